"""Test fixtures for zonectrl tests."""

import os
from collections.abc import Generator

import pytest

# Run Qt headless so the suite works without a display server.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from zonectrl.core.config import ConfigManager
from zonectrl.core.controller import ClientController
from zonectrl.core.state import StateStore
from zonectrl.models.controller import Controller
from zonectrl.models.group import Group
from zonectrl.models.system_state import SystemState
from zonectrl.models.zone import Zone

TEST_ORGANIZATION = "ZoneCtrlTest"
TEST_APPLICATION = "TestConfig"
TEST_MAC = "00:50:C2:12:34:56"


@pytest.fixture
def config() -> Generator[ConfigManager, None, None]:
    """Return a fresh, empty ConfigManager for each test."""
    # Use unique organization/app to avoid touching real settings
    config = ConfigManager(TEST_ORGANIZATION, TEST_APPLICATION)
    config.clear()
    yield config
    config.clear()


def _sample_system_state() -> SystemState:
    controller = Controller(name="HLX", host="192.168.1.50", port=23)
    groups = [
        Group(id=1, name="Downstairs", muted=False, zone_ids=[1, 2]),
        Group(id=2, name="Upstairs", muted=True, zone_ids=[3]),
        Group(id=3, name="Everywhere", muted=False, zone_ids=[1, 2, 3]),
    ]
    zones = [
        Zone(id=1, name="Kitchen", muted=False, volume=-30, source_id=1),
        Zone(id=2, name="Den", muted=True, volume=-45, source_id=2),
        Zone(id=3, name="Attic", muted=False, volume=-50, source_id=1),
    ]
    return SystemState(
        controller=controller,
        groups=groups,
        zones=zones,
        connected=True,
        version="1.2.0",
        host="hlx.local",
        mac=TEST_MAC,
    )


@pytest.fixture
def sample_system_state() -> SystemState:
    """Return a connected SystemState with three groups and three zones."""
    return _sample_system_state()


@pytest.fixture
def state_store(sample_system_state: SystemState) -> StateStore:
    """Return a StateStore populated with the sample state."""
    store = StateStore()
    store.update_from_system_state(sample_system_state)
    return store


@pytest.fixture
def client_controller(config: ConfigManager, state_store: StateStore) -> ClientController:
    """Return a ClientController bound to the sample state."""
    controller = ClientController(config, state_store)
    controller.bind()
    return controller
