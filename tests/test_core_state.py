"""Tests for StateStore with Qt signals."""

from dataclasses import replace

import pytest
from pytestqt.qtbot import QtBot

from zonectrl.core.state import StateStore
from zonectrl.models.entity import EntityKind
from zonectrl.models.system_state import SystemState


@pytest.fixture
def state() -> StateStore:
    """Return a fresh StateStore for each test."""
    return StateStore()


class TestStateStore:
    """Tests for StateStore lookups and signals."""

    def test_initial_state(self, state: StateStore) -> None:
        """Test that a new store is empty and disconnected."""
        assert not state.is_connected
        assert state.controller is None
        assert state.controller_identity is None
        assert state.groups == []
        assert state.zones == []

    def test_update_from_system_state(
        self, state: StateStore, sample_system_state: SystemState
    ) -> None:
        """Test populating from a system state."""
        state.update_from_system_state(sample_system_state)
        assert state.is_connected
        assert len(state.groups) == 3
        assert len(state.zones) == 3

    def test_get_group_and_zone(self, state_store: StateStore) -> None:
        """Test lookups by identifier."""
        group = state_store.get_group(2)
        assert group is not None
        assert group.name == "Upstairs"
        zone = state_store.get_zone(1)
        assert zone is not None
        assert zone.name == "Kitchen"
        assert state_store.get_zone(99) is None

    def test_identifiers_and_has_entity(self, state_store: StateStore) -> None:
        """Test per-kind identifier enumeration."""
        assert state_store.identifiers(EntityKind.GROUP) == [1, 2, 3]
        assert state_store.has_entity(EntityKind.ZONE, 3)
        assert not state_store.has_entity(EntityKind.ZONE, 4)


class TestControllerIdentity:
    """Tests for the controller identity used to key preferences."""

    def test_mac_preferred_and_lowercased(self, state_store: StateStore) -> None:
        """Test that the MAC is normalized."""
        assert state_store.controller_identity == "00:50:c2:12:34:56"

    def test_host_fallback(self, state: StateStore, sample_system_state: SystemState) -> None:
        """Test falling back to the reported host name."""
        state.update_from_system_state(replace(sample_system_state, mac=""))
        assert state.controller_identity == "hlx.local"

    def test_address_fallback(self, state: StateStore, sample_system_state: SystemState) -> None:
        """Test falling back to the connection address."""
        state.update_from_system_state(replace(sample_system_state, mac="", host=""))
        assert state.controller_identity == "192.168.1.50:23"

    def test_disconnected_has_no_identity(
        self, state: StateStore, sample_system_state: SystemState
    ) -> None:
        """Test that a disconnected state has no identity."""
        state.update_from_system_state(replace(sample_system_state, connected=False))
        assert state.controller_identity is None


class TestStateStoreSignals:
    """Tests for change signals."""

    def test_connection_changed_signal(
        self, state: StateStore, sample_system_state: SystemState, qtbot: QtBot
    ) -> None:
        """Test that connecting emits connection_changed."""
        with qtbot.wait_signal(state.connection_changed, timeout=100) as blocker:
            state.update_from_system_state(sample_system_state)
        assert blocker.args == [True]

    def test_zones_changed_signal(
        self, state: StateStore, sample_system_state: SystemState, qtbot: QtBot
    ) -> None:
        """Test that new zones emit zones_changed."""
        with qtbot.wait_signal(state.zones_changed, timeout=100) as blocker:
            state.update_from_system_state(sample_system_state)
        assert len(blocker.args[0]) == 3

    def test_unchanged_update_emits_state_changed(
        self, state_store: StateStore, sample_system_state: SystemState, qtbot: QtBot
    ) -> None:
        """Test that an identical update emits only state_changed."""
        with qtbot.wait_signal(state_store.state_changed, timeout=100):
            state_store.update_from_system_state(sample_system_state)

    def test_update_group_mute(self, state_store: StateStore, qtbot: QtBot) -> None:
        """Test updating a group's mute state."""
        with qtbot.wait_signal(state_store.groups_changed, timeout=100):
            state_store.update_group_mute(1, True)
        group = state_store.get_group(1)
        assert group is not None
        assert group.muted

    def test_update_zone_mute(self, state_store: StateStore, qtbot: QtBot) -> None:
        """Test updating a zone's mute state."""
        with qtbot.wait_signal(state_store.zones_changed, timeout=100):
            state_store.update_zone_mute(2, False)
        zone = state_store.get_zone(2)
        assert zone is not None
        assert zone.name == "Den"
        assert not zone.muted

    def test_update_missing_zone_is_safe(self, state: StateStore) -> None:
        """Test updating before any state is set."""
        state.update_zone_mute(1, True)
        state.update_group_mute(1, True)
        assert state.zones == []

    def test_clear_emits_disconnected(self, state_store: StateStore, qtbot: QtBot) -> None:
        """Test that clearing a connected store emits connection_changed(False)."""
        with qtbot.wait_signal(state_store.connection_changed, timeout=100) as blocker:
            state_store.clear()
        assert blocker.args == [False]
        assert state_store.groups == []
        assert state_store.controller_identity is None
