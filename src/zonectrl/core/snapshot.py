"""Parse a saved system snapshot into a SystemState.

Snapshot structure:
{
  "controller": {"name": "...", "host": "...", "port": 23},
  "connected": true,
  "version": "...", "host": "...", "mac": "...",
  "groups": [{"id": 1, "name": "...", "muted": false, "zones": [1, 2]}],
  "zones": [{"id": 1, "name": "...", "muted": false, "volume": -40, "source": 1}]
}
"""

import json
import logging
from pathlib import Path
from typing import Any, cast

from zonectrl.errors import InvalidArgumentError
from zonectrl.models.controller import Controller
from zonectrl.models.group import Group
from zonectrl.models.system_state import SystemState
from zonectrl.models.zone import Zone
from zonectrl.preferences.table import validate_identifier

logger = logging.getLogger(__name__)


def _identifier(raw: object, what: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise InvalidArgumentError(f"{what} id must be an integer, got {raw!r}")
    return validate_identifier(raw)


def _int_field(raw: object, what: str) -> int:
    try:
        return int(cast(Any, raw))
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"{what} must be an integer, got {raw!r}") from e


def _zone_ids(group: dict[str, Any]) -> list[int]:
    raw = group.get("zones", [])
    if not isinstance(raw, list):
        raise InvalidArgumentError(f"Group 'zones' must be a list, got {raw!r}")
    return [_identifier(z, "Zone") for z in cast(list[object], raw)]


def _entries(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    raw = data.get(key, [])
    if not isinstance(raw, list):
        raise InvalidArgumentError(f"'{key}' must be a list")
    entries = cast(list[object], raw)
    for entry in entries:
        if not isinstance(entry, dict):
            raise InvalidArgumentError(f"'{key}' entries must be objects, got {entry!r}")
    return cast(list[dict[str, Any]], entries)


def parse_system_state(data: dict[str, Any]) -> SystemState:
    """Parse a snapshot mapping into a SystemState.

    Args:
        data: Decoded snapshot.

    Returns:
        SystemState with parsed models.

    Raises:
        InvalidArgumentError: If the snapshot is malformed.
    """
    if not isinstance(data, dict):
        raise InvalidArgumentError("System snapshot must be an object")

    controller_info = data.get("controller", {})
    if not isinstance(controller_info, dict):
        raise InvalidArgumentError("'controller' must be an object")
    controller = Controller(
        name=str(controller_info.get("name", "Unknown")),
        host=str(controller_info.get("host", "")),
        port=_int_field(controller_info.get("port", 23), "Controller port"),
    )

    groups = [
        Group(
            id=_identifier(g.get("id"), "Group"),
            name=str(g.get("name", "")),
            muted=bool(g.get("muted", False)),
            zone_ids=_zone_ids(g),
        )
        for g in _entries(data, "groups")
    ]

    zones = [
        Zone(
            id=_identifier(z.get("id"), "Zone"),
            name=str(z.get("name", "")),
            muted=bool(z.get("muted", False)),
            volume=_int_field(z.get("volume", -40), "Zone volume"),
            source_id=_int_field(z.get("source", 0), "Zone source"),
        )
        for z in _entries(data, "zones")
    ]

    return SystemState(
        controller=controller,
        groups=groups,
        zones=zones,
        connected=bool(data.get("connected", True)),
        version=str(data.get("version", "")),
        host=str(data.get("host", "")),
        mac=str(data.get("mac", "")),
    )


def load_system_state(path: Path) -> SystemState:
    """Read and parse a snapshot file.

    Raises:
        InvalidArgumentError: If the file is not valid JSON or is malformed.
        OSError: If the file cannot be read.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InvalidArgumentError(f"{path} is not valid JSON: {e}") from e
    state = parse_system_state(data)
    logger.debug(
        "Loaded snapshot %s: %d groups, %d zones", path, state.group_count, state.zone_count
    )
    return state
