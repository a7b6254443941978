"""Central state store with Qt signals for reactive UI updates.

The StateStore holds the current system state reported by the audio
controller and emits Qt signals when it changes. It is the live source
the preferences and sort controllers read names, mute state, and the
controller identity from; it never reads preferences itself.
"""

import logging
from collections.abc import Mapping
from dataclasses import replace

from PySide6.QtCore import QObject, Signal

from zonectrl.models.controller import Controller
from zonectrl.models.entity import EntityKind
from zonectrl.models.group import Group
from zonectrl.models.system_state import SystemState
from zonectrl.models.zone import Zone

logger = logging.getLogger(__name__)


class StateStore(QObject):
    """Central state store emitting Qt signals on changes.

    Example:
        state = StateStore()

        # Connect a slot to be notified of zone changes
        state.zones_changed.connect(lambda zones: print(f"Zones: {zones}"))

        # Update state (emits signals)
        state.update_from_system_state(system_state)
    """

    # Connection state signals
    connection_changed = Signal(bool)  # True=connected, False=disconnected

    # Data change signals - emit full lists on change
    # Note: Using object for complex types (PySide6 limitation)
    groups_changed = Signal(object)
    zones_changed = Signal(object)
    state_changed = Signal(object)  # Combined state signal

    def __init__(self) -> None:
        """Initialize the state store with empty state."""
        super().__init__()
        self._state: SystemState | None = None
        self._groups: dict[int, Group] = {}
        self._zones: dict[int, Zone] = {}
        # List caches to avoid repeated list() conversions
        self._groups_cache: list[Group] | None = None
        self._zones_cache: list[Zone] | None = None

    def _is_connected(self) -> bool:
        """Internal check for connection state (before update)."""
        return self._state is not None and self._state.connected

    @property
    def is_connected(self) -> bool:
        """Return True if currently connected to a controller."""
        return self._is_connected()

    @property
    def controller(self) -> Controller | None:
        """Return the current controller info, or None if disconnected."""
        return self._state.controller if self._state else None

    @property
    def controller_identity(self) -> str | None:
        """Return a stable identity for the connected controller.

        The reported MAC address is preferred, then the reported host
        name, then the connection address. Returns None when not
        connected or when none of these is known.
        """
        if self._state is None or not self._state.connected:
            return None
        if self._state.mac:
            return self._state.mac.strip().lower()
        if self._state.host:
            return self._state.host.strip()
        if self._state.controller.host:
            return self._state.controller.address
        return None

    @property
    def groups(self) -> list[Group]:
        """Return all groups (cached)."""
        if self._groups_cache is None:
            self._groups_cache = list(self._groups.values())
        return self._groups_cache

    @property
    def zones(self) -> list[Zone]:
        """Return all zones (cached)."""
        if self._zones_cache is None:
            self._zones_cache = list(self._zones.values())
        return self._zones_cache

    def _invalidate_caches(self) -> None:
        """Invalidate all list caches."""
        self._groups_cache = None
        self._zones_cache = None

    @staticmethod
    def _dict_changed(old: Mapping[int, object], new: Mapping[int, object]) -> bool:
        """Check if dictionary changed, comparing keys before values."""
        if old.keys() != new.keys():
            return True
        return any(old[k] != new[k] for k in new)

    def get_group(self, group_id: int) -> Group | None:
        """Get a group by ID.

        Args:
            group_id: The group ID to look up.

        Returns:
            The Group if found, else None.
        """
        return self._groups.get(group_id)

    def get_zone(self, zone_id: int) -> Zone | None:
        """Get a zone by ID.

        Args:
            zone_id: The zone ID to look up.

        Returns:
            The Zone if found, else None.
        """
        return self._zones.get(zone_id)

    def identifiers(self, kind: EntityKind) -> list[int]:
        """Return the identifiers of every group or zone, ascending."""
        source = self._groups if kind is EntityKind.GROUP else self._zones
        return sorted(source)

    def has_entity(self, kind: EntityKind, identifier: int) -> bool:
        """Return True if the live topology contains the group or zone."""
        source = self._groups if kind is EntityKind.GROUP else self._zones
        return identifier in source

    def update_from_system_state(self, state: SystemState) -> None:
        """Update internal state from SystemState and emit signals.

        Compares the new state with the current state and emits signals
        only for data that actually changed.

        Args:
            state: The new system state.
        """
        # Check connection state BEFORE updating
        was_connected = self._is_connected()
        connection_changed = state.connected != was_connected

        self._state = state

        new_groups = {g.id: g for g in state.groups}
        new_zones = {z.id: z for z in state.zones}

        groups_changed = self._dict_changed(self._groups, new_groups)
        zones_changed = self._dict_changed(self._zones, new_zones)

        if groups_changed:
            self._groups = new_groups
            self._groups_cache = None
        if zones_changed:
            self._zones = new_zones
            self._zones_cache = None

        # Now emit signals (handlers can safely read any property)
        if groups_changed:
            self.groups_changed.emit(state.groups)

        if zones_changed:
            self.zones_changed.emit(state.zones)

        if connection_changed:
            self.connection_changed.emit(state.connected)

        # Only emit state_changed if no specific signals were emitted
        if not (groups_changed or zones_changed or connection_changed):
            self.state_changed.emit(state)

    def update_group_mute(self, group_id: int, muted: bool) -> None:
        """Update a specific group's mute state in the local state.

        Args:
            group_id: The group ID.
            muted: New mute state.
        """
        group = self._groups.get(group_id)
        if not group:
            logger.debug("Cannot update mute: group %d not found", group_id)
            return

        updated = replace(group, muted=muted)
        self._groups[group_id] = updated
        self._groups_cache = None
        self.groups_changed.emit(self.groups)

        if self._state:
            new_state_groups = [updated if g.id == group_id else g for g in self._state.groups]
            self._state = replace(self._state, groups=new_state_groups)

    def update_zone_mute(self, zone_id: int, muted: bool) -> None:
        """Update a specific zone's mute state in the local state.

        Args:
            zone_id: The zone ID.
            muted: New mute state.
        """
        zone = self._zones.get(zone_id)
        if not zone:
            logger.debug("Cannot update mute: zone %d not found", zone_id)
            return

        updated = replace(zone, muted=muted)
        self._zones[zone_id] = updated
        self._zones_cache = None
        self.zones_changed.emit(self.zones)

        # Update state but don't emit state_changed (zones_changed is sufficient)
        if self._state:
            new_state_zones = [updated if z.id == zone_id else z for z in self._state.zones]
            self._state = replace(self._state, zones=new_state_zones)

    def clear(self) -> None:
        """Clear all state (disconnected)."""
        was_connected = self.is_connected
        self._state = None
        self._groups.clear()
        self._zones.clear()
        self._invalidate_caches()

        if was_connected:
            self.connection_changed.emit(False)
