"""SystemState model representing a complete controller snapshot."""

from dataclasses import dataclass, field

from zonectrl.models.controller import Controller
from zonectrl.models.group import Group
from zonectrl.models.zone import Zone


@dataclass(frozen=True, slots=True)
class SystemState:
    """Complete snapshot of the audio system at a point in time.

    Attributes:
        controller: The controller connection info.
        groups: Groups configured on the controller.
        zones: Zones configured on the controller.
        connected: Whether currently connected to the controller.
        version: Controller firmware version string.
        host: Controller's hostname (as reported by the controller).
        mac: Controller's MAC address (as reported by the controller).
    """

    controller: Controller
    groups: list[Group] = field(default_factory=list)
    zones: list[Zone] = field(default_factory=list)
    connected: bool = False
    version: str = ""
    host: str = ""
    mac: str = ""

    @property
    def group_count(self) -> int:
        """Return number of groups."""
        return len(self.groups)

    @property
    def zone_count(self) -> int:
        """Return number of zones."""
        return len(self.zones)
