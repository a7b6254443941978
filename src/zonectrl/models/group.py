"""Group model for zones sharing volume, mute, and source."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Group:
    """A group of zones controlled together.

    Attributes:
        id: Unique positive group identifier from the controller.
        name: Human-readable group name.
        muted: Whether group audio is muted.
        zone_ids: Identifiers of the zones in this group.
    """

    id: int
    name: str = ""
    muted: bool = False
    zone_ids: list[int] = field(default_factory=list)
