"""Tagged reference to a group or a zone."""

from dataclasses import dataclass
from enum import Enum


class EntityKind(Enum):
    """The kind of addressable entity."""

    GROUP = "groups"
    ZONE = "zones"

    @property
    def label(self) -> str:
        """Return a singular display label ("Group" or "Zone")."""
        return "Group" if self is EntityKind.GROUP else "Zone"


@dataclass(frozen=True, slots=True)
class EntityRef:
    """A group or zone identifier together with its kind.

    Attributes:
        kind: Whether the identifier names a group or a zone.
        identifier: Positive entity identifier.
    """

    kind: EntityKind
    identifier: int

    @classmethod
    def group(cls, identifier: int) -> "EntityRef":
        """Return a reference to a group."""
        return cls(EntityKind.GROUP, identifier)

    @classmethod
    def zone(cls, identifier: int) -> "EntityRef":
        """Return a reference to a zone."""
        return cls(EntityKind.ZONE, identifier)

    def __str__(self) -> str:
        return f"{self.kind.label} {self.identifier}"
