"""Sort keys, sort orders, and their display descriptions."""

from dataclasses import dataclass
from enum import Enum

from zonectrl.errors import InvalidArgumentError


class SortKey(Enum):
    """Attribute a group or zone list can be sorted by."""

    FAVORITE = "favorite"
    IDENTIFIER = "identifier"
    LAST_USED_DATE = "last_used_date"
    MUTE = "mute"
    NAME = "name"

    @classmethod
    def parse(cls, value: str) -> "SortKey":
        """Return the key named ``value``.

        Raises:
            InvalidArgumentError: If no key has that name.
        """
        try:
            return cls(value)
        except ValueError:
            raise InvalidArgumentError(f"Unknown sort key: {value!r}") from None


class SortOrder(Enum):
    """Direction applied to a single sort key."""

    ASCENDING = "ascending"
    DESCENDING = "descending"

    @classmethod
    def parse(cls, value: str) -> "SortOrder":
        """Return the order named ``value``.

        Raises:
            InvalidArgumentError: If no order has that name.
        """
        try:
            return cls(value)
        except ValueError:
            raise InvalidArgumentError(f"Unknown sort order: {value!r}") from None

    @property
    def inverted(self) -> "SortOrder":
        """Return the opposite direction."""
        return SortOrder.DESCENDING if self is SortOrder.ASCENDING else SortOrder.ASCENDING


@dataclass(frozen=True, slots=True)
class SortParameter:
    """One sort criterion: a key and the direction to apply to it.

    Attributes:
        key: Attribute to compare.
        order: Direction for this key only.
    """

    key: SortKey
    order: SortOrder = SortOrder.ASCENDING

    def __post_init__(self) -> None:
        """Reject anything that is not a SortKey/SortOrder member."""
        if not isinstance(self.key, SortKey):
            raise InvalidArgumentError(f"Invalid sort key: {self.key!r}")
        if not isinstance(self.order, SortOrder):
            raise InvalidArgumentError(f"Invalid sort order: {self.order!r}")

    @property
    def description(self) -> str:
        """Return a short label such as "Name: A to Z"."""
        key_label = sort_key_description(self.key)
        return f"{key_label}: {sort_order_for_key_description(self.order, self.key)}"


_KEY_DESCRIPTIONS = {
    SortKey.FAVORITE: "Favorite",
    SortKey.IDENTIFIER: "Identifier",
    SortKey.LAST_USED_DATE: "Last Used",
    SortKey.MUTE: "Mute",
    SortKey.NAME: "Name",
}

# (ascending, descending) label pairs
_ORDER_FOR_KEY_DESCRIPTIONS = {
    SortKey.FAVORITE: ("Favorites Last", "Favorites First"),
    SortKey.IDENTIFIER: ("Low to High", "High to Low"),
    SortKey.LAST_USED_DATE: ("Least Recent First", "Most Recent First"),
    SortKey.MUTE: ("Unmuted First", "Muted First"),
    SortKey.NAME: ("A to Z", "Z to A"),
}

_ORDER_FOR_KEY_DETAIL_DESCRIPTIONS = {
    SortKey.FAVORITE: (
        "Favorites are listed after all other entries.",
        "Favorites are listed before all other entries.",
    ),
    SortKey.IDENTIFIER: (
        "Entries are listed by ascending identifier.",
        "Entries are listed by descending identifier.",
    ),
    SortKey.LAST_USED_DATE: (
        "Never-used entries first, then the least recently used.",
        "Never-used entries first, then the most recently used.",
    ),
    SortKey.MUTE: (
        "Unmuted entries are listed before muted ones.",
        "Muted entries are listed before unmuted ones.",
    ),
    SortKey.NAME: (
        "Entries are listed alphabetically by name.",
        "Entries are listed reverse-alphabetically by name.",
    ),
}


def sort_key_description(key: SortKey) -> str:
    """Return the display name of a sort key."""
    return _KEY_DESCRIPTIONS[key]


def sort_order_description(order: SortOrder) -> str:
    """Return the generic display name of a sort order."""
    return "Ascending" if order is SortOrder.ASCENDING else "Descending"


def sort_order_for_key_description(order: SortOrder, key: SortKey) -> str:
    """Return a key-specific order label, e.g. "A to Z" for ascending name."""
    ascending, descending = _ORDER_FOR_KEY_DESCRIPTIONS[key]
    return ascending if order is SortOrder.ASCENDING else descending


def sort_order_for_key_detail_description(order: SortOrder, key: SortKey) -> str:
    """Return a one-sentence explanation of what ``order`` does for ``key``."""
    ascending, descending = _ORDER_FOR_KEY_DETAIL_DESCRIPTIONS[key]
    return ascending if order is SortOrder.ASCENDING else descending
