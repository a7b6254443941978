"""Per-entity preferences record."""

from __future__ import annotations

from datetime import datetime

from zonectrl.preferences.scalar import (
    FavoritePreference,
    LastUsedDatePreference,
    UseCountPreference,
)
from zonectrl.preferences.status import Status, fold


class ObjectPreferences:
    """Favorite flag, last-used date, and use count for one group or zone.

    Each field is independently optional. Two records are equal when every
    field is equal, unset-ness included.

    Example:
        record = ObjectPreferences()
        record.set_favorite(True)
        record.increment_use_count()  # 1
    """

    __slots__ = ("_favorite", "_last_used_date", "_use_count")

    def __init__(self) -> None:
        """Create a record with every field unset."""
        self._favorite = FavoritePreference()
        self._last_used_date = LastUsedDatePreference()
        self._use_count = UseCountPreference()

    def init(self, other: ObjectPreferences | None = None) -> Status:
        """Reset every field, or copy every field from ``other``.

        Returns:
            Status.SUCCESS; per-field VALUE_ALREADY_SET is folded in.
        """
        if other is None:
            statuses = (
                self._favorite.init(),
                self._last_used_date.init(),
                self._use_count.init(),
            )
        else:
            statuses = (
                self._favorite.init_from(other._favorite),
                self._last_used_date.init_from(other._last_used_date),
                self._use_count.init_from(other._use_count),
            )
        return max(fold(status) for status in statuses)

    def copy(self) -> ObjectPreferences:
        """Return an independent copy of this record."""
        duplicate = ObjectPreferences()
        duplicate.init(self)
        return duplicate

    # -- Field access ----------------------------------------------------------

    @property
    def favorite(self) -> FavoritePreference:
        """Return the favorite field."""
        return self._favorite

    @property
    def last_used_date(self) -> LastUsedDatePreference:
        """Return the last-used date field."""
        return self._last_used_date

    @property
    def use_count(self) -> UseCountPreference:
        """Return the use count field."""
        return self._use_count

    @property
    def is_empty(self) -> bool:
        """Return True if no field is set."""
        return not (
            self._favorite.is_set or self._last_used_date.is_set or self._use_count.is_set
        )

    def get_favorite(self) -> bool:
        """Return the favorite flag (raises NotInitializedError if unset)."""
        return self._favorite.get()

    def get_last_used_date(self) -> datetime:
        """Return the last-used date (raises NotInitializedError if unset)."""
        return self._last_used_date.get()

    def get_use_count(self) -> int:
        """Return the use count (raises NotInitializedError if unset)."""
        return self._use_count.get()

    def set_favorite(self, favorite: bool) -> Status:
        return self._favorite.set(favorite)

    def set_last_used_date(self, date: datetime) -> Status:
        return self._last_used_date.set(date)

    def set_use_count(self, count: int) -> Status:
        return self._use_count.set(count)

    # -- Mutation --------------------------------------------------------------

    def toggle_favorite(self) -> bool:
        """Invert the favorite flag and return the new value."""
        return self._favorite.toggle()

    def touch_last_used_date(self) -> datetime:
        """Set the last-used date to now and return it."""
        return self._last_used_date.touch()

    def increment_use_count(self) -> int:
        """Increment the use count and return the post-increment value."""
        return self._use_count.increment()

    def reset_use_count(self) -> Status:
        return self._use_count.reset_count()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ObjectPreferences):
            return NotImplemented
        return (
            self._favorite == other._favorite
            and self._last_used_date == other._last_used_date
            and self._use_count == other._use_count
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"ObjectPreferences(favorite={self._favorite!r}, "
            f"last_used_date={self._last_used_date!r}, use_count={self._use_count!r})"
        )
