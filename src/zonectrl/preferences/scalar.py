"""Optional scalar preference values.

Each preference holds a single value together with an explicit "is set"
flag, so an unset favorite can never be mistaken for ``False`` or an
unset use count for ``0``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Generic, TypeVar

from zonectrl.errors import InvalidArgumentError, NotInitializedError
from zonectrl.preferences.status import Status, fold

T = TypeVar("T")


class OptionalPreference(Generic[T]):
    """A single optional value of one semantic type.

    Subclasses provide the default payload and validate candidate values.

    Example:
        favorite = FavoritePreference()
        favorite.set(True)    # Status.SUCCESS
        favorite.set(True)    # Status.VALUE_ALREADY_SET
        favorite.get()        # True
    """

    __slots__ = ("_is_set", "_value")

    def __init__(self) -> None:
        """Create an unset preference."""
        self._is_set = False
        self._value: T = self._default()

    def _default(self) -> T:
        raise NotImplementedError

    def _validate(self, value: T) -> T:
        raise NotImplementedError

    @property
    def is_set(self) -> bool:
        """Return True once a value has been written."""
        return self._is_set

    @property
    def is_unset(self) -> bool:
        """Return True while no value has been written."""
        return not self._is_set

    def init(self, value: T | None = None) -> Status:
        """Reset to unset, or initialize with ``value``.

        Args:
            value: Initial value, or None to reset to unset.

        Returns:
            Status.SUCCESS; an already-matching value is not reported.
        """
        if value is None:
            self._is_set = False
            self._value = self._default()
            return Status.SUCCESS
        return fold(self.set(value))

    def init_from(self, other: OptionalPreference[T]) -> Status:
        """Copy set-ness and value from another preference of the same kind."""
        if type(other) is not type(self):
            raise InvalidArgumentError(
                f"Cannot initialize {type(self).__name__} from {type(other).__name__}"
            )
        self._is_set = other._is_set
        self._value = other._value
        return Status.SUCCESS

    def get(self) -> T:
        """Return the held value.

        Raises:
            NotInitializedError: If the value has never been set.
        """
        if not self._is_set:
            raise NotInitializedError(f"{type(self).__name__} is not set")
        return self._value

    def get_or(self, default: T) -> T:
        """Return the held value, or ``default`` when unset."""
        return self._value if self._is_set else default

    def set(self, value: T) -> Status:
        """Write ``value``.

        Returns:
            Status.VALUE_ALREADY_SET if already set to an equal value (state is
            not touched), otherwise Status.SUCCESS.

        Raises:
            InvalidArgumentError: If the value is missing or of the wrong type.
        """
        if value is None:
            raise InvalidArgumentError(f"{type(self).__name__} value must not be None")
        value = self._validate(value)
        if self._is_set and self._value == value:
            return Status.VALUE_ALREADY_SET
        self._value = value
        self._is_set = True
        return Status.SUCCESS

    def copy(self) -> OptionalPreference[T]:
        """Return an independent copy."""
        duplicate = type(self)()
        duplicate.init_from(self)
        return duplicate

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OptionalPreference) or type(other) is not type(self):
            return NotImplemented
        if self._is_set != other._is_set:
            return False
        return not self._is_set or self._value == other._value

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        shown = repr(self._value) if self._is_set else "<unset>"
        return f"{type(self).__name__}({shown})"


class FavoritePreference(OptionalPreference[bool]):
    """Whether the user marked an entity as a favorite."""

    __slots__ = ()

    def _default(self) -> bool:
        return False

    def _validate(self, value: bool) -> bool:
        if not isinstance(value, bool):
            raise InvalidArgumentError(f"Favorite must be a bool, got {type(value).__name__}")
        return value

    def toggle(self) -> bool:
        """Invert the favorite flag and return the new value.

        Raises:
            NotInitializedError: If the flag has never been set.
        """
        current = self.get()
        self._value = not current
        return self._value


class LastUsedDatePreference(OptionalPreference[datetime]):
    """When an entity was most recently activated.

    Dates must be timezone-aware so that persisted and freshly sampled
    values always compare.
    """

    __slots__ = ()

    def _default(self) -> datetime:
        return datetime.min.replace(tzinfo=timezone.utc)

    def _validate(self, value: datetime) -> datetime:
        if not isinstance(value, datetime):
            raise InvalidArgumentError(
                f"Last used date must be a datetime, got {type(value).__name__}"
            )
        if value.tzinfo is None or value.utcoffset() is None:
            raise InvalidArgumentError("Last used date must be timezone-aware")
        return value

    def touch(self) -> datetime:
        """Set the date to now (UTC) and return it."""
        now = datetime.now(tz=timezone.utc)
        self.set(now)
        return now


class UseCountPreference(OptionalPreference[int]):
    """How many times an entity has been activated."""

    __slots__ = ()

    def _default(self) -> int:
        return 0

    def _validate(self, value: int) -> int:
        # bool is an int subclass; a True count is always a caller bug
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgumentError(f"Use count must be an int, got {type(value).__name__}")
        if value < 0:
            raise InvalidArgumentError(f"Use count must not be negative, got {value}")
        return value

    def increment(self) -> int:
        """Add one to the count (starting from 0 when unset) and return it."""
        count = self.get_or(0) + 1
        self.set(count)
        return count

    def touch(self) -> int:
        """Alias for :meth:`increment`."""
        return self.increment()

    def reset_count(self) -> Status:
        """Set the count back to zero (the preference stays set)."""
        return self.set(0)
