"""Result status for preference writes."""

from enum import IntEnum


class Status(IntEnum):
    """Outcome of a successful preference write.

    ``VALUE_ALREADY_SET`` means the write was a no-op because the stored
    value already matched. Callers that only care whether the value is
    now correct should test :attr:`ok`.
    """

    SUCCESS = 0
    VALUE_ALREADY_SET = 1

    @property
    def ok(self) -> bool:
        """Return True for every status (both mean the value is in place)."""
        return self in (Status.SUCCESS, Status.VALUE_ALREADY_SET)

    @property
    def changed(self) -> bool:
        """Return True if the write actually mutated state."""
        return self is Status.SUCCESS


def fold(status: Status) -> Status:
    """Fold ``VALUE_ALREADY_SET`` into ``SUCCESS`` for aggregate operations."""
    return Status.SUCCESS if status is Status.VALUE_ALREADY_SET else status
