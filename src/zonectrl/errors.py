"""Exception hierarchy for preference and sort operations.

Informational outcomes (a write that found the value already in place)
are not errors; see :class:`zonectrl.preferences.status.Status`.
"""


class ZoneCtrlError(Exception):
    """Base class for all zonectrl errors."""


class NotInitializedError(ZoneCtrlError):
    """Read of a preference value that has never been set."""


class NotFoundError(ZoneCtrlError, KeyError):
    """Lookup of an identifier or key that is not present."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep plain messages.
        return str(self.args[0]) if self.args else ""


class InvalidArgumentError(ZoneCtrlError, ValueError):
    """Malformed value, out-of-range index, or missing identity."""


class BindingRequiredError(ZoneCtrlError):
    """Operation requires a bound live system-state source."""


class PersistenceError(ZoneCtrlError):
    """Persisted preferences could not be read or decoded."""
