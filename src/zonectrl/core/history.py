"""History of previously connected controller locations."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from zonectrl.core.config import ConfigManager
from zonectrl.errors import InvalidArgumentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """A controller location the user connected to successfully.

    Attributes:
        location: Host name, address, or URL as the user entered it.
        last_connected: When the last successful connection happened (UTC).
    """

    location: str
    last_connected: datetime


class ConnectHistory:
    """Most-recent-first list of connected locations, saved on every change.

    Example:
        history = ConnectHistory(config)
        history.add_or_update_entry("hlx.local")
        history.most_recent_entry().location  # "hlx.local"
    """

    def __init__(self, config: ConfigManager) -> None:
        """Load the saved history.

        Args:
            config: Configuration manager used for persistence.
        """
        self._config = config
        self._entries: list[HistoryEntry] = []
        for item in config.get_connect_history():
            try:
                last_connected = datetime.fromisoformat(item["last_connected"])
            except ValueError:
                logger.warning("Skipping history entry with bad date: %r", item)
                continue
            if last_connected.tzinfo is None:
                last_connected = last_connected.replace(tzinfo=timezone.utc)
            self._entries.append(HistoryEntry(item["location"], last_connected))
        self._entries.sort(key=lambda e: e.last_connected, reverse=True)

    def count(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def entry_at(self, index: int) -> HistoryEntry:
        """Return the entry at ``index`` (0 is the most recent).

        Raises:
            InvalidArgumentError: If ``index`` is out of range.
        """
        if index < 0 or index >= len(self._entries):
            raise InvalidArgumentError(f"History index {index} out of range")
        return self._entries[index]

    def most_recent_entry(self) -> HistoryEntry | None:
        """Return the most recent entry, or None if the history is empty."""
        return self._entries[0] if self._entries else None

    def add_or_update_entry(self, location: str, date: datetime | None = None) -> bool:
        """Record a successful connection to ``location``.

        Args:
            location: Location as entered by the user.
            date: Connection time, or None for now.

        Returns:
            True if the location was new, False if an entry was updated.
        """
        location = location.strip()
        if not location:
            raise InvalidArgumentError("History location must not be empty")
        when = date if date is not None else datetime.now(tz=timezone.utc)
        if when.tzinfo is None:
            raise InvalidArgumentError("History date must be timezone-aware")

        original_count = len(self._entries)
        self._entries = [e for e in self._entries if e.location != location]
        added = len(self._entries) == original_count
        self._entries.append(HistoryEntry(location, when))
        self._entries.sort(key=lambda e: e.last_connected, reverse=True)
        self._save()
        return added

    def remove_entry_at(self, index: int) -> HistoryEntry:
        """Remove and return the entry at ``index``."""
        entry = self.entry_at(index)
        del self._entries[index]
        self._save()
        return entry

    def _save(self) -> None:
        self._config.save_connect_history(
            [
                {"location": e.location, "last_connected": e.last_connected.isoformat()}
                for e in self._entries
            ]
        )
