"""Configuration manager using QSettings for persistent storage."""

import json
import logging
from typing import Any, cast

from PySide6.QtCore import QSettings

from zonectrl.errors import PersistenceError
from zonectrl.models.entity import EntityKind

logger = logging.getLogger(__name__)

# Settings keys
_KEY_PREFERENCES = "preferences"
_KEY_SORT_GROUPS = "sort/groups"
_KEY_SORT_ZONES = "sort/zones"
_KEY_CONNECT_HISTORY = "history/connect"


def _sort_key_for(kind: EntityKind) -> str:
    return _KEY_SORT_GROUPS if kind is EntityKind.GROUP else _KEY_SORT_ZONES


class ConfigManager:
    """Wrapper around QSettings for type-safe config access.

    Nested documents (preferences, sort criteria, connect history) are
    stored JSON-encoded under a single key each, so they round-trip with
    their value types intact on every QSettings backend.

    QSettings stores config in platform-specific locations:
    - Windows: HKEY_CURRENT_USER\\Software\\ZoneCtrl\\ZoneCtrl
    - macOS: ~/Library/Preferences/com.ZoneCtrl.ZoneCtrl.plist
    - Linux: ~/.config/ZoneCtrl/ZoneCtrl.conf

    Example:
        config = ConfigManager()
        document = config.get_controller_preferences("00:50:c2:12:34:56")
        config.save_controller_preferences("00:50:c2:12:34:56", document or {})
    """

    def __init__(self, organization: str = "ZoneCtrl", application: str = "ZoneCtrl") -> None:
        """Initialize the config manager.

        Args:
            organization: Organization name for QSettings.
            application: Application name for QSettings.
        """
        self._settings = QSettings(organization, application)

    @property
    def settings(self) -> QSettings:
        """Return the underlying QSettings instance."""
        return self._settings

    def _read_json(self, key: str) -> Any:
        raw = self._settings.value(key, "", str)
        if not raw:
            return None
        try:
            return json.loads(str(raw))
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Stored value for '{key}' is not valid JSON: {e}") from e

    def _write_json(self, key: str, value: object) -> None:
        self._settings.setValue(key, json.dumps(value, sort_keys=True))

    # -- Preferences -----------------------------------------------------------

    def get_preferences_document(self) -> dict[str, object]:
        """Load the preferences of every controller, keyed by controller identity.

        Returns:
            The stored document, or an empty dict if none saved.

        Raises:
            PersistenceError: If the stored document cannot be decoded.
        """
        data = self._read_json(_KEY_PREFERENCES)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise PersistenceError("Stored preferences document is not a mapping")
        return cast(dict[str, object], data)

    def save_preferences_document(self, document: dict[str, object]) -> None:
        """Persist the preferences of every controller.

        Args:
            document: Mapping of controller identity to controller document.
        """
        self._write_json(_KEY_PREFERENCES, document)

    def get_controller_preferences(self, identity: str) -> dict[str, object] | None:
        """Load the preferences document for one controller.

        Args:
            identity: Controller identity string.

        Returns:
            The controller's document, or None if nothing was saved for it.

        Raises:
            PersistenceError: If the stored document cannot be decoded.
        """
        entry = self.get_preferences_document().get(identity)
        if entry is None:
            return None
        if not isinstance(entry, dict):
            raise PersistenceError(f"Preferences for controller '{identity}' are not a mapping")
        return cast(dict[str, object], entry)

    def save_controller_preferences(self, identity: str, document: dict[str, object]) -> None:
        """Persist one controller's preferences, keeping other controllers intact.

        Args:
            identity: Controller identity string.
            document: The controller's document.

        Raises:
            PersistenceError: If the stored document cannot be decoded. Nothing
                is written, so other controllers' entries survive.
        """
        stored = self.get_preferences_document()
        stored[identity] = document
        self.save_preferences_document(stored)

    # -- Sort criteria ---------------------------------------------------------

    def get_sort_criteria(self, kind: EntityKind) -> list[list[str]] | None:
        """Load the saved sort criteria for groups or zones.

        Returns:
            List of [key-name, order-name] pairs, or None if none saved or
            the stored value is unreadable.
        """
        try:
            data = self._read_json(_sort_key_for(kind))
        except PersistenceError as e:
            logger.warning("Ignoring saved %s sort criteria: %s", kind.value, e)
            return None
        if data is None:
            return None
        if not isinstance(data, list):
            logger.warning("Ignoring saved %s sort criteria: not a list", kind.value)
            return None
        return cast(list[list[str]], data)

    def save_sort_criteria(self, kind: EntityKind, pairs: list[list[str]]) -> None:
        """Persist sort criteria for groups or zones.

        Args:
            kind: Which list the criteria apply to.
            pairs: List of [key-name, order-name] pairs.
        """
        self._write_json(_sort_key_for(kind), pairs)

    # -- Connect history -------------------------------------------------------

    def get_connect_history(self) -> list[dict[str, str]]:
        """Load previously connected controller locations.

        Returns:
            List of {"location", "last_connected"} entries, or empty list.
            Invalid entries are skipped.
        """
        try:
            data = self._read_json(_KEY_CONNECT_HISTORY)
        except PersistenceError as e:
            logger.warning("Ignoring saved connect history: %s", e)
            return []
        if not isinstance(data, list):
            return []

        entries: list[dict[str, str]] = []
        for raw_item in cast(list[object], data):
            if not isinstance(raw_item, dict):
                continue
            item = cast(dict[str, object], raw_item)
            location = item.get("location")
            last_connected = item.get("last_connected")
            if not isinstance(location, str) or not isinstance(last_connected, str):
                logger.warning("Skipping invalid connect history entry: %r", item)
                continue
            entries.append({"location": location, "last_connected": last_connected})
        return entries

    def save_connect_history(self, entries: list[dict[str, str]]) -> None:
        """Persist previously connected controller locations."""
        self._write_json(_KEY_CONNECT_HISTORY, entries)

    # -- General settings ------------------------------------------------------

    def clear(self) -> None:
        """Clear all settings (useful for testing or reset)."""
        self._settings.clear()

    def sync(self) -> None:
        """Force settings to be written to disk."""
        self._settings.sync()
