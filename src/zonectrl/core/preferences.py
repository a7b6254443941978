"""Per-controller group and zone preferences.

The PreferencesController owns one preferences table for groups and one
for zones. Once bound to a StateStore it persists both tables through the
ConfigManager under the connected controller's identity, so preferences
follow the physical controller rather than the install.

Persisted document for one controller:

    {
        "groups": {"1": {"favorite": true, "use_count": 3}},
        "zones": {"7": {"last_used_date": "2026-01-02T03:04:05+00:00"}}
    }

An absent field is an unset preference.
"""

import logging
from datetime import datetime
from typing import cast

from zonectrl.core.config import ConfigManager
from zonectrl.core.state import StateStore
from zonectrl.errors import (
    BindingRequiredError,
    InvalidArgumentError,
    PersistenceError,
)
from zonectrl.models.entity import EntityKind, EntityRef
from zonectrl.preferences.record import ObjectPreferences
from zonectrl.preferences.status import Status
from zonectrl.preferences.table import ObjectPreferencesTable, validate_identifier

logger = logging.getLogger(__name__)

# Document field names
_FIELD_FAVORITE = "favorite"
_FIELD_LAST_USED_DATE = "last_used_date"
_FIELD_USE_COUNT = "use_count"


# -- Document conversion -------------------------------------------------------


def record_to_dict(record: ObjectPreferences) -> dict[str, object]:
    """Convert a record to its document form, omitting unset fields."""
    data: dict[str, object] = {}
    if record.favorite.is_set:
        data[_FIELD_FAVORITE] = record.get_favorite()
    if record.last_used_date.is_set:
        data[_FIELD_LAST_USED_DATE] = record.get_last_used_date().isoformat()
    if record.use_count.is_set:
        data[_FIELD_USE_COUNT] = record.get_use_count()
    return data


def record_from_dict(data: dict[str, object]) -> ObjectPreferences:
    """Build a record from its document form.

    Raises:
        InvalidArgumentError: If a field has the wrong type or a malformed value.
    """
    record = ObjectPreferences()

    favorite = data.get(_FIELD_FAVORITE)
    if favorite is not None:
        record.set_favorite(cast(bool, favorite))

    last_used = data.get(_FIELD_LAST_USED_DATE)
    if last_used is not None:
        if not isinstance(last_used, str):
            raise InvalidArgumentError(f"Last used date must be a string, got {last_used!r}")
        try:
            date = datetime.fromisoformat(last_used)
        except ValueError as e:
            raise InvalidArgumentError(f"Malformed last used date {last_used!r}") from e
        record.set_last_used_date(date)

    use_count = data.get(_FIELD_USE_COUNT)
    if use_count is not None:
        record.set_use_count(cast(int, use_count))

    return record


def table_to_dict(table: ObjectPreferencesTable) -> dict[str, object]:
    """Convert a table to a mapping of stringified identifier to record document."""
    return {str(identifier): record_to_dict(record) for identifier, record in table.items()}


def table_from_dict(data: object) -> ObjectPreferencesTable:
    """Build a table from a mapping of stringified identifier to record document.

    Raises:
        PersistenceError: If the mapping or any entry in it is malformed.
    """
    table = ObjectPreferencesTable()
    if data is None:
        return table
    if not isinstance(data, dict):
        raise PersistenceError(f"Preferences collection is not a mapping: {data!r}")

    for raw_key, raw_record in cast(dict[object, object], data).items():
        try:
            identifier = validate_identifier(int(str(raw_key)))
        except (InvalidArgumentError, ValueError) as e:
            raise PersistenceError(f"Malformed identifier {raw_key!r}") from e
        if not isinstance(raw_record, dict):
            raise PersistenceError(f"Preferences for {identifier} are not a mapping")
        try:
            record = record_from_dict(cast(dict[str, object], raw_record))
        except InvalidArgumentError as e:
            raise PersistenceError(f"Malformed preferences for {identifier}: {e}") from e
        table.set_record(identifier, record)
    return table


def preferences_to_document(
    groups: ObjectPreferencesTable, zones: ObjectPreferencesTable
) -> dict[str, object]:
    """Convert group and zone tables to one controller's document."""
    return {
        EntityKind.GROUP.value: table_to_dict(groups),
        EntityKind.ZONE.value: table_to_dict(zones),
    }


def preferences_from_document(
    document: dict[str, object] | None,
) -> tuple[ObjectPreferencesTable, ObjectPreferencesTable]:
    """Build (groups, zones) tables from one controller's document.

    A missing document or collection yields an empty table.

    Raises:
        PersistenceError: If the document is malformed.
    """
    if document is None:
        return ObjectPreferencesTable(), ObjectPreferencesTable()
    if not isinstance(document, dict):
        raise PersistenceError("Controller preferences document is not a mapping")
    groups = table_from_dict(document.get(EntityKind.GROUP.value))
    zones = table_from_dict(document.get(EntityKind.ZONE.value))
    return groups, zones


# -- Controller ----------------------------------------------------------------


class PreferencesController:
    """Group and zone preferences scoped to one bound controller.

    Reads fail for identifiers without an entry; writes create the entry.
    Resetting an entity blanks its fields but keeps it present.

    Example:
        prefs = PreferencesController(config)
        prefs.bind(state_store)           # loads saved preferences
        prefs.zone_set_favorite(3, True)  # also touches the last-used date
        prefs.store_preferences()
    """

    def __init__(self, config: ConfigManager) -> None:
        """Initialize an unbound controller with empty tables.

        Args:
            config: Configuration manager used for persistence.
        """
        self._config = config
        self._state: StateStore | None = None
        self._identity: str | None = None
        self._groups = ObjectPreferencesTable()
        self._zones = ObjectPreferencesTable()

    def init(self) -> None:
        """Return to the freshly constructed state: unbound, empty tables."""
        self._state = None
        self._identity = None
        self._groups.clear()
        self._zones.clear()

    # -- Bind / unbind ---------------------------------------------------------

    @property
    def is_bound(self) -> bool:
        """Return True while bound to a live source."""
        return self._identity is not None

    @property
    def controller_identity(self) -> str | None:
        """Return the bound controller identity, or None while unbound."""
        return self._identity

    def bind(self, state: StateStore) -> None:
        """Bind to a live source and load its controller's saved preferences.

        The saved document is read and parsed before anything changes, so a
        failed bind leaves the previous binding and tables untouched.

        Args:
            state: The live system-state source.

        Raises:
            InvalidArgumentError: If the source has no controller identity yet
                (for example, it is not connected).
            PersistenceError: If the saved preferences cannot be read.
        """
        identity = state.controller_identity
        if not identity:
            raise InvalidArgumentError("Cannot bind: controller identity is not available")

        groups, zones = self._read_tables(identity)
        self._state = state
        self._identity = identity
        self._replace_tables(groups, zones)
        logger.debug(
            "Preferences bound to controller %s: %d groups, %d zones",
            identity,
            len(groups),
            len(zones),
        )

    def unbind(self) -> None:
        """Forget the bound source; in-memory preferences are kept."""
        if self._identity is not None:
            logger.debug("Preferences unbound from controller %s", self._identity)
        self._state = None
        self._identity = None

    def _require_identity(self) -> str:
        if self._identity is None:
            raise BindingRequiredError("Preferences are not bound to a controller")
        return self._identity

    # -- Tables ----------------------------------------------------------------

    @property
    def groups(self) -> ObjectPreferencesTable:
        """Return the group preferences table."""
        return self._groups

    @property
    def zones(self) -> ObjectPreferencesTable:
        """Return the zone preferences table."""
        return self._zones

    def table_for(self, kind: EntityKind) -> ObjectPreferencesTable:
        """Return the table holding preferences for ``kind``."""
        return self._groups if kind is EntityKind.GROUP else self._zones

    def _record_for_write(self, ref: EntityRef) -> ObjectPreferences:
        # Work on a copy so a rejected value leaves the table untouched.
        validate_identifier(ref.identifier)
        table = self.table_for(ref.kind)
        if table.has_record(ref.identifier):
            return table.get_record(ref.identifier).copy()
        return ObjectPreferences()

    def _commit(self, ref: EntityRef, record: ObjectPreferences) -> Status:
        return self.table_for(ref.kind).set_record(ref.identifier, record)

    # -- Mutators --------------------------------------------------------------

    def reset(self) -> None:
        """Forget every field of every known group and zone."""
        for table in (self._groups, self._zones):
            for identifier in table.identifiers():
                table.set_record(identifier, ObjectPreferences())

    def reset_entity(self, ref: EntityRef) -> Status:
        """Forget every field of one group or zone, keeping its entry present."""
        validate_identifier(ref.identifier)
        return self._commit(ref, ObjectPreferences())

    def group_reset(self, group_id: int) -> Status:
        return self.reset_entity(EntityRef.group(group_id))

    def zone_reset(self, zone_id: int) -> Status:
        return self.reset_entity(EntityRef.zone(zone_id))

    # -- Observers -------------------------------------------------------------

    def has_preferences(self, ref: EntityRef) -> bool:
        """Return True if an entry exists for the entity, set fields or not."""
        return self.table_for(ref.kind).has_record(ref.identifier)

    def group_has_preferences(self, group_id: int) -> bool:
        return self.has_preferences(EntityRef.group(group_id))

    def zone_has_preferences(self, zone_id: int) -> bool:
        return self.has_preferences(EntityRef.zone(zone_id))

    def snapshot(self, ref: EntityRef) -> tuple[bool | None, datetime | None]:
        """Return (favorite, last-used date) with None for anything unset or absent."""
        table = self.table_for(ref.kind)
        if not table.has_record(ref.identifier):
            return None, None
        record = table.get_record(ref.identifier)
        favorite = record.get_favorite() if record.favorite.is_set else None
        last_used = record.get_last_used_date() if record.last_used_date.is_set else None
        return favorite, last_used

    # -- Getters ---------------------------------------------------------------
    # Each raises NotFoundError without an entry, NotInitializedError if unset.

    def get_favorite(self, ref: EntityRef) -> bool:
        return self.table_for(ref.kind).get_record(ref.identifier).get_favorite()

    def get_last_used_date(self, ref: EntityRef) -> datetime:
        return self.table_for(ref.kind).get_record(ref.identifier).get_last_used_date()

    def get_use_count(self, ref: EntityRef) -> int:
        return self.table_for(ref.kind).get_record(ref.identifier).get_use_count()

    def group_get_favorite(self, group_id: int) -> bool:
        return self.get_favorite(EntityRef.group(group_id))

    def group_get_last_used_date(self, group_id: int) -> datetime:
        return self.get_last_used_date(EntityRef.group(group_id))

    def group_get_use_count(self, group_id: int) -> int:
        return self.get_use_count(EntityRef.group(group_id))

    def zone_get_favorite(self, zone_id: int) -> bool:
        return self.get_favorite(EntityRef.zone(zone_id))

    def zone_get_last_used_date(self, zone_id: int) -> datetime:
        return self.get_last_used_date(EntityRef.zone(zone_id))

    def zone_get_use_count(self, zone_id: int) -> int:
        return self.get_use_count(EntityRef.zone(zone_id))

    # -- Setters ---------------------------------------------------------------

    def set_favorite(
        self, ref: EntityRef, favorite: bool, date: datetime | None = None
    ) -> Status:
        """Set the favorite flag and record when it changed.

        Args:
            ref: The group or zone.
            favorite: New favorite flag.
            date: Last-used date to store with the change, or None for now.

        Returns:
            Status.VALUE_ALREADY_SET if the flag already matched; the
            last-used date is then left unchanged. Otherwise Status.SUCCESS.
        """
        record = self._record_for_write(ref)
        status = record.set_favorite(favorite)
        if status is Status.VALUE_ALREADY_SET:
            return status
        if date is None:
            record.touch_last_used_date()
        else:
            record.set_last_used_date(date)
        self._commit(ref, record)
        return status

    def set_last_used_date(self, ref: EntityRef, date: datetime | None = None) -> Status:
        """Set the last-used date, or touch it to now when ``date`` is None."""
        record = self._record_for_write(ref)
        if date is None:
            record.touch_last_used_date()
            status = Status.SUCCESS
        else:
            status = record.set_last_used_date(date)
        self._commit(ref, record)
        return status

    def set_use_count(self, ref: EntityRef, count: int) -> Status:
        record = self._record_for_write(ref)
        status = record.set_use_count(count)
        self._commit(ref, record)
        return status

    def increment_use_count(self, ref: EntityRef) -> int:
        """Increment the use count and return the post-increment value."""
        record = self._record_for_write(ref)
        count = record.increment_use_count()
        self._commit(ref, record)
        return count

    def toggle_favorite(self, ref: EntityRef, date: datetime | None = None) -> bool:
        """Invert the favorite flag (unset counts as not favorite) and return it."""
        record = self._record_for_write(ref)
        favorite = not record.favorite.get_or(False)
        self.set_favorite(ref, favorite, date)
        return favorite

    def touch(self, ref: EntityRef, date: datetime | None = None) -> int:
        """Record an activation: update the last-used date and bump the use count.

        Returns:
            The post-increment use count.
        """
        record = self._record_for_write(ref)
        if date is None:
            record.touch_last_used_date()
        else:
            record.set_last_used_date(date)
        count = record.increment_use_count()
        self._commit(ref, record)
        return count

    def group_set_favorite(
        self, group_id: int, favorite: bool, date: datetime | None = None
    ) -> Status:
        return self.set_favorite(EntityRef.group(group_id), favorite, date)

    def zone_set_favorite(
        self, zone_id: int, favorite: bool, date: datetime | None = None
    ) -> Status:
        return self.set_favorite(EntityRef.zone(zone_id), favorite, date)

    def group_set_last_used_date(self, group_id: int, date: datetime | None = None) -> Status:
        return self.set_last_used_date(EntityRef.group(group_id), date)

    def zone_set_last_used_date(self, zone_id: int, date: datetime | None = None) -> Status:
        return self.set_last_used_date(EntityRef.zone(zone_id), date)

    def group_set_use_count(self, group_id: int, count: int) -> Status:
        return self.set_use_count(EntityRef.group(group_id), count)

    def zone_set_use_count(self, zone_id: int, count: int) -> Status:
        return self.set_use_count(EntityRef.zone(zone_id), count)

    def group_increment_use_count(self, group_id: int) -> int:
        return self.increment_use_count(EntityRef.group(group_id))

    def zone_increment_use_count(self, zone_id: int) -> int:
        return self.increment_use_count(EntityRef.zone(zone_id))

    def group_touch(self, group_id: int, date: datetime | None = None) -> int:
        return self.touch(EntityRef.group(group_id), date)

    def zone_touch(self, zone_id: int, date: datetime | None = None) -> int:
        return self.touch(EntityRef.zone(zone_id), date)

    # -- Persistence -----------------------------------------------------------

    def _read_tables(self, identity: str) -> tuple[ObjectPreferencesTable, ObjectPreferencesTable]:
        document = self._config.get_controller_preferences(identity)
        return preferences_from_document(document)

    def _report_unknown(self, kind: EntityKind, table: ObjectPreferencesTable) -> None:
        """Log saved entries the bound topology does not currently report.

        The entries are kept. Sorting only visits live entities.
        """
        if self._state is None or not self._state.identifiers(kind):
            return
        unknown = [i for i in table.identifiers() if not self._state.has_entity(kind, i)]
        if unknown:
            logger.debug(
                "Keeping saved preferences for %d %s not reported by %s: %s",
                len(unknown),
                kind.value,
                self._identity,
                unknown,
            )

    def _replace_tables(
        self, groups: ObjectPreferencesTable, zones: ObjectPreferencesTable
    ) -> None:
        self._groups.init_from(groups)
        self._zones.init_from(zones)
        self._report_unknown(EntityKind.GROUP, self._groups)
        self._report_unknown(EntityKind.ZONE, self._zones)

    def load_preferences(self) -> None:
        """Replace the tables with the bound controller's saved preferences.

        A controller with nothing saved yields empty tables. The table
        objects are refilled in place, so references to :attr:`groups` and
        :attr:`zones` stay valid.

        Raises:
            BindingRequiredError: If not bound.
            PersistenceError: If the saved document is malformed; the tables
                are left exactly as they were.
        """
        identity = self._require_identity()
        groups, zones = self._read_tables(identity)
        self._replace_tables(groups, zones)
        logger.debug(
            "Loaded preferences for %s: %d groups, %d zones",
            identity,
            len(groups),
            len(zones),
        )

    def store_preferences(self) -> None:
        """Save both tables under the bound controller's identity.

        Raises:
            BindingRequiredError: If not bound.
            PersistenceError: If the stored document for all controllers
                cannot be decoded; nothing is written.
        """
        identity = self._require_identity()
        document = preferences_to_document(self._groups, self._zones)
        self._config.save_controller_preferences(identity, document)
        logger.debug(
            "Stored preferences for %s: %d groups, %d zones",
            identity,
            len(self._groups),
            len(self._zones),
        )
