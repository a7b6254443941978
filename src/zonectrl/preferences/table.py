"""Identifier-keyed table of per-entity preferences."""

from __future__ import annotations

from collections.abc import Iterator

from zonectrl.errors import InvalidArgumentError, NotFoundError
from zonectrl.preferences.record import ObjectPreferences
from zonectrl.preferences.status import Status


def validate_identifier(identifier: int) -> int:
    """Return ``identifier`` if it is a positive int.

    Raises:
        InvalidArgumentError: For non-int (including bool) or non-positive values.
    """
    if isinstance(identifier, bool) or not isinstance(identifier, int):
        raise InvalidArgumentError(f"Identifier must be an int, got {identifier!r}")
    if identifier <= 0:
        raise InvalidArgumentError(f"Identifier must be positive, got {identifier}")
    return identifier


class ObjectPreferencesTable:
    """Maps group or zone identifiers to their preferences.

    Reads and writes are asymmetric: :meth:`get_record` fails
    for an identifier with no entry, while :meth:`set_record` creates the
    entry on first write. A read never materializes an entry.
    """

    __slots__ = ("_records",)

    def __init__(self) -> None:
        self._records: dict[int, ObjectPreferences] = {}

    def init_from(self, other: ObjectPreferencesTable) -> Status:
        """Replace all entries with copies of ``other``'s entries."""
        self._records = {ident: record.copy() for ident, record in other._records.items()}
        return Status.SUCCESS

    def copy(self) -> ObjectPreferencesTable:
        """Return a deep copy of this table."""
        duplicate = ObjectPreferencesTable()
        duplicate.init_from(self)
        return duplicate

    def identifiers(self) -> list[int]:
        """Return the identifiers present in the table, ascending."""
        return sorted(self._records)

    def has_record(self, identifier: int) -> bool:
        """Return True if an entry exists, whether or not any field is set."""
        return identifier in self._records

    def get_record(self, identifier: int) -> ObjectPreferences:
        """Return the stored record for ``identifier``.

        The returned record is the table's own instance; mutating it
        mutates the table.

        Raises:
            NotFoundError: If there is no entry for the identifier.
        """
        record = self._records.get(identifier)
        if record is None:
            raise NotFoundError(f"No preferences for identifier {identifier}")
        return record

    def set_record(self, identifier: int, record: ObjectPreferences) -> Status:
        """Insert or update the entry for ``identifier`` with a copy of ``record``.

        Returns:
            Status.VALUE_ALREADY_SET if an equal record is already stored,
            otherwise Status.SUCCESS.
        """
        validate_identifier(identifier)
        existing = self._records.get(identifier)
        if existing is not None and existing == record:
            return Status.VALUE_ALREADY_SET
        self._records[identifier] = record.copy()
        return Status.SUCCESS

    def clear(self) -> None:
        """Remove every entry."""
        self._records.clear()

    def items(self) -> Iterator[tuple[int, ObjectPreferences]]:
        """Iterate over (identifier, record) pairs in ascending identifier order."""
        for identifier in self.identifiers():
            yield identifier, self._records[identifier]

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[int]:
        return iter(self.identifiers())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ObjectPreferencesTable):
            return NotImplemented
        return self._records == other._records

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ObjectPreferencesTable({len(self._records)} entries)"
