"""Per-entity user preferences: optional scalars, records, and tables."""

from zonectrl.preferences.record import ObjectPreferences
from zonectrl.preferences.scalar import (
    FavoritePreference,
    LastUsedDatePreference,
    OptionalPreference,
    UseCountPreference,
)
from zonectrl.preferences.status import Status
from zonectrl.preferences.table import ObjectPreferencesTable, validate_identifier

__all__ = [
    "FavoritePreference",
    "LastUsedDatePreference",
    "ObjectPreferences",
    "ObjectPreferencesTable",
    "OptionalPreference",
    "Status",
    "UseCountPreference",
    "validate_identifier",
]
