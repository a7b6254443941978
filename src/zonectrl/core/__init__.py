"""Core business logic layer.

This module contains the stateful services that bind the preferences
and sort engine to the live system state.

Classes:
    StateStore: Central live state store with Qt signals.
    ConfigManager: QSettings wrapper for configuration.
    PreferencesController: Per-controller group and zone preferences.
    SortCriteriaController: Sort criteria and sorted output for one list.
    ClientController: Session owner tying the above together.
    ConnectHistory: Previously connected controller locations.
"""

from zonectrl.core.config import ConfigManager
from zonectrl.core.controller import ClientController
from zonectrl.core.history import ConnectHistory, HistoryEntry
from zonectrl.core.preferences import PreferencesController
from zonectrl.core.sort_controller import SortCriteriaController
from zonectrl.core.state import StateStore

__all__ = [
    "ClientController",
    "ConfigManager",
    "ConnectHistory",
    "HistoryEntry",
    "PreferencesController",
    "SortCriteriaController",
    "StateStore",
]
