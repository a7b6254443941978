"""Data models for the controller, its groups, and its zones."""

from zonectrl.models.controller import Controller
from zonectrl.models.entity import EntityKind, EntityRef
from zonectrl.models.group import Group
from zonectrl.models.system_state import SystemState
from zonectrl.models.zone import Zone

__all__ = [
    "Controller",
    "EntityKind",
    "EntityRef",
    "Group",
    "SystemState",
    "Zone",
]
