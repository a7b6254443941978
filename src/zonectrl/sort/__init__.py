"""Sort criteria and the multi-key sort engine."""

from zonectrl.sort.criteria import SortCriteria
from zonectrl.sort.engine import EntitySnapshot, compare_snapshots, sort_snapshots
from zonectrl.sort.parameter import (
    SortKey,
    SortOrder,
    SortParameter,
    sort_key_description,
    sort_order_description,
    sort_order_for_key_description,
    sort_order_for_key_detail_description,
)

__all__ = [
    "EntitySnapshot",
    "SortCriteria",
    "SortKey",
    "SortOrder",
    "SortParameter",
    "compare_snapshots",
    "sort_key_description",
    "sort_order_description",
    "sort_order_for_key_description",
    "sort_order_for_key_detail_description",
    "sort_snapshots",
]
