"""Multi-key comparator over group and zone snapshots.

The criteria are applied in priority order; the first key that tells two
entities apart decides. Identifiers break any remaining tie in ascending
order, so distinct entities never compare equal and the output is the
same for the same inputs every time.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from functools import cmp_to_key

from zonectrl.sort.criteria import SortCriteria
from zonectrl.sort.parameter import SortKey, SortOrder, SortParameter


@dataclass(frozen=True, slots=True)
class EntitySnapshot:
    """Attributes of one group or zone as seen at sort time.

    Attributes:
        identifier: Positive entity identifier.
        name: Display name, compared case-sensitively.
        muted: Live mute state.
        favorite: Favorite preference, or None if never set.
        last_used_date: Last-used preference, or None if never used.
    """

    identifier: int
    name: str = ""
    muted: bool = False
    favorite: bool | None = None
    last_used_date: datetime | None = None


def _cmp(a: object, b: object) -> int:
    return (a > b) - (a < b)  # type: ignore[operator]


def _compare_last_used(a: datetime | None, b: datetime | None, order: SortOrder) -> int:
    # "Never used" is a floor in both directions; only defined dates flip.
    if a is None and b is None:
        return 0
    if a is None:
        return -1
    if b is None:
        return 1
    result = _cmp(a, b)
    return result if order is SortOrder.ASCENDING else -result


def compare_by(a: EntitySnapshot, b: EntitySnapshot, parameter: SortParameter) -> int:
    """Compare two snapshots on a single criterion.

    Returns:
        Negative if ``a`` sorts first, positive if ``b`` does, 0 if tied.
    """
    key = parameter.key
    if key is SortKey.LAST_USED_DATE:
        return _compare_last_used(a.last_used_date, b.last_used_date, parameter.order)

    if key is SortKey.FAVORITE:
        result = _cmp(bool(a.favorite), bool(b.favorite))
    elif key is SortKey.MUTE:
        result = _cmp(a.muted, b.muted)
    elif key is SortKey.NAME:
        result = _cmp(a.name, b.name)
    else:
        result = _cmp(a.identifier, b.identifier)

    return result if parameter.order is SortOrder.ASCENDING else -result


def compare_snapshots(a: EntitySnapshot, b: EntitySnapshot, criteria: SortCriteria) -> int:
    """Compare two snapshots under the full criteria plus identifier tiebreak."""
    for parameter in criteria:
        result = compare_by(a, b, parameter)
        if result:
            return result
    return _cmp(a.identifier, b.identifier)


def sort_snapshots(snapshots: Iterable[EntitySnapshot], criteria: SortCriteria) -> list[int]:
    """Return the snapshot identifiers in sorted order.

    Args:
        snapshots: One snapshot per entity; identifiers must be distinct.
        criteria: Priority-ordered criteria (may be empty).

    Returns:
        A permutation of the input identifiers.
    """
    ordered = sorted(
        snapshots,
        key=cmp_to_key(lambda a, b: compare_snapshots(a, b, criteria)),
    )
    return [snapshot.identifier for snapshot in ordered]
