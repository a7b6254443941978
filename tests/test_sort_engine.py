"""Tests for the multi-key sort engine."""

from datetime import datetime, timedelta, timezone

import pytest

from zonectrl.sort.criteria import SortCriteria
from zonectrl.sort.engine import EntitySnapshot, compare_snapshots, sort_snapshots
from zonectrl.sort.parameter import SortKey, SortOrder, SortParameter

EPOCH = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _criteria(*pairs: tuple[SortKey, SortOrder]) -> SortCriteria:
    return SortCriteria(SortParameter(key, order) for key, order in pairs)


@pytest.fixture
def zones() -> list[EntitySnapshot]:
    """Return Kitchen (favorite), Den (not favorite), Attic (unset)."""
    return [
        EntitySnapshot(1, "Kitchen", muted=False, favorite=True),
        EntitySnapshot(2, "Den", muted=True, favorite=False),
        EntitySnapshot(3, "Attic", muted=False, favorite=None),
    ]


class TestSingleKey:
    """Tests for one criterion at a time."""

    def test_empty_criteria_sorts_by_identifier(self, zones: list[EntitySnapshot]) -> None:
        """Test that no criteria leaves identifier order."""
        assert sort_snapshots(reversed(zones), SortCriteria()) == [1, 2, 3]

    def test_name_ascending(self, zones: list[EntitySnapshot]) -> None:
        """Test alphabetical order."""
        criteria = _criteria((SortKey.NAME, SortOrder.ASCENDING))
        assert sort_snapshots(zones, criteria) == [3, 2, 1]

    def test_name_is_case_sensitive(self) -> None:
        """Test that upper case sorts before lower case."""
        snapshots = [EntitySnapshot(1, "attic"), EntitySnapshot(2, "Bath")]
        criteria = _criteria((SortKey.NAME, SortOrder.ASCENDING))
        assert sort_snapshots(snapshots, criteria) == [2, 1]

    def test_identifier_descending(self, zones: list[EntitySnapshot]) -> None:
        """Test descending identifiers."""
        criteria = _criteria((SortKey.IDENTIFIER, SortOrder.DESCENDING))
        assert sort_snapshots(zones, criteria) == [3, 2, 1]

    def test_mute_ascending_puts_unmuted_first(self, zones: list[EntitySnapshot]) -> None:
        """Test that false sorts before true."""
        criteria = _criteria((SortKey.MUTE, SortOrder.ASCENDING))
        assert sort_snapshots(zones, criteria) == [1, 3, 2]

    def test_unset_favorite_counts_as_false(self) -> None:
        """Test that unset and False favorites tie."""
        snapshots = [EntitySnapshot(2, favorite=None), EntitySnapshot(1, favorite=False)]
        criteria = _criteria((SortKey.FAVORITE, SortOrder.DESCENDING))
        assert sort_snapshots(snapshots, criteria) == [1, 2]


class TestMultiKey:
    """Tests for priority-ordered criteria."""

    def test_favorites_then_name(self, zones: list[EntitySnapshot]) -> None:
        """Test favorite descending then name ascending."""
        criteria = _criteria(
            (SortKey.FAVORITE, SortOrder.DESCENDING),
            (SortKey.NAME, SortOrder.ASCENDING),
        )
        assert sort_snapshots(zones, criteria) == [1, 3, 2]

    def test_secondary_key_breaks_ties_only(self) -> None:
        """Test that the second key only decides among primary ties."""
        snapshots = [
            EntitySnapshot(1, "B", muted=True),
            EntitySnapshot(2, "A", muted=True),
            EntitySnapshot(3, "C", muted=False),
        ]
        criteria = _criteria(
            (SortKey.MUTE, SortOrder.ASCENDING),
            (SortKey.NAME, SortOrder.ASCENDING),
        )
        assert sort_snapshots(snapshots, criteria) == [3, 2, 1]

    def test_identifier_tiebreak_is_ascending(self) -> None:
        """Test that equal names fall back to ascending identifiers."""
        snapshots = [EntitySnapshot(i, "Same") for i in (5, 2, 9)]
        criteria = _criteria((SortKey.NAME, SortOrder.DESCENDING))
        assert sort_snapshots(snapshots, criteria) == [2, 5, 9]


class TestLastUsedDate:
    """Tests for the never-used floor."""

    @pytest.fixture
    def used(self) -> list[EntitySnapshot]:
        """Return two used snapshots around one never-used one."""
        return [
            EntitySnapshot(1, last_used_date=EPOCH + timedelta(days=1)),
            EntitySnapshot(2, last_used_date=None),
            EntitySnapshot(3, last_used_date=EPOCH + timedelta(days=2)),
        ]

    def test_descending_lists_never_used_first(self, used: list[EntitySnapshot]) -> None:
        """Test never-used, then most recent first."""
        criteria = _criteria((SortKey.LAST_USED_DATE, SortOrder.DESCENDING))
        assert sort_snapshots(used, criteria) == [2, 3, 1]

    def test_ascending_lists_never_used_first(self, used: list[EntitySnapshot]) -> None:
        """Test never-used, then least recent first."""
        criteria = _criteria((SortKey.LAST_USED_DATE, SortOrder.ASCENDING))
        assert sort_snapshots(used, criteria) == [2, 1, 3]

    def test_two_never_used_tie(self) -> None:
        """Test that two unset dates fall through to the next key."""
        snapshots = [EntitySnapshot(1, "B"), EntitySnapshot(2, "A")]
        criteria = _criteria(
            (SortKey.LAST_USED_DATE, SortOrder.DESCENDING),
            (SortKey.NAME, SortOrder.ASCENDING),
        )
        assert sort_snapshots(snapshots, criteria) == [2, 1]


class TestOrdering:
    """Tests for total order and determinism."""

    def test_no_adjacent_ties(self) -> None:
        """Test that distinct snapshots never compare equal."""
        snapshots = [EntitySnapshot(i, "Same", muted=bool(i % 2)) for i in range(1, 8)]
        criteria = _criteria(
            (SortKey.MUTE, SortOrder.DESCENDING),
            (SortKey.NAME, SortOrder.ASCENDING),
        )
        by_id = {s.identifier: s for s in snapshots}
        order = sort_snapshots(snapshots, criteria)
        for first, second in zip(order, order[1:]):
            assert compare_snapshots(by_id[first], by_id[second], criteria) < 0

    def test_result_independent_of_input_order(self, zones: list[EntitySnapshot]) -> None:
        """Test determinism across input permutations."""
        criteria = _criteria((SortKey.FAVORITE, SortOrder.ASCENDING))
        expected = sort_snapshots(zones, criteria)
        assert sort_snapshots(list(reversed(zones)), criteria) == expected
        assert sort_snapshots([zones[1], zones[2], zones[0]], criteria) == expected

    def test_output_is_permutation(self, zones: list[EntitySnapshot]) -> None:
        """Test that every identifier appears exactly once."""
        criteria = _criteria((SortKey.NAME, SortOrder.DESCENDING))
        assert sorted(sort_snapshots(zones, criteria)) == [1, 2, 3]

    def test_empty_input(self) -> None:
        """Test sorting nothing."""
        assert sort_snapshots([], _criteria((SortKey.NAME, SortOrder.ASCENDING))) == []
