"""
Tests for timespine.core.units module.

Tests cover:
- Ascending/descending order tables
- smallest()/largest() selection
- Totality over every non-empty unit subset
- Empty-set precondition violation
"""

from itertools import combinations

import pytest

from timespine.core.errors import InternalInvariantViolation
from timespine.core.units import (
    ASCENDING_ORDER,
    DESCENDING_ORDER,
    Unit,
    as_units,
    largest,
    rank,
    smallest,
)


def all_non_empty_subsets():
    units = list(Unit)
    for size in range(1, len(units) + 1):
        for subset in combinations(units, size):
            yield frozenset(subset)


class TestOrderTables:
    """Tests for the hand-written order tables."""

    def test_ascending_is_fine_to_coarse(self):
        """Ascending order runs nanosecond to era."""
        assert ASCENDING_ORDER[0] is Unit.NANOSECOND
        assert ASCENDING_ORDER[-1] is Unit.ERA

    def test_orders_are_exact_reverses(self):
        """Descending order is the ascending order reversed."""
        assert DESCENDING_ORDER == tuple(reversed(ASCENDING_ORDER))

    def test_orders_cover_every_unit_once(self):
        """Both orders are permutations of the eight units."""
        assert sorted(ASCENDING_ORDER) == sorted(Unit)
        assert len(set(ASCENDING_ORDER)) == 8

    def test_rank(self):
        """rank() gives the ascending position."""
        assert rank(Unit.NANOSECOND) == 0
        assert rank("day") == 4
        assert rank(Unit.ERA) == 7


class TestSmallestLargest:
    """Tests for smallest() and largest()."""

    def test_smallest_picks_finest(self):
        """smallest() returns the finest unit present."""
        assert smallest({Unit.YEAR, Unit.DAY, Unit.MONTH}) is Unit.DAY

    def test_largest_picks_coarsest(self):
        """largest() returns the coarsest unit present."""
        assert largest({Unit.SECOND, Unit.HOUR, Unit.MINUTE}) is Unit.HOUR

    def test_accepts_unit_names(self):
        """Unit names are coerced."""
        assert smallest(["era", "nanosecond"]) is Unit.NANOSECOND
        assert largest(["era", "nanosecond"]) is Unit.ERA

    def test_single_unit(self):
        """A singleton set is its own smallest and largest."""
        assert smallest({Unit.MONTH}) is largest({Unit.MONTH}) is Unit.MONTH

    def test_unknown_name_raises_value_error(self):
        """Names outside the eight units are rejected."""
        with pytest.raises(ValueError):
            smallest({"fortnight"})

    def test_empty_smallest_is_invariant_violation(self):
        """An empty set is a caller bug, never a default."""
        with pytest.raises(InternalInvariantViolation, match="smallest"):
            smallest(set())

    def test_empty_largest_is_invariant_violation(self):
        """An empty set is a caller bug, never a default."""
        with pytest.raises(InternalInvariantViolation, match="largest"):
            largest([])


class TestOrderingTotality:
    """smallest/largest over all 255 non-empty subsets."""

    def test_subset_count(self):
        """There are 2^8 - 1 non-empty subsets."""
        assert sum(1 for _ in all_non_empty_subsets()) == 255

    def test_extremes_are_members(self):
        """Both extremes are members of the subset."""
        for subset in all_non_empty_subsets():
            assert smallest(subset) in subset
            assert largest(subset) in subset

    def test_smallest_not_above_largest(self):
        """smallest <= largest, equal iff the subset is a singleton."""
        for subset in all_non_empty_subsets():
            low, high = rank(smallest(subset)), rank(largest(subset))
            assert low <= high
            assert (low == high) == (len(subset) == 1)

    def test_extremes_bound_every_member(self):
        """No member is finer than smallest or coarser than largest."""
        for subset in all_non_empty_subsets():
            low, high = rank(smallest(subset)), rank(largest(subset))
            assert all(low <= rank(unit) <= high for unit in subset)


class TestAsUnits:
    def test_mixed_input(self):
        assert as_units(["day", Unit.DAY, Unit.YEAR]) == frozenset({Unit.DAY, Unit.YEAR})

    def test_empty(self):
        assert as_units([]) == frozenset()
