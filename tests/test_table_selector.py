"""
Tests for loot selection.

Exact roll-to-entry mapping is checked with scripted random sources;
distribution properties are checked with seeded sources and tolerance bands.
"""

import random
from collections import Counter
from fractions import Fraction

import pytest

from loot_picker.observability.run_log import EventType, get_run_log
from loot_picker.rng.rng_adapter import LootRngAdapter
from loot_picker.tables.table_parser import parse_text
from loot_picker.tables.table_selector import (
    AllZeroWeightsError,
    EmptyTableError,
    SelectionError,
    WeightOverflowError,
    get_odds,
    roll_table,
    select,
)
from loot_picker.tables.table_types import (
    MAX_TOTAL_WEIGHT,
    MAX_WEIGHT,
    LootTable,
    TableMode,
    WeightedEntry,
)


def weighted(*pairs) -> LootTable:
    return LootTable(
        mode=TableMode.WEIGHTED,
        entries=[WeightedEntry(name, weight) for name, weight in pairs],
    )


class TestUniformSelection:
    """Uniform tables roll one face per entry."""

    def test_roll_maps_to_entry(self, scripted_rng):
        """Roll k picks the k-th entry."""
        table = parse_text("Uniform\nsword\nshield\npotion")
        rng = scripted_rng(1, 2, 3)

        assert [select(table, rng) for _ in range(3)] == ["sword", "shield", "potion"]
        assert rng.calls == [(1, 3), (1, 3), (1, 3)]

    def test_result_details(self, scripted_rng):
        """roll_table reports index, roll and die size."""
        table = parse_text("Uniform\nsword\nshield\npotion")
        result = roll_table(table, scripted_rng(2))

        assert result.name == "shield"
        assert result.index == 1
        assert result.roll == 2
        assert result.die_size == 3
        assert result.mode == TableMode.UNIFORM

    def test_single_pick_is_a_table_name(self, seeded_rng):
        """A pick is always one of the table's names."""
        table = parse_text("Uniform\nsword\nshield\npotion")
        for _ in range(50):
            assert select(table, seeded_rng) in {"sword", "shield", "potion"}

    def test_frequencies_converge(self):
        """Each of n entries is picked about 1/n of the time."""
        table = parse_text("Uniform\na\nb\nc\nd\n")
        rng = LootRngAdapter(seed=1234)
        trials = 8000

        counts = Counter(select(table, rng) for _ in range(trials))

        assert set(counts) == {"a", "b", "c", "d"}
        for name in "abcd":
            assert abs(counts[name] / trials - 0.25) < 0.03

    def test_empty_uniform_table(self, seeded_rng):
        """Nothing to pick from an empty table."""
        table = parse_text("# header only\nUniform\n")
        with pytest.raises(EmptyTableError):
            select(table, seeded_rng)


class TestWeightedSelection:
    """Weighted tables roll one face per unit of weight."""

    def test_every_face_maps_by_weight(self, scripted_rng):
        """Rolling each face once yields each entry weight-many times."""
        table = weighted(("a", 0), ("b", 2), ("c", 0), ("d", 1), ("e", 3))
        total = table.total_weight
        rng = scripted_rng(*range(1, total + 1))

        picks = Counter(select(table, rng) for _ in range(total))

        assert picks == Counter({"b": 2, "d": 1, "e": 3})
        assert all(call == (1, total) for call in rng.calls)

    def test_boundary_rolls(self, scripted_rng):
        """Cumulative boundaries fall on the right entries."""
        table = weighted(("sword", 10), ("shield", 5), ("potion", 1))
        rng = scripted_rng(1, 10, 11, 15, 16)

        assert [select(table, rng) for _ in range(5)] == [
            "sword", "sword", "shield", "shield", "potion",
        ]

    def test_zero_weight_never_picked(self, seeded_rng):
        """Zero-weight entries have probability 0."""
        table = weighted(("cursed", 0), ("gold", 1), ("junk", 0))
        for _ in range(200):
            assert select(table, seeded_rng) == "gold"

    def test_equal_weights_tolerance_band(self):
        """[a:1, b:1, c:1] over 10,000 draws stays within [0.30, 0.37]."""
        table = weighted(("a", 1), ("b", 1), ("c", 1))
        rng = LootRngAdapter(seed=7)
        trials = 10_000

        counts = Counter(select(table, rng) for _ in range(trials))

        for name in ("a", "b", "c"):
            assert 0.30 <= counts[name] / trials <= 0.37

    def test_frequencies_follow_weights(self):
        """Observed frequency converges to weight / total."""
        table = parse_text("Weighted\nsword!!10\nshield!!5\npotion!!1\n")
        rng = LootRngAdapter(seed=99)
        trials = 16_000

        counts = Counter(select(table, rng) for _ in range(trials))

        assert abs(counts["sword"] / trials - 10 / 16) < 0.02
        assert abs(counts["shield"] / trials - 5 / 16) < 0.02
        assert abs(counts["potion"] / trials - 1 / 16) < 0.01

    def test_all_zero_weights(self, seeded_rng):
        """All-zero weights raise instead of dividing by zero."""
        table = parse_text("Weighted\nsword!!0\nshield!!0")
        with pytest.raises(AllZeroWeightsError):
            select(table, seeded_rng)

    def test_empty_weighted_table(self, seeded_rng):
        """Empty Weighted table raises EmptyTableError, not AllZeroWeights."""
        table = parse_text("Weighted\n")
        with pytest.raises(EmptyTableError):
            select(table, seeded_rng)

    def test_weight_overflow(self, seeded_rng):
        """Totals beyond 32 bits raise WeightOverflowError."""
        table = weighted(("a", MAX_WEIGHT), ("b", 1))
        with pytest.raises(WeightOverflowError) as exc_info:
            select(table, seeded_rng)
        assert exc_info.value.total == MAX_WEIGHT + 1
        assert exc_info.value.limit == MAX_TOTAL_WEIGHT

    def test_total_at_limit_is_fine(self, scripted_rng):
        """A total exactly at the limit can still be sampled."""
        table = weighted(("a", MAX_TOTAL_WEIGHT - 1), ("b", 1))
        assert select(table, scripted_rng(MAX_TOTAL_WEIGHT)) == "b"


class TestSelectionPurity:
    """Selection never changes the table."""

    def test_table_unchanged_after_picks(self, seeded_rng):
        """Repeated picks leave entries untouched."""
        table = parse_text("Weighted\nsword!!10\nshield!!5\n")
        before = table.entries
        for _ in range(20):
            select(table, seeded_rng)
        assert table.entries == before

    def test_table_usable_after_error(self, scripted_rng):
        """A failed pick does not poison the table."""
        table = parse_text("Weighted\nsword!!0\nshield!!0")
        rng = scripted_rng()
        for _ in range(2):
            with pytest.raises(SelectionError):
                select(table, rng)
        assert rng.calls == []

    def test_selection_is_logged(self, scripted_rng):
        """Each pick records a SelectionEvent."""
        table = parse_text("Uniform\nsword\nshield\n", source="chest.txt")
        select(table, scripted_rng(2))

        events = get_run_log().get_events(EventType.SELECTION)
        assert len(events) == 1
        assert events[0].result_name == "shield"
        assert events[0].source == "chest.txt"
        assert events[0].die_size == 2

    def test_random_random_is_a_valid_source(self):
        """The standard library Random works as a random source."""
        table = parse_text("Uniform\nsword\nshield\n")
        assert select(table, random.Random(3)) in {"sword", "shield"}


class TestOdds:
    """Exact probabilities."""

    def test_weighted_odds(self):
        table = parse_text("Weighted\nsword!!10\nshield!!5\npotion!!1\ncursed!!0\n")
        assert get_odds(table) == [
            ("sword", Fraction(5, 8)),
            ("shield", Fraction(5, 16)),
            ("potion", Fraction(1, 16)),
            ("cursed", Fraction(0)),
        ]

    def test_uniform_odds(self):
        table = parse_text("Uniform\na\nb\nc\n")
        assert get_odds(table) == [("a", Fraction(1, 3)), ("b", Fraction(1, 3)), ("c", Fraction(1, 3))]

    def test_odds_errors_match_selection(self):
        """Degenerate tables raise the same errors as selection."""
        with pytest.raises(AllZeroWeightsError):
            get_odds(parse_text("Weighted\na!!0\n"))
        with pytest.raises(EmptyTableError):
            get_odds(parse_text("Uniform\n"))
