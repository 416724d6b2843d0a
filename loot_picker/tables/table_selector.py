"""
Loot selection.

Uniform tables roll a die with one face per entry. Weighted tables roll a die
with one face per unit of total weight and walk the cumulative weights, so
every entry is chosen with probability weight / total and zero-weight entries
are never chosen.
"""

import logging
from bisect import bisect_left
from fractions import Fraction
from itertools import accumulate

from loot_picker.observability.run_log import get_run_log
from loot_picker.rng.rng_adapter import RandomSource
from loot_picker.tables.table_types import (
    MAX_TOTAL_WEIGHT,
    LootTable,
    LootTableError,
    SelectionResult,
    TableMode,
)


logger = logging.getLogger(__name__)


class SelectionError(LootTableError):
    """Raised when no valid draw exists for a table. The table stays usable."""
    pass


class EmptyTableError(SelectionError):
    """Table has no entries."""

    def __init__(self, source: str = "<text>"):
        self.source = source
        super().__init__(f"Cannot pick loot from an empty table ({source})")


class AllZeroWeightsError(SelectionError):
    """Every weight in a Weighted table is zero."""

    def __init__(self, source: str = "<text>"):
        self.source = source
        super().__init__(f"Every weight is zero, nothing can be picked ({source})")


class WeightOverflowError(SelectionError):
    """Sum of weights exceeds MAX_TOTAL_WEIGHT."""

    def __init__(self, total: int, limit: int = MAX_TOTAL_WEIGHT):
        self.total = total
        self.limit = limit
        super().__init__(f"Total weight {total} exceeds the maximum of {limit}")


def _source_label(table: LootTable) -> str:
    return table.source or "<text>"


def _checked_total_weight(table: LootTable) -> int:
    """Total weight of a Weighted table, raising if no distribution exists."""
    if table.is_empty:
        raise EmptyTableError(_source_label(table))

    total = table.total_weight
    if total > MAX_TOTAL_WEIGHT:
        raise WeightOverflowError(total)
    if total == 0:
        raise AllZeroWeightsError(_source_label(table))
    return total


def _roll_uniform(table: LootTable, rng: RandomSource) -> SelectionResult:
    if table.is_empty:
        raise EmptyTableError(_source_label(table))

    die_size = len(table.entries)
    roll = rng.randint(1, die_size)
    index = roll - 1
    return SelectionResult(
        name=table.entries[index].name,
        index=index,
        roll=roll,
        die_size=die_size,
        mode=table.mode,
        source=table.source,
    )


def _roll_weighted(table: LootTable, rng: RandomSource) -> SelectionResult:
    total = _checked_total_weight(table)
    cumulative = list(accumulate(entry.weight for entry in table.entries))

    roll = rng.randint(1, total)
    # First entry whose cumulative weight reaches the roll. A zero-weight
    # entry shares its predecessor's cumulative value and is never first.
    index = bisect_left(cumulative, roll)
    return SelectionResult(
        name=table.entries[index].name,
        index=index,
        roll=roll,
        die_size=total,
        mode=table.mode,
        source=table.source,
    )


def roll_table(table: LootTable, rng: RandomSource) -> SelectionResult:
    """
    Draw one entry from a loot table and return the full result.

    The table is only read, so the same table may be rolled any number of
    times, including after a failed roll.

    Args:
        table: Table to draw from
        rng: Random source providing randint(a, b)

    Returns:
        SelectionResult with the chosen name, its index and the die roll

    Raises:
        EmptyTableError: The table has no entries
        AllZeroWeightsError: Weighted table whose weights are all zero
        WeightOverflowError: Weighted table whose total exceeds MAX_TOTAL_WEIGHT
    """
    if table.mode == TableMode.WEIGHTED:
        result = _roll_weighted(table, rng)
    else:
        result = _roll_uniform(table, rng)

    logger.debug(f"Picked {result.name!r} from {table.describe()} ({result})")
    get_run_log().log_selection(
        source=_source_label(table),
        mode=table.mode.value,
        roll=result.roll,
        die_size=result.die_size,
        result_name=result.name,
        index=result.index,
    )
    return result


def select(table: LootTable, rng: RandomSource) -> str:
    """Draw one entry from a loot table and return its name."""
    return roll_table(table, rng).name


def get_odds(table: LootTable) -> list[tuple[str, Fraction]]:
    """
    Exact selection probability of every entry, in table order.

    Raises the same errors as roll_table for tables that cannot be sampled.
    """
    if table.mode == TableMode.WEIGHTED:
        total = _checked_total_weight(table)
        return [(entry.name, Fraction(entry.weight, total)) for entry in table.entries]

    if table.is_empty:
        raise EmptyTableError(_source_label(table))
    count = len(table.entries)
    return [(entry.name, Fraction(1, count)) for entry in table.entries]
