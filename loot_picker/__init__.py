"""
Loot Picker - pick random items from uniform or weighted loot tables.
"""

from loot_picker.tables import (
    TableMode,
    UnweightedEntry,
    WeightedEntry,
    LootTable,
    SelectionResult,
    LootTableError,
    TableParseError,
    SelectionError,
    LootFileError,
    parse_lines,
    parse_text,
    load_table,
    roll_table,
    select,
    get_odds,
)
from loot_picker.rng import LootRngAdapter, RandomSource

__version__ = "0.1.0"

__all__ = [
    "TableMode",
    "UnweightedEntry",
    "WeightedEntry",
    "LootTable",
    "SelectionResult",
    "LootTableError",
    "TableParseError",
    "SelectionError",
    "LootFileError",
    "parse_lines",
    "parse_text",
    "load_table",
    "roll_table",
    "select",
    "get_odds",
    "LootRngAdapter",
    "RandomSource",
]
