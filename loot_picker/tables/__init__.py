"""
Loot tables for the Loot Picker.

This module provides:
- Table types (mode, weighted and unweighted entries, the immutable table)
- The line-oriented table parser
- Uniform and weighted selection
- Loading tables from files
"""

from loot_picker.tables.table_types import (
    # Constants
    MAX_WEIGHT,
    MAX_TOTAL_WEIGHT,
    COMMENT_PREFIX,
    WEIGHT_SEPARATOR,
    # Enums
    TableMode,
    # Data classes
    UnweightedEntry,
    WeightedEntry,
    LootEntry,
    LootTable,
    SelectionResult,
    # Errors
    LootTableError,
)

from loot_picker.tables.table_parser import (
    TableParseError,
    InvalidFormatHeaderError,
    MalformedWeightedLineError,
    InvalidWeightError,
    parse_numbered_lines,
    parse_lines,
    parse_text,
)

from loot_picker.tables.table_selector import (
    SelectionError,
    EmptyTableError,
    AllZeroWeightsError,
    WeightOverflowError,
    roll_table,
    select,
    get_odds,
)

from loot_picker.tables.table_loader import (
    LootFileError,
    read_table_lines,
    load_table,
)

__all__ = [
    # Constants
    "MAX_WEIGHT",
    "MAX_TOTAL_WEIGHT",
    "COMMENT_PREFIX",
    "WEIGHT_SEPARATOR",
    # Table types
    "TableMode",
    "UnweightedEntry",
    "WeightedEntry",
    "LootEntry",
    "LootTable",
    "SelectionResult",
    # Errors
    "LootTableError",
    "TableParseError",
    "InvalidFormatHeaderError",
    "MalformedWeightedLineError",
    "InvalidWeightError",
    "SelectionError",
    "EmptyTableError",
    "AllZeroWeightsError",
    "WeightOverflowError",
    "LootFileError",
    # Parsing
    "parse_numbered_lines",
    "parse_lines",
    "parse_text",
    # Selection
    "roll_table",
    "select",
    "get_odds",
    # Loading
    "read_table_lines",
    "load_table",
]
