"""
Table type definitions for the Loot Picker.

A loot table is read once from a text file and then sampled any number of
times. Entries are a tagged union decided by the table mode at parse time:
Uniform tables hold UnweightedEntry items, Weighted tables hold WeightedEntry
items, and a table never mixes the two.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


# Weights are unsigned 32-bit values, and so is their sum.
MAX_WEIGHT = 2**32 - 1
MAX_TOTAL_WEIGHT = 2**32 - 1

COMMENT_PREFIX = "#"
WEIGHT_SEPARATOR = "!!"


class LootTableError(Exception):
    """Base class for every loot table failure."""
    pass


class TableMode(str, Enum):
    """Selection modes. Values are the exact header keywords."""
    UNIFORM = "Uniform"
    WEIGHTED = "Weighted"

    @classmethod
    def from_header(cls, header: str) -> Optional["TableMode"]:
        """Return the mode named by a header line, or None if unrecognized."""
        for mode in cls:
            if mode.value == header:
                return mode
        return None


@dataclass(frozen=True)
class UnweightedEntry:
    """An item in a Uniform table."""
    name: str


@dataclass(frozen=True)
class WeightedEntry:
    """An item in a Weighted table. Weight 0 means never selected."""
    name: str
    weight: int

    def __post_init__(self):
        if self.weight < 0:
            raise ValueError(f"Weight for {self.name!r} must be non-negative, got {self.weight}")


LootEntry = Union[UnweightedEntry, WeightedEntry]

_ENTRY_TYPES: dict[TableMode, type] = {
    TableMode.UNIFORM: UnweightedEntry,
    TableMode.WEIGHTED: WeightedEntry,
}


@dataclass(frozen=True)
class LootTable:
    """
    An immutable loot table.

    Entries keep the order of the source lines. Order has no effect on
    selection probability but keeps seeded draws reproducible.
    """
    mode: TableMode
    entries: tuple[LootEntry, ...] = ()
    source: Optional[str] = None          # File path or other origin label
    warnings: tuple[str, ...] = ()        # Non-fatal parse notes

    def __post_init__(self):
        # Accept any iterable but always store tuples
        object.__setattr__(self, "entries", tuple(self.entries))
        object.__setattr__(self, "warnings", tuple(self.warnings))

        expected = _ENTRY_TYPES[self.mode]
        for entry in self.entries:
            if not isinstance(entry, expected):
                raise ValueError(
                    f"{self.mode.value} table cannot hold {type(entry).__name__} {entry.name!r}"
                )

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def names(self) -> list[str]:
        """Entry names in table order."""
        return [entry.name for entry in self.entries]

    @property
    def total_weight(self) -> int:
        """
        Sum of weights for a Weighted table, entry count for a Uniform one.

        Not bounded here; the selector checks the sum against MAX_TOTAL_WEIGHT.
        """
        if self.mode == TableMode.WEIGHTED:
            return sum(entry.weight for entry in self.entries)
        return len(self.entries)

    def describe(self) -> str:
        """Short one-line summary for logs and status output."""
        origin = self.source or "<text>"
        return f"{self.mode.value} table from {origin} ({len(self.entries)} entries)"


@dataclass(frozen=True)
class SelectionResult:
    """Full record of one draw from a loot table."""
    name: str
    index: int          # Position of the chosen entry in LootTable.entries
    roll: int           # Die result, 1-based
    die_size: int       # Faces rolled: entry count (Uniform) or total weight (Weighted)
    mode: TableMode
    source: Optional[str] = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"d{self.die_size} -> {self.roll}: {self.name}"
