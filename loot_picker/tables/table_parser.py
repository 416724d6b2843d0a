"""
Loot table parser.

Turns the line-oriented table format into a LootTable:

    # comment lines start with '#'
    Weighted            <- or "Uniform", first non-comment line
    sword!!10
    shield!!5

Structural problems raise a TableParseError subclass carrying the offending
line number and content. No partial table is ever returned.
"""

import logging
import re
from typing import Iterable, Optional

from loot_picker.tables.table_types import (
    COMMENT_PREFIX,
    MAX_WEIGHT,
    WEIGHT_SEPARATOR,
    LootEntry,
    LootTable,
    LootTableError,
    TableMode,
    UnweightedEntry,
    WeightedEntry,
)


logger = logging.getLogger(__name__)

# Base-10 unsigned integer, optional leading '+', nothing else
_WEIGHT_RE = re.compile(r"\+?[0-9]+")
# One physical line with its "\n", or a trailing line without one
_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+\Z")


class TableParseError(LootTableError):
    """Raised when a loot table source is structurally invalid."""

    def __init__(self, line_number: int, line: str, message: str):
        self.line_number = line_number
        self.line = line
        self.message = message
        super().__init__(f"Line {line_number} ({line!r}): {message}")


class InvalidFormatHeaderError(TableParseError):
    """First non-comment line is not 'Weighted' or 'Uniform'."""
    pass


class MalformedWeightedLineError(TableParseError):
    """Weighted line does not split into exactly name!!weight."""
    pass


class InvalidWeightError(TableParseError):
    """Weight token is not a valid non-negative integer."""
    pass


def _strip_line_ending(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


def _parse_weight(line_number: int, line: str, token: str) -> int:
    if not _WEIGHT_RE.fullmatch(token):
        raise InvalidWeightError(
            line_number, line,
            f"Weight {token!r} is not a non-negative base-10 integer",
        )
    weight = int(token)
    if weight > MAX_WEIGHT:
        raise InvalidWeightError(
            line_number, line,
            f"Weight {weight} exceeds the maximum of {MAX_WEIGHT}",
        )
    return weight


def _parse_weighted_line(line_number: int, line: str) -> WeightedEntry:
    tokens = line.split(WEIGHT_SEPARATOR)
    if len(tokens) != 2:
        raise MalformedWeightedLineError(
            line_number, line,
            f'Name and weight should be separated by "{WEIGHT_SEPARATOR}" (e.g. greatsword!!10)',
        )
    name, weight_token = tokens
    return WeightedEntry(name=name, weight=_parse_weight(line_number, line, weight_token))


def parse_numbered_lines(
    numbered_lines: Iterable[tuple[int, str]],
    source: Optional[str] = None,
) -> LootTable:
    """
    Parse (line_number, text) pairs into a LootTable.

    Line numbers are reported as given, so callers that skip unreadable lines
    keep error messages pointing at the physical line in the file.

    Args:
        numbered_lines: Pairs of 1-based line number and line text
        source: Optional origin label stored on the table (e.g. file path)

    Returns:
        The parsed LootTable (possibly with zero entries)

    Raises:
        InvalidFormatHeaderError: First effective line is not a mode keyword
        MalformedWeightedLineError: Weighted line without exactly one "!!"
        InvalidWeightError: Weight is negative, non-numeric or too large
    """
    mode: Optional[TableMode] = None
    entries: list[LootEntry] = []
    warnings: list[str] = []

    for line_number, raw_line in numbered_lines:
        line = _strip_line_ending(raw_line)

        if line.startswith(COMMENT_PREFIX):
            continue

        if mode is None:
            mode = TableMode.from_header(line)
            if mode is None:
                raise InvalidFormatHeaderError(
                    line_number, line,
                    'First non-comment line should be "Weighted" or "Uniform"',
                )
            continue

        if mode == TableMode.WEIGHTED:
            entries.append(_parse_weighted_line(line_number, line))
        else:
            if WEIGHT_SEPARATOR in line:
                note = (
                    f"Line {line_number}: {line!r} contains \"{WEIGHT_SEPARATOR}\" in a "
                    f"Uniform table; did you mean to use Weighted?"
                )
                logger.warning(note)
                warnings.append(note)
            entries.append(UnweightedEntry(name=line))

    if mode is None:
        raise InvalidFormatHeaderError(
            0, "",
            'No header found; first non-comment line should be "Weighted" or "Uniform"',
        )

    table = LootTable(mode=mode, entries=entries, source=source, warnings=warnings)
    logger.debug(f"Parsed {table.describe()}")
    return table


def parse_lines(lines: Iterable[str], source: Optional[str] = None) -> LootTable:
    """Parse a sequence of lines, numbering them from 1."""
    return parse_numbered_lines(enumerate(lines, start=1), source=source)


def parse_text(text: str, source: Optional[str] = None) -> LootTable:
    """Parse a whole table given as one string. Only a newline ends a line."""
    return parse_lines(_LINE_RE.findall(text), source=source)
