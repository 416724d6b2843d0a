"""
Loading loot tables from files.

Lines are decoded one at a time. A line that is not valid UTF-8 is skipped
with a warning and the rest of the file is still used; structural errors in
the readable lines remain fatal (see table_parser).
"""

import logging
from pathlib import Path
from typing import Iterator, Union

from loot_picker.observability.run_log import get_run_log
from loot_picker.tables.table_parser import parse_numbered_lines
from loot_picker.tables.table_types import LootTable, LootTableError


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class LootFileError(LootTableError):
    """Raised when a loot table file cannot be opened or read."""

    def __init__(self, path: PathLike, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Error while opening {self.path}: {reason}")


def read_table_lines(path: PathLike, encoding: str = "utf-8") -> Iterator[tuple[int, str]]:
    """
    Yield (line_number, text) for every decodable line of a file.

    Undecodable lines are logged and skipped but still counted, so line
    numbers always match the file.

    Raises:
        LootFileError: The file cannot be opened or read
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            for line_number, raw in enumerate(f, start=1):
                try:
                    text = raw.decode(encoding)
                except UnicodeDecodeError as e:
                    logger.warning(f"{path}:{line_number}: skipping unreadable line ({e.reason})")
                    continue
                yield line_number, text
    except OSError as e:
        raise LootFileError(path, e.strerror or str(e)) from e


def load_table(path: PathLike, encoding: str = "utf-8") -> LootTable:
    """
    Read and parse a loot table file.

    Args:
        path: Path to the table file
        encoding: Per-line text encoding

    Returns:
        The parsed LootTable, with the path as its source

    Raises:
        LootFileError: The file cannot be opened or read
        TableParseError: The file contents are structurally invalid
    """
    source = str(path)
    table = parse_numbered_lines(read_table_lines(path, encoding), source=source)

    logger.info(f"Loaded {table.describe()}")
    get_run_log().log_table_load(
        source=source,
        mode=table.mode.value,
        entry_count=len(table),
        warning_count=len(table.warnings),
    )
    return table
