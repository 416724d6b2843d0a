"""
Loot Picker - Main Entry Point

Reads a loot table file and picks an item from it, either once on the
command line or repeatedly through the interactive form.

Table format:
    # comments start with '#'
    Weighted        (or Uniform)
    sword!!10
    shield!!5
"""

import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from loot_picker.interface import LootFormCLI
from loot_picker.rng import LootRngAdapter
from loot_picker.tables import (
    LootTable,
    LootTableError,
    get_odds,
    load_table,
    roll_table,
)


# Configure logging
def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass
class PickerConfig:
    """Configuration for one loot picker run."""

    table_path: Path = field(default_factory=lambda: Path("loot_table.txt"))
    seed: Optional[int] = None
    count: int = 1
    show_odds: bool = False
    interactive: bool = False
    verbose: bool = False

    def __post_init__(self):
        """Ensure paths are Path objects and counts are usable."""
        if isinstance(self.table_path, str):
            self.table_path = Path(self.table_path)
        if self.count < 1:
            raise ValueError(f"count must be at least 1, got {self.count}")


# =============================================================================
# ARGUMENT PARSING
# =============================================================================

def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="loot-picker",
        description="Loot Picker - pick a random item from a loot table file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  loot-picker loot_table.txt              # Pick one item
  loot-picker loot_table.txt -n 5         # Pick five items
  loot-picker loot_table.txt --seed 42    # Reproducible pick
  loot-picker loot_table.txt --odds       # Show each item's chance
  loot-picker loot_table.txt -i           # Open the interactive form
        """
    )

    parser.add_argument(
        "table_file",
        type=Path,
        help="Loot table file (first non-comment line: Weighted or Uniform)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed the random source for reproducible picks",
    )
    parser.add_argument(
        "-n", "--count",
        type=_positive_int,
        default=1,
        help="Number of independent picks (default: 1)",
    )
    parser.add_argument(
        "--odds",
        action="store_true",
        help="Print each item's selection probability instead of picking",
    )
    parser.add_argument(
        "-i", "--interactive",
        action="store_true",
        help="Open the interactive loot form",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)


def create_config_from_args(args: argparse.Namespace) -> PickerConfig:
    """Create PickerConfig from parsed arguments."""
    return PickerConfig(
        table_path=args.table_file,
        seed=args.seed,
        count=args.count,
        show_odds=args.odds,
        interactive=args.interactive,
        verbose=args.verbose,
    )


# =============================================================================
# COMMANDS
# =============================================================================

def print_odds(table: LootTable) -> None:
    """Print every entry with its exact selection probability."""
    for name, chance in get_odds(table):
        print(f"{name}: {chance} ({float(chance):.2%})")


def print_picks(table: LootTable, rng: LootRngAdapter, count: int) -> None:
    """Pick count items and print one per line."""
    for _ in range(count):
        result = roll_table(table, rng)
        print(f"Selected Item: {result.name}")


def run(config: PickerConfig) -> int:
    """Run the picker for a configuration and return the exit status."""
    try:
        table = load_table(config.table_path)
        rng = LootRngAdapter(seed=config.seed, reason_prefix="LootPicker")

        if config.show_odds:
            print_odds(table)
        elif config.interactive:
            LootFormCLI(table, rng).run()
        else:
            print_picks(table, rng, config.count)

    except LootTableError as e:
        logger.debug(f"Fatal loot table error: {e!r}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CLI usage."""
    args = parse_arguments(argv)
    setup_logging(args.verbose)
    config = create_config_from_args(args)
    return run(config)


if __name__ == "__main__":
    sys.exit(main())
