"""
Random source for loot selection.

The selector only needs randint(a, b), so any random.Random works. The
LootRngAdapter wraps a private random.Random to add:
- Reproducibility via seeding
- Logging of every roll to the RunLog for observability
"""

from __future__ import annotations

import logging
import random
from typing import Optional, Protocol, runtime_checkable

from loot_picker.observability.run_log import get_run_log


logger = logging.getLogger(__name__)


@runtime_checkable
class RandomSource(Protocol):
    """Anything that can return a random integer in [a, b], inclusive."""

    def randint(self, a: int, b: int) -> int:
        ...


class LootRngAdapter:
    """
    Seedable random source that records every roll.

    Usage:
        from loot_picker.rng import LootRngAdapter
        from loot_picker.tables import load_table, select

        rng = LootRngAdapter(seed=42, reason_prefix="CLI")
        print(select(load_table("loot.txt"), rng))
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        reason_prefix: str = "LootPicker",
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the adapter.

        Args:
            seed: Seed for a fresh random.Random. Ignored when rng is given.
            reason_prefix: Prefix for roll reasons in the run log
            rng: Optional random.Random to draw from instead of a new one
        """
        self._reason_prefix = reason_prefix
        self._roll_count = 0
        if rng is not None:
            self._seed = None
            self._rng = rng
        else:
            self._seed = seed
            self._rng = random.Random(seed)
            if seed is not None:
                get_run_log().set_seed(seed)

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    def _make_reason(self, context: str) -> str:
        """Create a reason string for logging."""
        self._roll_count += 1
        return f"{self._reason_prefix}: {context} (roll #{self._roll_count})"

    def randint(self, a: int, b: int) -> int:
        """
        Return random integer in range [a, b], inclusive.

        Raises:
            ValueError: If b < a
        """
        if b < a:
            raise ValueError(f"Empty range for randint({a}, {b})")

        notation = f"d{b - a + 1}" if a == 1 else f"range({a}-{b})"
        reason = self._make_reason(notation)
        result = self._rng.randint(a, b)

        logger.debug(f"{reason} -> {result}")
        get_run_log().log_roll(notation=notation, roll=result, reason=reason)
        return result

    @property
    def roll_count(self) -> int:
        """Get the number of rolls made through this adapter."""
        return self._roll_count

    def reset_count(self) -> None:
        """Reset the roll counter."""
        self._roll_count = 0
