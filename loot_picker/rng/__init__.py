"""
Random sources for loot selection.
"""

from loot_picker.rng.rng_adapter import LootRngAdapter, RandomSource

__all__ = [
    "LootRngAdapter",
    "RandomSource",
]
