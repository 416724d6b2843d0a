"""
Pytest fixtures for the Loot Picker test suite.

Provides seeded random sources, scripted random sources for exact roll
checks, a clean run log per test and helpers for writing table files.
"""

import pytest
from pathlib import Path
from typing import Callable, Iterable

from loot_picker.observability.run_log import reset_run_log
from loot_picker.rng.rng_adapter import LootRngAdapter


# =============================================================================
# RUN LOG
# =============================================================================


@pytest.fixture(autouse=True)
def clean_run_log():
    """Every test starts and ends with an empty RunLog."""
    reset_run_log()
    yield
    reset_run_log()


# =============================================================================
# RANDOM SOURCE FIXTURES
# =============================================================================


class ScriptedRng:
    """Random source that returns queued rolls and records every call."""

    def __init__(self, rolls: Iterable[int]):
        self._rolls = list(rolls)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        roll = self._rolls.pop(0)
        assert a <= roll <= b, f"scripted roll {roll} outside [{a}, {b}]"
        return roll


@pytest.fixture
def seeded_rng():
    """LootRngAdapter with a fixed seed for reproducible draws."""
    return LootRngAdapter(seed=42, reason_prefix="Test")


@pytest.fixture
def scripted_rng() -> Callable[..., ScriptedRng]:
    """Factory for ScriptedRng: scripted_rng(1, 3, 2)."""
    def _make(*rolls: int) -> ScriptedRng:
        return ScriptedRng(rolls)
    return _make


# =============================================================================
# TABLE FILE FIXTURES
# =============================================================================


WEIGHTED_TEXT = """# Treasure chest
Weighted
sword!!10
shield!!5
potion!!1
"""

UNIFORM_TEXT = """Uniform
sword
shield
potion
"""


@pytest.fixture
def write_table(tmp_path) -> Callable[..., Path]:
    """Write table content (str or bytes) to a temp file and return its path."""
    def _write(content, name: str = "loot_table.txt") -> Path:
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes(content.encode("utf-8"))
        return path
    return _write


@pytest.fixture
def weighted_table_file(write_table) -> Path:
    return write_table(WEIGHTED_TEXT, "weighted.txt")


@pytest.fixture
def uniform_table_file(write_table) -> Path:
    return write_table(UNIFORM_TEXT, "uniform.txt")
