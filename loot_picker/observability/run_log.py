"""
Run Log for loot picker events.

Keeps an in-memory record of dice rolls, table loads and selections so a
session can be inspected (for example by the form's 'log' command).
Only the most recent MAX_EVENTS are kept; nothing is written to disk.
"""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional
import logging

logger = logging.getLogger(__name__)

MAX_EVENTS = 1000


class EventType(str, Enum):
    """Types of events that can be logged."""

    ROLL = "roll"  # Random source roll
    TABLE_LOAD = "table_load"  # Loot table parsed from a source
    SELECTION = "selection"  # Item picked from a table


@dataclass
class LogEvent:
    """Base class for all logged events."""

    event_type: ClassVar[EventType]
    timestamp: datetime = field(default_factory=datetime.now)
    sequence_number: int = 0


@dataclass
class RollEvent(LogEvent):
    """A single random roll."""

    event_type: ClassVar[EventType] = EventType.ROLL

    notation: str = ""  # e.g. "d6", "range(0-9)"
    roll: int = 0
    reason: str = ""

    def __str__(self) -> str:
        return f"[{self.sequence_number}] ROLL {self.notation} = {self.roll} ({self.reason})"


@dataclass
class TableLoadEvent(LogEvent):
    """A loot table was parsed."""

    event_type: ClassVar[EventType] = EventType.TABLE_LOAD

    source: str = ""
    mode: str = ""
    entry_count: int = 0
    warning_count: int = 0

    def __str__(self) -> str:
        return f"[{self.sequence_number}] LOAD {self.mode} table {self.source} ({self.entry_count} entries)"


@dataclass
class SelectionEvent(LogEvent):
    """An item was selected from a loot table."""

    event_type: ClassVar[EventType] = EventType.SELECTION

    source: str = ""
    mode: str = ""
    roll: int = 0
    die_size: int = 0
    result_name: str = ""
    index: int = 0

    def __str__(self) -> str:
        return f"[{self.sequence_number}] PICK {self.mode} d{self.die_size} = {self.roll}: {self.result_name}"


class RunLog:
    """
    Central run log for loot picker events.

    Singleton pattern - use get_run_log() to access. Sequence numbers keep
    counting after old events fall out of the bounded buffer.
    """

    _instance: Optional["RunLog"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return
        self._initialized = True
        self.reset()

    def reset(self) -> None:
        """Reset the log for a new session."""
        self._events: deque[LogEvent] = deque(maxlen=MAX_EVENTS)
        self._sequence: int = 0
        self._seed: Optional[int] = None
        self._session_start: datetime = datetime.now()
        logger.debug("RunLog reset")

    def set_seed(self, seed: int) -> None:
        """Record the RNG seed used for this session."""
        self._seed = seed
        logger.info(f"RunLog seed set: {seed}")

    def get_seed(self) -> Optional[int]:
        return self._seed

    def _log_event(self, event: LogEvent) -> None:
        self._sequence += 1
        event.sequence_number = self._sequence
        self._events.append(event)

    def log_roll(self, notation: str, roll: int, reason: str = "") -> RollEvent:
        """Log a random roll."""
        event = RollEvent(notation=notation, roll=roll, reason=reason)
        self._log_event(event)
        return event

    def log_table_load(
        self,
        source: str,
        mode: str,
        entry_count: int,
        warning_count: int = 0,
    ) -> TableLoadEvent:
        """Log a parsed table."""
        event = TableLoadEvent(
            source=source,
            mode=mode,
            entry_count=entry_count,
            warning_count=warning_count,
        )
        self._log_event(event)
        return event

    def log_selection(
        self,
        source: str,
        mode: str,
        roll: int,
        die_size: int,
        result_name: str,
        index: int,
    ) -> SelectionEvent:
        """Log a selection."""
        event = SelectionEvent(
            source=source,
            mode=mode,
            roll=roll,
            die_size=die_size,
            result_name=result_name,
            index=index,
        )
        self._log_event(event)
        return event

    def get_events(
        self,
        event_type: Optional[EventType] = None,
        since_sequence: int = 0,
    ) -> list[LogEvent]:
        """
        Get logged events.

        Args:
            event_type: Filter by event type (None = all)
            since_sequence: Only events after this sequence number

        Returns:
            List of events still held in the buffer
        """
        events = [e for e in self._events if e.sequence_number > since_sequence]
        if event_type:
            events = [e for e in events if e.event_type == event_type]
        return events

    def get_rolls(self) -> list[RollEvent]:
        return [e for e in self._events if isinstance(e, RollEvent)]

    def get_selections(self) -> list[SelectionEvent]:
        return [e for e in self._events if isinstance(e, SelectionEvent)]

    def format_log(
        self,
        event_types: Optional[list[EventType]] = None,
        max_events: int = 50,
    ) -> str:
        """
        Format the log for display.

        Args:
            event_types: Filter by event types (None = all)
            max_events: Maximum number of events to include

        Returns:
            Formatted log string
        """
        lines = [
            "=== Run Log ===",
            f"Session: {self._session_start.isoformat()}",
            f"Seed: {self._seed if self._seed is not None else 'not set'}",
            f"Total Events: {self._sequence}",
            "",
        ]

        events = list(self._events)
        if event_types:
            events = [e for e in events if e.event_type in event_types]
        if max_events:
            events = events[-max_events:]

        for event in events:
            lines.append(str(event))

        return "\n".join(lines)


# Singleton access
_run_log: Optional[RunLog] = None


def get_run_log() -> RunLog:
    """Get the global RunLog instance."""
    global _run_log
    if _run_log is None:
        _run_log = RunLog()
    return _run_log


def reset_run_log() -> RunLog:
    """Reset and return the global RunLog instance."""
    log = get_run_log()
    log.reset()
    return log
