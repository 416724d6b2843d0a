"""
Observability for the Loot Picker.

In-memory logging of rolls, table loads and selections.
"""

from loot_picker.observability.run_log import (
    RunLog,
    LogEvent,
    EventType,
    RollEvent,
    TableLoadEvent,
    SelectionEvent,
    get_run_log,
    reset_run_log,
)

__all__ = [
    "RunLog",
    "LogEvent",
    "EventType",
    "RollEvent",
    "TableLoadEvent",
    "SelectionEvent",
    "get_run_log",
    "reset_run_log",
]
