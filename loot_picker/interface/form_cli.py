"""
Interactive terminal form for the Loot Picker.

Mirrors the loot picker window: two numeric controls, a text entry, a
multi-line entry and a Pick Loot button, with live labels underneath. Each
command becomes a form event; the form keeps only the latest FormState
snapshot and re-renders it after every event.
"""

import logging
from typing import Callable, Optional

from loot_picker.interface.form_state import (
    CONTROL_MAX,
    CONTROL_MIN,
    EntryChanged,
    FormEvent,
    FormState,
    MultilineAppended,
    MultilineCleared,
    PickRequested,
    SliderChanged,
    SpinnerChanged,
    apply_event,
    render_labels,
)
from loot_picker.observability.run_log import EventType, get_run_log
from loot_picker.rng.rng_adapter import RandomSource
from loot_picker.tables.table_types import LootTable


logger = logging.getLogger(__name__)


class LootFormCLI:
    """Interactive command-line form for picking loot."""

    def __init__(
        self,
        table: LootTable,
        rng: RandomSource,
        output: Callable[[str], None] = print,
    ):
        self.table = table
        self.rng = rng
        self.output = output
        self.state = FormState()
        self.running = False
        self.commands: dict[str, Callable[[str], Optional[FormEvent]]] = {
            "slider": self.cmd_slider,
            "spinner": self.cmd_spinner,
            "text": self.cmd_text,
            "multi": self.cmd_multi,
            "clear": self.cmd_clear,
            "pick": self.cmd_pick,
            "show": self.cmd_show,
            "log": self.cmd_log,
            "help": self.cmd_help,
            "quit": self.cmd_quit,
            "exit": self.cmd_quit,
        }

    def run(self, read_input: Callable[[str], str] = input) -> FormState:
        """Run the interactive loop and return the final snapshot."""
        self.running = True
        self.output("=" * 40)
        self.output("LOOT PICKER")
        self.output(self.table.describe())
        self.output("=" * 40)
        self.output("Type 'help' for available commands, 'quit' to exit.\n")
        self.render()

        while self.running:
            try:
                user_input = read_input("loot> ").strip()
                if not user_input:
                    continue

                self.process_command(user_input)

            except KeyboardInterrupt:
                self.output("\nInterrupted. Type 'quit' to exit.")
            except EOFError:
                self.running = False

        return self.state

    def process_command(self, user_input: str) -> None:
        """Turn a command into an event, apply it and re-render."""
        parts = user_input.split(maxsplit=1)
        cmd = parts[0].lower()
        args = parts[1] if len(parts) > 1 else ""

        handler = self.commands.get(cmd)
        if handler is None:
            self.output(f"Unknown command: {cmd}. Type 'help' for available commands.")
            return

        event = handler(args)
        if event is not None:
            self.dispatch(event)

    def dispatch(self, event: FormEvent) -> FormState:
        """Apply one event and render the new snapshot."""
        self.state = apply_event(self.state, event, self.table, self.rng)
        if self.state.loot_error and isinstance(event, PickRequested):
            logger.warning(f"Pick failed: {self.state.loot_error}")
        self.render()
        return self.state

    def render(self) -> None:
        for label in render_labels(self.state):
            self.output(label)

    def _parse_control_value(self, name: str, args: str) -> Optional[int]:
        try:
            return int(args.strip())
        except ValueError:
            self.output(f"Usage: {name} N ({CONTROL_MIN}-{CONTROL_MAX})")
            return None

    def cmd_slider(self, args: str) -> Optional[FormEvent]:
        """Set the slider."""
        value = self._parse_control_value("slider", args)
        return SliderChanged(value) if value is not None else None

    def cmd_spinner(self, args: str) -> Optional[FormEvent]:
        """Set the spinbox."""
        value = self._parse_control_value("spinner", args)
        return SpinnerChanged(value) if value is not None else None

    def cmd_text(self, args: str) -> Optional[FormEvent]:
        return EntryChanged(args)

    def cmd_multi(self, args: str) -> Optional[FormEvent]:
        return MultilineAppended(args)

    def cmd_clear(self, args: str) -> Optional[FormEvent]:
        return MultilineCleared()

    def cmd_pick(self, args: str) -> Optional[FormEvent]:
        return PickRequested()

    def cmd_show(self, args: str) -> Optional[FormEvent]:
        """Re-render without changing anything."""
        self.render()
        return None

    def cmd_log(self, args: str) -> Optional[FormEvent]:
        """Show recent picks from the run log."""
        self.output(get_run_log().format_log(event_types=[EventType.SELECTION], max_events=10))
        return None

    def cmd_help(self, args: str) -> Optional[FormEvent]:
        self.output(f"""
Available Commands:
  slider N    - Set the slider ({CONTROL_MIN}-{CONTROL_MAX})
  spinner N   - Set the spinbox ({CONTROL_MIN}-{CONTROL_MAX})
  text TEXT   - Set the text entry
  multi TEXT  - Add a line to the multi-line entry
  clear       - Clear the multi-line entry
  pick        - Pick Loot
  show        - Show the labels again
  log         - Show recent picks
  help        - Show this help
  quit/exit   - Exit
""")
        return None

    def cmd_quit(self, args: str) -> Optional[FormEvent]:
        self.running = False
        return None
