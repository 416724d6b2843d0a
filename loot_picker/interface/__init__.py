"""
Interactive form for the Loot Picker.
"""

from loot_picker.interface.form_state import (
    CONTROL_MIN,
    CONTROL_MAX,
    FormState,
    SliderChanged,
    SpinnerChanged,
    EntryChanged,
    MultilineAppended,
    MultilineCleared,
    PickRequested,
    FormEvent,
    clamp_control,
    apply_event,
    render_labels,
)
from loot_picker.interface.form_cli import LootFormCLI

__all__ = [
    "CONTROL_MIN",
    "CONTROL_MAX",
    "FormState",
    "SliderChanged",
    "SpinnerChanged",
    "EntryChanged",
    "MultilineAppended",
    "MultilineCleared",
    "PickRequested",
    "FormEvent",
    "clamp_control",
    "apply_event",
    "render_labels",
    "LootFormCLI",
]
