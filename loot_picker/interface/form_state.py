"""
State for the interactive loot form.

Every input produces a new immutable FormState through apply_event(), and
render_labels() turns a snapshot into the label text shown to the user.
Nothing else holds form state.
"""

from dataclasses import dataclass, replace
from typing import Optional, Union

from loot_picker.rng.rng_adapter import RandomSource
from loot_picker.tables.table_selector import SelectionError, select
from loot_picker.tables.table_types import LootTable


# Range shared by the slider and the spinbox
CONTROL_MIN = 1
CONTROL_MAX = 100


@dataclass(frozen=True)
class FormState:
    """Snapshot of every value the form displays."""
    slider_val: int = 0
    spinner_val: int = 0
    entry_val: str = ""
    multi_val: str = ""
    loot_val: str = ""                  # Last successfully picked item
    loot_error: Optional[str] = None    # Set when the last pick failed
    picks: int = 0                      # Successful picks so far


# =============================================================================
# EVENTS
# =============================================================================


@dataclass(frozen=True)
class SliderChanged:
    value: int


@dataclass(frozen=True)
class SpinnerChanged:
    value: int


@dataclass(frozen=True)
class EntryChanged:
    text: str


@dataclass(frozen=True)
class MultilineAppended:
    """One more line typed into the multi-line entry."""
    text: str


@dataclass(frozen=True)
class MultilineCleared:
    pass


@dataclass(frozen=True)
class PickRequested:
    """The Pick Loot button was pressed."""
    pass


FormEvent = Union[
    SliderChanged,
    SpinnerChanged,
    EntryChanged,
    MultilineAppended,
    MultilineCleared,
    PickRequested,
]


def clamp_control(value: int) -> int:
    """Clamp a numeric control value to the slider/spinbox range."""
    return max(CONTROL_MIN, min(CONTROL_MAX, value))


def apply_event(
    state: FormState,
    event: FormEvent,
    table: LootTable,
    rng: RandomSource,
) -> FormState:
    """
    Return the snapshot that follows an input event.

    PickRequested makes exactly one select() call. A SelectionError keeps the
    last picked item and records the error message instead of raising.

    Raises:
        TypeError: Unknown event type
    """
    if isinstance(event, SliderChanged):
        return replace(state, slider_val=clamp_control(event.value))

    if isinstance(event, SpinnerChanged):
        return replace(state, spinner_val=clamp_control(event.value))

    if isinstance(event, EntryChanged):
        return replace(state, entry_val=event.text)

    if isinstance(event, MultilineAppended):
        if state.multi_val:
            return replace(state, multi_val=f"{state.multi_val}\n{event.text}")
        return replace(state, multi_val=event.text)

    if isinstance(event, MultilineCleared):
        return replace(state, multi_val="")

    if isinstance(event, PickRequested):
        try:
            item = select(table, rng)
        except SelectionError as e:
            return replace(state, loot_error=str(e))
        return replace(state, loot_val=item, loot_error=None, picks=state.picks + 1)

    raise TypeError(f"Unknown form event: {event!r}")


def render_labels(state: FormState) -> list[str]:
    """Label lines for a snapshot, top to bottom."""
    selected = f"Selected Item: {state.loot_val}"
    if state.loot_error:
        selected = f"{selected} (error: {state.loot_error})"

    return [
        f"Added: {state.slider_val + state.spinner_val}",
        f"Subtracted: {state.slider_val - state.spinner_val}",
        f"Text: {state.entry_val}",
        f"Multiline Text: {state.multi_val}",
        selected,
    ]
