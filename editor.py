"""
🎛️ EDITOR SESSION
=================
Everything the user can do to a routine, as plain functions over one
EditorState object. The Streamlit page keeps the state in session_state and
calls these; nothing here knows about widgets.
Every accepted change is written to disk straight away.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import storage
from conflicts import ConflictError
from models import Schedule, ScheduleConfig, default_config
from schedule_store import (
    create_grid, resize_classes, resize_slots, set_cell, set_time_slot,
    rename_class as store_rename_class,
    set_class_names as store_set_class_names,
)


logger = logging.getLogger(__name__)


@dataclass
class EditorState:
    """
    - config: classes, days, slots
    - schedule: the committed grid (None until generated)
    - has_generated: hides the config form once a grid exists
    - error: last conflict message shown to the user ("" = none)
    """

    config: ScheduleConfig = field(default_factory=default_config)
    schedule: Optional[Schedule] = None
    has_generated: bool = False
    error: str = ""


def load_state() -> EditorState:
    """Initial state from disk (defaults for anything missing)."""
    config = storage.load_config()
    schedule = storage.load_schedule(config)
    has_generated = storage.load_has_generated() or schedule is not None
    return EditorState(config=config, schedule=schedule, has_generated=has_generated)


def persist(state: EditorState) -> None:
    storage.save_config(state.config)
    storage.save_schedule(state.schedule)
    storage.save_has_generated(state.has_generated)


def generate(state: EditorState) -> None:
    """Fresh empty grid from the current config. Old grid is wiped."""
    c = state.config
    state.schedule = create_grid(c.class_names, c.days, c.time_slots)
    state.error = ""
    state.has_generated = True
    persist(state)
    logger.info(
        "Generated grid: %d classes, %d days, %d slots",
        len(c.class_names), len(c.days), len(c.time_slots),
    )


def edit_cell(
    state: EditorState,
    class_name: str,
    day: str,
    slot_index: int,
    field_name: str,
    value: str,
) -> bool:
    """
    Try to change one field of one cell.
    True = committed. False = clash; grid kept as it was and state.error set.
    """
    if state.schedule is None:
        raise ValueError("Generate a schedule before editing it")
    try:
        updated = set_cell(state.schedule, class_name, day, slot_index, field_name, value)
    except ConflictError as e:
        state.error = e.message
        return False
    state.schedule = updated
    state.error = ""
    storage.save_schedule(state.schedule)
    return True


def change_class_count(state: EditorState, new_count: int) -> None:
    state.config, state.schedule = resize_classes(state.schedule, state.config, new_count)
    persist(state)


def change_period_count(state: EditorState, new_count: int) -> None:
    state.config, state.schedule = resize_slots(state.schedule, state.config, new_count)
    persist(state)


def rename_class(state: EditorState, index: int, new_name: str) -> None:
    """Raises ValueError for an empty or duplicate name; state untouched then."""
    state.config, state.schedule = store_rename_class(state.schedule, state.config, index, new_name)
    persist(state)


def set_class_names(state: EditorState, names: List[str]) -> None:
    """Rename every class in one go (no half-renamed state on a clash)."""
    state.config, state.schedule = store_set_class_names(state.schedule, state.config, names)
    persist(state)


def change_time_slot(state: EditorState, index: int, start: Optional[str] = None, end: Optional[str] = None) -> None:
    state.config, state.schedule = set_time_slot(state.schedule, state.config, index, start, end)
    persist(state)


def new_routine(state: EditorState) -> None:
    """Forget everything: wipe saved data and go back to the default config."""
    storage.clear_state()
    state.config = default_config()
    state.schedule = None
    state.has_generated = False
    state.error = ""
    logger.info("Started a new routine")


def can_export(state: EditorState) -> bool:
    return state.schedule is not None and not state.error
