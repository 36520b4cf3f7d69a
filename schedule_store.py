"""
🗂️ SCHEDULE STORE
=================
Creates the grid and changes it safely.
Every change builds a new grid first, checks it for clashes, and only hands
it back if it is clean. The grid you passed in is never touched.
"""

import logging
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from conflicts import find_first_conflict
from models import CELL_FIELDS, EMPTY_CELL, Cell, Schedule, ScheduleConfig, TimeSlot


logger = logging.getLogger(__name__)


def create_grid(
    class_names: Sequence[str],
    days: Sequence[str],
    time_slots: Sequence[TimeSlot],
) -> Schedule:
    """Brand-new grid, every cell empty."""
    return Schedule(class_names, days, time_slots)


def set_cell(
    schedule: Schedule,
    class_name: str,
    day: str,
    slot_index: int,
    field: str,
    value: str,
) -> Schedule:
    """
    Return a copy of schedule with one field of one cell replaced.
    Raises ConflictError (and returns nothing) if the copy double-books a teacher.
    """
    if field not in CELL_FIELDS:
        raise ValueError(f"Unknown cell field {field!r}; expected one of {CELL_FIELDS}")
    current = schedule.get(class_name, day, slot_index)
    ci = schedule.class_index(class_name)
    di = schedule.day_index(day)

    cells = schedule.copy_cells()
    cells[ci][di][slot_index] = replace(current, **{field: value})
    candidate = Schedule(schedule.class_names, schedule.days, schedule.time_slots, cells)

    error = find_first_conflict(candidate, candidate.days, candidate.class_names, candidate.time_slots)
    if error is not None:
        logger.warning("Rejected %s=%r for %s/%s/%d: %s", field, value, class_name, day, slot_index, error)
        raise error
    logger.debug("Set %s=%r for %s/%s/%d", field, value, class_name, day, slot_index)
    return candidate


def _next_class_name(existing: Sequence[str], position: int) -> str:
    """'Class N' for the new position, bumped until unused."""
    n = position
    while f"Class {n}" in existing:
        n += 1
    return f"Class {n}"


def _resize_list(items: list, new_count: int, make_default) -> list:
    updated = list(items[:new_count])
    while len(updated) < new_count:
        updated.append(make_default(updated))
    return updated


def resize_classes(
    schedule: Optional[Schedule],
    config: ScheduleConfig,
    new_count: int,
) -> Tuple[ScheduleConfig, Optional[Schedule]]:
    """
    Grow or shrink the class list (at least 1).
    New classes get empty cells; dropped classes lose their cells for good.
    """
    new_count = max(1, int(new_count))
    names = _resize_list(
        config.class_names,
        new_count,
        lambda current: _next_class_name(current, len(current) + 1),
    )
    new_config = replace(config, class_names=names)
    if schedule is None:
        return new_config, None

    cells = schedule.copy_cells()[:new_count]
    while len(cells) < new_count:
        cells.append([[EMPTY_CELL for _ in schedule.time_slots] for _ in schedule.days])
    logger.info("Resized classes %d -> %d", len(schedule.class_names), new_count)
    return new_config, Schedule(names, schedule.days, schedule.time_slots, cells)


def resize_slots(
    schedule: Optional[Schedule],
    config: ScheduleConfig,
    new_count: int,
) -> Tuple[ScheduleConfig, Optional[Schedule]]:
    """Grow or shrink the period list (at least 1). New slots have blank start/end."""
    new_count = max(1, int(new_count))
    slots = _resize_list(config.time_slots, new_count, lambda _current: TimeSlot())
    new_config = replace(config, time_slots=slots)
    if schedule is None:
        return new_config, None

    cells: List[List[List[Cell]]] = []
    for per_class in schedule.cells:
        cells.append([
            _resize_list(per_day, new_count, lambda _current: EMPTY_CELL)
            for per_day in per_class
        ])
    logger.info("Resized slots %d -> %d", len(schedule.time_slots), new_count)
    return new_config, Schedule(schedule.class_names, schedule.days, slots, cells)


def set_class_names(
    schedule: Optional[Schedule],
    config: ScheduleConfig,
    names: Sequence[str],
) -> Tuple[ScheduleConfig, Optional[Schedule]]:
    """
    Replace all class names at once (same count). Cells follow position.
    Raises ValueError for a blank or repeated name.
    """
    names = [n.strip() for n in names]
    if len(names) != len(config.class_names):
        raise ValueError(f"Expected {len(config.class_names)} class names, got {len(names)}")
    if any(not n for n in names):
        raise ValueError("Class name cannot be empty")
    seen = set()
    for n in names:
        if n in seen:
            raise ValueError(f"Class name {n!r} is already used")
        seen.add(n)
    new_config = replace(config, class_names=names)
    if schedule is None:
        return new_config, None
    return new_config, Schedule(names, schedule.days, schedule.time_slots, schedule.copy_cells())


def rename_class(
    schedule: Optional[Schedule],
    config: ScheduleConfig,
    index: int,
    new_name: str,
) -> Tuple[ScheduleConfig, Optional[Schedule]]:
    """Rename the class at index."""
    names = list(config.class_names)
    names[index] = new_name
    return set_class_names(schedule, config, names)


def set_time_slot(
    schedule: Optional[Schedule],
    config: ScheduleConfig,
    index: int,
    start: Optional[str] = None,
    end: Optional[str] = None,
) -> Tuple[ScheduleConfig, Optional[Schedule]]:
    """Change the start and/or end label of one slot. Cells are unchanged."""
    slots = list(config.time_slots)
    old = slots[index]
    slots[index] = TimeSlot(
        start=old.start if start is None else start,
        end=old.end if end is None else end,
    )
    new_config = replace(config, time_slots=slots)
    if schedule is None:
        return new_config, None
    return new_config, Schedule(schedule.class_names, schedule.days, slots, schedule.copy_cells())
