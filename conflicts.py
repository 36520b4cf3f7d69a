"""
🚦 CONFLICT CHECKER
===================
One teacher cannot stand in two classrooms at once.
Walks the grid day by day, slot by slot, class by class, and stops at the
first teacher it sees twice in the same (day, slot).
"""

from typing import Optional, Sequence

from models import Schedule, TimeSlot


class ConflictError(Exception):
    """A change was refused because it would double-book a teacher."""

    def __init__(self, message: str, day: str = "", slot_label: str = "", teacher: str = ""):
        super().__init__(message)
        self.message = message
        self.day = day
        self.slot_label = slot_label
        self.teacher = teacher


def conflict_message(day: str, slot: TimeSlot, teacher: str) -> str:
    return f'Conflict on {day}, {slot.start}-{slot.end}: Teacher "{teacher}" is assigned to multiple classes.'


def find_first_conflict(
    schedule: Schedule,
    days: Sequence[str],
    class_names: Sequence[str],
    time_slots: Sequence[TimeSlot],
) -> Optional[ConflictError]:
    """
    Same scan as check_conflicts, but returns the error object (or None)
    so callers get day / slot / teacher without parsing the message.
    """
    for day in days:
        for slot_index, slot in enumerate(time_slots):
            seen = set()
            for class_name in class_names:
                teacher = schedule.get(class_name, day, slot_index).teacher.strip()
                if not teacher:
                    continue
                if teacher in seen:
                    return ConflictError(
                        conflict_message(day, slot, teacher),
                        day=day,
                        slot_label=slot.label,
                        teacher=teacher,
                    )
                seen.add(teacher)
    return None


def check_conflicts(
    schedule: Schedule,
    days: Sequence[str],
    class_names: Sequence[str],
    time_slots: Sequence[TimeSlot],
) -> Optional[str]:
    """Return the first conflict description, or None when the grid is clean."""
    error = find_first_conflict(schedule, days, class_names, time_slots)
    return error.message if error else None


def ensure_no_conflicts(schedule: Schedule) -> None:
    """Raise ConflictError if the grid double-books anyone."""
    error = find_first_conflict(schedule, schedule.days, schedule.class_names, schedule.time_slots)
    if error is not None:
        raise error
