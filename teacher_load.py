"""
📊 TEACHER LOAD
===============
Counts how many periods each teacher has on each day. Read-only.
"""

from typing import Dict, Sequence

from models import Schedule, TimeSlot


def build_teacher_day_count(
    schedule: Schedule,
    days: Sequence[str],
    class_names: Sequence[str],
    time_slots: Sequence[TimeSlot],
) -> Dict[str, Dict[str, int]]:
    """
    teacher -> day -> number of assigned slots.
    Blank teachers are skipped; days without any slot are left out.
    """
    counts: Dict[str, Dict[str, int]] = {}
    for class_name in class_names:
        for day in days:
            for slot_index in range(len(time_slots)):
                teacher = schedule.get(class_name, day, slot_index).teacher.strip()
                if not teacher:
                    continue
                per_day = counts.setdefault(teacher, {})
                per_day[day] = per_day.get(day, 0) + 1
    return counts
