"""
🎨 TABLE VIEWS
==============
pandas tables for the page: the editable class table, the coloured class
grid and the "Teacher Assignments per Day" summary.
Uses pandas Styler for cell coloring.
"""

import html
from typing import Dict, List, Sequence, Tuple

import pandas as pd

from models import CELL_FIELDS, Schedule
from xlsx_export import cell_text


SUBJECT_COLORS: Dict[str, str] = {
    "Hifz": "#f0ec13",
    "Ammapara": "#f39c12",
    "Najera": "#34495e",
    "Qaida": "#3498db",
    "Arabic": "#1300f7",
    "Bangla": "#2ecc71",
    "English": "#d35400",
    "Math": "#8e44ad",
    "Science": "#16a085",
    "BGS": "#f1c40f",
    "Deen": "#c0392b",
    "Tiffin": "#f81f0b",
    "Lunch": "#f81f0b",
    "Meal": "#f81f0b",
    "Hifz Revision": "#bdc3c7",
    "Ammapara Revision": "#95a5a6",
    "Najera Revision": "#7f8c8d",
    "Qaida Revision": "#2c3e50",
}
EMPTY_SUBJECT_COLOR = "#FFFFFF"
UNKNOWN_SUBJECT_COLOR = "#F5F5F5"


def subject_color(subject: str) -> str:
    """White for no subject, mapped colour if known, light gray otherwise."""
    if not subject:
        return EMPTY_SUBJECT_COLOR
    return SUBJECT_COLORS.get(subject, UNKNOWN_SUBJECT_COLOR)


def _text_color(background: str) -> str:
    """Black or white, whichever reads better on the background."""
    hex_value = background.lstrip("#")
    r, g, b = (int(hex_value[i:i + 2], 16) for i in (0, 2, 4))
    return "black" if (0.299 * r + 0.587 * g + 0.114 * b) > 150 else "white"


def class_grid_frame(schedule: Schedule, class_name: str) -> pd.DataFrame:
    """Rows=days, Cols=numbered slot labels, cells 'Subject - Teacher'."""
    data = []
    for day in schedule.days:
        data.append([
            cell_text(schedule.get(class_name, day, s)) for s in range(len(schedule.time_slots))
        ])
    columns = [f"{i + 1}. {slot.label}" for i, slot in enumerate(schedule.time_slots)]
    return pd.DataFrame(data, index=list(schedule.days), columns=columns)


def style_class_grid(schedule: Schedule, class_name: str):
    """Class grid with every cell painted in its subject's colour."""
    df = class_grid_frame(schedule, class_name)
    colours = pd.DataFrame(
        [
            [subject_color(schedule.get(class_name, day, s).subject) for s in range(len(schedule.time_slots))]
            for day in schedule.days
        ],
        index=df.index,
        columns=df.columns,
    )
    css = colours.map(lambda c: f"background-color: {c}; color: {_text_color(c)};")
    return df.style.apply(lambda _: css, axis=None).set_caption(class_name)


def _editor_column(slot_index: int, label: str, field_name: str) -> str:
    return f"{slot_index + 1}. {label} · {field_name.title()}"


def editor_frame(schedule: Schedule, class_name: str) -> pd.DataFrame:
    """
    Editable table for one class: rows=days, two text columns per slot
    (subject, teacher). Column names carry the slot number so they stay
    unique even when two slots share a label.
    """
    columns = []
    for s, slot in enumerate(schedule.time_slots):
        for field_name in CELL_FIELDS:
            columns.append(_editor_column(s, slot.label, field_name))
    data = []
    for day in schedule.days:
        row = []
        for s in range(len(schedule.time_slots)):
            cell = schedule.get(class_name, day, s)
            row.extend([cell.subject, cell.teacher])
        data.append(row)
    return pd.DataFrame(data, index=list(schedule.days), columns=columns)


def _as_text(value) -> str:
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    return str(value)


def editor_changes(
    schedule: Schedule,
    class_name: str,
    edited: pd.DataFrame,
) -> List[Tuple[str, int, str, str]]:
    """
    (day, slot_index, field, new_value) for every cell field that differs
    between the edited table and the committed grid, in day/slot order.
    """
    changes = []
    for day in schedule.days:
        for s, slot in enumerate(schedule.time_slots):
            cell = schedule.get(class_name, day, s)
            for field_name in CELL_FIELDS:
                new_value = _as_text(edited.at[day, _editor_column(s, slot.label, field_name)])
                if new_value != getattr(cell, field_name):
                    changes.append((day, s, field_name, new_value))
    return changes


def teacher_load_frame(
    teacher_day_count: Dict[str, Dict[str, int]],
    days: Sequence[str],
) -> pd.DataFrame:
    """Rows=teachers (sorted), Cols=days. Missing days shown as 0."""
    teachers: List[str] = sorted(teacher_day_count.keys())
    data = [[teacher_day_count[t].get(day, 0) for day in days] for t in teachers]
    df = pd.DataFrame(data, index=teachers, columns=list(days), dtype="int64")
    df.index.name = "Teacher"
    return df


def _color_scale(val: float, low_rgb: str = "#22c55e", mid_rgb: str = "#eab308", high_rgb: str = "#ef4444") -> str:
    """Value 0-1 -> green (free), yellow (light), red (at or near the busiest)."""
    if val <= 0:
        return f"background-color: {low_rgb}; color: white;"
    if val >= 1:
        return f"background-color: {high_rgb}; color: white;"
    if val < 0.5:
        return f"background-color: {mid_rgb}; color: black;"
    return f"background-color: {high_rgb}; color: white;"


def render_teacher_load_table(
    teacher_day_count: Dict[str, Dict[str, int]],
    days: Sequence[str],
):
    """Teacher x day counts, hotter colour = more periods that day."""
    df = teacher_load_frame(teacher_day_count, days)
    max_val = df.max().max() if not df.empty else 0
    max_val = max_val or 1

    def _style(val):
        if pd.isna(val):
            return ""
        return _color_scale(val / max_val)

    return df.style.map(_style).set_caption("Teacher Assignments per Day")


def toast_html(msg: str, remaining: int) -> str:
    """One notification row; the message is escaped, it may carry class or teacher names."""
    return (
        '<div class="toast-item">'
        f'<span class="toast-msg">{html.escape(msg)}</span>'
        f'<span class="toast-countdown">{max(0, remaining)}s</span>'
        '</div>'
    )
