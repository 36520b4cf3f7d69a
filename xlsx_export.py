"""
📥 SPREADSHEET EXPORT
=====================
One sheet per class:
  row 1  → class name
  row 2  → "Day", then "start-end" for every slot
  rows 3+ → one row per day, "Subject - Teacher" in every slot
Written with pandas + openpyxl, every cell wraps its text.
"""

import re
from io import BytesIO
from typing import List

import pandas as pd
from openpyxl.styles import Alignment

from conflicts import ensure_no_conflicts
from models import Cell, Schedule


XLSX_FILE_NAME = "schedule.xlsx"
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_MAX_SHEET_NAME = 31
_BAD_SHEET_CHARS = re.compile(r"[\[\]:*?/\\]")


def cell_text(cell: Cell) -> str:
    """'Math - Mr. X', or just 'Math' when there is no teacher."""
    return cell.subject + (f" - {cell.teacher}" if cell.teacher else "")


def build_class_sheet_rows(schedule: Schedule, class_name: str) -> List[List[str]]:
    """The 2-D table for one class. Same layout for every export format."""
    rows: List[List[str]] = [[class_name]]
    rows.append(["Day"] + [slot.label for slot in schedule.time_slots])
    for day in schedule.days:
        row = [day]
        for slot_index in range(len(schedule.time_slots)):
            row.append(cell_text(schedule.get(class_name, day, slot_index)))
        rows.append(row)
    return rows


def sheet_names(class_names: List[str]) -> List[str]:
    """Excel-safe, unique sheet names in class order."""
    used = set()
    names = []
    for class_name in class_names:
        base = _BAD_SHEET_CHARS.sub("_", class_name).strip("'") or "Sheet"
        base = base[:_MAX_SHEET_NAME]
        name = base
        n = 2
        while name.lower() in used:
            suffix = f" ({n})"
            name = base[: _MAX_SHEET_NAME - len(suffix)] + suffix
            n += 1
        used.add(name.lower())
        names.append(name)
    return names


def export_schedule_xlsx(schedule: Schedule) -> bytes:
    """
    Workbook bytes, ready for a download button.
    Raises ConflictError if the grid still double-books someone.
    """
    ensure_no_conflicts(schedule)
    buffer = BytesIO()
    names = sheet_names(list(schedule.class_names))
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        for class_name, sheet_name in zip(schedule.class_names, names):
            rows = build_class_sheet_rows(schedule, class_name)
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, index=False, header=False)
            ws = writer.sheets[sheet_name]
            for ws_row in ws.iter_rows():
                for ws_cell in ws_row:
                    ws_cell.alignment = Alignment(wrap_text=True, vertical="top")
    return buffer.getvalue()
