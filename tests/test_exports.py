import unittest
from io import BytesIO

import pandas as pd
from openpyxl import load_workbook

from conflicts import ConflictError
from models import Cell, Schedule, TimeSlot
from pdf_export import export_schedule_pdf
from schedule_store import create_grid, set_cell
from views import (
    EMPTY_SUBJECT_COLOR, UNKNOWN_SUBJECT_COLOR, editor_changes, editor_frame,
    _color_scale, render_teacher_load_table, style_class_grid, subject_color, teacher_load_frame,
    toast_html,
)
from xlsx_export import build_class_sheet_rows, export_schedule_xlsx, sheet_names


def _sample_grid():
    slots = [TimeSlot("7:30", "8:30"), TimeSlot("8:30", "9:40")]
    grid = create_grid(["Nursery", "KG"], ["Sunday", "Monday"], slots)
    grid = set_cell(grid, "Nursery", "Sunday", 0, "subject", "Hifz")
    grid = set_cell(grid, "Nursery", "Sunday", 0, "teacher", "Ms. Khan")
    grid = set_cell(grid, "Nursery", "Monday", 1, "subject", "Tiffin")
    grid = set_cell(grid, "KG", "Sunday", 1, "teacher", "Ms. Khan")
    return grid


class SheetRowsTests(unittest.TestCase):
    def test_layout(self):
        rows = build_class_sheet_rows(_sample_grid(), "Nursery")
        self.assertEqual(rows, [
            ["Nursery"],
            ["Day", "7:30-8:30", "8:30-9:40"],
            ["Sunday", "Hifz - Ms. Khan", ""],
            ["Monday", "", "Tiffin"],
        ])

    def test_teacher_without_subject(self):
        rows = build_class_sheet_rows(_sample_grid(), "KG")
        self.assertEqual(rows[2], ["Sunday", "", " - Ms. Khan"])

    def test_sheet_names_are_excel_safe(self):
        names = sheet_names(["A/B", "x" * 40, "x" * 40, "Nursery"])
        self.assertEqual(names[0], "A_B")
        self.assertEqual(len(names[1]), 31)
        self.assertNotEqual(names[1], names[2])
        self.assertLessEqual(len(names[2]), 31)
        self.assertEqual(names[3], "Nursery")


class XlsxExportTests(unittest.TestCase):
    def test_one_sheet_per_class(self):
        wb = load_workbook(BytesIO(export_schedule_xlsx(_sample_grid())))
        self.assertEqual(wb.sheetnames, ["Nursery", "KG"])
        ws = wb["Nursery"]
        self.assertEqual(ws["A1"].value, "Nursery")
        self.assertEqual([c.value for c in ws[2]], ["Day", "7:30-8:30", "8:30-9:40"])
        self.assertEqual(ws["A3"].value, "Sunday")
        self.assertEqual(ws["B3"].value, "Hifz - Ms. Khan")
        self.assertEqual(ws["C4"].value, "Tiffin")
        self.assertIn(ws["C3"].value, (None, ""))
        self.assertTrue(ws["B3"].alignment.wrap_text)

    def test_refuses_grid_with_conflict(self):
        grid = create_grid(["A", "B"], ["Mon"], [TimeSlot("9", "10")])
        cells = grid.copy_cells()
        cells[0][0][0] = Cell("Math", "X")
        cells[1][0][0] = Cell("Art", "X")
        clashing = Schedule(grid.class_names, grid.days, grid.time_slots, cells)
        with self.assertRaises(ConflictError):
            export_schedule_xlsx(clashing)
        with self.assertRaises(ConflictError):
            export_schedule_pdf(clashing)


class PdfExportTests(unittest.TestCase):
    def test_produces_pdf(self):
        data = export_schedule_pdf(_sample_grid())
        self.assertTrue(data.startswith(b"%PDF"))


class ViewTests(unittest.TestCase):
    def test_subject_colors(self):
        self.assertEqual(subject_color(""), EMPTY_SUBJECT_COLOR)
        self.assertEqual(subject_color("Hifz"), "#f0ec13")
        self.assertEqual(subject_color("Chemistry"), UNKNOWN_SUBJECT_COLOR)

    def test_teacher_load_frame_sorted_with_zeros(self):
        counts = {"Mr. Roy": {"Monday": 1}, "Ms. Khan": {"Sunday": 2}}
        df = teacher_load_frame(counts, ["Sunday", "Monday"])
        self.assertEqual(list(df.index), ["Mr. Roy", "Ms. Khan"])
        self.assertEqual(df.loc["Ms. Khan"].tolist(), [2, 0])
        self.assertEqual(df.loc["Mr. Roy"].tolist(), [0, 1])

        styled = render_teacher_load_table(counts, ["Sunday", "Monday"])
        self.assertTrue(styled.data.equals(df))
        self.assertIn("<table", styled.to_html())

    def test_load_colour_bands(self):
        self.assertIn("#22c55e", _color_scale(0))
        self.assertIn("#eab308", _color_scale(0.25))
        self.assertIn("#ef4444", _color_scale(0.75))
        self.assertIn("#ef4444", _color_scale(1.0))

    def test_toast_escapes_message(self):
        markup = toast_html("<b>5A & 5B</b>", 2)
        self.assertIn("&lt;b&gt;5A &amp; 5B&lt;/b&gt;", markup)
        self.assertNotIn("<b>", markup)
        self.assertIn("2s", markup)
        self.assertIn("0s", toast_html("done", -1))

    def test_colour_grid_renders(self):
        html = style_class_grid(_sample_grid(), "Nursery").to_html()
        self.assertIn("#f0ec13", html)
        self.assertIn("Hifz - Ms. Khan", html)

    def test_editor_frame_diff(self):
        grid = _sample_grid()
        df = editor_frame(grid, "Nursery")
        self.assertEqual(df.shape, (2, 4))
        self.assertEqual(editor_changes(grid, "Nursery", df), [])

        edited = df.copy()
        edited.iloc[0, 1] = "Mr. Roy"   # Sunday, first slot, teacher
        edited.iloc[1, 2] = None         # Monday, second slot, subject cleared
        self.assertEqual(
            editor_changes(grid, "Nursery", edited),
            [("Sunday", 0, "teacher", "Mr. Roy"), ("Monday", 1, "subject", "")],
        )

    def test_editor_frame_unique_columns_for_blank_slots(self):
        grid = create_grid(["A"], ["Mon"], [TimeSlot(), TimeSlot()])
        df = editor_frame(grid, "A")
        self.assertTrue(df.columns.is_unique)
        self.assertIsInstance(df, pd.DataFrame)


if __name__ == "__main__":
    unittest.main()
