"""
🧠 PDF EXPORT — Baby-level explanation
======================================
Same tables as the spreadsheet, as a clean printable PDF.
- Light theme only (white background, black text)
- One table per class
- A4 printable
"""

from io import BytesIO
from xml.sax.saxutils import escape
from typing import List

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer

from conflicts import ensure_no_conflicts
from models import Schedule
from xlsx_export import build_class_sheet_rows


PDF_FILE_NAME = "schedule.pdf"


def _light_theme_table_style() -> TableStyle:
    """Light theme: white/gray grid, black text."""
    return TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#f0f0f0")),
        ("BACKGROUND", (0, 1), (0, -1), colors.HexColor("#f7f7f7")),
        ("TEXTCOLOR", (0, 0), (-1, -1), colors.black),
        ("ALIGN", (0, 0), (-1, -1), "CENTER"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, 0), 10),
        ("FONTSIZE", (0, 1), (-1, -1), 9),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#cccccc")),
        ("ROWBACKGROUNDS", (1, 1), (-1, -1), [colors.white, colors.HexColor("#fafafa")]),
    ])


def export_schedule_pdf(schedule: Schedule) -> bytes:
    """
    Creates a PDF with one table per class, in class order.
    Raises ConflictError if the grid still double-books someone.
    """
    ensure_no_conflicts(schedule)
    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=landscape(A4), leftMargin=1.5*cm, rightMargin=1.5*cm)
    styles = getSampleStyleSheet()
    story: List = []

    n_slots = len(schedule.time_slots)
    usable = landscape(A4)[0] - 3*cm - 2.5*cm
    slot_width = max(2*cm, usable / max(n_slots, 1))

    for class_name in schedule.class_names:
        # First row of the sheet is the class name; here it becomes the heading
        rows = build_class_sheet_rows(schedule, class_name)[1:]
        t = Table(rows, colWidths=[2.5*cm] + [slot_width] * n_slots, repeatRows=1)
        t.setStyle(_light_theme_table_style())
        story.append(Paragraph(f"<b>Class: {escape(class_name)}</b>", styles["Heading2"]))
        story.append(Spacer(1, 0.3*cm))
        story.append(t)
        story.append(Spacer(1, 0.8*cm))

    doc.build(story)
    return buffer.getvalue()
