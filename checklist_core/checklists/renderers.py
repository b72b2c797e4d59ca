# backend/checklist_core/checklists/renderers.py
"""
Byte-level document formatters for checklist exports.

They only know about a header block, column titles and string rows; which rows
to export is decided in checklists.exports.
"""
from __future__ import annotations

import csv
import io
from dataclasses import dataclass

from docx import Document as DocxDocument
from docx.enum.section import WD_ORIENT
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

REPORT_TITLE = "Daily Checklist Report"


@dataclass(frozen=True)
class ReportHeader:
    hospital_name: str
    date_line: str
    contact_line: str
    footer: str


def render_csv(columns: list[str], rows: list[list[str]]) -> bytes:
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(columns)
    writer.writerows(rows)
    return buf.getvalue().encode("utf-8")


# -------------------------
# PDF (reportlab)
# -------------------------
def _pdf_table(columns: list[str], rows: list[list[str]], cell_style) -> Table:
    data = [columns] + [[Paragraph(_escape(v), cell_style) for v in row] for row in rows]
    table = Table(data, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ("FONTSIZE", (0, 0), (-1, -1), 8),
                ("LEFTPADDING", (0, 0), (-1, -1), 2 * mm),
                ("RIGHTPADDING", (0, 0), (-1, -1), 2 * mm),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ]
        )
    )
    return table


def _escape(value: str) -> str:
    return (value or "").replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def render_pdf(header: ReportHeader, columns: list[str], rows: list[list[str]]) -> bytes:
    buf = io.BytesIO()
    page_size = landscape(A4)
    doc = SimpleDocTemplate(
        buf,
        pagesize=page_size,
        leftMargin=10 * mm,
        rightMargin=10 * mm,
        topMargin=10 * mm,
        bottomMargin=15 * mm,
        title=REPORT_TITLE,
    )

    styles = getSampleStyleSheet()
    cell_style = styles["BodyText"].clone("ChecklistCell", fontSize=8, leading=10)

    elements = [
        Paragraph(_escape(header.hospital_name), styles["Title"]),
        Paragraph(REPORT_TITLE, styles["Heading2"]),
        Paragraph(_escape(header.date_line), styles["Normal"]),
    ]
    if header.contact_line:
        elements.append(Paragraph(_escape(header.contact_line), styles["Italic"]))
    elements.append(Spacer(1, 6 * mm))
    elements.append(_pdf_table(columns, rows, cell_style))

    def _footer(canvas, _doc):
        canvas.saveState()
        canvas.setFont("Helvetica", 8)
        canvas.drawCentredString(page_size[0] / 2, 8 * mm, header.footer)
        canvas.restoreState()

    doc.build(elements, onFirstPage=_footer, onLaterPages=_footer)
    return buf.getvalue()


# -------------------------
# DOCX (python-docx)
# -------------------------
def _centered(doc, text: str, *, size: int, bold: bool = False) -> None:
    p = doc.add_paragraph()
    p.alignment = WD_ALIGN_PARAGRAPH.CENTER
    run = p.add_run(text)
    run.font.size = Pt(size)
    run.bold = bold


def render_docx(header: ReportHeader, columns: list[str], rows: list[list[str]]) -> bytes:
    doc = DocxDocument()

    section = doc.sections[0]
    section.orientation = WD_ORIENT.LANDSCAPE
    section.page_width, section.page_height = section.page_height, section.page_width

    _centered(doc, header.hospital_name, size=18, bold=True)
    _centered(doc, REPORT_TITLE, size=14)
    _centered(doc, header.date_line, size=11)
    if header.contact_line:
        _centered(doc, header.contact_line, size=9)

    table = doc.add_table(rows=1, cols=len(columns))
    table.style = "Table Grid"
    for i, title in enumerate(columns):
        cell = table.rows[0].cells[i]
        cell.text = title
        for run in cell.paragraphs[0].runs:
            run.bold = True
            run.font.size = Pt(9)

    for row in rows:
        cells = table.add_row().cells
        for i, value in enumerate(row):
            cells[i].text = value or ""
            for run in cells[i].paragraphs[0].runs:
                run.font.size = Pt(8)

    footer = section.footer.paragraphs[0]
    footer.text = header.footer
    footer.alignment = WD_ALIGN_PARAGRAPH.CENTER

    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()
