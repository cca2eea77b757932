"""
Paginated-document export of a MonthlyReport (reportlab platypus).

Landscape A3: centred title and month, the item grid with its two-level
header and a TOTALS line, then the summary and ration-side tables.
"""

from __future__ import annotations

from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A3, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from mess_config.schema import ReportConfig
from mess_modules.reporting.formatting import format_amount
from mess_modules.reporting.models import MonthlyReport, header_rows

HEADER_COLOR = colors.Color(102 / 255, 126 / 255, 234 / 255)
TOTALS_COLOR = colors.HexColor("#e8eaf6")

COLUMN_WIDTHS = [12 * mm, 50 * mm, 14 * mm] + [20 * mm, 18 * mm, 24 * mm] * 5


def _item_table(report: MonthlyReport, precision: int) -> Table:
    top, bottom = header_rows()
    top = list(top)
    top[12] = "Expenditure"
    top[15] = "Balance"
    data = [top, list(bottom)]
    data.extend(list(row) for row in report.rendered_rows(precision))
    data.append(list(report.totals_row("TOTALS", precision)))

    table = Table(data, colWidths=COLUMN_WIDTHS, repeatRows=2)
    style = [
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("BACKGROUND", (0, 0), (-1, 1), HEADER_COLOR),
        ("TEXTCOLOR", (0, 0), (-1, 1), colors.white),
        ("FONTNAME", (0, 0), (-1, 1), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, 1), 8),
        ("FONTSIZE", (0, 2), (-1, -1), 7),
        ("ALIGN", (0, 0), (-1, 1), "CENTER"),
        ("ALIGN", (3, 2), (-1, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("TOPPADDING", (0, 0), (-1, -1), 1),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 1),
        ("LEFTPADDING", (0, 0), (-1, -1), 2),
        ("RIGHTPADDING", (0, 0), (-1, -1), 2),
        ("BACKGROUND", (0, -1), (-1, -1), TOTALS_COLOR),
        ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
    ]
    for col in (0, 1, 2):
        style.append(("SPAN", (col, 0), (col, 1)))
    for start in range(3, 18, 3):
        style.append(("SPAN", (start, 0), (start + 2, 0)))
    table.setStyle(TableStyle(style))
    return table


def _key_value_table(title: str, lines, precision: int) -> Table:
    data = [[title, ""]]
    for label, value in lines:
        shown = str(value) if isinstance(value, int) else format_amount(value, precision)
        data.append([label, shown])
    table = Table(data, colWidths=[70 * mm, 35 * mm])
    table.setStyle(TableStyle([
        ("SPAN", (0, 0), (-1, 0)),
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("ALIGN", (1, 1), (1, -1), "RIGHT"),
        ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
    ]))
    return table


def _summary_table(report: MonthlyReport, precision: int) -> Table:
    data = [["Summary", "Qty", "Amount"]]
    for label, total in report.summary.as_pairs():
        data.append([
            label,
            format_amount(total.qty, precision),
            format_amount(total.amount, precision),
        ])
    table = Table(data, colWidths=[70 * mm, 30 * mm, 35 * mm])
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
    ]))
    return table


def write_pdf(report: MonthlyReport, path: Path, config: ReportConfig) -> Path:
    """Write ``report`` as a PDF file at ``path``."""
    precision = config.display_precision
    path.parent.mkdir(parents=True, exist_ok=True)

    doc = SimpleDocTemplate(
        str(path),
        pagesize=landscape(A3),
        topMargin=12 * mm,
        bottomMargin=12 * mm,
        leftMargin=10 * mm,
        rightMargin=10 * mm,
        title=f"{config.title} - {report.label}",
    )
    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "ReportTitle", parent=styles["Heading1"], fontSize=20, alignment=TA_CENTER,
    )
    month_style = ParagraphStyle(
        "ReportMonth", parent=styles["Normal"], fontSize=14, alignment=TA_CENTER,
    )

    elements = [
        Paragraph(escape(config.title), title_style),
        Spacer(1, 4),
        Paragraph(escape(f"Month: {report.label}"), month_style),
        Spacer(1, 10),
        _item_table(report, precision),
        Spacer(1, 14),
        _summary_table(report, precision),
        Spacer(1, 10),
    ]

    side_by_side = Table([[
        _key_value_table(title, lines, precision) for title, lines in report.sections()
    ]])
    side_by_side.setStyle(TableStyle([("VALIGN", (0, 0), (-1, -1), "TOP")]))
    elements.append(side_by_side)

    doc.build(elements)
    return path
