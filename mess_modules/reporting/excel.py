"""
Spreadsheet export of a MonthlyReport (openpyxl).

Sheet "Inventory" carries the title, month, the two header lines (group
headers merged over their three sub-columns), every item row, a blank
line and the GRAND TOTALS line.  Sheet "Summary" carries the five totals
and the ration-side sections.  Cell values are the rendered strings, so
the sheet matches the PDF and the screen listing exactly.
"""

from __future__ import annotations

from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from mess_config.schema import ReportConfig
from mess_modules.reporting.formatting import format_amount
from mess_modules.reporting.models import MonthlyReport, header_rows

HEADER_COLOR = "667EEA"
TOTALS_COLOR = "E8EAF6"

COLUMN_WIDTHS = (6, 25, 8) + (10, 10, 12) * 5

_thin = Side(style="thin", color="BFBFBF")
_border = Border(left=_thin, right=_thin, top=_thin, bottom=_thin)
_header_font = Font(name="Calibri", size=11, bold=True, color="FFFFFF")
_header_fill = PatternFill(start_color=HEADER_COLOR, end_color=HEADER_COLOR, fill_type="solid")
_totals_fill = PatternFill(start_color=TOTALS_COLOR, end_color=TOTALS_COLOR, fill_type="solid")
_center = Alignment(horizontal="center", vertical="center", wrap_text=True)
_right = Alignment(horizontal="right", vertical="center")


def _write_line(ws, row_idx: int, values, *, font=None, fill=None, align_numbers=True) -> None:
    for col_idx, value in enumerate(values, start=1):
        cell = ws.cell(row=row_idx, column=col_idx, value=value if value != "" else None)
        cell.border = _border
        if font is not None:
            cell.font = font
        if fill is not None:
            cell.fill = fill
        if align_numbers and col_idx > 3:
            cell.alignment = _right


def _inventory_sheet(ws, report: MonthlyReport, config: ReportConfig) -> None:
    precision = config.display_precision

    ws.cell(row=1, column=1, value=config.title).font = Font(name="Calibri", size=14, bold=True)
    ws.cell(row=2, column=1, value="Month:").font = Font(name="Calibri", size=11, bold=True)
    ws.cell(row=2, column=2, value=report.label)

    top, bottom = header_rows()
    _write_line(ws, 4, top, font=_header_font, fill=_header_fill, align_numbers=False)
    _write_line(ws, 5, bottom, font=_header_font, fill=_header_fill, align_numbers=False)
    for col_idx in range(1, len(top) + 1):
        ws.cell(row=4, column=col_idx).alignment = _center
        ws.cell(row=5, column=col_idx).alignment = _center

    # Sl No / Item Name / Unit span both header lines; groups span three columns.
    for col_idx in (1, 2, 3):
        ws.merge_cells(start_row=4, start_column=col_idx, end_row=5, end_column=col_idx)
    for start in range(4, len(top) + 1, 3):
        ws.merge_cells(start_row=4, start_column=start, end_row=4, end_column=start + 2)

    row_idx = 6
    for values in report.rendered_rows(precision):
        _write_line(ws, row_idx, values)
        row_idx += 1

    row_idx += 1
    _write_line(
        ws,
        row_idx,
        report.totals_row("GRAND TOTALS", precision),
        font=Font(name="Calibri", size=11, bold=True),
        fill=_totals_fill,
    )

    for col_idx, width in enumerate(COLUMN_WIDTHS, start=1):
        ws.column_dimensions[get_column_letter(col_idx)].width = width
    ws.freeze_panes = "D6"


def _section(ws, row_idx: int, title: str, lines, config: ReportConfig) -> int:
    ws.cell(row=row_idx, column=1, value=title).font = Font(name="Calibri", size=12, bold=True)
    row_idx += 1
    for label, value in lines:
        ws.cell(row=row_idx, column=1, value=label)
        if isinstance(value, int):
            cell = ws.cell(row=row_idx, column=2, value=value)
        else:
            cell = ws.cell(
                row=row_idx,
                column=2,
                value=format_amount(value, config.display_precision, config.currency_symbol),
            )
        cell.alignment = _right
        row_idx += 1
    return row_idx + 1


def _summary_sheet(ws, report: MonthlyReport, config: ReportConfig) -> None:
    precision = config.display_precision

    ws.cell(row=1, column=1, value="Summary").font = Font(name="Calibri", size=14, bold=True)
    ws.cell(row=2, column=1, value="Month:").font = Font(name="Calibri", size=11, bold=True)
    ws.cell(row=2, column=2, value=report.label)

    _write_line(ws, 4, ("Column", "Qty", "Amount"), font=_header_font, fill=_header_fill)
    row_idx = 5
    for label, total in report.summary.as_pairs():
        _write_line(ws, row_idx, (
            label,
            format_amount(total.qty, precision),
            format_amount(total.amount, precision, config.currency_symbol),
        ))
        for col_idx in (2, 3):
            ws.cell(row=row_idx, column=col_idx).alignment = _right
        row_idx += 1
    row_idx += 1

    for title, lines in report.sections():
        row_idx = _section(ws, row_idx, title, lines, config)

    ws.column_dimensions["A"].width = 30
    ws.column_dimensions["B"].width = 18
    ws.column_dimensions["C"].width = 18


def write_workbook(report: MonthlyReport, path: Path, config: ReportConfig) -> Path:
    """Write ``report`` as an .xlsx file at ``path``."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Inventory"
    _inventory_sheet(ws, report, config)
    _summary_sheet(wb.create_sheet("Summary"), report, config)

    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    return path
