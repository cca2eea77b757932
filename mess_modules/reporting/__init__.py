"""
Reporting Module (``mess_modules.reporting``).

Monthly report assembly and its spreadsheet and PDF renderings.
"""

from mess_modules.reporting.formatting import (
    export_filename,
    format_amount,
    month_label,
    parse_month,
)
from mess_modules.reporting.models import ItemShortfall, MonthlyReport, header_rows
from mess_modules.reporting.service import SUPPORTED_FORMATS, ReportingService

__all__ = [
    "ItemShortfall",
    "MonthlyReport",
    "ReportingService",
    "SUPPORTED_FORMATS",
    "export_filename",
    "format_amount",
    "header_rows",
    "month_label",
    "parse_month",
]
