"""
Reporting Module Service (``mess_modules.reporting.service``).

Responsibility
--------------
Assembles the ``MonthlyReport`` for a month from the current item
collection and the ration-side figures, and writes it out as a
spreadsheet or a PDF.  The month defaults to the injected clock's
current month.

Architecture
------------
Layer: **Modules** -- orchestration.  Calls ``mess_engines`` for every
figure; the writers in ``excel`` and ``pdf`` only lay out what the
report already holds.

Failure Modes
-------------
- ``InvalidMonthError`` for a month selector that is not ``YYYY-MM``.
- ``UnsupportedExportFormatError`` for a format other than xlsx / pdf.
- ``OSError`` from the writers if the output directory is not writable.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from pathlib import Path

from mess_config.schema import AppConfig, ReportConfig
from mess_engines.fifo import value_item
from mess_engines.rows import report_rows
from mess_engines.summary import summarize_valuations
from mess_kernel.domain.clock import Clock, SystemClock
from mess_kernel.exceptions import UnsupportedExportFormatError
from mess_kernel.logging_config import LogContext, get_logger
from mess_modules.inventory.service import InventoryService
from mess_modules.ration.service import RationService
from mess_modules.reporting.excel import write_workbook
from mess_modules.reporting.formatting import export_filename, month_label, parse_month
from mess_modules.reporting.models import ItemShortfall, MonthlyReport
from mess_modules.reporting.pdf import write_pdf

logger = get_logger("modules.reporting.service")

_WRITERS: dict[str, Callable[[MonthlyReport, Path, ReportConfig], Path]] = {
    "xlsx": write_workbook,
    "pdf": write_pdf,
}

SUPPORTED_FORMATS = tuple(_WRITERS)


class ReportingService:
    """Builds and exports monthly reports."""

    def __init__(
        self,
        inventory: InventoryService,
        ration: RationService,
        config: AppConfig | None = None,
        clock: Clock | None = None,
    ):
        self._inventory = inventory
        self._ration = ration
        self._config = config or AppConfig.with_defaults()
        self._clock = clock or SystemClock()

    def _resolve_month(self, month: str | date | None) -> date:
        if month is None:
            return self._clock.month_start()
        if isinstance(month, date):
            return date(month.year, month.month, 1)
        return parse_month(month)

    def build_report(self, month: str | date | None = None) -> MonthlyReport:
        """
        Everything shown for ``month``.

        Args:
            month: ``"YYYY-MM"``, a date in the month, or None for the
                clock's current month.
        """
        first_day = self._resolve_month(month)
        label = month_label(first_day)

        with LogContext.bind(month=label):
            items = tuple(self._inventory.items())
            valuations = tuple(value_item(item) for item in items)
            summary = summarize_valuations(valuations)
            additional, ration, attendance = self._ration.evaluate(summary, first_day)

            shortfalls = [
                ItemShortfall(
                    item_id=v.item.id,
                    item_name=v.item.name,
                    requested_qty=v.expenditure.requested_qty,
                    shortfall=v.expenditure.shortfall,
                )
                for v in valuations
                if v.expenditure.is_short
            ]

            report = MonthlyReport(
                month=first_day,
                label=label,
                generated_at=self._clock.now(),
                items=items,
                rows=report_rows(valuations),
                summary=summary,
                additional=additional,
                ration=ration,
                attendance=attendance,
                shortfalls=tuple(shortfalls),
            )
            logger.info("report_built", extra={
                "item_count": len(items),
                "row_count": len(report.rows),
                "shortfall_count": len(shortfalls),
            })
        return report

    def export(
        self,
        fmt: str,
        month: str | date | None = None,
        out_dir: Path | str | None = None,
    ) -> Path:
        """Write the month's report as ``fmt`` and return the file path."""
        fmt = fmt.lower().lstrip(".")
        writer = _WRITERS.get(fmt)
        if writer is None:
            raise UnsupportedExportFormatError(fmt, SUPPORTED_FORMATS)

        report = self.build_report(month)
        report_config = self._config.report
        directory = Path(out_dir) if out_dir is not None else Path(report_config.export_dir)
        path = directory / export_filename(report_config.file_prefix, report.label, fmt)

        writer(report, path, report_config)
        logger.info("report_exported", extra={
            "export_format": fmt,
            "path": str(path),
            "month": report.label,
        })
        return path
