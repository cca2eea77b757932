"""
Module: mess_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    calculation engines.  This is the canonical import surface for
    mess_modules.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import mess_kernel.domain and mess_kernel.logging_config
    (and sibling engine modules).  MUST NOT import mess_modules.

Invariants enforced:
    - Purity: engines never read the clock.  The report month is passed
      in by callers.
    - Decimal-only arithmetic; no rounding except in row rendering and
      the per-day diet amount.
    - Determinism: identical inputs always produce identical outputs.

Usage:
    from mess_engines import summarize, materialize_report, render_row
"""

from mess_kernel.logging_config import get_logger

logger = get_logger("engines")

from mess_engines.fifo import (
    Aggregate,
    ExpenditureAllocation,
    FifoSplit,
    ItemValuation,
    aggregate_rate,
    balance_allocation,
    category_aggregate,
    consume_fifo,
    expenditure_allocation,
    fifo_queue,
    total_received,
    value_item,
)
from mess_engines.ration import (
    AdditionalSummary,
    AdditionalSummaryInputs,
    AttendanceInputs,
    AttendanceResult,
    RationConsumption,
    RationDeductions,
    RationSettings,
    additional_summary,
    attendance,
    days_in_month,
    ration_consumption,
)
from mess_engines.rows import (
    ReportCell,
    ReportRow,
    format_decimal,
    materialize_report,
    materialize_rows,
    quantize,
    render_row,
    report_rows,
    valuation_rows,
)
from mess_engines.summary import InventorySummary, summarize, summarize_valuations
from mess_engines.tracer import compute_input_fingerprint, traced_engine

__all__ = [
    # fifo
    "Aggregate",
    "ExpenditureAllocation",
    "FifoSplit",
    "ItemValuation",
    "aggregate_rate",
    "balance_allocation",
    "category_aggregate",
    "consume_fifo",
    "expenditure_allocation",
    "fifo_queue",
    "total_received",
    "value_item",
    # ration
    "AdditionalSummary",
    "AdditionalSummaryInputs",
    "AttendanceInputs",
    "AttendanceResult",
    "RationConsumption",
    "RationDeductions",
    "RationSettings",
    "additional_summary",
    "attendance",
    "days_in_month",
    "ration_consumption",
    # rows
    "ReportCell",
    "ReportRow",
    "format_decimal",
    "materialize_report",
    "materialize_rows",
    "quantize",
    "render_row",
    "report_rows",
    "valuation_rows",
    # summary
    "InventorySummary",
    "summarize",
    "summarize_valuations",
    # tracer
    "compute_input_fingerprint",
    "traced_engine",
]
