"""
Report data model.

``MonthlyReport`` is the single object the screen listing and both
export documents are rendered from.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from mess_engines.ration import AdditionalSummary, AttendanceResult, RationConsumption
from mess_engines.rows import ReportRow, format_decimal, render_row
from mess_engines.summary import InventorySummary
from mess_kernel.domain.values import InventoryItem

GROUP_HEADERS = (
    "Previous Month",
    "Received This Month",
    "Total Received",
    "Expenditure This Month",
    "Balance Next Month",
)

SUB_HEADERS = ("Qty", "Rate", "Amount")


def header_rows() -> tuple[tuple[str, ...], tuple[str, ...]]:
    """The two header lines above the item rows."""
    top = ["Sl No", "Item Name", "Unit"]
    for group in GROUP_HEADERS:
        top.extend((group, "", ""))
    bottom = ["", "", ""]
    for _ in GROUP_HEADERS:
        bottom.extend(SUB_HEADERS)
    return tuple(top), tuple(bottom)


@dataclass(frozen=True)
class ItemShortfall:
    item_id: int
    item_name: str
    requested_qty: Decimal
    shortfall: Decimal


@dataclass(frozen=True)
class MonthlyReport:
    month: date
    label: str
    generated_at: datetime
    items: tuple[InventoryItem, ...]
    rows: tuple[ReportRow, ...]
    summary: InventorySummary
    additional: AdditionalSummary
    ration: RationConsumption
    attendance: AttendanceResult
    shortfalls: tuple[ItemShortfall, ...] = ()

    def rendered_rows(self, precision: int = 2) -> list[tuple[str, ...]]:
        return [render_row(row, precision) for row in self.rows]

    def totals_row(self, label: str, precision: int = 2) -> tuple[str, ...]:
        """Grand totals line: qty and amount per column, rate left blank."""
        out = [label, "", ""]
        for _, total in self.summary.as_pairs():
            out.extend((
                format_decimal(total.qty, precision),
                "",
                format_decimal(total.amount, precision),
            ))
        return tuple(out)

    def sections(self) -> tuple[tuple[str, tuple[tuple[str, Decimal | int], ...]], ...]:
        """Fresh-ration, ration and attendance figures as labelled lines."""
        add = self.additional
        ration = self.ration
        att = self.attendance
        return (
            ("Fresh Ration Summary", (
                ("Previous Month Fresh", add.prev_month_fresh),
                ("This Month Purchased", add.this_month_purchased),
                ("Total Fresh Purchased", add.total_fresh_purchased),
                ("Expenditures This Month", add.expenditures_month),
                ("Balance Next Month", add.balance_next_month),
            )),
            ("Ration Consumption", (
                ("Dry Ration Consumed", ration.dry_ration_consumed),
                ("Fresh Ration Consumed", ration.fresh_ration_consumed),
                ("Total Ration Consumed", ration.total_ration_consumed),
                ("Less Casual Diet", ration.casual_diet),
                ("Less RI Person", ration.ri_person),
                ("Less Bara Khana", ration.bara_khana),
                ("Net Amount", ration.net_amount),
            )),
            ("Attendance", (
                ("Total Attendance", att.total_attendance),
                ("Less Casual Attendance", att.less_casual_attendance),
                ("Less RI Attendance", att.less_ri_attendance),
                ("Net Attendance", att.net_attendance),
                ("Total Days in Month", att.total_days_month),
                ("RMA per Month", att.rma_per_month),
                ("Per Day Diet Amount", att.per_day_diet_amount),
                ("Recovery from Jawans", att.recovery_from_jawans),
                ("Total Ration Expenditure", att.total_ration_expenditure),
                ("Mess Profit", att.mess_profit),
            )),
        )
