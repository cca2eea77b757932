"""
Module: mess_engines.ration
Responsibility:
    Arithmetic for the sections printed beside the inventory report: the
    editable fresh-ration summary, ration consumption and attendance /
    mess profit.

Architecture position:
    Engines -- pure calculation layer, zero I/O.  The month whose day
    count drives the per-day diet amount is passed in; no clock is read.

Invariants enforced:
    - Dry ration consumed is the inventory summary's expenditure amount.
    - Fresh ration consumed is the editable summary's month expenditure.
    - Results may be negative (a loss, or deductions larger than
      consumption); inputs are taken as entered.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from mess_engines.summary import InventorySummary
from mess_kernel.domain.values import ZERO, to_decimal


def _decimal_fields(obj: object, names: tuple[str, ...]) -> None:
    for name in names:
        object.__setattr__(obj, name, to_decimal(getattr(obj, name), name))


# =============================================================================
# Inputs
# =============================================================================


@dataclass(frozen=True, slots=True)
class AdditionalSummaryInputs:
    """Fresh-ration figures the user types in each month."""

    prev_month_fresh: Decimal = Decimal("9000")
    this_month_purchased: Decimal = Decimal("8000")
    expenditures_month: Decimal = Decimal("12000")

    def __post_init__(self) -> None:
        _decimal_fields(
            self, ("prev_month_fresh", "this_month_purchased", "expenditures_month"),
        )


@dataclass(frozen=True, slots=True)
class RationDeductions:
    casual_diet: Decimal = ZERO
    ri_person: Decimal = ZERO
    bara_khana: Decimal = ZERO

    def __post_init__(self) -> None:
        _decimal_fields(self, ("casual_diet", "ri_person", "bara_khana"))


@dataclass(frozen=True, slots=True)
class AttendanceInputs:
    total_attendance: int = 450
    less_casual_attendance: int = 0
    less_ri_attendance: int = 0
    rma_per_month: Decimal = Decimal("5000")
    recovery_from_jawans: Decimal = ZERO

    def __post_init__(self) -> None:
        for name in ("total_attendance", "less_casual_attendance", "less_ri_attendance"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        _decimal_fields(self, ("rma_per_month", "recovery_from_jawans"))


@dataclass(frozen=True, slots=True)
class RationSettings:
    """Everything the ration section persists between sessions."""

    deductions: RationDeductions = field(default_factory=RationDeductions)
    attendance: AttendanceInputs = field(default_factory=AttendanceInputs)


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True, slots=True)
class AdditionalSummary:
    prev_month_fresh: Decimal
    this_month_purchased: Decimal
    total_fresh_purchased: Decimal
    expenditures_month: Decimal
    balance_next_month: Decimal


@dataclass(frozen=True, slots=True)
class RationConsumption:
    dry_ration_consumed: Decimal
    fresh_ration_consumed: Decimal
    total_ration_consumed: Decimal
    casual_diet: Decimal
    ri_person: Decimal
    bara_khana: Decimal
    net_amount: Decimal


@dataclass(frozen=True, slots=True)
class AttendanceResult:
    total_attendance: int
    less_casual_attendance: int
    less_ri_attendance: int
    net_attendance: int
    total_days_month: int
    rma_per_month: Decimal
    per_day_diet_amount: Decimal
    recovery_from_jawans: Decimal
    total_ration_expenditure: Decimal
    mess_profit: Decimal


# =============================================================================
# Formulas
# =============================================================================


def additional_summary(inputs: AdditionalSummaryInputs) -> AdditionalSummary:
    total_fresh = inputs.prev_month_fresh + inputs.this_month_purchased
    return AdditionalSummary(
        prev_month_fresh=inputs.prev_month_fresh,
        this_month_purchased=inputs.this_month_purchased,
        total_fresh_purchased=total_fresh,
        expenditures_month=inputs.expenditures_month,
        balance_next_month=total_fresh - inputs.expenditures_month,
    )


def ration_consumption(
    summary: InventorySummary,
    fresh: AdditionalSummaryInputs,
    deductions: RationDeductions,
) -> RationConsumption:
    """Dry (inventory) plus fresh ration, less the three deductions."""
    dry = summary.total_expenditure_total.amount
    total = dry + fresh.expenditures_month
    net = total - deductions.casual_diet - deductions.ri_person - deductions.bara_khana
    return RationConsumption(
        dry_ration_consumed=dry,
        fresh_ration_consumed=fresh.expenditures_month,
        total_ration_consumed=total,
        casual_diet=deductions.casual_diet,
        ri_person=deductions.ri_person,
        bara_khana=deductions.bara_khana,
        net_amount=net,
    )


def days_in_month(month: date) -> int:
    return calendar.monthrange(month.year, month.month)[1]


def attendance(
    inputs: AttendanceInputs,
    consumption: RationConsumption,
    month: date,
) -> AttendanceResult:
    """
    Net attendance, per-day diet amount and mess profit for ``month``.

    The per-day diet amount is the monthly RMA spread over the days of
    ``month``, rounded half-up to two places.
    """
    days = days_in_month(month)
    per_day = (inputs.rma_per_month / days).quantize(
        Decimal("0.01"), rounding=ROUND_HALF_UP,
    )
    return AttendanceResult(
        total_attendance=inputs.total_attendance,
        less_casual_attendance=inputs.less_casual_attendance,
        less_ri_attendance=inputs.less_ri_attendance,
        net_attendance=(
            inputs.total_attendance
            - inputs.less_casual_attendance
            - inputs.less_ri_attendance
        ),
        total_days_month=days,
        rma_per_month=inputs.rma_per_month,
        per_day_diet_amount=per_day,
        recovery_from_jawans=inputs.recovery_from_jawans,
        total_ration_expenditure=consumption.net_amount,
        mess_profit=inputs.recovery_from_jawans - consumption.net_amount,
    )
