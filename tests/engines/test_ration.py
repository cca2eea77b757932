"""
Tests for the ration, attendance and fresh-ration summary formulas.
"""

from datetime import date
from decimal import Decimal

import pytest

from mess_engines.ration import (
    AdditionalSummaryInputs,
    AttendanceInputs,
    RationDeductions,
    additional_summary,
    attendance,
    days_in_month,
    ration_consumption,
)
from mess_engines.summary import InventorySummary, summarize


class TestAdditionalSummary:
    def test_defaults(self):
        result = additional_summary(AdditionalSummaryInputs())

        assert result.prev_month_fresh == Decimal("9000")
        assert result.this_month_purchased == Decimal("8000")
        assert result.total_fresh_purchased == Decimal("17000")
        assert result.expenditures_month == Decimal("12000")
        assert result.balance_next_month == Decimal("5000")

    def test_overspend_goes_negative(self):
        inputs = AdditionalSummaryInputs(
            prev_month_fresh="100", this_month_purchased="50", expenditures_month="200",
        )

        assert additional_summary(inputs).balance_next_month == Decimal("-50")

    def test_rejects_non_numeric(self):
        with pytest.raises(ValueError):
            AdditionalSummaryInputs(prev_month_fresh="lots")


class TestRationConsumption:
    def test_dry_ration_is_inventory_expenditure(self, sample):
        summary = summarize(list(sample.values()))

        result = ration_consumption(summary, AdditionalSummaryInputs(), RationDeductions())

        assert result.dry_ration_consumed == Decimal("9432")
        assert result.fresh_ration_consumed == Decimal("12000")
        assert result.total_ration_consumed == Decimal("21432")
        assert result.net_amount == Decimal("21432")

    def test_deductions(self):
        deductions = RationDeductions(casual_diet="100", ri_person="50.5", bara_khana="25")

        result = ration_consumption(
            InventorySummary.zero(),
            AdditionalSummaryInputs(expenditures_month="1000"),
            deductions,
        )

        assert result.total_ration_consumed == Decimal("1000")
        assert result.net_amount == Decimal("824.5")


class TestAttendance:
    def setup_method(self):
        self.consumption = ration_consumption(
            InventorySummary.zero(),
            AdditionalSummaryInputs(expenditures_month="3000"),
            RationDeductions(),
        )

    def test_defaults(self):
        result = attendance(AttendanceInputs(), self.consumption, date(2026, 10, 1))

        assert result.net_attendance == 450
        assert result.total_days_month == 31
        assert result.per_day_diet_amount == Decimal("161.29")
        assert result.total_ration_expenditure == Decimal("3000")
        assert result.mess_profit == Decimal("-3000")

    def test_net_attendance_and_profit(self):
        inputs = AttendanceInputs(
            total_attendance=500,
            less_casual_attendance=20,
            less_ri_attendance=5,
            recovery_from_jawans="4200",
        )

        result = attendance(inputs, self.consumption, date(2026, 10, 1))

        assert result.net_attendance == 475
        assert result.mess_profit == Decimal("1200")

    @pytest.mark.parametrize(
        "month, days",
        [
            (date(2026, 2, 1), 28),
            (date(2028, 2, 1), 29),
            (date(2026, 4, 1), 30),
            (date(2026, 12, 1), 31),
        ],
    )
    def test_days_follow_report_month(self, month, days):
        assert days_in_month(month) == days

    def test_per_day_rounds_half_up(self):
        inputs = AttendanceInputs(rma_per_month="4500.15")

        # 4500.15 / 30 = 150.005
        result = attendance(inputs, self.consumption, date(2026, 6, 1))

        assert result.per_day_diet_amount == Decimal("150.01")

    def test_rejects_fractional_attendance(self):
        with pytest.raises(ValueError):
            AttendanceInputs(total_attendance=10.5)
