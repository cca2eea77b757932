"""
Tests for the ration module service.

Covers:
- Defaults when nothing is stored
- Partial edits persisted under their own keys
- Rejection of unknown fields and bad values
- Evaluation of the three derived sections
"""

from datetime import date
from decimal import Decimal

import pytest

from mess_engines.summary import summarize
from mess_kernel.exceptions import CorruptDocumentError, InvalidItemInputError
from mess_modules.ration.service import RationService


class TestSummaryInputs:
    def test_defaults_when_nothing_stored(self, ration):
        inputs = ration.summary_inputs()

        assert inputs.prev_month_fresh == Decimal("9000")
        assert inputs.this_month_purchased == Decimal("8000")
        assert inputs.expenditures_month == Decimal("12000")

    def test_partial_edit_keeps_other_fields(self, ration, store):
        ration.save_summary_inputs(this_month_purchased="7500.50")

        inputs = RationService(store).summary_inputs()
        assert inputs.this_month_purchased == Decimal("7500.50")
        assert inputs.prev_month_fresh == Decimal("9000")

    def test_stored_under_editable_summary_key(self, ration, store):
        ration.save_summary_inputs(prev_month_fresh="100")

        assert store.get_json("editable-summary") == {
            "prevMonthFresh": "100",
            "thisMonthPurchased": "8000",
            "expendituresMonth": "12000",
        }

    def test_unknown_field(self, ration):
        with pytest.raises(InvalidItemInputError):
            ration.save_summary_inputs(fresh_fish="1")

    def test_bad_value(self, ration):
        with pytest.raises(InvalidItemInputError):
            ration.save_summary_inputs(expenditures_month="twelve")

    def test_corrupt_document(self, ration, store):
        store.set_json("editable-summary", {"prevMonthFresh": "nine thousand"})

        with pytest.raises(CorruptDocumentError):
            ration.summary_inputs()


class TestSettings:
    def test_defaults_when_nothing_stored(self, ration):
        settings = ration.settings()

        assert settings.attendance.total_attendance == 450
        assert settings.attendance.rma_per_month == Decimal("5000")
        assert settings.deductions.casual_diet == Decimal("0")

    def test_deductions_and_attendance_together(self, ration, store):
        ration.save_settings(bara_khana="250", less_ri_attendance=4)

        settings = RationService(store).settings()
        assert settings.deductions.bara_khana == Decimal("250")
        assert settings.attendance.less_ri_attendance == 4
        assert settings.attendance.total_attendance == 450

    def test_stored_field_names(self, ration, store):
        ration.save_settings(total_attendance=480)

        document = store.get_json("ration-settings")
        assert document["totalAttendance"] == 480
        assert set(document) == {
            "casualDiet", "riPerson", "baraKhana",
            "totalAttendance", "lessCasualAttendance", "lessRiAttendance",
            "rmaPerMonth", "recoveryFromJawans",
        }

    def test_unknown_field(self, ration):
        with pytest.raises(InvalidItemInputError, match="overtime"):
            ration.save_settings(overtime=3)

    def test_fractional_attendance(self, ration):
        with pytest.raises(InvalidItemInputError):
            ration.save_settings(total_attendance=10.5)

    def test_not_an_object(self, ration, store):
        store.set_json("ration-settings", [1, 2, 3])

        with pytest.raises(CorruptDocumentError):
            ration.settings()


class TestEvaluate:
    def test_sample_month(self, ration, sample):
        ration.save_settings(casual_diet="432", recovery_from_jawans="25000")
        summary = summarize(list(sample.values()))

        additional, consumption, attendance = ration.evaluate(summary, date(2026, 10, 1))

        assert additional.balance_next_month == Decimal("5000")
        assert consumption.total_ration_consumed == Decimal("21432")
        assert consumption.net_amount == Decimal("21000")
        assert attendance.total_days_month == 31
        assert attendance.total_ration_expenditure == Decimal("21000")
        assert attendance.mess_profit == Decimal("4000")
