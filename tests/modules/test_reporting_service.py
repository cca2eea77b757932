"""
Tests for the reporting module service.

Covers:
- Month resolution (clock default, YYYY-MM, date)
- Report contents for the sample collection
- Shortfall detection
- Export file naming and format dispatch
"""

from datetime import date
from decimal import Decimal

import pytest

from mess_kernel.exceptions import InvalidMonthError, UnsupportedExportFormatError
from mess_modules.reporting.formatting import (
    export_filename,
    format_amount,
    month_label,
    parse_month,
)
from mess_modules.reporting.models import header_rows


class TestFormatting:
    def test_parse_month(self):
        assert parse_month("2026-02") == date(2026, 2, 1)

    @pytest.mark.parametrize("value", ["2026-13", "2026-00", "26-10", "October", "2026-1", ""])
    def test_invalid_month(self, value):
        with pytest.raises(InvalidMonthError):
            parse_month(value)

    def test_month_label(self):
        assert month_label(date(2026, 10, 1)) == "October 2026"

    def test_export_filename(self):
        assert export_filename("FIFO_Inventory", "October 2026", "pdf") == "FIFO_Inventory_October_2026.pdf"

    def test_format_amount(self):
        assert format_amount(Decimal("1234.565"), 2, "₹") == "₹1234.57"

    def test_header_rows_cover_every_column(self):
        top, bottom = header_rows()

        assert len(top) == len(bottom) == 18
        assert top[3] == "Previous Month"
        assert bottom[3:6] == ("Qty", "Rate", "Amount")


class TestBuildReport:
    def test_defaults_to_clock_month(self, reporting):
        report = reporting.build_report()

        assert report.month == date(2026, 10, 1)
        assert report.label == "October 2026"
        assert report.attendance.total_days_month == 31

    def test_explicit_month(self, reporting):
        report = reporting.build_report("2028-02")

        assert report.label == "February 2028"
        assert report.attendance.total_days_month == 29

    def test_date_selector(self, reporting):
        assert reporting.build_report(date(2026, 4, 17)).month == date(2026, 4, 1)

    def test_invalid_month(self, reporting):
        with pytest.raises(InvalidMonthError):
            reporting.build_report("April")

    def test_empty_collection(self, reporting):
        report = reporting.build_report()

        assert report.rows == ()
        assert report.summary.total_received_total.qty == Decimal("0")
        assert report.ration.dry_ration_consumed == Decimal("0")

    def test_sample_collection(self, reporting, inventory):
        inventory.seed_sample_data()

        report = reporting.build_report()

        assert len(report.items) == 3
        assert len(report.rows) == 17
        assert report.summary.total_expenditure_total.amount == Decimal("9432")
        assert report.ration.dry_ration_consumed == Decimal("9432")
        assert report.shortfalls == ()

    def test_totals_row(self, reporting, inventory):
        inventory.seed_sample_data()

        totals = reporting.build_report().totals_row("GRAND TOTALS")

        assert totals[:6] == ("GRAND TOTALS", "", "", "760.00", "", "8797.00")
        assert totals[-3:] == ("540.00", "", "6661.50")

    def test_shortfall_reported(self, reporting, inventory, captured_logs):
        item = inventory.add_item("Sugar")
        inventory.add_batch(item.id, "prev_month", "10", "40")
        inventory.set_expenditure(item.id, "14")

        report = reporting.build_report()

        assert len(report.shortfalls) == 1
        assert report.shortfalls[0].shortfall == Decimal("4")
        built = [r for r in captured_logs() if r["message"] == "report_built"]
        assert built[0]["shortfall_count"] == 1
        assert built[0]["month"] == "October 2026"

    def test_shortfall_warned_once_per_build(self, reporting, inventory, captured_logs):
        item = inventory.add_item("Sugar")
        inventory.add_batch(item.id, "prev_month", "10", "40")
        inventory.set_expenditure(item.id, "14")

        report = reporting.build_report()

        warnings = [r for r in captured_logs() if r["message"] == "expenditure_exceeds_supply"]
        assert len(warnings) == 1
        assert warnings[0]["item_id"] == item.id
        assert report.shortfalls[0].requested_qty == Decimal("14")

    def test_sections_in_order(self, reporting):
        titles = [title for title, _ in reporting.build_report().sections()]

        assert titles == ["Fresh Ration Summary", "Ration Consumption", "Attendance"]

    def test_generated_at_from_clock(self, reporting, deterministic_clock):
        assert reporting.build_report().generated_at == deterministic_clock.now()


class TestExportDispatch:
    def test_unsupported_format(self, reporting, tmp_path):
        with pytest.raises(UnsupportedExportFormatError) as exc_info:
            reporting.export("csv", out_dir=tmp_path)

        assert exc_info.value.supported == ("xlsx", "pdf")

    def test_file_name_from_month(self, reporting, tmp_path):
        path = reporting.export("xlsx", month="2026-10", out_dir=tmp_path)

        assert path == tmp_path / "FIFO_Inventory_October_2026.xlsx"
        assert path.exists()

    def test_format_normalized(self, reporting, tmp_path):
        path = reporting.export(".PDF", out_dir=tmp_path)

        assert path.suffix == ".pdf"

    def test_creates_missing_directory(self, reporting, tmp_path):
        path = reporting.export("xlsx", out_dir=tmp_path / "nested" / "exports")

        assert path.exists()

    def test_export_logged(self, reporting, tmp_path, captured_logs):
        reporting.export("xlsx", out_dir=tmp_path)

        exported = [r for r in captured_logs() if r["message"] == "report_exported"]
        assert exported[0]["export_format"] == "xlsx"
