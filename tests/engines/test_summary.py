"""
Tests for the Summary Aggregator.
"""

from decimal import Decimal

from mess_engines.fifo import value_item
from mess_engines.summary import InventorySummary, summarize, summarize_valuations
from mess_kernel.domain.values import QtyAmount
from tests.conftest import make_item


class TestSummarize:
    def test_empty_collection(self):
        """No items gives five zero totals."""
        assert summarize([]) == InventorySummary.zero()

    def test_sample_totals(self, sample):
        summary = summarize(list(sample.values()))

        assert summary.prev_month_total == QtyAmount(Decimal("760"), Decimal("8797"))
        assert summary.received_this_month_total == QtyAmount(Decimal("590"), Decimal("7296.5"))
        assert summary.total_received_total == QtyAmount(Decimal("1350"), Decimal("16093.5"))
        assert summary.total_expenditure_total == QtyAmount(Decimal("810"), Decimal("9432"))
        assert summary.balance_next_month_total == QtyAmount(Decimal("540"), Decimal("6661.5"))

    def test_rate_recomputed_from_totals(self):
        """The total rate is amount / qty, not an average of item rates."""
        items = [
            make_item(item_id=1, prev=[(1, 10)]),
            make_item(item_id=2, prev=[(9, 20)]),
        ]

        summary = summarize(items)

        # A plain average of the two item rates would be 15.
        assert summary.prev_month_total.rate == Decimal("190") / Decimal("10")

    def test_expenditure_qty_is_requested_qty(self):
        """A short item contributes what was asked for, not what was supplied."""
        items = [make_item(prev=[(10, 2)], expenditure=25)]

        summary = summarize(items)

        assert summary.total_expenditure_total.qty == Decimal("25")
        assert summary.total_expenditure_total.amount == Decimal("20")
        assert summary.balance_next_month_total.qty == Decimal("0")

    def test_accepts_keyword_items(self):
        items = [make_item(prev=[(2, 3)])]

        assert summarize(items=items) == summarize(items)

    def test_precomputed_valuations_give_same_totals(self, sample):
        items = list(sample.values())

        assert summarize_valuations(tuple(value_item(i) for i in items)) == summarize(items)

    def test_labelled_pairs_in_column_order(self, sample):
        summary = summarize(list(sample.values()))

        labels = [label for label, _ in summary.as_pairs()]

        assert labels == [
            "Previous Month",
            "Received This Month",
            "Total Received",
            "Expenditure This Month",
            "Balance Next Month",
        ]
