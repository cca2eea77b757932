"""
Unit tests for the inventory value objects.

Verifies:
- Decimal conversion (floats go through str)
- Rejection of negative, non-finite and non-numeric input
- Derived amount and rate
- Copy-on-edit helpers on InventoryItem
"""

from decimal import Decimal

import pytest

from mess_kernel.domain.values import (
    Batch,
    BatchCategory,
    InventoryItem,
    QtyAmount,
    to_decimal,
)


class TestToDecimal:
    """Tests for to_decimal."""

    def test_float_goes_through_str(self):
        assert to_decimal(0.1) == Decimal("0.1")

    def test_int_and_str(self):
        assert to_decimal(5) == Decimal("5")
        assert to_decimal("12.75") == Decimal("12.75")

    def test_decimal_passthrough(self):
        value = Decimal("3.300")
        assert to_decimal(value) is value

    @pytest.mark.parametrize("bad", ["abc", "", "NaN", "Infinity", True, None])
    def test_rejects_invalid(self, bad):
        with pytest.raises(ValueError):
            to_decimal(bad)

    def test_error_names_field(self):
        with pytest.raises(ValueError, match="rate"):
            to_decimal("x", "rate")


class TestBatch:
    """Tests for Batch."""

    def test_amount_is_qty_times_rate(self):
        batch = Batch(id=1, qty=Decimal("2.5"), rate=Decimal("4.2"))
        assert batch.amount == Decimal("10.50")

    def test_coerces_numeric_input(self):
        batch = Batch(id=1, qty="10", rate=2)
        assert batch.qty == Decimal("10")
        assert batch.rate == Decimal("2")

    def test_rejects_negative_qty(self):
        with pytest.raises(ValueError, match="qty"):
            Batch(id=1, qty=Decimal("-1"), rate=Decimal("1"))

    def test_rejects_negative_rate(self):
        with pytest.raises(ValueError, match="rate"):
            Batch(id=1, qty=Decimal("1"), rate=Decimal("-0.01"))

    def test_zero_allowed(self):
        """Zero-quantity and free batches are representable."""
        assert Batch(id=1, qty=0, rate=0).amount == Decimal("0")

    def test_with_qty_keeps_id_and_rate(self):
        batch = Batch(id=4, qty=Decimal("10"), rate=Decimal("3"))

        smaller = batch.with_qty(Decimal("6"))

        assert smaller == Batch(id=4, qty=Decimal("6"), rate=Decimal("3"))
        assert batch.qty == Decimal("10")

    def test_immutable(self):
        batch = Batch(id=1, qty=1, rate=1)
        with pytest.raises(AttributeError):
            batch.qty = Decimal("2")


class TestInventoryItem:
    """Tests for InventoryItem."""

    def setup_method(self):
        self.item = InventoryItem(
            id=1,
            name="Sugar",
            unit="KG",
            prev_month=[Batch(id=1, qty=5, rate=40)],
            received_this_month=[Batch(id=3, qty=10, rate=42), Batch(id=2, qty=1, rate=45)],
        )

    def test_lists_stored_as_tuples(self):
        assert isinstance(self.item.prev_month, tuple)
        assert isinstance(self.item.received_this_month, tuple)

    def test_default_expenditure_is_zero(self):
        assert self.item.expenditure_qty == Decimal("0")

    def test_rejects_negative_expenditure(self):
        with pytest.raises(ValueError, match="expenditure_qty"):
            InventoryItem(id=1, name="x", unit="KG", expenditure_qty=-1)

    def test_rejects_non_batch_entries(self):
        with pytest.raises(TypeError):
            InventoryItem(id=1, name="x", unit="KG", prev_month=[{"id": 1}])

    def test_batches_by_category(self):
        assert self.item.batches(BatchCategory.PREV_MONTH) == self.item.prev_month
        assert self.item.batches(BatchCategory.RECEIVED_THIS_MONTH) == self.item.received_this_month

    def test_with_batches_replaces_one_queue(self):
        updated = self.item.with_batches(BatchCategory.PREV_MONTH, [])

        assert updated.prev_month == ()
        assert updated.received_this_month == self.item.received_this_month
        assert len(self.item.prev_month) == 1

    def test_with_expenditure(self):
        updated = self.item.with_expenditure(Decimal("7"))

        assert updated.expenditure_qty == Decimal("7")
        assert self.item.expenditure_qty == Decimal("0")

    def test_next_batch_id_spans_both_queues(self):
        assert self.item.next_batch_id() == 4

    def test_next_batch_id_of_empty_item(self):
        assert InventoryItem(id=1, name="x", unit="KG").next_batch_id() == 1


class TestQtyAmount:
    """Tests for QtyAmount."""

    def test_rate_is_derived(self):
        pair = QtyAmount(qty=Decimal("4"), amount=Decimal("10"))
        assert pair.rate == Decimal("2.5")

    def test_zero_qty_rate_is_zero(self):
        assert QtyAmount.zero().rate == Decimal("0")

    def test_addition(self):
        total = QtyAmount(Decimal("1"), Decimal("10")) + QtyAmount(Decimal("3"), Decimal("2"))

        assert total == QtyAmount(Decimal("4"), Decimal("12"))
        assert total.rate == Decimal("3")

    def test_add_rejects_other_types(self):
        with pytest.raises(TypeError):
            QtyAmount.zero() + 1
