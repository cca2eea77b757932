"""
Property-based tests for the FIFO engine.

Generated batch queues and expenditure quantities are checked against:
- Conservation of quantity and amount between allocation and balance
- Balance quantity equal to max(0, supply - expenditure)
- Allocation entries keeping queue ids and rates, in queue order
- Summary totals equal to the sum of per-item views
- Determinism across repeated calls
"""

from decimal import Decimal

from hypothesis import given, settings
from hypothesis import strategies as st
from hypothesis.strategies import composite

from mess_engines.fifo import (
    balance_allocation,
    expenditure_allocation,
    fifo_queue,
    total_received,
    value_item,
)
from mess_engines.rows import materialize_rows
from mess_engines.summary import summarize
from mess_kernel.domain.values import Batch, InventoryItem

quantities = st.decimals(
    min_value=Decimal("0.01"),
    max_value=Decimal("1000"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
)
rates = st.decimals(
    min_value=Decimal("0"),
    max_value=Decimal("500"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
)


@composite
def batch_lists(draw, start_id: int = 1, max_size: int = 6):
    pairs = draw(st.lists(st.tuples(quantities, rates), max_size=max_size))
    return [Batch(id=start_id + i, qty=q, rate=r) for i, (q, r) in enumerate(pairs)]


@composite
def items(draw, item_id: int = 1, within_supply: bool = True):
    """An item whose expenditure is at most its supply unless told otherwise."""
    prev = draw(batch_lists(start_id=1))
    received = draw(batch_lists(start_id=len(prev) + 1))
    supply = sum((b.qty for b in prev + received), Decimal("0"))
    ceiling = supply if within_supply else supply + Decimal("500")
    expenditure = draw(st.decimals(
        min_value=Decimal("0"),
        max_value=ceiling,
        places=2,
        allow_nan=False,
        allow_infinity=False,
    ))
    return InventoryItem(
        id=item_id,
        name=f"Item {item_id}",
        unit="KG",
        prev_month=prev,
        received_this_month=received,
        expenditure_qty=expenditure,
    )


class TestConservationProperty:
    """Allocation plus balance reproduces the queue when supply suffices."""

    @given(item=items())
    @settings(max_examples=200)
    def test_qty_conserved(self, item):
        spent = expenditure_allocation(item)
        left = balance_allocation(item)

        assert spent.qty + left.qty == total_received(item).qty
        assert spent.qty == item.expenditure_qty
        assert spent.shortfall == Decimal("0")

    @given(item=items())
    @settings(max_examples=200)
    def test_amount_conserved(self, item):
        spent = expenditure_allocation(item)
        left = balance_allocation(item)

        assert spent.amount + left.amount == total_received(item).amount


class TestBalanceProperty:
    @given(item=items(within_supply=False))
    @settings(max_examples=200)
    def test_balance_qty_is_clamped_difference(self, item):
        supply = total_received(item).qty

        expected = max(Decimal("0"), supply - item.expenditure_qty)

        assert balance_allocation(item).qty == expected

    @given(item=items(within_supply=False))
    @settings(max_examples=200)
    def test_no_zero_quantity_residue(self, item):
        assert all(b.qty > 0 for b in balance_allocation(item).batches)


class TestAllocationShape:
    @given(item=items(within_supply=False))
    @settings(max_examples=200)
    def test_allocation_follows_queue_order(self, item):
        queue = fifo_queue(item)
        allocated = expenditure_allocation(item).batches

        assert len(allocated) <= len(queue)
        for entry, source in zip(allocated, queue):
            assert entry.id == source.id
            assert entry.rate == source.rate
            assert entry.qty <= source.qty

    @given(item=items(within_supply=False))
    @settings(max_examples=200)
    def test_only_last_entry_partial(self, item):
        queue = fifo_queue(item)
        allocated = expenditure_allocation(item).batches

        for entry, source in zip(allocated[:-1], queue):
            assert entry.qty == source.qty

    @given(item=items(within_supply=False))
    @settings(max_examples=100)
    def test_deterministic(self, item):
        assert value_item(item) == value_item(item)


class TestSummaryProperty:
    """Every grand total is the sum of the matching per-item figures."""

    @staticmethod
    def _sum(values):
        return sum(values, Decimal("0"))

    @given(collection=st.one_of(
        st.lists(items(), max_size=5),
        st.lists(items(within_supply=False), max_size=5),
    ))
    @settings(max_examples=150)
    def test_totals_are_sums_of_items(self, collection):
        summary = summarize(collection)
        views = [value_item(i) for i in collection]

        pairs = (
            (summary.prev_month_total, [v.prev_month for v in views]),
            (summary.received_this_month_total, [v.received_this_month for v in views]),
            (summary.total_received_total, [v.total_received for v in views]),
            (summary.balance_next_month_total, [v.balance for v in views]),
        )
        for total, parts in pairs:
            assert total.qty == self._sum(p.qty for p in parts)
            assert total.amount == self._sum(p.amount for p in parts)

        assert summary.total_expenditure_total.qty == self._sum(
            v.expenditure.requested_qty for v in views
        )
        assert summary.total_expenditure_total.amount == self._sum(
            v.expenditure.amount for v in views
        )

    @given(collection=st.lists(items(within_supply=False), min_size=1, max_size=5))
    @settings(max_examples=150)
    def test_expenditure_total_reports_requested_qty(self, collection):
        """Short items count their full request; supply never goes negative."""
        summary = summarize(collection)
        shortfall = self._sum(value_item(i).expenditure.shortfall for i in collection)

        supplied = summary.total_received_total.qty
        spent = summary.total_expenditure_total.qty
        left = summary.balance_next_month_total.qty
        assert spent + left == supplied + shortfall
        assert left >= 0


class TestRowProperty:
    @given(item=items(within_supply=False))
    @settings(max_examples=100)
    def test_row_count_is_longest_column(self, item):
        view = value_item(item)
        longest = max(
            len(view.prev_month.batches),
            len(view.received_this_month.batches),
            len(view.total_received.batches),
            len(view.expenditure.batches),
            len(view.balance.batches),
            1,
        )

        assert len(materialize_rows(item, 1)) == longest
