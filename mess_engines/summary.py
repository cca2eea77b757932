"""
Module: mess_engines.summary
Responsibility:
    Fold the FIFO engine's per-item outputs across the whole item
    collection into five grand totals.

Architecture position:
    Engines -- pure calculation layer, zero I/O.  Depends only on
    mess_engines.fifo and mess_kernel.domain.values.

Invariants enforced:
    - Only quantities and amounts accumulate; a total's rate is always
      recomputed as amount / qty (QtyAmount.rate), never averaged.
    - The expenditure total accumulates each item's *requested*
      expenditure quantity, matching what the item rows report.
    - Cache-free: every call recomputes from the items it is given.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from mess_engines.fifo import ItemValuation, value_item
from mess_engines.tracer import traced_engine
from mess_kernel.domain.values import InventoryItem, QtyAmount


@dataclass(frozen=True, slots=True)
class InventorySummary:
    """Grand totals across every item."""

    prev_month_total: QtyAmount
    received_this_month_total: QtyAmount
    total_received_total: QtyAmount
    total_expenditure_total: QtyAmount
    balance_next_month_total: QtyAmount

    @classmethod
    def zero(cls) -> InventorySummary:
        return cls(
            prev_month_total=QtyAmount.zero(),
            received_this_month_total=QtyAmount.zero(),
            total_received_total=QtyAmount.zero(),
            total_expenditure_total=QtyAmount.zero(),
            balance_next_month_total=QtyAmount.zero(),
        )

    def including(self, valuation: ItemValuation) -> InventorySummary:
        """Totals with one more item folded in."""
        return InventorySummary(
            prev_month_total=self.prev_month_total.add(
                valuation.prev_month.qty, valuation.prev_month.amount,
            ),
            received_this_month_total=self.received_this_month_total.add(
                valuation.received_this_month.qty,
                valuation.received_this_month.amount,
            ),
            total_received_total=self.total_received_total.add(
                valuation.total_received.qty, valuation.total_received.amount,
            ),
            total_expenditure_total=self.total_expenditure_total.add(
                valuation.expenditure.requested_qty, valuation.expenditure.amount,
            ),
            balance_next_month_total=self.balance_next_month_total.add(
                valuation.balance.qty, valuation.balance.amount,
            ),
        )

    def as_pairs(self) -> tuple[tuple[str, QtyAmount], ...]:
        """Labelled totals in report column order."""
        return (
            ("Previous Month", self.prev_month_total),
            ("Received This Month", self.received_this_month_total),
            ("Total Received", self.total_received_total),
            ("Expenditure This Month", self.total_expenditure_total),
            ("Balance Next Month", self.balance_next_month_total),
        )


@traced_engine("summary", "1.0", fingerprint_fields=("valuations",))
def summarize_valuations(valuations: Iterable[ItemValuation]) -> InventorySummary:
    """Grand totals over items that have already been valued."""
    summary = InventorySummary.zero()
    for valuation in valuations:
        summary = summary.including(valuation)
    return summary


def summarize(items: Iterable[InventoryItem]) -> InventorySummary:
    """Grand totals of the five report columns over ``items``."""
    return summarize_valuations(value_item(item) for item in items)
