"""
Module: mess_engines.fifo
Responsibility:
    FIFO batch-consumption engine.  Given an item's previous-month batches
    followed by this month's receipts (one FIFO queue) and a single
    expenditure quantity, partition the expenditure across batches in
    arrival order, price it at a weighted-average rate, and derive the
    residual batches that roll into next month.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import mess_kernel.domain.values.

Invariants enforced:
    - Queue order: previous-month batches always precede this month's
      receipts; within each list, position is arrival order.
    - Each queue batch contributes at most one allocation entry and at
      most one balance entry; allocation and balance entries keep the
      original batch id and rate.
    - Conservation (when expenditure <= supply): allocated qty + balance
      qty == total received qty, and likewise for amounts.
    - No rounding: every value is full Decimal precision.  Rounding is a
      presentation concern.
    - Purity: no clock, no randomness, no I/O; identical input gives
      identical output.

Failure modes:
    - None for well-formed input.  Division by a zero quantity yields a
      zero rate.  An expenditure larger than the available supply is not an
      error: the allocation exhausts the queue, the unmet remainder is
      dropped (exposed as ``shortfall``), and a warning is logged.

Usage:
    from mess_engines.fifo import expenditure_allocation, balance_allocation

    spent = expenditure_allocation(item)
    left = balance_allocation(item)
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal

from mess_kernel.domain.values import ZERO, Batch, BatchCategory, InventoryItem
from mess_kernel.logging_config import get_logger

logger = get_logger("engines.fifo")


# =============================================================================
# Result types
# =============================================================================


@dataclass(frozen=True, slots=True)
class Aggregate:
    """
    A batch sequence with its totals.

    Guarantees:
        - ``qty`` and ``amount`` are exact sums over ``batches``.
        - ``rate`` is ``aggregate_rate(batches)``.
    """

    batches: tuple[Batch, ...]
    qty: Decimal
    rate: Decimal
    amount: Decimal

    @classmethod
    def of(cls, batches: Iterable[Batch]) -> Aggregate:
        """Totals for ``batches``."""
        batches = tuple(batches)
        qty = sum_qty(batches)
        amount = sum_amount(batches)
        rate = amount / qty if qty > ZERO else ZERO
        return cls(batches=batches, qty=qty, rate=rate, amount=amount)

    @classmethod
    def empty(cls) -> Aggregate:
        return cls(batches=(), qty=ZERO, rate=ZERO, amount=ZERO)


@dataclass(frozen=True, slots=True)
class ExpenditureAllocation:
    """
    The part of the FIFO queue attributed to this month's expenditure.

    ``requested_qty`` is the item's expenditure quantity; ``qty`` is what
    the queue could actually supply.  ``rate`` is priced over the
    requested quantity, so it is understated whenever ``shortfall`` > 0.
    """

    batches: tuple[Batch, ...]
    requested_qty: Decimal
    qty: Decimal
    rate: Decimal
    amount: Decimal

    @property
    def shortfall(self) -> Decimal:
        """Requested quantity the queue could not supply."""
        return self.requested_qty - self.qty

    @property
    def is_short(self) -> bool:
        return self.shortfall > ZERO


@dataclass(frozen=True, slots=True)
class FifoSplit:
    """Consumed prefix and residual suffix of one walk over a queue."""

    consumed: tuple[Batch, ...]
    residual: tuple[Batch, ...]
    unmet: Decimal


# =============================================================================
# Primitives over raw batch sequences
# =============================================================================


def sum_qty(batches: Iterable[Batch]) -> Decimal:
    return sum((b.qty for b in batches), ZERO)


def sum_amount(batches: Iterable[Batch]) -> Decimal:
    return sum((b.qty * b.rate for b in batches), ZERO)


def aggregate_rate(batches: Sequence[Batch]) -> Decimal:
    """
    Weighted-average rate across a batch sequence.

    ``sum(qty * rate) / sum(qty)``, or zero when the total quantity is zero
    (including the empty sequence).
    """
    qty = sum_qty(batches)
    if qty == ZERO:
        return ZERO
    return sum_amount(batches) / qty


def consume_fifo(batches: Sequence[Batch], qty: Decimal) -> FifoSplit:
    """
    Walk ``batches`` in order, consuming ``qty`` oldest-first.

    For each batch while quantity remains, ``min(batch.qty, remaining)`` is
    consumed and recorded under the batch's id and rate.  The unconsumed
    part of a partially used batch, and every batch reached after the
    quantity ran out, form the residual.  A batch with nothing left over
    contributes no residual entry.
    """
    remaining = qty
    consumed: list[Batch] = []
    residual: list[Batch] = []

    for batch in batches:
        if remaining <= ZERO:
            residual.append(batch)
            continue

        used = min(batch.qty, remaining)
        consumed.append(batch.with_qty(used))
        remaining -= used

        leftover = batch.qty - used
        if leftover > ZERO:
            residual.append(batch.with_qty(leftover))

    return FifoSplit(
        consumed=tuple(consumed),
        residual=tuple(residual),
        unmet=max(remaining, ZERO),
    )


# =============================================================================
# Item-level operations
# =============================================================================


def fifo_queue(item: InventoryItem) -> tuple[Batch, ...]:
    """Previous-month batches followed by this month's receipts."""
    return item.prev_month + item.received_this_month


def category_aggregate(item: InventoryItem, category: BatchCategory) -> Aggregate:
    """Totals for one of the item's entered batch lists."""
    return Aggregate.of(item.batches(category))


def total_received(item: InventoryItem) -> Aggregate:
    """Totals over the whole FIFO queue (previous month, then received)."""
    return Aggregate.of(fifo_queue(item))


def expenditure_allocation(item: InventoryItem) -> ExpenditureAllocation:
    """
    Attribute the item's expenditure to queue batches, oldest first.

    Postconditions:
        - ``batches`` is a prefix of the queue (same ids and rates), the
          last entry possibly with a reduced quantity.
        - ``rate`` is ``amount / requested_qty``, zero if nothing requested.
    """
    requested = item.expenditure_qty
    split = consume_fifo(fifo_queue(item), requested)

    amount = sum_amount(split.consumed)
    allocated = sum_qty(split.consumed)
    rate = amount / requested if requested > ZERO else ZERO

    if split.unmet > ZERO:
        logger.warning("expenditure_exceeds_supply", extra={
            "item_id": item.id,
            "item_name": item.name,
            "requested_qty": str(requested),
            "available_qty": str(allocated),
            "shortfall": str(split.unmet),
        })

    return ExpenditureAllocation(
        batches=split.consumed,
        requested_qty=requested,
        qty=allocated,
        rate=rate,
        amount=amount,
    )


def balance_allocation(item: InventoryItem) -> Aggregate:
    """
    Stock left after the expenditure allocation, carried to next month.

    Postconditions:
        - ``qty == max(0, total_received.qty - expenditure_qty)``.
        - ``rate`` is the weighted average over the residual batches.
    """
    split = consume_fifo(fifo_queue(item), item.expenditure_qty)
    return Aggregate.of(split.residual)


# =============================================================================
# Per-item bundle
# =============================================================================


@dataclass(frozen=True, slots=True)
class ItemValuation:
    """All five derived views of one item, computed together."""

    item: InventoryItem
    prev_month: Aggregate
    received_this_month: Aggregate
    total_received: Aggregate
    expenditure: ExpenditureAllocation
    balance: Aggregate


def value_item(item: InventoryItem) -> ItemValuation:
    """Compute every derived view of ``item``."""
    return ItemValuation(
        item=item,
        prev_month=category_aggregate(item, BatchCategory.PREV_MONTH),
        received_this_month=category_aggregate(item, BatchCategory.RECEIVED_THIS_MONTH),
        total_received=total_received(item),
        expenditure=expenditure_allocation(item),
        balance=balance_allocation(item),
    )
