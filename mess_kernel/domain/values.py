"""
Values -- Immutable, self-validating inventory value objects.

Responsibility:
    Provides the record types every calculation works on: Batch (a lot of
    stock at one unit rate), InventoryItem (an item with its previous-month
    and this-month batch queues plus one expenditure quantity) and
    QtyAmount (a quantity/amount pair whose rate is always derived).

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by engines and modules. No outward dependencies.

Invariants enforced:
    - Quantities, rates and amounts are Decimal, never float.
    - Quantities, rates and amounts are finite and non-negative.
    - Batch order inside an item is FIFO order and is never re-sorted.
    - Items hold batches in tuples; "editing" an item builds a new one,
      so two items never share a mutable batch list.

Failure modes:
    - ValueError on construction with negative, non-finite or
      non-numeric quantities, rates or amounts.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

ZERO = Decimal("0")


def to_decimal(value: Any, field: str = "value") -> Decimal:
    """
    Convert a numeric input to Decimal.

    Floats go through ``str`` so that ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.

    Raises:
        ValueError: If the value is not numeric or not finite.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid {field}: {value!r}")
    if not isinstance(value, Decimal):
        try:
            value = Decimal(str(value))
        except (InvalidOperation, ValueError) as e:
            raise ValueError(f"Invalid {field}: {value!r}") from e
    if not value.is_finite():
        raise ValueError(f"Invalid {field}: {value!r}")
    return value


def _non_negative(value: Any, field: str) -> Decimal:
    result = to_decimal(value, field)
    if result < ZERO:
        raise ValueError(f"{field} cannot be negative, got {result}")
    return result


class BatchCategory(str, Enum):
    """The two user-entered batch queues of an item."""

    PREV_MONTH = "prev_month"
    RECEIVED_THIS_MONTH = "received_this_month"


@dataclass(frozen=True, slots=True)
class Batch:
    """
    A discrete lot of stock with its own quantity and unit rate.

    Contract:
        ``id`` is caller-assigned and unique within the owning list.
        Amount is derived as ``qty * rate`` and never stored.

    Guarantees:
        - qty and rate are non-negative Decimals.
        - Immutable; an edit replaces the whole record.
    """

    id: int
    qty: Decimal
    rate: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "qty", _non_negative(self.qty, "qty"))
        object.__setattr__(self, "rate", _non_negative(self.rate, "rate"))

    @property
    def amount(self) -> Decimal:
        """Cost of the whole batch."""
        return self.qty * self.rate

    def with_qty(self, qty: Decimal) -> Batch:
        """Same batch id and rate, different quantity."""
        return Batch(id=self.id, qty=qty, rate=self.rate)


@dataclass(frozen=True, slots=True)
class InventoryItem:
    """
    One inventory item with its FIFO batch queues.

    Contract:
        ``prev_month`` batches are older than every ``received_this_month``
        batch. Within each tuple, earlier position means acquired earlier.
        ``expenditure_qty`` is the single quantity spent this month; its
        per-batch breakdown is derived, never entered.

    Guarantees:
        - Batch sequences are stored as tuples (copying the item copies
          its batches by value).
        - expenditure_qty is a non-negative Decimal.
    """

    id: int
    name: str
    unit: str
    prev_month: tuple[Batch, ...] = ()
    received_this_month: tuple[Batch, ...] = ()
    expenditure_qty: Decimal = ZERO

    def __post_init__(self) -> None:
        object.__setattr__(self, "prev_month", tuple(self.prev_month))
        object.__setattr__(
            self, "received_this_month", tuple(self.received_this_month),
        )
        object.__setattr__(
            self,
            "expenditure_qty",
            _non_negative(self.expenditure_qty, "expenditure_qty"),
        )
        for batch in self.prev_month + self.received_this_month:
            if not isinstance(batch, Batch):
                raise TypeError(f"batches must be Batch, got {type(batch)}")

    def batches(self, category: BatchCategory) -> tuple[Batch, ...]:
        """Batches of one category, in FIFO order."""
        if category is BatchCategory.PREV_MONTH:
            return self.prev_month
        return self.received_this_month

    def with_batches(
        self, category: BatchCategory, batches: Iterable[Batch],
    ) -> InventoryItem:
        """Return a copy with one batch queue replaced."""
        if category is BatchCategory.PREV_MONTH:
            return dataclasses.replace(self, prev_month=tuple(batches))
        return dataclasses.replace(self, received_this_month=tuple(batches))

    def with_expenditure(self, qty: Decimal) -> InventoryItem:
        """Return a copy with a new expenditure quantity."""
        return dataclasses.replace(self, expenditure_qty=qty)

    def next_batch_id(self) -> int:
        """Fresh batch id: one past the highest id in either queue."""
        ids = [b.id for b in self.prev_month + self.received_this_month]
        return max(ids, default=0) + 1


@dataclass(frozen=True, slots=True)
class QtyAmount:
    """
    A quantity/amount pair used for running totals.

    Rates are never summed: ``rate`` is recomputed from the pair each time
    it is read, and is zero when the quantity is zero.
    """

    qty: Decimal = ZERO
    amount: Decimal = ZERO

    def __post_init__(self) -> None:
        object.__setattr__(self, "qty", _non_negative(self.qty, "qty"))
        object.__setattr__(self, "amount", _non_negative(self.amount, "amount"))

    @classmethod
    def zero(cls) -> QtyAmount:
        return cls()

    @property
    def rate(self) -> Decimal:
        """Weighted average rate of the pair."""
        if self.qty == ZERO:
            return ZERO
        return self.amount / self.qty

    def add(self, qty: Decimal, amount: Decimal) -> QtyAmount:
        """Return a new pair with ``qty`` and ``amount`` accumulated."""
        return QtyAmount(qty=self.qty + qty, amount=self.amount + amount)

    def __add__(self, other: QtyAmount) -> QtyAmount:
        if not isinstance(other, QtyAmount):
            return NotImplemented
        return self.add(other.qty, other.amount)
