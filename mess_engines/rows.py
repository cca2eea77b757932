"""
Module: mess_engines.rows
Responsibility:
    Turn one item's engine outputs into the printed row layout shared by
    the screen listing and both export documents.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Positional merge: row ``i`` shows the i-th batch of each of the five
      batch columns independently, or a blank slot (None) when that column
      has fewer batches.  Columns are never aligned by batch id.
    - The total-received column is the i-th entry of the concatenated
      queue, not a row-wise sum.
    - Serial number, name and unit appear on the first row only.
    - An item with no batches in any column still prints one row, whose
      five cells are explicit zeros (distinct from blank).
    - Rounding happens only in ``render_row``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from itertools import zip_longest

from mess_engines.fifo import ItemValuation, value_item
from mess_kernel.domain.values import ZERO, Batch, InventoryItem

COLUMNS_PER_ROW = 18


@dataclass(frozen=True, slots=True)
class ReportCell:
    """Qty, rate and amount shown in one batch column of one row."""

    qty: Decimal
    rate: Decimal
    amount: Decimal

    @classmethod
    def zero(cls) -> ReportCell:
        return cls(qty=ZERO, rate=ZERO, amount=ZERO)

    @classmethod
    def from_batch(cls, batch: Batch) -> ReportCell:
        return cls(qty=batch.qty, rate=batch.rate, amount=batch.amount)


@dataclass(frozen=True, slots=True)
class ReportRow:
    """
    One printed line.  ``sl_no``, ``item_name`` and ``unit`` are None on
    continuation rows; a None cell is a blank slot.
    """

    sl_no: int | None
    item_name: str | None
    unit: str | None
    prev_month: ReportCell | None
    received_this_month: ReportCell | None
    total_received: ReportCell | None
    expenditure: ReportCell | None
    balance: ReportCell | None

    @property
    def cells(self) -> tuple[ReportCell | None, ...]:
        return (
            self.prev_month,
            self.received_this_month,
            self.total_received,
            self.expenditure,
            self.balance,
        )

    @property
    def is_first(self) -> bool:
        return self.sl_no is not None


def _columns(valuation: ItemValuation) -> tuple[Sequence[Batch], ...]:
    return (
        valuation.prev_month.batches,
        valuation.received_this_month.batches,
        valuation.total_received.batches,
        valuation.expenditure.batches,
        valuation.balance.batches,
    )


def valuation_rows(valuation: ItemValuation, display_index: int) -> tuple[ReportRow, ...]:
    """
    Rows for one valued item, numbered ``display_index`` (1-based).

    Produces ``max(1, longest batch column)`` rows.
    """
    item = valuation.item
    columns = _columns(valuation)

    if not any(columns):
        zero = ReportCell.zero()
        return (
            ReportRow(
                sl_no=display_index,
                item_name=item.name,
                unit=item.unit,
                prev_month=zero,
                received_this_month=zero,
                total_received=zero,
                expenditure=zero,
                balance=zero,
            ),
        )

    rows: list[ReportRow] = []
    for position, slots in enumerate(zip_longest(*columns)):
        cells = [None if b is None else ReportCell.from_batch(b) for b in slots]
        first = position == 0
        rows.append(
            ReportRow(
                sl_no=display_index if first else None,
                item_name=item.name if first else None,
                unit=item.unit if first else None,
                prev_month=cells[0],
                received_this_month=cells[1],
                total_received=cells[2],
                expenditure=cells[3],
                balance=cells[4],
            )
        )
    return tuple(rows)


def materialize_rows(item: InventoryItem, display_index: int) -> tuple[ReportRow, ...]:
    """Rows for one item, numbered ``display_index`` (1-based)."""
    return valuation_rows(value_item(item), display_index)


def report_rows(valuations: Iterable[ItemValuation]) -> tuple[ReportRow, ...]:
    """Rows for every valued item, numbered 1..n in collection order."""
    rows: list[ReportRow] = []
    for index, valuation in enumerate(valuations, start=1):
        rows.extend(valuation_rows(valuation, index))
    return tuple(rows)


def materialize_report(items: Iterable[InventoryItem]) -> tuple[ReportRow, ...]:
    """Rows for every item, numbered 1..n in collection order."""
    return report_rows(value_item(item) for item in items)


def quantize(value: Decimal, precision: int = 2) -> Decimal:
    """Round half-up to ``precision`` decimal places."""
    return value.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)


def format_decimal(value: Decimal, precision: int = 2) -> str:
    return f"{quantize(value, precision):.{precision}f}"


def render_row(row: ReportRow, precision: int = 2) -> tuple[str, ...]:
    """
    Text form of ``row``: sl no, name, unit, then qty/rate/amount for
    each of the five batch columns.  Blank slots render as empty strings.
    """
    out = [
        "" if row.sl_no is None else str(row.sl_no),
        row.item_name or "",
        row.unit or "",
    ]
    for cell in row.cells:
        if cell is None:
            out.extend(("", "", ""))
        else:
            out.extend(
                format_decimal(v, precision) for v in (cell.qty, cell.rate, cell.amount)
            )
    return tuple(out)
