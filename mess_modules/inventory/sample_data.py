"""Starter items shown to a new installation."""

from __future__ import annotations

from decimal import Decimal

from mess_kernel.domain.values import Batch, InventoryItem


def _batches(*rows: tuple[int, str, str]) -> tuple[Batch, ...]:
    return tuple(Batch(id=i, qty=Decimal(q), rate=Decimal(r)) for i, q, r in rows)


def sample_items() -> list[InventoryItem]:
    return [
        InventoryItem(
            id=1,
            name="Basmati Rice",
            unit="KG",
            prev_month=_batches(
                (1, "100", "10"),
                (2, "50", "12"),
                (3, "75", "11"),
                (4, "60", "10.5"),
                (5, "40", "11.5"),
            ),
            received_this_month=_batches(
                (6, "80", "11"),
                (7, "90", "11.2"),
                (8, "70", "10.8"),
            ),
            expenditure_qty=Decimal("320"),
        ),
        InventoryItem(
            id=2,
            name="Olive Oil",
            unit="L",
            prev_month=_batches((1, "150", "15"), (2, "100", "15.5")),
            received_this_month=_batches(
                (3, "100", "16"),
                (4, "50", "15.5"),
                (5, "75", "16.2"),
            ),
            expenditure_qty=Decimal("280"),
        ),
        InventoryItem(
            id=3,
            name="Wheat Flour",
            unit="KG",
            prev_month=_batches((1, "75", "8"), (2, "60", "8.2"), (3, "50", "7.8")),
            received_this_month=_batches((4, "125", "8.5")),
            expenditure_qty=Decimal("210"),
        ),
    ]
