"""
Document shape of a stored item collection.

Items are stored as a JSON list in the layout the mess inventory has
always used::

    {"id": 1, "name": "Basmati Rice", "unit": "KG",
     "prevMonth": {"batches": [{"id": 1, "qty": 100, "rate": 10}]},
     "receivedThisMonth": {"batches": [...]},
     "expenditureThisMonth": {"qty": 320}}

Quantities and rates are written as decimal strings.  Reading accepts
numbers or strings, and a missing batch list reads as empty.
"""

from __future__ import annotations

from typing import Any

from mess_kernel.domain.values import Batch, InventoryItem, to_decimal


def batch_to_dict(batch: Batch) -> dict[str, Any]:
    return {"id": batch.id, "qty": str(batch.qty), "rate": str(batch.rate)}


def batch_from_dict(data: dict[str, Any]) -> Batch:
    return Batch(
        id=int(data["id"]),
        qty=to_decimal(data["qty"], "qty"),
        rate=to_decimal(data["rate"], "rate"),
    )


def _batch_list(data: dict[str, Any], key: str) -> tuple[Batch, ...]:
    section = data.get(key) or {}
    return tuple(batch_from_dict(b) for b in section.get("batches") or ())


def item_to_dict(item: InventoryItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "name": item.name,
        "unit": item.unit,
        "prevMonth": {"batches": [batch_to_dict(b) for b in item.prev_month]},
        "receivedThisMonth": {
            "batches": [batch_to_dict(b) for b in item.received_this_month],
        },
        "expenditureThisMonth": {"qty": str(item.expenditure_qty)},
    }


def item_from_dict(data: dict[str, Any]) -> InventoryItem:
    """
    Parse one stored item.

    Raises:
        KeyError, TypeError, ValueError: If the document is malformed.
    """
    expenditure = data.get("expenditureThisMonth") or {}
    return InventoryItem(
        id=int(data["id"]),
        name=str(data["name"]),
        unit=str(data["unit"]),
        prev_month=_batch_list(data, "prevMonth"),
        received_this_month=_batch_list(data, "receivedThisMonth"),
        expenditure_qty=to_decimal(expenditure.get("qty", 0), "expenditure_qty"),
    )


def items_to_document(items: list[InventoryItem]) -> list[dict[str, Any]]:
    return [item_to_dict(item) for item in items]


def items_from_document(document: Any) -> list[InventoryItem]:
    if not isinstance(document, list):
        raise TypeError(f"expected a list of items, got {type(document).__name__}")
    return [item_from_dict(entry) for entry in document]
