"""
Inventory Module Service (``mess_modules.inventory.service``).

Responsibility
--------------
Owns the item collection: creating, editing and deleting items and their
batches, and persisting the whole collection after every change.  It
holds no costing logic; valuation lives in ``mess_engines``.

Architecture
------------
Layer: **Modules** -- stateful orchestration wrapper.  The repository
(and through it the KeyValueStore) is injected; callers hand the
collection returned by ``items()`` to the engines explicitly.

Invariants
----------
- Item ids are ``max(existing ids) + 1`` (1 for an empty collection).
- Batch ids are one past the highest batch id of the item.
- Batch order is arrival order: new batches are appended, edits replace
  a batch in place, removal keeps the order of the others.
- Every mutation writes the whole collection back before returning.

Failure Modes
-------------
- ``ItemNotFoundError`` / ``BatchNotFoundError`` for unknown ids.
- ``InvalidBatchInputError`` when a batch qty or rate is not > 0.
- ``InvalidItemInputError`` for an empty name or unit, or a negative or
  non-numeric expenditure quantity.

Usage::

    service = InventoryService(InventoryRepository(store), config)
    item = service.add_item("Sugar", unit="KG")
    service.add_batch(item.id, BatchCategory.RECEIVED_THIS_MONTH, "50", "42")
    service.set_expenditure(item.id, "20")
"""

from __future__ import annotations

import dataclasses
from decimal import Decimal
from typing import Any

from mess_config.schema import AppConfig
from mess_kernel.domain.values import (
    ZERO,
    Batch,
    BatchCategory,
    InventoryItem,
    to_decimal,
)
from mess_kernel.exceptions import (
    BatchNotFoundError,
    InvalidBatchInputError,
    InvalidItemInputError,
    ItemNotFoundError,
)
from mess_kernel.logging_config import get_logger
from mess_modules.inventory.repository import InventoryRepository
from mess_modules.inventory.sample_data import sample_items

logger = get_logger("modules.inventory.service")


def _positive(value: Any, field: str) -> Decimal:
    try:
        result = to_decimal(value, field)
    except ValueError as e:
        raise InvalidBatchInputError(field, repr(value)) from e
    if result <= ZERO:
        raise InvalidBatchInputError(field, str(result))
    return result


def _expenditure(value: Any) -> Decimal:
    try:
        result = to_decimal(value, "expenditure_qty")
    except ValueError as e:
        raise InvalidItemInputError("expenditure_qty", f"not a number: {value!r}") from e
    if result < ZERO:
        raise InvalidItemInputError("expenditure_qty", "cannot be negative")
    return result


def _text(value: str, field: str) -> str:
    text = (value or "").strip()
    if not text:
        raise InvalidItemInputError(field, "must not be empty")
    return text


def _category(category: BatchCategory | str) -> BatchCategory:
    try:
        return BatchCategory(category)
    except ValueError as e:
        raise InvalidItemInputError("category", f"unknown batch category {category!r}") from e


class InventoryService:
    """
    Edits the item collection and keeps the stored copy current.

    Contract
    --------
    The collection is loaded lazily on first use.  If nothing is stored
    and ``config.inventory.seed_sample_data`` is set, the sample items
    are stored and used.

    Non-goals
    ---------
    - No per-change history; each save replaces the previous document.
    - No concurrent writers.
    """

    def __init__(self, repository: InventoryRepository, config: AppConfig | None = None):
        self._repository = repository
        self._config = config or AppConfig.with_defaults()
        self._items: list[InventoryItem] | None = None

    # =========================================================================
    # Loading and saving
    # =========================================================================

    def _collection(self) -> list[InventoryItem]:
        if self._items is None:
            stored = self._repository.load()
            if stored is None and self._config.inventory.seed_sample_data:
                stored = sample_items()
                self._repository.save(stored)
                logger.info("sample_data_seeded", extra={"item_count": len(stored)})
            self._items = stored or []
            logger.debug("inventory_loaded", extra={"item_count": len(self._items)})
        return self._items

    def _commit(self, items: list[InventoryItem]) -> None:
        self._repository.save(items)
        self._items = items

    def _index_of(self, item_id: int) -> int:
        for index, item in enumerate(self._collection()):
            if item.id == item_id:
                return index
        raise ItemNotFoundError(item_id)

    def _store_item(self, item: InventoryItem) -> InventoryItem:
        items = list(self._collection())
        items[self._index_of(item.id)] = item
        self._commit(items)
        return item

    # =========================================================================
    # Queries
    # =========================================================================

    def items(self) -> list[InventoryItem]:
        """The collection in display order (a copy)."""
        return list(self._collection())

    def get(self, item_id: int) -> InventoryItem:
        return self._collection()[self._index_of(item_id)]

    def next_item_id(self) -> int:
        return max((item.id for item in self._collection()), default=0) + 1

    # =========================================================================
    # Items
    # =========================================================================

    def add_item(
        self,
        name: str,
        unit: str | None = None,
        expenditure_qty: Any = ZERO,
    ) -> InventoryItem:
        """Append a new item with no batches."""
        item = InventoryItem(
            id=self.next_item_id(),
            name=_text(name, "name"),
            unit=_text(unit or self._config.inventory.default_unit, "unit"),
            expenditure_qty=_expenditure(expenditure_qty),
        )
        self._commit([*self._collection(), item])
        logger.info("item_added", extra={"item_id": item.id, "item_name": item.name})
        return item

    def update_item(
        self,
        item_id: int,
        *,
        name: str | None = None,
        unit: str | None = None,
        expenditure_qty: Any = None,
    ) -> InventoryItem:
        """Change any of an item's name, unit or expenditure quantity."""
        item = self.get(item_id)
        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = _text(name, "name")
        if unit is not None:
            changes["unit"] = _text(unit, "unit")
        if expenditure_qty is not None:
            changes["expenditure_qty"] = _expenditure(expenditure_qty)
        if not changes:
            return item

        updated = self._store_item(dataclasses.replace(item, **changes))
        logger.info("item_updated", extra={
            "item_id": item_id,
            "fields": sorted(changes),
        })
        return updated

    def replace_item(self, item: InventoryItem) -> InventoryItem:
        """Replace the stored item having ``item.id`` with ``item`` as a whole."""
        _text(item.name, "name")
        _text(item.unit, "unit")
        for batch in item.prev_month + item.received_this_month:
            _positive(batch.qty, "qty")
            _positive(batch.rate, "rate")
        self._store_item(item)
        logger.info("item_replaced", extra={"item_id": item.id})
        return item

    def delete_item(self, item_id: int) -> InventoryItem:
        """Remove an item and its batches."""
        items = list(self._collection())
        removed = items.pop(self._index_of(item_id))
        self._commit(items)
        logger.info("item_deleted", extra={
            "item_id": item_id,
            "item_name": removed.name,
        })
        return removed

    def set_expenditure(self, item_id: int, qty: Any) -> InventoryItem:
        item = self.get(item_id)
        updated = self._store_item(item.with_expenditure(_expenditure(qty)))
        logger.info("expenditure_set", extra={
            "item_id": item_id,
            "expenditure_qty": str(updated.expenditure_qty),
        })
        return updated

    # =========================================================================
    # Batches
    # =========================================================================

    def add_batch(
        self,
        item_id: int,
        category: BatchCategory | str,
        qty: Any,
        rate: Any,
    ) -> Batch:
        """Append a batch to the end of one of the item's queues."""
        category = _category(category)
        item = self.get(item_id)
        batch = Batch(
            id=item.next_batch_id(),
            qty=_positive(qty, "qty"),
            rate=_positive(rate, "rate"),
        )
        self._store_item(
            item.with_batches(category, (*item.batches(category), batch))
        )
        logger.info("batch_added", extra={
            "item_id": item_id,
            "category": category.value,
            "batch_id": batch.id,
        })
        return batch

    def update_batch(
        self,
        item_id: int,
        category: BatchCategory | str,
        batch_id: int,
        *,
        qty: Any = None,
        rate: Any = None,
    ) -> Batch:
        """Replace a batch's qty and/or rate, keeping its position."""
        category = _category(category)
        item = self.get(item_id)
        batches = list(item.batches(category))
        for position, batch in enumerate(batches):
            if batch.id == batch_id:
                break
        else:
            raise BatchNotFoundError(item_id, category.value, batch_id)

        updated = Batch(
            id=batch_id,
            qty=batch.qty if qty is None else _positive(qty, "qty"),
            rate=batch.rate if rate is None else _positive(rate, "rate"),
        )
        batches[position] = updated
        self._store_item(item.with_batches(category, batches))
        logger.info("batch_updated", extra={
            "item_id": item_id,
            "category": category.value,
            "batch_id": batch_id,
        })
        return updated

    def remove_batch(
        self,
        item_id: int,
        category: BatchCategory | str,
        batch_id: int,
    ) -> Batch:
        category = _category(category)
        item = self.get(item_id)
        batches = list(item.batches(category))
        kept = [b for b in batches if b.id != batch_id]
        if len(kept) == len(batches):
            raise BatchNotFoundError(item_id, category.value, batch_id)

        removed = next(b for b in batches if b.id == batch_id)
        self._store_item(item.with_batches(category, kept))
        logger.info("batch_removed", extra={
            "item_id": item_id,
            "category": category.value,
            "batch_id": batch_id,
        })
        return removed

    # =========================================================================
    # Sample data
    # =========================================================================

    def seed_sample_data(self, force: bool = False) -> list[InventoryItem]:
        """
        Store the sample items.

        Without ``force`` an existing non-empty collection is left alone.
        """
        current = self._collection()
        if current and not force:
            logger.info("sample_data_skipped", extra={"item_count": len(current)})
            return list(current)

        items = sample_items()
        self._commit(items)
        logger.info("sample_data_seeded", extra={
            "item_count": len(items),
            "forced": force,
        })
        return list(items)
