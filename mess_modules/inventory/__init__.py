"""
Inventory Module (``mess_modules.inventory``).

Item and batch editing over the stored collection, the stored document
shape, and the sample items a new installation starts with.  Costing
is delegated to ``mess_engines``; persistence to the KeyValueStore.
"""

from mess_kernel.domain.values import BatchCategory
from mess_modules.inventory.repository import InventoryRepository
from mess_modules.inventory.sample_data import sample_items
from mess_modules.inventory.serialization import (
    item_from_dict,
    item_to_dict,
    items_from_document,
    items_to_document,
)
from mess_modules.inventory.service import InventoryService

__all__ = [
    "BatchCategory",
    "InventoryRepository",
    "InventoryService",
    "item_from_dict",
    "item_to_dict",
    "items_from_document",
    "items_to_document",
    "sample_items",
]
