"""
InventoryRepository -- loads and saves the whole item collection.

The collection is one document in the KeyValueStore.  A document that
does not parse as items raises CorruptDocumentError; nothing is
silently replaced.
"""

from __future__ import annotations

from mess_kernel.domain.values import InventoryItem
from mess_kernel.exceptions import CorruptDocumentError
from mess_kernel.services.kv_store import KeyValueStore
from mess_modules.inventory.serialization import (
    items_from_document,
    items_to_document,
)


class InventoryRepository:
    def __init__(self, store: KeyValueStore, key: str = "fifo-inventory"):
        self._store = store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list[InventoryItem] | None:
        """The stored items, or None if nothing has been saved yet."""
        document = self._store.get_json(self._key)
        if document is None:
            return None
        try:
            return items_from_document(document)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise CorruptDocumentError(self._key, str(e)) from e

    def save(self, items: list[InventoryItem]) -> None:
        self._store.set_json(self._key, items_to_document(items))
