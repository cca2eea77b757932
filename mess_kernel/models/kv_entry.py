"""
Module: mess_kernel.models.kv_entry
Responsibility: ORM model for whole-document JSON blobs stored under fixed
    string keys (the item collection, the editable summary, the ration and
    attendance settings).
Architecture position: Kernel > Models.  Inherits from TimestampedBase.

Invariants enforced:
    - ``key`` is unique: one document per key, overwritten as a whole.
    - ``document`` holds the serialized JSON text; decoding happens in
      KeyValueStore, never here.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mess_kernel.db.base import TimestampedBase


class KeyValueEntry(TimestampedBase):
    """One JSON document stored under a string key."""

    __tablename__ = "kv_entries"

    key: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    document: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<KeyValueEntry {self.key} ({len(self.document)} chars)>"
