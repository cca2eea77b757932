"""
KeyValueStore -- whole-document JSON persistence under fixed string keys.

Responsibility:
    Reads and writes opaque JSON documents (the item collection, the
    editable summary, the ration and attendance settings).  Callers hand
    in plain dict/list structures; the store never interprets them.

Architecture position:
    Kernel > Services.  Injected into module repositories and services at
    the composition boundary.  The FIFO engine never reaches it.

Invariants enforced:
    - A write replaces the whole document under its key.
    - Decimal values are written as strings; JSON floats are read back as
      Decimal, so stored quantities never pass through binary floats.

Failure modes:
    - CorruptDocumentError if a stored document is not valid JSON.
    - StoreNotInitializedError if constructed without a session factory.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from mess_kernel.db.engine import session_scope
from mess_kernel.exceptions import CorruptDocumentError, StoreNotInitializedError
from mess_kernel.logging_config import get_logger
from mess_kernel.models.kv_entry import KeyValueEntry

logger = get_logger("services.kv_store")


class _DocumentEncoder(json.JSONEncoder):
    """Handle Decimal and dates in stored documents."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, Decimal):
            return str(obj)
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        return super().default(obj)


def encode_document(value: Any) -> str:
    """Serialize a document deterministically (sorted keys)."""
    return json.dumps(value, cls=_DocumentEncoder, sort_keys=True, ensure_ascii=False)


def decode_document(key: str, text: str) -> Any:
    """Parse a stored document, reading floats as Decimal."""
    try:
        return json.loads(text, parse_float=Decimal)
    except json.JSONDecodeError as e:
        raise CorruptDocumentError(key, str(e)) from e


class KeyValueStore:
    """
    JSON document store over a single SQL table.

    Contract:
        ``get_json`` returns None for an absent key; ``set_json`` upserts.
    """

    def __init__(self, session_factory: sessionmaker[Session] | None):
        if session_factory is None:
            raise StoreNotInitializedError()
        self._session_factory = session_factory

    def get_json(self, key: str) -> Any | None:
        """Load the document stored under ``key``, or None."""
        with session_scope(self._session_factory) as session:
            entry = session.scalars(
                select(KeyValueEntry).where(KeyValueEntry.key == key)
            ).one_or_none()
            if entry is None:
                logger.debug("document_missing", extra={"key": key})
                return None
            text = entry.document

        value = decode_document(key, text)
        logger.debug("document_loaded", extra={"key": key, "size": len(text)})
        return value

    def set_json(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous document."""
        text = encode_document(value)
        with session_scope(self._session_factory) as session:
            entry = session.scalars(
                select(KeyValueEntry).where(KeyValueEntry.key == key)
            ).one_or_none()
            if entry is None:
                session.add(KeyValueEntry(key=key, document=text))
                inserted = True
            else:
                entry.document = text
                inserted = False

        logger.info(
            "document_saved",
            extra={"key": key, "size": len(text), "inserted": inserted},
        )

    def delete(self, key: str) -> bool:
        """Remove the document under ``key``. Returns True if one existed."""
        with session_scope(self._session_factory) as session:
            entry = session.scalars(
                select(KeyValueEntry).where(KeyValueEntry.key == key)
            ).one_or_none()
            if entry is None:
                return False
            session.delete(entry)

        logger.info("document_deleted", extra={"key": key})
        return True

    def keys(self) -> list[str]:
        """All stored keys, sorted."""
        with session_scope(self._session_factory) as session:
            return sorted(session.scalars(select(KeyValueEntry.key)).all())
