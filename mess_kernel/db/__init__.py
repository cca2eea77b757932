"""Database layer - engine, base classes and session scope."""

from mess_kernel.db.base import Base, TimestampedBase
from mess_kernel.db.engine import (
    create_tables,
    drop_tables,
    init_engine_from_url,
    make_session_factory,
    session_scope,
)

__all__ = [
    "init_engine_from_url",
    "make_session_factory",
    "session_scope",
    "create_tables",
    "drop_tables",
    "Base",
    "TimestampedBase",
]
