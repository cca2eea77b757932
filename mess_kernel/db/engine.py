"""
Module: mess_kernel.db.engine
Responsibility: SQLAlchemy engine initialization, session factory creation,
    and transactional scope utilities.
Architecture position: Kernel > DB.  May import from db/base.py.  The
    engine and session factory are returned to the caller and injected
    into stores; nothing here is held in module-level state.

Invariants enforced:
    - SQLite in-memory URLs share a single connection (StaticPool) so every
      session sees the same database.
    - session_scope() commits on success and rolls back on any exception.

Failure modes:
    - sqlalchemy.exc.ArgumentError for a malformed database URL.
    - OperationalError if the database file cannot be opened.
"""

from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from mess_kernel.logging_config import get_logger

logger = get_logger("db.engine")


def _is_memory_sqlite(database_url: str) -> bool:
    return database_url in ("sqlite://", "sqlite:///:memory:") or (
        database_url.startswith("sqlite") and "mode=memory" in database_url
    )


def init_engine_from_url(database_url: str, echo: bool = False) -> Engine:
    """
    Create the SQLAlchemy engine for the document store.

    Args:
        database_url: SQLAlchemy URL, e.g. ``sqlite:///mess_inventory.db``.
        echo: If True, log all SQL statements.

    Returns:
        SQLAlchemy Engine instance.
    """
    kwargs: dict = {"echo": echo}
    if _is_memory_sqlite(database_url):
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
    elif database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs["pool_pre_ping"] = True

    engine = create_engine(database_url, **kwargs)

    logger.info(
        "engine_initialized",
        extra={
            "dialect": engine.dialect.name,
            "echo": echo,
        },
    )
    return engine


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Session factory bound to ``engine``."""
    return sessionmaker(bind=engine, expire_on_commit=False)


@contextmanager
def session_scope(
    session_factory: sessionmaker[Session],
) -> Generator[Session, None, None]:
    """
    Provide a transactional scope around a series of operations.

    On normal exit the session is committed and closed. On exception the
    session is rolled back and closed, and the exception is re-raised.

    Usage:
        with session_scope(factory) as session:
            session.add(entity)
    """
    session = session_factory()
    logger.debug("transaction_started")
    try:
        yield session
        session.commit()
        logger.debug("transaction_committed")
    except Exception:
        session.rollback()
        logger.warning("transaction_rolled_back", exc_info=True)
        raise
    finally:
        session.close()


def create_tables(engine: Engine) -> None:
    """
    Create all tables defined in the models.

    Postconditions: every ORM table registered on Base.metadata exists.
    """
    from mess_kernel.db.base import Base
    from mess_kernel.models import kv_entry  # noqa: F401

    Base.metadata.create_all(engine)
    logger.info(
        "tables_created",
        extra={"tables": sorted(Base.metadata.tables.keys())},
    )


def drop_tables(engine: Engine) -> None:
    """Drop all tables. Use with caution - primarily for testing."""
    from mess_kernel.db.base import Base

    Base.metadata.drop_all(engine)
