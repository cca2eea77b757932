"""
Pytest fixtures for the mess inventory test suite.

Provides:
- Structured logging setup and log capture
- In-memory SQLite document store
- Item builders and the sample collection
- Wired services over a deterministic clock
"""

import json
import logging
from datetime import datetime, timezone
from decimal import Decimal
from io import StringIO

import pytest

from mess_config.schema import AppConfig, InventoryConfig
from mess_kernel.db.engine import create_tables, init_engine_from_url, make_session_factory
from mess_kernel.domain.clock import DeterministicClock
from mess_kernel.domain.values import Batch, InventoryItem
from mess_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from mess_kernel.services.kv_store import KeyValueStore
from mess_modules.inventory.repository import InventoryRepository
from mess_modules.inventory.sample_data import sample_items
from mess_modules.inventory.service import InventoryService
from mess_modules.ration.service import RationService
from mess_modules.reporting.service import ReportingService


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture mess_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, inventory):
            inventory.add_item("Sugar")
            logs = captured_logs()
            assert any(r["message"] == "item_added" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("mess_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Builders
# =============================================================================


def make_batch(batch_id: int, qty, rate) -> Batch:
    return Batch(id=batch_id, qty=Decimal(str(qty)), rate=Decimal(str(rate)))


def make_item(
    prev=(),
    received=(),
    expenditure=0,
    item_id: int = 1,
    name: str = "Test Item",
    unit: str = "KG",
) -> InventoryItem:
    """
    Build an item from ``(qty, rate)`` pairs.

    Batch ids run 1..n across previous-month then received batches.
    """
    batches = [make_batch(i, q, r) for i, (q, r) in enumerate([*prev, *received], start=1)]
    return InventoryItem(
        id=item_id,
        name=name,
        unit=unit,
        prev_month=tuple(batches[: len(prev)]),
        received_this_month=tuple(batches[len(prev):]),
        expenditure_qty=Decimal(str(expenditure)),
    )


@pytest.fixture
def sample():
    """The three sample items, keyed by name."""
    return {item.name: item for item in sample_items()}


# =============================================================================
# Store and services
# =============================================================================


@pytest.fixture
def engine():
    engine = init_engine_from_url("sqlite://")
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    return KeyValueStore(make_session_factory(engine))


@pytest.fixture
def config():
    """Defaults, without sample seeding so tests start from an empty collection."""
    return AppConfig(inventory=InventoryConfig(seed_sample_data=False))


@pytest.fixture
def deterministic_clock():
    return DeterministicClock(datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc))


@pytest.fixture
def inventory(store, config):
    return InventoryService(InventoryRepository(store, config.storage.inventory_key), config)


@pytest.fixture
def ration(store, config):
    return RationService(store, config)


@pytest.fixture
def reporting(inventory, ration, config, deterministic_clock):
    return ReportingService(inventory, ration, config, deterministic_clock)
