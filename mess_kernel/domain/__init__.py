"""
Pure domain layer.

This module contains immutable value objects with NO dependencies on:
- ORM (SQLAlchemy)
- Database
- Time/clock (except the injectable Clock itself)
- I/O
"""

from mess_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from mess_kernel.domain.values import (
    ZERO,
    Batch,
    BatchCategory,
    InventoryItem,
    QtyAmount,
    to_decimal,
)

__all__ = [
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "ZERO",
    "Batch",
    "BatchCategory",
    "InventoryItem",
    "QtyAmount",
    "to_decimal",
]
