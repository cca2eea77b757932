"""Kernel services."""

from mess_kernel.services.kv_store import KeyValueStore

__all__ = ["KeyValueStore"]
