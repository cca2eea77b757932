"""ORM models for the mess kernel."""

from mess_kernel.models.kv_entry import KeyValueEntry

__all__ = ["KeyValueEntry"]
