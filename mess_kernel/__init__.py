"""
Mess Kernel - shared foundation for the mess FIFO inventory.

Provides:
- Immutable batch / item value objects
- Structured JSON logging
- Typed exception hierarchy
- Key-value document persistence
"""

__version__ = "0.1.0"
