"""
Ration Module (``mess_modules.ration``).

Stored fresh-ration summary, ration deductions and attendance inputs,
evaluated through ``mess_engines.ration``.
"""

from mess_modules.ration.service import RationService

__all__ = ["RationService"]
