"""Month selectors, labels, file names and amount formatting for reports."""

from __future__ import annotations

import calendar
import re
from datetime import date
from decimal import Decimal

from mess_engines.rows import format_decimal
from mess_kernel.exceptions import InvalidMonthError

_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")
_WHITESPACE_RE = re.compile(r"\s+")


def parse_month(value: str) -> date:
    """``"2026-10"`` -> ``date(2026, 10, 1)``."""
    match = _MONTH_RE.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise InvalidMonthError(str(value))
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12 or year < 1:
        raise InvalidMonthError(value)
    return date(year, month, 1)


def month_label(month: date) -> str:
    """``date(2026, 10, 1)`` -> ``"October 2026"``."""
    return f"{calendar.month_name[month.month]} {month.year}"


def export_filename(prefix: str, label: str, extension: str) -> str:
    """Whitespace runs in the label become single underscores."""
    return f"{prefix}_{_WHITESPACE_RE.sub('_', label.strip())}.{extension}"


def format_amount(value: Decimal, precision: int = 2, symbol: str = "") -> str:
    """Half-up rounded amount, optionally prefixed by a currency symbol."""
    return f"{symbol}{format_decimal(value, precision)}"
