"""
Payment field rules: pure functions, no DB, no network.

Single source for the checks shared by the payments screen, the HTTP
layer and the SQLAlchemy write path:

  month        YYYY-MM, month component 01–12
  status       pending | paid | overdue
  amount       any finite decimal number ("500", "12.50")
  description  non-empty once trimmed
"""
import math
import re
from decimal import Decimal, InvalidOperation

# ── Valid values ────────────────────────────────────────────────────────────

VALID_STATUSES = ("pending", "paid", "overdue")
DEFAULT_STATUS = "pending"

MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")

# Message the store reports for a bad month; shown verbatim on the screen.
MONTH_FORMAT_ERROR = "Invalid month format. Expected YYYY-MM"


# ── Predicates ───────────────────────────────────────────────────────────────

def is_valid_month(month: str | None) -> bool:
    """``True`` for tokens like ``2024-01``; ``08-2024``, ``2024/08`` and ``2024-13`` fail."""
    if not month:
        return False
    return MONTH_PATTERN.fullmatch(month) is not None


def is_valid_status(status: str | None) -> bool:
    return status in VALID_STATUSES


def parse_amount(raw) -> Decimal | None:
    """
    Parse a user-entered amount. Returns None when it is not a finite number.

    Accepts str, int, float or Decimal. Blank strings, "abc", "NaN",
    "Infinity" and values too large for a float ("1e400") return None.
    """
    if raw is None or isinstance(raw, bool):
        return None
    text = str(raw).strip()
    if not text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite() or not math.isfinite(float(value)):
        return None
    return value


def has_text(value: str | None) -> bool:
    return bool(value and value.strip())


# ── Write-path checks (raise ValueError) ─────────────────────────────────────

def check_month(month: str | None) -> str:
    if not is_valid_month(month):
        raise ValueError(MONTH_FORMAT_ERROR)
    return month


def check_status(status: str | None) -> str:
    if not is_valid_status(status):
        raise ValueError(f"Status must be one of: {', '.join(VALID_STATUSES)}")
    return status


def check_amount(raw) -> Decimal:
    value = parse_amount(raw)
    if value is None:
        raise ValueError(f"Invalid payment amount: {raw!r}")
    return value
