"""
Display helpers for the payments screen: how records look, not what they are.
"""
import logging
from datetime import datetime, timezone

import pytz

from condo.core.config import settings
from condo.schemas.payment import (
    ApartmentOwnerOption,
    ApartmentOwnerSummary,
    PaymentCard,
    PaymentRecord,
    StatusBadge,
)

logger = logging.getLogger(__name__)

NOT_SET = "Not set"
INVALID_DATE = "Invalid date"
DATE_FORMAT = "%d/%m/%Y, %H:%M"  # 05/08/2024, 14:30

_STATUS_COLORS = {
    "paid": "success",
    "pending": "warning",
    "overdue": "error",
}


def status_badge(status: str | None) -> StatusBadge:
    status = status or ""
    return StatusBadge(
        label=status[:1].upper() + status[1:],
        color=_STATUS_COLORS.get(status, "default"),
    )


def _viewer_tz(name: str | None):
    try:
        return pytz.timezone(name or settings.display_timezone)
    except pytz.UnknownTimeZoneError:
        logger.warning("Unknown display timezone %r, falling back to UTC", name)
        return pytz.utc


def _parse_timestamp(value) -> datetime:
    """ISO-8601 strings, datetimes, or epoch milliseconds (number or digit string)."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    else:
        text = str(value).strip()
        if text.lstrip("-").isdigit():
            parsed = datetime.fromtimestamp(int(text) / 1000, tz=timezone.utc)
        else:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        # Store timestamps without an offset are UTC
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_date(value, tz_name: str | None = None) -> str:
    """
    Format a store timestamp in the viewer's timezone.

    Never raises: missing values read "Not set", garbage reads "Invalid date".
    """
    if value is None or value == "":
        return NOT_SET
    tz = _viewer_tz(tz_name)
    try:
        return _parse_timestamp(value).astimezone(tz).strftime(DATE_FORMAT)
    except (ValueError, TypeError, OverflowError, OSError) as exc:
        logger.error("Invalid date value %r: %s", value, exc)
        return INVALID_DATE


def format_amount(amount) -> str:
    return f"${amount:.2f}"


def owner_label(owner: ApartmentOwnerSummary) -> str:
    return f"{owner.name} (Apt {owner.apartment_number})"


def to_payment_card(record: PaymentRecord, tz_name: str | None = None) -> PaymentCard:
    return PaymentCard(
        **record.model_dump(),
        amount_display=format_amount(record.amount),
        owner_label=owner_label(record.apartment_owner),
        status_badge=status_badge(record.status),
        payment_date_display=format_date(record.payment_date, tz_name),
        created_at_display=format_date(record.created_at, tz_name),
        updated_at_display=format_date(record.updated_at, tz_name),
    )


def to_owner_option(owner: ApartmentOwnerSummary) -> ApartmentOwnerOption:
    return ApartmentOwnerOption(**owner.model_dump(), label=owner_label(owner))
