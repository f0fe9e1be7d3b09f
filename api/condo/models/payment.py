import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, validates

from condo.core.database import Base
from condo.services.payment_rules import DEFAULT_STATUS, check_amount, check_month, check_status


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Payment(Base):
    """A single billing entry for one owner in one month."""
    __tablename__ = "payments"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    apartment_owner_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("apartment_owners.id", ondelete="CASCADE"), index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    month: Mapped[str] = mapped_column(String(7))  # YYYY-MM
    description: Mapped[str | None] = mapped_column(Text)
    # Applied at INSERT only when the attribute was never assigned.
    payment_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    status: Mapped[str] = mapped_column(
        String(20), default=DEFAULT_STATUS
    )  # pending | paid | overdue
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    @validates("month")
    def _validate_month(self, key: str, value: str) -> str:
        return check_month(value)

    @validates("status")
    def _validate_status(self, key: str, value: str) -> str:
        return check_status(value)

    @validates("amount")
    def _validate_amount(self, key: str, value) -> Decimal:
        return check_amount(value)

    @validates("payment_date")
    def _validate_payment_date(self, key: str, value: datetime | None) -> datetime:
        # Explicit None is refused, not defaulted: only an unassigned date gets "now".
        if value is None:
            raise ValueError("payment_date cannot be null")
        return value
