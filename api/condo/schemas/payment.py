import enum
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from condo.services.payment_rules import DEFAULT_STATUS, check_month

# Store payloads travel in camelCase (apartmentOwner, paymentDate, ...).
# populate_by_name lets Python code keep using snake_case.
_WIRE = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaymentStatus(str, enum.Enum):
    pending = "pending"
    paid = "paid"
    overdue = "overdue"


# ─── Store records (read side) ──────────────────────────────────────────────

class ApartmentOwnerSummary(BaseModel):
    model_config = _WIRE

    id: str
    name: str
    apartment_number: str


class PaymentRecord(BaseModel):
    model_config = _WIRE

    id: str
    amount: Decimal
    month: str
    description: str | None = None
    # Raw wire values (ISO string or epoch millis); display code decides what an unparsable date shows.
    payment_date: str | int | float | None = None
    status: str  # pending | paid | overdue; anything else renders as a neutral badge
    apartment_owner: ApartmentOwnerSummary
    created_at: str | int | float | None = None
    updated_at: str | int | float | None = None


# ─── Store inputs (write side) ──────────────────────────────────────────────

class CreatePaymentInput(BaseModel):
    model_config = _WIRE

    apartment_owner_id: str = Field(min_length=1)
    amount: float
    month: str
    description: str
    status: PaymentStatus = PaymentStatus.pending

    @field_validator("month")
    @classmethod
    def month_format(cls, v: str) -> str:
        return check_month(v)


class UpdatePaymentInput(BaseModel):
    model_config = _WIRE

    amount: float | None = None
    month: str | None = None
    description: str | None = None
    status: PaymentStatus | None = None

    @field_validator("month")
    @classmethod
    def month_format(cls, v: str | None) -> str | None:
        return v if v is None else check_month(v)


# ─── Form (what the user typed) ─────────────────────────────────────────────

class PaymentFormData(BaseModel):
    """Raw form fields. Everything is a string so invalid input can be reported, not rejected."""
    model_config = _WIRE

    apartment_owner_id: str = ""
    amount: str = ""
    month: str = ""
    description: str = ""
    status: str = DEFAULT_STATUS

    @field_validator("amount", mode="before")
    @classmethod
    def amount_as_text(cls, v):
        # JSON clients send numbers; keep them as typed so check_form sees them
        if isinstance(v, (bool, int, float, Decimal)):
            return str(v)
        return v


# ─── Display ────────────────────────────────────────────────────────────────

class StatusBadge(BaseModel):
    label: str
    color: str  # success | warning | error | default


class PaymentCard(PaymentRecord):
    amount_display: str
    owner_label: str
    status_badge: StatusBadge
    payment_date_display: str
    created_at_display: str
    updated_at_display: str


class ApartmentOwnerOption(ApartmentOwnerSummary):
    label: str
