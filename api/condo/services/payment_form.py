"""
Payment form workflow: validate what the user typed, turn it into a store
mutation, and describe failures the way the screen shows them.

Shared by the payments screen controller and the HTTP router.
"""
import logging

from condo.schemas.payment import (
    CreatePaymentInput,
    PaymentFormData,
    PaymentRecord,
    UpdatePaymentInput,
)
from condo.services.payment_rules import has_text, is_valid_month, is_valid_status, parse_amount
from condo.services.payment_store import PaymentStoreClient, PaymentStoreError

logger = logging.getLogger(__name__)

# Aggregated alert messages, in check order
OWNER_REQUIRED = "Please select the apartment owner"
INVALID_AMOUNT = "Invalid payment amount"
INVALID_MONTH = "Invalid month (use format YYYY-MM)"
DESCRIPTION_REQUIRED = "Description is required"
STATUS_REQUIRED = "Status is required"

# Helper text rendered under each field while the alert is showing
FIELD_HINTS = {
    "owner": "Please select an apartment owner",
    "amount": "Please enter a valid amount",
    "month": "Please use YYYY-MM format",
    "description": "Description is required",
    "status": "Please select a status",
}

NETWORK_ERROR = "Could not connect to the server"
GENERIC_SAVE_ERROR = "An error occurred while saving the payment"


class PaymentFormError(Exception):
    """Local validation failed; nothing was sent to the store."""

    def __init__(self, field_errors: dict[str, str]):
        self.field_errors = field_errors
        self.errors = list(field_errors.values())
        super().__init__("; ".join(self.errors))

    @property
    def hints(self) -> dict[str, str]:
        return {field: FIELD_HINTS[field] for field in self.field_errors}


def check_form(form: PaymentFormData, *, editing: bool) -> dict[str, str]:
    """Return ``{field: message}`` for every failed check, in display order."""
    errors: dict[str, str] = {}
    # The owner is fixed once a payment exists, so only a new payment needs one.
    if not editing and not form.apartment_owner_id:
        errors["owner"] = OWNER_REQUIRED
    if parse_amount(form.amount) is None:
        errors["amount"] = INVALID_AMOUNT
    if not is_valid_month(form.month):
        errors["month"] = INVALID_MONTH
    if not has_text(form.description):
        errors["description"] = DESCRIPTION_REQUIRED
    if not is_valid_status(form.status):
        errors["status"] = STATUS_REQUIRED
    return errors


def validate_payment_form(form: PaymentFormData, *, editing: bool) -> list[str]:
    return list(check_form(form, editing=editing).values())


def form_from_payment(payment: PaymentRecord) -> PaymentFormData:
    return PaymentFormData(
        apartment_owner_id=payment.apartment_owner.id,
        amount=str(payment.amount),
        month=payment.month,
        description=payment.description or "",
        status=payment.status,
    )


async def save_payment(
    store: PaymentStoreClient,
    form: PaymentFormData,
    *,
    editing_payment_id: str | None = None,
) -> PaymentRecord:
    """
    Validate ``form`` and create (or, with ``editing_payment_id``, update) the payment.

    Raises PaymentFormError before any request when the form is invalid, and
    PaymentStoreError when the store refuses or cannot be reached. An update
    never carries the owner id.
    """
    editing = editing_payment_id is not None
    field_errors = check_form(form, editing=editing)
    if field_errors:
        raise PaymentFormError(field_errors)

    amount = float(parse_amount(form.amount))
    if editing:
        payload = UpdatePaymentInput(
            amount=amount,
            month=form.month,
            description=form.description,
            status=form.status,
        )
        return await store.update_payment(editing_payment_id, payload)

    payload = CreatePaymentInput(
        apartment_owner_id=form.apartment_owner_id,
        amount=amount,
        month=form.month,
        description=form.description,
        status=form.status,
    )
    return await store.create_payment(payload)


def describe_store_error(exc: Exception) -> list[str]:
    """Messages for the error alert: store messages verbatim, then connectivity, then a fallback."""
    messages: list[str] = []
    if isinstance(exc, PaymentStoreError):
        messages.extend(exc.graphql_errors)
        if exc.network_error:
            messages.append(NETWORK_ERROR)
    if not messages:
        messages.append(GENERIC_SAVE_ERROR)
    return messages
