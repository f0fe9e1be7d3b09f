"""
Payments screen view-model and controller.

``PaymentsViewModel`` is the whole screen state as one serializable object.
State changes only through the transition functions below; the
``PaymentsScreen`` controller sequences them around store calls.

    closed ──open_for_create──▶ creating ─┐
      ▲    ──open_for_edit────▶ editing  ─┤ begin_submit
      │                                   ▼
      └──── submit_succeeded ◀──── submitting ───▶ submit_failed (stays open)
"""
import logging
from collections.abc import Callable

from pydantic import BaseModel, Field, computed_field

from condo.schemas.payment import ApartmentOwnerOption, PaymentCard, PaymentFormData, PaymentRecord
from condo.services.display import to_owner_option, to_payment_card
from condo.services.payment_form import (
    PaymentFormError,
    describe_store_error,
    form_from_payment,
    save_payment,
)
from condo.services.payment_store import PaymentStoreClient, PaymentStoreError

logger = logging.getLogger(__name__)

EMPTY_LIST_MESSAGE = "No payments found."


class PaymentsViewModel(BaseModel):
    # ── List ──
    loading: bool = False
    load_error: str | None = None
    payments: list[PaymentCard] = Field(default_factory=list)
    owners: list[ApartmentOwnerOption] = Field(default_factory=list)

    # ── Dialog ──
    dialog_open: bool = False
    editing_payment_id: str | None = None
    form: PaymentFormData = Field(default_factory=PaymentFormData)
    form_errors: list[str] = Field(default_factory=list)
    field_hints: dict[str, str] = Field(default_factory=dict)
    show_error_alert: bool = False
    submitting: bool = False

    @computed_field
    @property
    def is_editing(self) -> bool:
        return self.editing_payment_id is not None

    @computed_field
    @property
    def owner_field_disabled(self) -> bool:
        return self.is_editing

    @computed_field
    @property
    def dialog_title(self) -> str:
        return "Edit Payment" if self.is_editing else "Add New Payment"

    @computed_field
    @property
    def submit_label(self) -> str:
        return "Update" if self.is_editing else "Create"

    @computed_field
    @property
    def empty_message(self) -> str | None:
        if self.loading or self.load_error or self.payments:
            return None
        return EMPTY_LIST_MESSAGE


# ── Transitions ──────────────────────────────────────────────────────────────

def _dialog_reset() -> dict:
    return {
        "editing_payment_id": None,
        "form": PaymentFormData(),
        "form_errors": [],
        "field_hints": {},
        "show_error_alert": False,
        "submitting": False,
    }


def open_for_create(vm: PaymentsViewModel) -> PaymentsViewModel:
    return vm.model_copy(update={**_dialog_reset(), "dialog_open": True})


def open_for_edit(vm: PaymentsViewModel, payment: PaymentRecord) -> PaymentsViewModel:
    return vm.model_copy(
        update={
            **_dialog_reset(),
            "dialog_open": True,
            "editing_payment_id": payment.id,
            "form": form_from_payment(payment),
        }
    )


def close_dialog(vm: PaymentsViewModel) -> PaymentsViewModel:
    return vm.model_copy(update={**_dialog_reset(), "dialog_open": False})


def edit_form(vm: PaymentsViewModel, **changes) -> PaymentsViewModel:
    """Apply field edits. The owner of an existing payment cannot change."""
    if vm.is_editing:
        changes.pop("apartment_owner_id", None)
    return vm.model_copy(update={"form": vm.form.model_copy(update=changes)})


def dismiss_error(vm: PaymentsViewModel) -> PaymentsViewModel:
    return vm.model_copy(update={"show_error_alert": False, "field_hints": {}})


def begin_submit(vm: PaymentsViewModel) -> PaymentsViewModel:
    return vm.model_copy(
        update={"submitting": True, "form_errors": [], "field_hints": {}, "show_error_alert": False}
    )


def submit_failed(
    vm: PaymentsViewModel, errors: list[str], hints: dict[str, str] | None = None
) -> PaymentsViewModel:
    return vm.model_copy(
        update={
            "submitting": False,
            "form_errors": errors,
            "field_hints": hints or {},
            "show_error_alert": True,
        }
    )


def submit_succeeded(vm: PaymentsViewModel) -> PaymentsViewModel:
    return close_dialog(vm)


# ── Controller ───────────────────────────────────────────────────────────────

class PaymentsScreen:
    def __init__(self, store: PaymentStoreClient, state: PaymentsViewModel | None = None):
        self.store = store
        self.state = state or PaymentsViewModel()

    async def load(self) -> PaymentsViewModel:
        """Fetch payments and owners; the store is the only source of truth."""
        self.state = self.state.model_copy(update={"loading": True, "load_error": None})
        try:
            payments = await self.store.list_payments()
            owners = await self.store.list_apartment_owners()
        except PaymentStoreError as exc:
            logger.error("Error loading payments: %s", exc)
            self.state = self.state.model_copy(
                update={"loading": False, "load_error": f"Error loading payments: {exc}"}
            )
            return self.state

        self.state = self.state.model_copy(
            update={
                "loading": False,
                "payments": [to_payment_card(p) for p in payments],
                "owners": [to_owner_option(o) for o in owners],
            }
        )
        return self.state

    def _find_payment(self, payment_id: str) -> PaymentCard:
        for payment in self.state.payments:
            if payment.id == payment_id:
                return payment
        raise LookupError(f"Payment {payment_id} is not in the current list")

    def open_for_create(self) -> PaymentsViewModel:
        self.state = open_for_create(self.state)
        return self.state

    def open_for_edit(self, payment_id: str) -> PaymentsViewModel:
        self.state = open_for_edit(self.state, self._find_payment(payment_id))
        return self.state

    def close(self) -> PaymentsViewModel:
        self.state = close_dialog(self.state)
        return self.state

    def edit_form(self, **changes) -> PaymentsViewModel:
        self.state = edit_form(self.state, **changes)
        return self.state

    def dismiss_error(self) -> PaymentsViewModel:
        self.state = dismiss_error(self.state)
        return self.state

    async def submit(self) -> bool:
        """
        Validate and save the open form. Returns True when the payment was saved.

        A submit while another is still in flight is ignored.
        """
        if not self.state.dialog_open:
            return False
        if self.state.submitting:
            logger.info("Submit ignored: a save is already in flight")
            return False

        self.state = begin_submit(self.state)
        try:
            await save_payment(
                self.store,
                self.state.form,
                editing_payment_id=self.state.editing_payment_id,
            )
        except PaymentFormError as exc:
            self.state = submit_failed(self.state, exc.errors, exc.hints)
            return False
        except PaymentStoreError as exc:
            logger.error("Error saving payment: %s", exc)
            self.state = submit_failed(self.state, describe_store_error(exc))
            return False
        except Exception:
            self.state = self.state.model_copy(update={"submitting": False})
            raise

        self.state = submit_succeeded(self.state)
        await self.load()
        return True

    async def delete(self, payment_id: str, *, confirm: Callable[[], bool]) -> bool:
        """
        Delete after ``confirm()`` returns True, then refresh the list.

        Store failures are logged and reported only through the return value.
        """
        if not confirm():
            return False
        try:
            await self.store.delete_payment(payment_id)
        except PaymentStoreError:
            logger.exception("Error deleting payment %s", payment_id)
            return False
        await self.load()
        return True
