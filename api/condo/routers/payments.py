"""
Payments screen endpoints. The browser talks to these; they talk to the
GraphQL payment store.

GET    /payments                    payment cards (record + display fields)
GET    /apartment-owners            owner options for the form select
POST   /payments                    create from form fields
PATCH  /payments/{payment_id}       update from form fields (owner is fixed)
DELETE /payments/{payment_id}?confirm=true

Error mapping: local validation → 422, store-reported → 400,
store unreachable → 502. ``detail`` is always a list of messages.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from condo.core.config import settings
from condo.core.deps import get_payment_store
from condo.core.rate_limit import limiter
from condo.schemas.payment import ApartmentOwnerOption, PaymentCard, PaymentFormData
from condo.services.display import to_owner_option, to_payment_card
from condo.services.payment_form import PaymentFormError, describe_store_error, save_payment
from condo.services.payment_store import PaymentStoreClient, PaymentStoreError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["payments"])


def _store_http_error(exc: PaymentStoreError) -> HTTPException:
    status_code = 400 if exc.graphql_errors else 502
    return HTTPException(status_code=status_code, detail=describe_store_error(exc))


async def _save(store: PaymentStoreClient, form: PaymentFormData, payment_id: str | None) -> PaymentCard:
    try:
        record = await save_payment(store, form, editing_payment_id=payment_id)
    except PaymentFormError as exc:
        raise HTTPException(status_code=422, detail=exc.errors)
    except PaymentStoreError as exc:
        logger.error("Error saving payment: %s", exc)
        raise _store_http_error(exc)
    return to_payment_card(record)


@router.get("/payments", response_model=list[PaymentCard])
async def list_payments(store: PaymentStoreClient = Depends(get_payment_store)):
    try:
        records = await store.list_payments()
    except PaymentStoreError as exc:
        logger.error("Error loading payments: %s", exc)
        raise _store_http_error(exc)
    return [to_payment_card(r) for r in records]


@router.get("/apartment-owners", response_model=list[ApartmentOwnerOption])
async def list_apartment_owners(store: PaymentStoreClient = Depends(get_payment_store)):
    try:
        owners = await store.list_apartment_owners()
    except PaymentStoreError as exc:
        logger.error("Error loading apartment owners: %s", exc)
        raise _store_http_error(exc)
    return [to_owner_option(o) for o in owners]


@router.post("/payments", response_model=PaymentCard, status_code=201)
@limiter.limit(settings.mutation_rate_limit)
async def create_payment(
    request: Request,
    form: PaymentFormData,
    store: PaymentStoreClient = Depends(get_payment_store),
):
    return await _save(store, form, None)


@router.patch("/payments/{payment_id}", response_model=PaymentCard)
@limiter.limit(settings.mutation_rate_limit)
async def update_payment(
    request: Request,
    payment_id: str,
    form: PaymentFormData,
    store: PaymentStoreClient = Depends(get_payment_store),
):
    # Any apartment_owner_id in the body is ignored: save_payment never sends it on update
    return await _save(store, form, payment_id)


@router.delete("/payments/{payment_id}", status_code=204)
@limiter.limit(settings.mutation_rate_limit)
async def delete_payment(
    request: Request,
    payment_id: str,
    confirm: bool = False,
    store: PaymentStoreClient = Depends(get_payment_store),
):
    if not confirm:
        raise HTTPException(status_code=400, detail=["Deletion must be confirmed"])
    try:
        await store.delete_payment(payment_id)
    except PaymentStoreError:
        # A failed delete is not surfaced; the next list fetch shows what the store kept
        logger.exception("Error deleting payment %s", payment_id)
