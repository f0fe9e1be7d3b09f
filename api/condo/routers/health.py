import logging

from fastapi import APIRouter, Depends, HTTPException

from condo.core.deps import get_payment_store
from condo.services.payment_store import PaymentStoreClient, PaymentStoreError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.get("/health/store")
async def health_store(store: PaymentStoreClient = Depends(get_payment_store)):
    try:
        await store.ping()
    except PaymentStoreError as exc:
        logger.warning("Payment store health check failed: %s", exc)
        raise HTTPException(status_code=503, detail="Payment store unavailable")
    return {"status": "ok", "store": "connected"}
