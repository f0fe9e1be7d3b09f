from fastapi import Request

from condo.services.payment_store import PaymentStoreClient


def get_payment_store(request: Request) -> PaymentStoreClient:
    """App-scoped store client, opened in the lifespan handler."""
    return request.app.state.payment_store
