"""
GraphQL client for the payment record store.

The store owns persistence, id assignment and timestamps. This module only
speaks its wire format: a JSON POST of ``{query, operationName, variables}``
answered by ``{data, errors}``.

Failure classification (matches what the screen tells the user):
  * a non-empty ``errors`` array      → PaymentStoreError.graphql_errors
  * transport failure or HTTP error   → PaymentStoreError.network_error
  * a payload that does not match the record shape → plain PaymentStoreError
"""
import logging

import httpx
from pydantic import BaseModel, ValidationError

from condo.schemas.payment import (
    ApartmentOwnerSummary,
    CreatePaymentInput,
    PaymentRecord,
    UpdatePaymentInput,
)

logger = logging.getLogger(__name__)

# ── Documents ───────────────────────────────────────────────────────────────

_OWNER_FIELDS = """
      apartmentOwner {
        id
        name
        apartmentNumber
      }"""

GET_PAYMENTS = """
  query GetPayments {
    payments {
      id
      amount
      month
      description
      paymentDate
      status""" + _OWNER_FIELDS + """
      createdAt
      updatedAt
    }
  }
"""

GET_APARTMENT_OWNERS = """
  query GetApartmentOwners {
    apartmentOwners {
      id
      name
      apartmentNumber
    }
  }
"""

CREATE_PAYMENT = """
  mutation CreatePayment($input: CreatePaymentInput!) {
    createPayment(input: $input) {
      id
      amount
      month
      description
      paymentDate
      status""" + _OWNER_FIELDS + """
      createdAt
    }
  }
"""

UPDATE_PAYMENT = """
  mutation UpdatePayment($id: ID!, $input: UpdatePaymentInput!) {
    updatePayment(id: $id, input: $input) {
      id
      amount
      month
      description
      paymentDate
      status""" + _OWNER_FIELDS + """
      updatedAt
    }
  }
"""

DELETE_PAYMENT = """
  mutation DeletePayment($id: ID!) {
    deletePayment(id: $id)
  }
"""

PING = "query Ping { __typename }"


class PaymentStoreError(Exception):
    """Raised for any failed store operation."""

    def __init__(
        self,
        message: str,
        *,
        graphql_errors: list[str] | None = None,
        network_error: bool = False,
    ):
        super().__init__(message)
        self.graphql_errors = graphql_errors or []
        self.network_error = network_error


class PaymentStoreClient:
    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _execute(
        self, query: str, operation_name: str, variables: dict | None = None
    ) -> dict:
        payload = {"query": query, "operationName": operation_name, "variables": variables or {}}
        try:
            resp = await self._client.post(self.url, json=payload)
        except httpx.TransportError as exc:
            logger.warning("GraphQL %s failed to reach %s: %s", operation_name, self.url, exc)
            raise PaymentStoreError(str(exc) or exc.__class__.__name__, network_error=True) from exc

        try:
            body = resp.json()
        except ValueError:
            body = None

        errors = body.get("errors") if isinstance(body, dict) else None
        if errors:
            messages = [
                e["message"] for e in errors if isinstance(e, dict) and e.get("message")
            ]
            logger.info("GraphQL %s rejected: %s", operation_name, messages)
            raise PaymentStoreError(
                "; ".join(messages) or f"{operation_name} failed",
                graphql_errors=messages,
            )

        if resp.is_error or not isinstance(body, dict):
            logger.warning(
                "GraphQL %s returned HTTP %d: %s", operation_name, resp.status_code, resp.text[:200]
            )
            raise PaymentStoreError(
                f"Store returned HTTP {resp.status_code}", network_error=True
            )

        return body.get("data") or {}

    def _parse(self, model: type[BaseModel], raw, operation_name: str):
        try:
            return model.model_validate(raw)
        except ValidationError as exc:
            logger.warning("GraphQL %s returned a malformed %s: %s", operation_name, model.__name__, exc)
            raise PaymentStoreError(f"Malformed {model.__name__} in {operation_name} response") from exc

    # ── Queries ─────────────────────────────────────────────────────────────

    async def list_payments(self) -> list[PaymentRecord]:
        data = await self._execute(GET_PAYMENTS, "GetPayments")
        return [self._parse(PaymentRecord, p, "GetPayments") for p in data.get("payments") or []]

    async def list_apartment_owners(self) -> list[ApartmentOwnerSummary]:
        data = await self._execute(GET_APARTMENT_OWNERS, "GetApartmentOwners")
        return [
            self._parse(ApartmentOwnerSummary, o, "GetApartmentOwners")
            for o in data.get("apartmentOwners") or []
        ]

    async def ping(self) -> bool:
        data = await self._execute(PING, "Ping")
        return "__typename" in data

    # ── Mutations ───────────────────────────────────────────────────────────

    async def create_payment(self, payload: CreatePaymentInput) -> PaymentRecord:
        data = await self._execute(
            CREATE_PAYMENT,
            "CreatePayment",
            {"input": payload.model_dump(by_alias=True, mode="json")},
        )
        return self._parse(PaymentRecord, data.get("createPayment"), "CreatePayment")

    async def update_payment(self, payment_id: str, payload: UpdatePaymentInput) -> PaymentRecord:
        data = await self._execute(
            UPDATE_PAYMENT,
            "UpdatePayment",
            {
                "id": payment_id,
                "input": payload.model_dump(by_alias=True, mode="json", exclude_none=True),
            },
        )
        return self._parse(PaymentRecord, data.get("updatePayment"), "UpdatePayment")

    async def delete_payment(self, payment_id: str) -> bool:
        data = await self._execute(DELETE_PAYMENT, "DeletePayment", {"id": payment_id})
        return bool(data.get("deletePayment"))
