"""
Shared fixtures: an in-memory GraphQL payment store served through
httpx.MockTransport, and a throwaway SQLite database for the models.
"""
import json

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from condo.core.database import Base
from condo.models import apartment_owner, payment  # noqa: F401  (register tables)
from condo.services.payment_rules import MONTH_FORMAT_ERROR, is_valid_month
from condo.services.payment_store import PaymentStoreClient

STORE_URL = "http://store.test/graphql"
TIMESTAMP = "2024-08-05T14:30:00.000Z"


class _GraphQLError(Exception):
    pass


class FakeGraphQLStore:
    """Answers the operations the payments screen sends, keyed by operationName."""

    def __init__(self):
        self.owners = {
            "owner-1": {"id": "owner-1", "name": "Ana Souza", "apartmentNumber": "A101"},
            "owner-2": {"id": "owner-2", "name": "Bruno Lima", "apartmentNumber": "B202"},
        }
        self.payments: dict[str, dict] = {}
        self.requests: list[tuple[str, dict]] = []
        self.network_down = False
        self.fail_deletes = False
        self._next_id = 1

    # ── helpers for tests ──

    def add_payment(self, owner_id="owner-1", **fields) -> dict:
        payment_id = f"pay-{self._next_id}"
        self._next_id += 1
        record = {
            "id": payment_id,
            "amount": 500.0,
            "month": "2024-08",
            "description": "Rent",
            "paymentDate": TIMESTAMP,
            "status": "pending",
            "apartmentOwnerId": owner_id,
            "createdAt": TIMESTAMP,
            "updatedAt": TIMESTAMP,
        }
        record.update(fields)
        self.payments[payment_id] = record
        return record

    def operations(self) -> list[str]:
        return [op for op, _ in self.requests]

    # ── transport ──

    def handle(self, request: httpx.Request) -> httpx.Response:
        if self.network_down:
            raise httpx.ConnectError("Connection refused", request=request)
        body = json.loads(request.content)
        op = body["operationName"]
        variables = body.get("variables") or {}
        self.requests.append((op, variables))
        try:
            data = getattr(self, f"_op_{op}")(variables)
        except _GraphQLError as exc:
            return httpx.Response(200, json={"data": None, "errors": [{"message": str(exc)}]})
        return httpx.Response(200, json={"data": data})

    def _out(self, record: dict) -> dict:
        out = {k: v for k, v in record.items() if k != "apartmentOwnerId"}
        out["apartmentOwner"] = self.owners[record["apartmentOwnerId"]]
        return out

    def _op_Ping(self, variables):
        return {"__typename": "Query"}

    def _op_GetPayments(self, variables):
        return {"payments": [self._out(p) for p in self.payments.values()]}

    def _op_GetApartmentOwners(self, variables):
        return {"apartmentOwners": list(self.owners.values())}

    def _op_CreatePayment(self, variables):
        data = variables["input"]
        if data["apartmentOwnerId"] not in self.owners:
            raise _GraphQLError("Apartment owner not found")
        if not is_valid_month(data["month"]):
            raise _GraphQLError(MONTH_FORMAT_ERROR)
        fields = {k: v for k, v in data.items() if k != "apartmentOwnerId"}
        return {"createPayment": self._out(self.add_payment(data["apartmentOwnerId"], **fields))}

    def _op_UpdatePayment(self, variables):
        record = self.payments.get(variables["id"])
        if record is None:
            raise _GraphQLError("Payment not found")
        data = variables["input"]
        if "month" in data and not is_valid_month(data["month"]):
            raise _GraphQLError(MONTH_FORMAT_ERROR)
        record.update(data)
        return {"updatePayment": self._out(record)}

    def _op_DeletePayment(self, variables):
        if self.fail_deletes:
            raise _GraphQLError("Delete failed")
        return {"deletePayment": self.payments.pop(variables["id"], None) is not None}


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def fake_store() -> FakeGraphQLStore:
    return FakeGraphQLStore()


@pytest.fixture
def store_client(fake_store) -> PaymentStoreClient:
    return PaymentStoreClient(STORE_URL, transport=httpx.MockTransport(fake_store.handle))


@pytest.fixture
def db():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    with sessionmaker(bind=engine, expire_on_commit=False)() as session:
        yield session
    engine.dispose()
