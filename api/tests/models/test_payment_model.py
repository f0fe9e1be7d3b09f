"""
Write-path rules on the SQLAlchemy models, against in-memory SQLite.
"""
from decimal import Decimal

import pytest
from sqlalchemy import select

from condo.models.apartment_owner import ApartmentOwner
from condo.models.payment import Payment
from condo.services.payment_rules import MONTH_FORMAT_ERROR


@pytest.fixture
def owner(db):
    o = ApartmentOwner(name="Test Owner", apartment_number="A101", email="test@example.com")
    db.add(o)
    db.commit()
    return o


class TestPaymentValidation:
    @pytest.mark.parametrize("month", ["08-2024", "2024/08", "2024-13", ""])
    def test_bad_month_rejected(self, owner, month):
        with pytest.raises(ValueError, match=MONTH_FORMAT_ERROR):
            Payment(apartment_owner_id=owner.id, amount=500, month=month)

    def test_bad_status_rejected(self, owner):
        with pytest.raises(ValueError, match="Status must be one of"):
            Payment(apartment_owner_id=owner.id, amount=500, month="2024-08", status="cancelled")

    def test_bad_amount_rejected(self, owner):
        with pytest.raises(ValueError, match="Invalid payment amount"):
            Payment(apartment_owner_id=owner.id, amount="abc", month="2024-08")

    def test_explicit_null_payment_date_rejected(self, owner):
        with pytest.raises(ValueError, match="payment_date cannot be null"):
            Payment(apartment_owner_id=owner.id, amount=500, month="2024-08", payment_date=None)

    def test_amount_string_stored_as_number(self, owner):
        p = Payment(apartment_owner_id=owner.id, amount="500", month="2024-08")
        assert p.amount == Decimal("500")


class TestPaymentDefaults:
    def test_omitted_payment_date_defaults_at_save(self, db, owner):
        p = Payment(apartment_owner_id=owner.id, amount=500, month="2024-01", description="Rent")
        assert p.payment_date is None
        db.add(p)
        db.commit()
        assert p.payment_date is not None
        assert p.status == "pending"

    def test_saved_row_round_trips(self, db, owner):
        db.add(Payment(apartment_owner_id=owner.id, amount=500, month="2025-01", status="paid"))
        db.commit()
        row = db.execute(select(Payment)).scalar_one()
        assert row.month == "2025-01"
        assert row.status == "paid"
        assert row.created_at is not None
