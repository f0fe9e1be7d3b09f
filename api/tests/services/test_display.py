from datetime import datetime, timezone
from decimal import Decimal

import pytest

from condo.schemas.payment import ApartmentOwnerSummary, PaymentRecord
from condo.services.display import (
    INVALID_DATE,
    NOT_SET,
    format_amount,
    format_date,
    owner_label,
    status_badge,
    to_payment_card,
)


class TestStatusBadge:
    @pytest.mark.parametrize(
        "status,color",
        [("paid", "success"), ("pending", "warning"), ("overdue", "error"), ("refunded", "default")],
    )
    def test_colors(self, status, color):
        assert status_badge(status).color == color

    def test_label_capitalised(self):
        assert status_badge("overdue").label == "Overdue"

    def test_empty_status(self):
        badge = status_badge("")
        assert badge.label == ""
        assert badge.color == "default"


class TestFormatDate:
    def test_utc_iso_string(self):
        assert format_date("2024-08-05T14:30:00.000Z", "UTC") == "05/08/2024, 14:30"

    def test_viewer_timezone_applied(self):
        assert format_date("2024-08-05T14:30:00Z", "America/Sao_Paulo") == "05/08/2024, 11:30"

    def test_epoch_millis_string(self):
        assert format_date("1722868200000", "UTC") == "05/08/2024, 14:30"

    def test_datetime_and_naive_values(self):
        aware = datetime(2024, 8, 5, 14, 30, tzinfo=timezone.utc)
        assert format_date(aware, "UTC") == "05/08/2024, 14:30"
        assert format_date("2024-08-05T14:30:00", "UTC") == "05/08/2024, 14:30"

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing(self, value):
        assert format_date(value) == NOT_SET

    @pytest.mark.parametrize("value", ["not a date", "2024-13-45", "-"])
    def test_invalid_does_not_raise(self, value):
        assert format_date(value) == INVALID_DATE

    def test_out_of_range_after_conversion(self):
        assert format_date("0001-01-01T00:00:00Z", "America/Sao_Paulo") == INVALID_DATE

    def test_epoch_millis_number(self):
        assert format_date(1722868200000, "UTC") == "05/08/2024, 14:30"

    def test_unknown_timezone_falls_back_to_utc(self):
        assert format_date("2024-08-05T14:30:00Z", "Mars/Olympus") == "05/08/2024, 14:30"


class TestCards:
    def test_amount_two_decimals(self):
        assert format_amount(Decimal("500")) == "$500.00"
        assert format_amount(12.5) == "$12.50"

    def test_owner_label(self):
        owner = ApartmentOwnerSummary(id="o", name="Ana Souza", apartment_number="A101")
        assert owner_label(owner) == "Ana Souza (Apt A101)"

    def test_to_payment_card(self):
        record = PaymentRecord.model_validate(
            {
                "id": "pay-1",
                "amount": 500,
                "month": "2024-08",
                "paymentDate": "garbage",
                "status": "paid",
                "apartmentOwner": {"id": "o", "name": "Ana Souza", "apartmentNumber": "A101"},
                "createdAt": "2024-08-05T14:30:00Z",
            }
        )
        card = to_payment_card(record, "UTC")
        assert card.id == "pay-1"
        assert card.amount_display == "$500.00"
        assert card.owner_label == "Ana Souza (Apt A101)"
        assert card.status_badge.color == "success"
        assert card.payment_date_display == INVALID_DATE
        assert card.created_at_display == "05/08/2024, 14:30"
        assert card.updated_at_display == NOT_SET
