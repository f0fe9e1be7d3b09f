"""
Manual check of the payment write rules against a real database.

Inserts a fixture apartment owner, tries six payment inserts that exercise
payment_date defaulting and month validation, logs pass/fail for each, then
removes the fixtures:

    docker exec condo-api-1 bash -c \\
        "export PYTHONPATH=/app && python -m condo.scripts.check_payment_rules"

Exit status is 1 when any case behaves differently from what it expects.
"""
import logging
import sys
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from condo.core.database import SessionLocal
from condo.models.apartment_owner import ApartmentOwner
from condo.models.payment import Payment

logger = logging.getLogger("check_payment_rules")


@dataclass
class CheckResult:
    label: str
    should_save: bool
    saved: bool
    payment_date: datetime | None = None
    month: str | None = None
    error: str | None = None

    @property
    def passed(self) -> bool:
        return self.saved == self.should_save


def _omitted(owner_id):
    return Payment(
        apartment_owner_id=owner_id, amount=500, month="2024-08",
        description="Omitted paymentDate",
    )


def _never_assigned(owner_id):
    payment = Payment(apartment_owner_id=owner_id)
    payment.amount = 500
    payment.month = "2024-08"
    payment.description = "Unassigned paymentDate"
    return payment


def _null_date(owner_id):
    return Payment(
        apartment_owner_id=owner_id, amount=500, month="",
        description="Null paymentDate", payment_date=None,
    )


def _month(value: str, description: str):
    def build(owner_id):
        return Payment(
            apartment_owner_id=owner_id, amount=500, month=value, description=description,
        )
    return build


# (label, should_save, builder)
SCENARIOS = [
    ("payment_date omitted (defaults to now)", True, _omitted),
    ("payment_date never assigned (defaults to now)", True, _never_assigned),
    ("payment_date is None with empty month (rejected)", False, _null_date),
    ("month with invalid format 08-2024 (rejected)", False, _month("08-2024", "Invalid month format")),
    ("month with invalid format 2024/08 (rejected)", False, _month("2024/08", "Invalid month format slash")),
    ("valid month 2025-01", True, _month("2025-01", "Valid month")),
]


def run_checks(db: Session, owner_id) -> list[CheckResult]:
    """Try every scenario for ``owner_id``; each successful insert is committed."""
    results = []
    for label, should_save, build in SCENARIOS:
        try:
            payment = build(owner_id)
            db.add(payment)
            db.commit()
        except (ValueError, SQLAlchemyError) as exc:
            db.rollback()
            results.append(CheckResult(label, should_save, saved=False, error=str(exc)))
            continue
        results.append(
            CheckResult(
                label, should_save, saved=True,
                payment_date=payment.payment_date, month=payment.month,
            )
        )
    return results


def create_fixture_owner(db: Session) -> ApartmentOwner:
    owner = ApartmentOwner(
        name="Test Owner",
        email="test@example.com",
        apartment_number="A101",
        phone_number="+1234567890",
    )
    db.add(owner)
    db.commit()
    return owner


def remove_fixtures(db: Session, owner: ApartmentOwner) -> None:
    db.execute(delete(Payment).where(Payment.apartment_owner_id == owner.id))
    db.execute(delete(ApartmentOwner).where(ApartmentOwner.id == owner.id))
    db.commit()


def main() -> int:
    with SessionLocal() as db:
        owner = create_fixture_owner(db)
        logger.info("Apartment owner created: %s", owner.name)
        try:
            results = run_checks(db, owner.id)
        finally:
            remove_fixtures(db, owner)

    for r in results:
        mark = "✓" if r.passed else "✗"
        if r.saved:
            logger.info("  %s %s → payment_date=%s month=%s", mark, r.label, r.payment_date, r.month)
        else:
            logger.info("  %s %s → %s", mark, r.label, r.error)

    failed = [r for r in results if not r.passed]
    logger.info("Check complete: %d passed, %d failed", len(results) - len(failed), len(failed))
    return 1 if failed else 0


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    sys.exit(main())
