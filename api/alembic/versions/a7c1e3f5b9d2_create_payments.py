"""create_payments

Revision ID: a7c1e3f5b9d2
Revises:
Create Date: 2026-10-19

Apartment owners and the monthly payments billed against them.
month is a YYYY-MM token, checked on the write path by the Payment model.
"""
from alembic import op
import sqlalchemy as sa

revision = "a7c1e3f5b9d2"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "apartment_owners",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("apartment_number", sa.String(20), nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("phone_number", sa.String(50), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "payments",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("apartment_owner_id", sa.Uuid(), nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("month", sa.String(7), nullable=False),           # YYYY-MM
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("payment_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),          # pending | paid | overdue
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["apartment_owner_id"], ["apartment_owners.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_payments_apartment_owner_id", "payments", ["apartment_owner_id"])


def downgrade() -> None:
    op.drop_index("ix_payments_apartment_owner_id", "payments")
    op.drop_table("payments")
    op.drop_table("apartment_owners")
