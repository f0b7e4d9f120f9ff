"""create_listings_and_bookings

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "homestays",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("district", sa.String(120), nullable=True),
        sa.Column("base_price", sa.Numeric(10, 2), nullable=True),
        sa.Column("max_guests", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(50), server_default="active", nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_homestays_district", "homestays", ["district"])

    op.create_table(
        "guides",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("district", sa.String(120), nullable=True),
        sa.Column("languages", sa.JSON(), nullable=True),
        sa.Column("price_per_day", sa.Numeric(10, 2), nullable=True),
        sa.Column("status", sa.String(50), server_default="active", nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_guides_district", "guides", ["district"])

    op.create_table(
        "counters",
        sa.Column("name", sa.String(64), primary_key=True),
        sa.Column("value", sa.BigInteger(), nullable=False),
    )

    op.create_table(
        "bookings",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("booking_number", sa.Integer(), nullable=False, unique=True),
        sa.Column("listing_type", sa.String(20), nullable=False),
        sa.Column("listing_id", sa.String(64), nullable=False),
        sa.Column("listing_title", sa.String(255), nullable=True),
        sa.Column("check_in", sa.Date(), nullable=False),
        sa.Column("check_out", sa.Date(), nullable=False),
        sa.Column("guests", sa.JSON(), nullable=False),
        sa.Column("total_guests", sa.Integer(), nullable=False),
        sa.Column("guest_details", sa.JSON(), nullable=False),
        sa.Column("special_requests", sa.Text(), nullable=True),
        sa.Column("nights", sa.Integer(), nullable=False),
        sa.Column("price_per_night", sa.Numeric(10, 2), nullable=True),
        sa.Column("total_price", sa.Numeric(10, 2), nullable=True),
        sa.Column("currency", sa.String(3), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("payment_status", sa.String(20), nullable=False),
        sa.Column("cancellation_reason", sa.Text(), nullable=True),
        sa.Column("cancelled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("check_out > check_in", name="ck_bookings_date_order"),
    )
    op.create_index("ix_bookings_listing_id", "bookings", ["listing_id"])
    op.create_index("ix_bookings_status", "bookings", ["status"])
    op.create_index("ix_bookings_listing_dates", "bookings", ["listing_id", "check_in", "check_out"])


def downgrade() -> None:
    op.drop_index("ix_bookings_listing_dates", table_name="bookings")
    op.drop_index("ix_bookings_status", table_name="bookings")
    op.drop_index("ix_bookings_listing_id", table_name="bookings")
    op.drop_table("bookings")
    op.drop_table("counters")
    op.drop_index("ix_guides_district", table_name="guides")
    op.drop_table("guides")
    op.drop_index("ix_homestays_district", table_name="homestays")
    op.drop_table("homestays")
