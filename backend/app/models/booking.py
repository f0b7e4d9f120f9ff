"""Booking model — reservations against homestay and guide listings."""

import enum
import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import JSON, CheckConstraint, Date, DateTime, Enum, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class ListingType(str, enum.Enum):
    HOMESTAY = "homestay"
    GUIDE = "guide"


class BookingStatus(str, enum.Enum):
    """Closed set of booking states.

    ``cancelled`` and ``completed`` are terminal. Transitions are checked by
    :func:`app.services.booking_state.ensure_transition`.
    """

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"

    @property
    def is_terminal(self) -> bool:
        return self in (BookingStatus.CANCELLED, BookingStatus.COMPLETED)


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"
    FAILED = "failed"


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class Booking(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A reservation of a listing for a date range.

    ``listing_title`` is a snapshot copied in at creation time and is never
    refreshed when the listing is renamed.
    """

    __tablename__ = "bookings"

    booking_number: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    listing_type: Mapped[ListingType] = mapped_column(
        Enum(ListingType, native_enum=False, length=20, values_callable=_enum_values),
        nullable=False,
    )
    listing_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    listing_title: Mapped[str | None] = mapped_column(String(255), nullable=True)

    check_in: Mapped[date] = mapped_column(Date, nullable=False)
    check_out: Mapped[date] = mapped_column(Date, nullable=False)

    # {"adults": int, "children": int, "infants": int}
    guests: Mapped[dict] = mapped_column(JSON, nullable=False)
    total_guests: Mapped[int] = mapped_column(Integer, nullable=False)
    # {"name": str, "email": str, "phone": str | None}
    guest_details: Mapped[dict] = mapped_column(JSON, nullable=False)
    special_requests: Mapped[str | None] = mapped_column(Text, nullable=True)

    nights: Mapped[int] = mapped_column(Integer, nullable=False)
    price_per_night: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    total_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)

    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus, native_enum=False, length=20, values_callable=_enum_values),
        default=BookingStatus.PENDING,
        nullable=False,
        index=True,
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus, native_enum=False, length=20, values_callable=_enum_values),
        default=PaymentStatus.PENDING,
        nullable=False,
    )
    cancellation_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    cancelled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
    __table_args__ = (
        Index("ix_bookings_listing_dates", "listing_id", "check_in", "check_out"),
        CheckConstraint("check_out > check_in", name="ck_bookings_date_order"),
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, number={self.booking_number}, "
            f"listing_id={self.listing_id!r}, status={self.status})>"
        )
