"""Pydantic v2 request/response schemas for booking endpoints.

``BookingCreate`` accepts any JSON value in its leaves: presence, type and
date checks are done by
:func:`app.services.booking_validation.validate_booking_request` so every
field problem is reported together in one 400 response.
"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.models.booking import BookingStatus, ListingType, PaymentStatus

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class GuestCounts(BaseModel):
    adults: Any = None
    children: Any = None
    infants: Any = None


class GuestDetails(BaseModel):
    name: Any = None
    email: Any = None
    phone: Any = None


class PricingInput(BaseModel):
    price_per_night: Any = None
    total: Any = None
    currency: Any = None


class BookingCreate(BaseModel):
    """Schema for creating a new booking.

    Nested objects fall back to the raw value when they are not JSON objects,
    so the validator can report them as field errors.
    """

    listing_type: Any = None
    listing_id: Any = None
    check_in: Any = None
    check_out: Any = None
    guests: GuestCounts | Any = Field(None, union_mode="left_to_right")
    guest_details: GuestDetails | Any = Field(None, union_mode="left_to_right")
    special_requests: Any = None
    pricing: PricingInput | Any = Field(None, union_mode="left_to_right")


class BookingCancel(BaseModel):
    reason: str | None = Field(None, max_length=1000)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BookingResponse(BaseModel):
    """Standard booking response."""

    id: uuid.UUID
    booking_number: int
    listing_type: ListingType
    listing_id: str
    listing_title: str | None = None
    check_in: date
    check_out: date
    nights: int
    guests: dict
    total_guests: int
    guest_details: dict
    special_requests: str | None = None
    price_per_night: Decimal | None = None
    total_price: Decimal | None = None
    currency: str
    status: BookingStatus
    payment_status: PaymentStatus
    cancellation_reason: str | None = None
    cancelled_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BookingListResponse(BaseModel):
    """Paginated list of bookings."""

    items: list[BookingResponse]
    total: int
    page: int
    limit: int
    total_pages: int


class CancellationResponse(BaseModel):
    """Outcome of a cancellation, including the refund owed."""

    id: uuid.UUID
    status: BookingStatus
    cancellation_reason: str | None = None
    cancelled_at: datetime
    refund_amount: Decimal
    refund_status: str = "pending"
