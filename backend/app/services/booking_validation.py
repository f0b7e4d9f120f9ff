"""Two-phase validation of booking creation requests.

Phase one collects every missing or malformed field into a single
:class:`ValidationError`. Only when all fields are valid does phase two
check the date range, and each date-range problem is reported on its own.
"""

import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from app.config import settings
from app.errors import ValidationError
from app.models.booking import ListingType
from app.schemas.booking import BookingCreate, GuestCounts, GuestDetails, PricingInput


@dataclass(frozen=True)
class BookingDraft:
    """A creation request that passed validation, with parsed values."""

    listing_type: ListingType
    listing_id: str
    check_in: date
    check_out: date
    guests: dict
    guest_details: dict
    special_requests: str | None
    price_per_night: Decimal | None
    total: Decimal | None
    currency: str


def parse_date(value: Any) -> date | None:
    """Parse an ISO date or datetime string down to its calendar date.

    Datetimes with an offset are converted to UTC first.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def canonical_listing_id(value: str) -> str:
    """Normalise a listing id so equivalent spellings compare equal.

    UUIDs are rendered in their canonical lower-case hyphenated form; any
    other id is only stripped of surrounding whitespace.
    """
    value = value.strip()
    try:
        return str(uuid.UUID(value))
    except ValueError:
        return value


def _text(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _whole_number(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def _amount(value: Any) -> Decimal | None:
    """Parse a non-negative money amount from a number or numeric string."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        return None
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount < 0:
        return None
    return amount


def _field_errors(body: BookingCreate) -> list[dict[str, str]]:
    errors: list[dict[str, str]] = []

    def add(field: str, message: str) -> None:
        errors.append({"field": field, "message": message})

    if not isinstance(body.listing_type, str) or body.listing_type not in {t.value for t in ListingType}:
        add("listing_type", 'Listing type must be "homestay" or "guide"')
    if _text(body.listing_id) is None:
        add("listing_id", "Listing ID is required")

    for field, label in (("check_in", "Check-in"), ("check_out", "Check-out")):
        value = getattr(body, field)
        if value is None or value == "":
            add(field, f"{label} date is required")
        elif parse_date(value) is None:
            add(field, f"{label} date must be a valid date")

    guests = body.guests if isinstance(body.guests, GuestCounts) else None
    adults = _whole_number(guests.adults) if guests is not None else None
    if adults is None or adults < 1:
        add("guests.adults", "At least 1 adult guest is required")

    details = body.guest_details if isinstance(body.guest_details, GuestDetails) else None
    if details is None or _text(details.name) is None:
        add("guest_details.name", "Guest name is required")
    if details is None or _text(details.email) is None:
        add("guest_details.email", "Guest email is required")

    # Optional fields, reported after the required ones.
    if guests is not None:
        for field, label in (("children", "Children"), ("infants", "Infants")):
            value = getattr(guests, field)
            if value is None:
                continue
            count = _whole_number(value)
            if count is None:
                add(f"guests.{field}", f"{label} must be a whole number")
            elif count < 0:
                add(f"guests.{field}", f"{label} cannot be negative")
    if details is not None and details.phone is not None and not isinstance(details.phone, str):
        add("guest_details.phone", "Guest phone must be text")
    if body.special_requests is not None and not isinstance(body.special_requests, str):
        add("special_requests", "Special requests must be text")

    pricing = body.pricing
    if pricing is not None and not isinstance(pricing, PricingInput):
        add("pricing", "Pricing must be an object")
    elif pricing is not None:
        if pricing.price_per_night is not None and _amount(pricing.price_per_night) is None:
            add("pricing.price_per_night", "Price per night must be a non-negative amount")
        if pricing.total is not None and _amount(pricing.total) is None:
            add("pricing.total", "Total must be a non-negative amount")
        currency = pricing.currency
        if currency is not None and not (isinstance(currency, str) and len(currency) == 3 and currency.isalpha()):
            add("pricing.currency", "Currency must be a 3-letter code")

    return errors


def validate_booking_request(body: BookingCreate, today: date | None = None) -> BookingDraft:
    """Validate ``body`` and return a :class:`BookingDraft`.

    Raises :class:`ValidationError` with all field errors at once, or with a
    single date-range error once the fields themselves are valid. ``today``
    defaults to the current UTC date.
    """
    errors = _field_errors(body)
    if errors:
        raise ValidationError(errors)

    today = today or datetime.now(timezone.utc).date()
    check_in = parse_date(body.check_in)
    check_out = parse_date(body.check_out)

    if check_in <= today:
        raise ValidationError.single("check_in", "Check-in date must be in the future")
    if check_out <= check_in:
        raise ValidationError.single("check_out", "Check-out date must be after check-in date")

    guests = body.guests
    details = body.guest_details
    pricing = body.pricing
    price_per_night = _amount(pricing.price_per_night) if pricing is not None else None
    total = _amount(pricing.total) if pricing is not None else None
    return BookingDraft(
        listing_type=ListingType(body.listing_type),
        listing_id=canonical_listing_id(body.listing_id),
        check_in=check_in,
        check_out=check_out,
        guests={
            "adults": guests.adults,
            "children": guests.children or 0,
            "infants": guests.infants or 0,
        },
        guest_details={"name": details.name, "email": details.email, "phone": details.phone},
        special_requests=body.special_requests,
        price_per_night=price_per_night,
        total=total,
        currency=((pricing.currency if pricing is not None else None) or settings.currency).upper(),
    )
