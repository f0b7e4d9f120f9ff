"""Night count, guest count, and refund arithmetic."""

from datetime import date
from decimal import Decimal

from app.models.booking import Booking

_CENTS = Decimal("0.01")


def count_nights(check_in: date, check_out: date) -> int:
    """Whole days between check-in and check-out."""
    return (check_out - check_in).days


def count_guests(guests: dict) -> int:
    return sum(int(guests.get(key) or 0) for key in ("adults", "children", "infants"))


def compute_total(
    price_per_night: Decimal | None,
    nights: int,
    total: Decimal | None = None,
) -> Decimal | None:
    """Return the stay total.

    An explicit ``total`` wins; otherwise it is ``price_per_night * nights``.
    ``None`` when neither is known.
    """
    if total is not None:
        return Decimal(total).quantize(_CENTS)
    if price_per_night is None:
        return None
    return (Decimal(price_per_night) * nights).quantize(_CENTS)


def refund_amount(booking: Booking) -> Decimal:
    """Full refund of the stored total; there is no cancellation-window policy."""
    if booking.total_price is None:
        return Decimal("0.00")
    return Decimal(booking.total_price).quantize(_CENTS)
