"""Date-conflict detection for listing bookings.

Stays are half-open ``[check_in, check_out)`` ranges: a stay that checks out
on the day another checks in does not conflict with it.
"""

import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.booking import Booking, BookingStatus


def ranges_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    return a_start < b_end and a_end > b_start


async def find_conflicting_booking(
    db: AsyncSession,
    listing_id: str,
    check_in: date,
    check_out: date,
    exclude_booking_id: uuid.UUID | None = None,
) -> Booking | None:
    """Return any non-cancelled booking on the listing overlapping the range, or None."""
    query = select(Booking).where(
        Booking.listing_id == listing_id,
        Booking.status != BookingStatus.CANCELLED,
        Booking.check_in < check_out,
        Booking.check_out > check_in,
    )
    if exclude_booking_id is not None:
        query = query.where(Booking.id != exclude_booking_id)

    result = await db.execute(query.limit(1))
    return result.scalars().first()


def conflict_summary(booking: Booking) -> dict[str, str]:
    """Identify a conflicting booking at calendar-day precision."""
    return {
        "id": str(booking.id),
        "check_in": booking.check_in.isoformat(),
        "check_out": booking.check_out.isoformat(),
    }
