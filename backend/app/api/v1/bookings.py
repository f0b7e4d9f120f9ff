"""Bookings API router.

Creation and transitions delegate to :class:`BookingService`; domain errors
are rendered by the handlers registered in ``app.main``.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_booking_service
from app.models.booking import Booking, BookingStatus
from app.schemas.booking import (
    BookingCancel,
    BookingCreate,
    BookingListResponse,
    BookingResponse,
    CancellationResponse,
)
from app.services.booking_service import BookingService

router = APIRouter(prefix="/api/v1/bookings", tags=["bookings"])


@router.post(
    "",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new booking",
)
async def create_booking(
    body: BookingCreate,
    service: BookingService = Depends(get_booking_service),
) -> Booking:
    """Create a pending booking for a homestay or guide.

    Returns 400 with every invalid field listed, or a single date-range error;
    409 when the dates overlap an active booking on the same listing.
    """
    return await service.create_booking(body)


@router.get(
    "",
    response_model=BookingListResponse,
    summary="List bookings",
)
async def list_bookings(
    status_filter: BookingStatus | None = Query(None, alias="status", description="Filter by booking status"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int | None = Query(None, ge=1, description="Items per page (capped by max_page_size)"),
    service: BookingService = Depends(get_booking_service),
) -> BookingListResponse:
    """Return a paginated list of bookings, newest first."""
    result = await service.list_bookings(status=status_filter, page=page, limit=limit)
    return BookingListResponse(
        items=[BookingResponse.model_validate(b) for b in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
        total_pages=result.total_pages,
    )


@router.get(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Get a booking",
)
async def get_booking(
    booking_id: uuid.UUID,
    service: BookingService = Depends(get_booking_service),
) -> Booking:
    return await service.get_booking(booking_id)


@router.put(
    "/{booking_id}/cancel",
    response_model=CancellationResponse,
    summary="Cancel a booking",
)
async def cancel_booking(
    booking_id: uuid.UUID,
    body: BookingCancel | None = None,
    service: BookingService = Depends(get_booking_service),
) -> CancellationResponse:
    """Cancel a pending or confirmed booking and report the full refund owed."""
    reason = body.reason if body is not None else None
    cancellation = await service.cancel_booking(booking_id, reason)
    booking = cancellation.booking
    return CancellationResponse(
        id=booking.id,
        status=booking.status,
        cancellation_reason=booking.cancellation_reason,
        cancelled_at=booking.cancelled_at,
        refund_amount=cancellation.refund_amount,
        refund_status=cancellation.refund_status,
    )


@router.put(
    "/{booking_id}/confirm",
    response_model=BookingResponse,
    summary="Confirm a pending booking",
)
async def confirm_booking(
    booking_id: uuid.UUID,
    service: BookingService = Depends(get_booking_service),
) -> Booking:
    return await service.confirm_booking(booking_id)


@router.put(
    "/{booking_id}/complete",
    response_model=BookingResponse,
    summary="Mark a confirmed booking as completed",
)
async def complete_booking(
    booking_id: uuid.UUID,
    service: BookingService = Depends(get_booking_service),
) -> Booking:
    return await service.complete_booking(booking_id)
