"""Booking lifecycle — admission, lookup, and status transitions."""

import logging
import math
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from app.config import settings
from app.errors import ConflictError, InfrastructureError, NotFoundError
from app.models.booking import Booking, BookingStatus, PaymentStatus
from app.schemas.booking import BookingCreate
from app.services.booking_state import ensure_transition
from app.services.booking_validation import BookingDraft, validate_booking_request
from app.services.conflicts import conflict_summary, find_conflicting_booking
from app.services.listing_titles import resolve_listing_title
from app.services.locks import KeyedLock
from app.services.pricing import compute_total, count_guests, count_nights, refund_amount
from app.services.sequence import SequenceGenerator

logger = logging.getLogger(__name__)

# Shared by every BookingService in the process.
listing_locks = KeyedLock()


@dataclass(frozen=True)
class Cancellation:
    booking: Booking
    refund_amount: Decimal
    refund_status: str = "pending"


@dataclass(frozen=True)
class BookingPage:
    items: list[Booking]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.total else 0


class BookingService:
    """Entry point for every booking operation.

    Each operation opens its own sessions from ``session_factory`` and commits
    before returning. Admission on a listing is serialised by a per-listing
    lock (and a transaction-scoped advisory lock on PostgreSQL); transitions
    on a booking are serialised by a row lock plus the booking's version
    column. An operation never holds more than one pooled connection at once.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        sequence: SequenceGenerator | None = None,
        locks: KeyedLock | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._sequence = sequence or SequenceGenerator(session_factory, settings.booking_counter_name)
        self._locks = locks if locks is not None else listing_locks

    # ------------------------------------------------------------------
    # Admission
    # ------------------------------------------------------------------

    async def create_booking(self, body: BookingCreate) -> Booking:
        """Validate, check for conflicts, and insert a pending booking.

        Raises ``ValidationError``, ``ConflictError`` or ``InfrastructureError``.
        """
        draft = validate_booking_request(body)
        # Read-only and best-effort, so it runs before the admission
        # connection is checked out.
        listing_title = await resolve_listing_title(self._session_factory, draft.listing_type, draft.listing_id)

        async with self._locks.hold(draft.listing_id):
            async with self._session_factory() as session:
                try:
                    booking = await self._admit(session, draft, listing_title)
                except SQLAlchemyError as exc:
                    await session.rollback()
                    logger.exception(
                        "Failed to create booking for %s %s (%s -> %s)",
                        draft.listing_type.value,
                        draft.listing_id,
                        draft.check_in,
                        draft.check_out,
                    )
                    raise InfrastructureError("Failed to create booking") from exc

        logger.info(
            "Created booking #%s on %s %s (%s -> %s)",
            booking.booking_number,
            booking.listing_type.value,
            booking.listing_id,
            booking.check_in,
            booking.check_out,
        )
        return booking

    async def _admit(self, session: AsyncSession, draft: BookingDraft, listing_title: str | None) -> Booking:
        await _lock_listing(session, draft.listing_id)

        conflict = await find_conflicting_booking(session, draft.listing_id, draft.check_in, draft.check_out)
        if conflict is not None:
            logger.info(
                "Rejected booking on listing %s (%s -> %s): overlaps booking %s",
                draft.listing_id,
                draft.check_in,
                draft.check_out,
                conflict.id,
            )
            raise ConflictError(
                requested_check_in=draft.check_in.isoformat(),
                requested_check_out=draft.check_out.isoformat(),
                conflicting_booking=conflict_summary(conflict),
            )

        booking_number = await self._sequence.allocate(session)

        nights = count_nights(draft.check_in, draft.check_out)
        booking = Booking(
            booking_number=booking_number,
            listing_type=draft.listing_type,
            listing_id=draft.listing_id,
            listing_title=listing_title,
            check_in=draft.check_in,
            check_out=draft.check_out,
            guests=draft.guests,
            total_guests=count_guests(draft.guests),
            guest_details=draft.guest_details,
            special_requests=draft.special_requests,
            nights=nights,
            price_per_night=draft.price_per_night,
            total_price=compute_total(draft.price_per_night, nights, draft.total),
            currency=draft.currency,
            status=BookingStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
        )
        session.add(booking)
        await session.flush()
        await session.refresh(booking)
        await session.commit()
        return booking

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_booking(self, booking_id: uuid.UUID) -> Booking:
        try:
            async with self._session_factory() as session:
                booking = await session.get(Booking, booking_id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to fetch booking %s", booking_id)
            raise InfrastructureError("Failed to fetch booking") from exc

        if booking is None:
            raise NotFoundError("Booking not found")
        return booking

    async def list_bookings(
        self,
        status: BookingStatus | None = None,
        page: int = 1,
        limit: int | None = None,
    ) -> BookingPage:
        """Return one page of bookings, newest first."""
        page = max(page, 1)
        limit = min(max(limit or settings.default_page_size, 1), settings.max_page_size)

        filters = []
        if status is not None:
            filters.append(Booking.status == status)

        try:
            async with self._session_factory() as session:
                total_result = await session.execute(select(func.count()).select_from(Booking).where(*filters))
                total = total_result.scalar_one()

                items_query = (
                    select(Booking)
                    .where(*filters)
                    .order_by(Booking.created_at.desc(), Booking.booking_number.desc())
                    .offset((page - 1) * limit)
                    .limit(limit)
                )
                result = await session.execute(items_query)
                items = list(result.scalars().all())
        except SQLAlchemyError as exc:
            logger.exception("Failed to list bookings (status=%s, page=%s)", status, page)
            raise InfrastructureError("Failed to fetch bookings") from exc

        return BookingPage(items=items, total=total, page=page, limit=limit)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def cancel_booking(self, booking_id: uuid.UUID, reason: str | None = None) -> Cancellation:
        """Cancel a pending or confirmed booking and report the refund owed."""

        def apply(booking: Booking) -> None:
            booking.status = BookingStatus.CANCELLED
            booking.cancellation_reason = reason
            booking.cancelled_at = datetime.now(timezone.utc)

        booking = await self._transition(booking_id, BookingStatus.CANCELLED, apply)
        refund = refund_amount(booking)
        logger.info("Cancelled booking #%s, refund owed %s %s", booking.booking_number, refund, booking.currency)
        return Cancellation(booking=booking, refund_amount=refund)

    async def confirm_booking(self, booking_id: uuid.UUID) -> Booking:
        booking = await self._transition(booking_id, BookingStatus.CONFIRMED)
        logger.info("Confirmed booking #%s", booking.booking_number)
        return booking

    async def complete_booking(self, booking_id: uuid.UUID) -> Booking:
        booking = await self._transition(booking_id, BookingStatus.COMPLETED)
        logger.info("Completed booking #%s", booking.booking_number)
        return booking

    async def _transition(
        self,
        booking_id: uuid.UUID,
        target: BookingStatus,
        apply: Callable[[Booking], None] | None = None,
    ) -> Booking:
        """Move a booking to ``target`` under a row lock and version check.

        If another writer bumped the version first, the booking is reloaded
        and the guard re-run once, so the loser sees the real state error.
        """
        try:
            return await self._apply_transition(booking_id, target, apply)
        except StaleDataError:
            logger.info("Booking %s changed concurrently, retrying %s", booking_id, target.value)

        try:
            return await self._apply_transition(booking_id, target, apply)
        except StaleDataError as exc:
            logger.exception("Booking %s kept changing during %s", booking_id, target.value)
            raise InfrastructureError("Failed to update booking") from exc

    async def _apply_transition(
        self,
        booking_id: uuid.UUID,
        target: BookingStatus,
        apply: Callable[[Booking], None] | None,
    ) -> Booking:
        async with self._session_factory() as session:
            try:
                result = await session.execute(select(Booking).where(Booking.id == booking_id).with_for_update())
                booking = result.scalar_one_or_none()
                if booking is None:
                    raise NotFoundError("Booking not found")

                ensure_transition(booking.status, target)
                booking.status = target
                if apply is not None:
                    apply(booking)

                await session.flush()
                await session.refresh(booking)
                await session.commit()
            except StaleDataError:
                await session.rollback()
                raise
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.exception("Failed to move booking %s to %s", booking_id, target.value)
                raise InfrastructureError("Failed to update booking") from exc
        return booking


async def _lock_listing(session: AsyncSession, listing_id: str) -> None:
    """Take a transaction-scoped advisory lock on the listing (PostgreSQL only)."""
    if session.get_bind().dialect.name == "postgresql":
        await session.execute(select(func.pg_advisory_xact_lock(func.hashtext(listing_id))))
