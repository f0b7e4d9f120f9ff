"""Shared API dependencies — single import point for all routers.

Re-exports the database dependencies and builds the booking service so
that router modules can import everything they need from one place::

    from app.api.deps import get_db, get_booking_service
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.database import get_db, get_session_factory
from app.services.booking_service import BookingService


def get_booking_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> BookingService:
    """Build a BookingService over the application session factory."""
    return BookingService(session_factory)


__all__ = [
    "get_db",
    "get_session_factory",
    "get_booking_service",
]
