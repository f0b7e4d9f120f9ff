"""Best-effort lookup of listing display names."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.booking import ListingType
from app.models.guide import Guide
from app.models.homestay import Homestay

logger = logging.getLogger(__name__)

_TITLE_COLUMNS = {
    ListingType.HOMESTAY: (Homestay, Homestay.title),
    ListingType.GUIDE: (Guide, Guide.name),
}


async def resolve_listing_title(
    session_factory: async_sessionmaker[AsyncSession],
    listing_type: ListingType,
    listing_id: str,
) -> str | None:
    """Return the listing's title (homestay) or name (guide).

    Never raises: unknown ids, malformed ids, and lookup failures all come
    back as ``None`` so booking creation can proceed without a title.
    """
    model, column = _TITLE_COLUMNS[listing_type]
    try:
        listing_uuid = uuid.UUID(listing_id)
    except ValueError:
        return None

    try:
        async with session_factory() as session:
            result = await session.execute(select(column).where(model.id == listing_uuid))
            return result.scalar_one_or_none()
    except Exception:
        logger.warning(
            "Could not resolve title for %s %s", listing_type.value, listing_id, exc_info=True
        )
        return None
