"""Homestay listing routes."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db
from app.config import settings
from app.models.homestay import Homestay
from app.schemas.listing import (
    HomestayCreate,
    HomestayListResponse,
    HomestayResponse,
    HomestayUpdate,
    MessageResponse,
)

router = APIRouter(prefix="/api/v1/homestays", tags=["homestays"])


@router.post(
    "",
    response_model=HomestayResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a homestay",
)
async def create_homestay(
    body: HomestayCreate,
    db: AsyncSession = Depends(get_db),
) -> HomestayResponse:
    homestay = Homestay(**body.model_dump(), status="active")
    db.add(homestay)
    await db.flush()
    await db.refresh(homestay)
    return HomestayResponse.model_validate(homestay)


@router.get(
    "",
    response_model=HomestayListResponse,
    summary="List active homestays",
)
async def list_homestays(
    district: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    db: AsyncSession = Depends(get_db),
) -> HomestayListResponse:
    """Return active homestays, optionally filtered by district (case-insensitive)."""
    filters = [Homestay.status == "active"]
    if district is not None:
        filters.append(func.lower(Homestay.district) == district.lower())

    count_query = select(func.count()).select_from(Homestay).where(*filters)
    total = (await db.execute(count_query)).scalar_one()

    items_query = (
        select(Homestay).where(*filters).order_by(Homestay.created_at.desc()).offset((page - 1) * limit).limit(limit)
    )
    result = await db.execute(items_query)

    return HomestayListResponse(
        items=[HomestayResponse.model_validate(h) for h in result.scalars().all()],
        total=total,
    )


@router.get(
    "/{homestay_id}",
    response_model=HomestayResponse,
    summary="Get a homestay by ID",
)
async def get_homestay(
    homestay_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> HomestayResponse:
    homestay = await db.get(Homestay, homestay_id)
    if homestay is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Homestay not found",
        )
    return HomestayResponse.model_validate(homestay)


@router.put(
    "/{homestay_id}",
    response_model=HomestayResponse,
    summary="Update a homestay",
)
async def update_homestay(
    homestay_id: uuid.UUID,
    body: HomestayUpdate,
    db: AsyncSession = Depends(get_db),
) -> HomestayResponse:
    """Partially update a homestay. Only explicitly set fields are changed.

    Existing bookings keep the title they were created with.
    """
    homestay = await db.get(Homestay, homestay_id)
    if homestay is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Homestay not found",
        )

    update_data = body.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(homestay, field, value)

    db.add(homestay)
    await db.flush()
    await db.refresh(homestay)

    return HomestayResponse.model_validate(homestay)


@router.delete(
    "/{homestay_id}",
    response_model=MessageResponse,
    summary="Deactivate a homestay",
)
async def delete_homestay(
    homestay_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """Mark a homestay inactive. Listings are never hard-deleted."""
    homestay = await db.get(Homestay, homestay_id)
    if homestay is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Homestay not found",
        )

    homestay.status = "inactive"
    await db.flush()

    return MessageResponse(message="Homestay deleted")
