"""Guide listing routes."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db
from app.config import settings
from app.models.guide import Guide
from app.schemas.listing import (
    GuideCreate,
    GuideListResponse,
    GuideResponse,
    GuideUpdate,
    MessageResponse,
)

router = APIRouter(prefix="/api/v1/guides", tags=["guides"])


@router.post(
    "",
    response_model=GuideResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a guide",
)
async def create_guide(
    body: GuideCreate,
    db: AsyncSession = Depends(get_db),
) -> GuideResponse:
    guide = Guide(**body.model_dump(), status="active")
    db.add(guide)
    await db.flush()
    await db.refresh(guide)
    return GuideResponse.model_validate(guide)


@router.get(
    "",
    response_model=GuideListResponse,
    summary="List active guides",
)
async def list_guides(
    district: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    db: AsyncSession = Depends(get_db),
) -> GuideListResponse:
    """Return active guides, optionally filtered by district (case-insensitive)."""
    filters = [Guide.status == "active"]
    if district is not None:
        filters.append(func.lower(Guide.district) == district.lower())

    count_query = select(func.count()).select_from(Guide).where(*filters)
    total = (await db.execute(count_query)).scalar_one()

    items_query = (
        select(Guide).where(*filters).order_by(Guide.created_at.desc()).offset((page - 1) * limit).limit(limit)
    )
    result = await db.execute(items_query)

    return GuideListResponse(
        items=[GuideResponse.model_validate(g) for g in result.scalars().all()],
        total=total,
    )


@router.get(
    "/{guide_id}",
    response_model=GuideResponse,
    summary="Get a guide by ID",
)
async def get_guide(
    guide_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> GuideResponse:
    guide = await db.get(Guide, guide_id)
    if guide is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Guide not found",
        )
    return GuideResponse.model_validate(guide)


@router.put(
    "/{guide_id}",
    response_model=GuideResponse,
    summary="Update a guide",
)
async def update_guide(
    guide_id: uuid.UUID,
    body: GuideUpdate,
    db: AsyncSession = Depends(get_db),
) -> GuideResponse:
    """Partially update a guide. Only explicitly set fields are changed."""
    guide = await db.get(Guide, guide_id)
    if guide is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Guide not found",
        )

    update_data = body.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(guide, field, value)

    db.add(guide)
    await db.flush()
    await db.refresh(guide)

    return GuideResponse.model_validate(guide)


@router.delete(
    "/{guide_id}",
    response_model=MessageResponse,
    summary="Deactivate a guide",
)
async def delete_guide(
    guide_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """Mark a guide inactive. Listings are never hard-deleted."""
    guide = await db.get(Guide, guide_id)
    if guide is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Guide not found",
        )

    guide.status = "inactive"
    await db.flush()

    return MessageResponse(message="Guide deleted")
