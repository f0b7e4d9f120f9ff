"""Pydantic v2 request/response schemas for homestay and guide listings."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Homestays
# ---------------------------------------------------------------------------


class HomestayCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    district: str | None = Field(None, max_length=120)
    base_price: Decimal | None = Field(None, ge=0)
    max_guests: int | None = Field(None, ge=1)


class HomestayUpdate(BaseModel):
    """Partial homestay update. All fields optional."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    district: str | None = Field(None, max_length=120)
    base_price: Decimal | None = Field(None, ge=0)
    max_guests: int | None = Field(None, ge=1)
    status: str | None = Field(None, pattern="^(active|inactive)$")


class HomestayResponse(BaseModel):
    id: uuid.UUID
    title: str
    description: str | None = None
    district: str | None = None
    base_price: Decimal | None = None
    max_guests: int | None = None
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class HomestayListResponse(BaseModel):
    items: list[HomestayResponse]
    total: int


# ---------------------------------------------------------------------------
# Guides
# ---------------------------------------------------------------------------


class GuideCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    bio: str | None = None
    district: str | None = Field(None, max_length=120)
    languages: list[str] | None = None
    price_per_day: Decimal | None = Field(None, ge=0)


class GuideUpdate(BaseModel):
    """Partial guide update. All fields optional."""

    name: str | None = Field(None, min_length=1, max_length=255)
    bio: str | None = None
    district: str | None = Field(None, max_length=120)
    languages: list[str] | None = None
    price_per_day: Decimal | None = Field(None, ge=0)
    status: str | None = Field(None, pattern="^(active|inactive)$")


class GuideResponse(BaseModel):
    id: uuid.UUID
    name: str
    bio: str | None = None
    district: str | None = None
    languages: list | None = None
    price_per_day: Decimal | None = None
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GuideListResponse(BaseModel):
    items: list[GuideResponse]
    total: int


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str
