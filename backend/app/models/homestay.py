"""Homestay model — bookable stays hosted by local families."""

from decimal import Decimal

from sqlalchemy import Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Homestay(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A homestay listing."""

    __tablename__ = "homestays"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    district: Mapped[str | None] = mapped_column(String(120), default=None, index=True)
    base_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), default=None)
    max_guests: Mapped[int | None] = mapped_column(default=None)
    status: Mapped[str] = mapped_column(String(50), server_default="active")  # active, inactive

    def __repr__(self) -> str:
        return f"<Homestay(id={self.id}, title={self.title!r})>"
