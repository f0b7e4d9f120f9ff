"""Guide model — local guides offering tours."""

from decimal import Decimal

from sqlalchemy import JSON, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Guide(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A local guide profile."""

    __tablename__ = "guides"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    bio: Mapped[str | None] = mapped_column(Text, default=None)
    district: Mapped[str | None] = mapped_column(String(120), default=None, index=True)
    languages: Mapped[list | None] = mapped_column(JSON, default=None)
    price_per_day: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), default=None)
    status: Mapped[str] = mapped_column(String(50), server_default="active")  # active, inactive

    def __repr__(self) -> str:
        return f"<Guide(id={self.id}, name={self.name!r})>"
