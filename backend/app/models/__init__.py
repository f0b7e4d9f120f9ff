"""SQLAlchemy models.

All models are imported here so that Alembic's autogenerate can discover
them via Base.metadata. If you add a new model, import it in this file.
"""

from app.models.booking import Booking, BookingStatus, ListingType, PaymentStatus
from app.models.counter import Counter
from app.models.guide import Guide
from app.models.homestay import Homestay

__all__ = [
    "Booking",
    "BookingStatus",
    "Counter",
    "Guide",
    "Homestay",
    "ListingType",
    "PaymentStatus",
]
