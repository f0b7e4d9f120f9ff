"""Seed the database with sample homestays, guides, and bookings.

Bookings go through BookingService so they get real booking numbers and
pass the same conflict checks as API traffic.

Run from the backend directory:
    python -m scripts.seed_data
"""

import asyncio
import sys
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path

# Add backend to path so imports work when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import delete

from app.database import async_session_factory, engine
from app.errors import ConflictError
from app.models.booking import Booking
from app.models.guide import Guide
from app.models.homestay import Homestay
from app.schemas.booking import BookingCreate
from app.services.booking_service import BookingService

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

HOMESTAYS = [
    {
        "title": "Riverside Bamboo Cottage",
        "description": "Two-room bamboo cottage on a family farm, home-cooked meals included.",
        "district": "Kodagu",
        "base_price": Decimal("2200.00"),
        "max_guests": 4,
    },
    {
        "title": "Tea Estate Heritage Home",
        "description": "Colonial-era planter's bungalow with estate walks at sunrise.",
        "district": "Nilgiris",
        "base_price": Decimal("3500.00"),
        "max_guests": 6,
    },
    {
        "title": "Backwater Courtyard Stay",
        "description": "Traditional courtyard house a short canoe ride from the village market.",
        "district": "Alappuzha",
        "base_price": Decimal("2800.00"),
        "max_guests": 3,
    },
]

GUIDES = [
    {
        "name": "Meera Nair",
        "bio": "Backwater ecology and birding walks.",
        "district": "Alappuzha",
        "languages": ["English", "Malayalam", "Hindi"],
        "price_per_day": Decimal("1800.00"),
    },
    {
        "name": "Arjun Bopanna",
        "bio": "Coffee trails and Kodava food history.",
        "district": "Kodagu",
        "languages": ["English", "Kannada"],
        "price_per_day": Decimal("1500.00"),
    },
]


def _booking_requests(homestays: list[Homestay], guides: list[Guide], today: date) -> list[BookingCreate]:
    h = {item.title: item for item in homestays}
    g = {item.name: item for item in guides}

    def request(listing_type: str, listing_id, start: int, nights: int, adults: int, name: str, price: Decimal):
        check_in = today + timedelta(days=start)
        return BookingCreate.model_validate(
            {
                "listing_type": listing_type,
                "listing_id": str(listing_id),
                "check_in": check_in.isoformat(),
                "check_out": (check_in + timedelta(days=nights)).isoformat(),
                "guests": {"adults": adults},
                "guest_details": {"name": name, "email": f"{name.split()[0].lower()}@example.com"},
                "pricing": {"price_per_night": str(price)},
            }
        )

    cottage = h["Riverside Bamboo Cottage"]
    estate = h["Tea Estate Heritage Home"]
    return [
        request("homestay", cottage.id, 10, 3, 2, "Priya Raman", cottage.base_price),
        # Checks in the day the previous stay checks out.
        request("homestay", cottage.id, 13, 4, 2, "Daniel Weber", cottage.base_price),
        request("homestay", estate.id, 20, 5, 4, "Aiko Sato", estate.base_price),
        request("guide", g["Meera Nair"].id, 7, 1, 3, "Lucas Martin", g["Meera Nair"].price_per_day),
    ]


# ---------------------------------------------------------------------------
# Main seed function
# ---------------------------------------------------------------------------


async def seed() -> None:
    """Replace all listings and bookings with the sample data."""
    async with async_session_factory() as session:
        await session.execute(delete(Booking))
        await session.execute(delete(Homestay))
        await session.execute(delete(Guide))

        homestays = [Homestay(**data, status="active") for data in HOMESTAYS]
        guides = [Guide(**data, status="active") for data in GUIDES]
        session.add_all([*homestays, *guides])
        await session.commit()

    for homestay in homestays:
        print(f"   🏠 {homestay.title} — {homestay.district} (₹{homestay.base_price}/night)")
    for guide in guides:
        print(f"   🧭 {guide.name} — {guide.district}")

    service = BookingService(async_session_factory)
    created = 0
    for body in _booking_requests(homestays, guides, date.today()):
        try:
            booking = await service.create_booking(body)
        except ConflictError as exc:
            print(f"⚠️  Skipped {body.guest_details.name}: {exc.message}")
            continue
        created += 1
        print(f"   📅 #{booking.booking_number} {booking.listing_title} {booking.check_in} → {booking.check_out}")

    print(f"✅ Created {len(homestays)} homestays, {len(guides)} guides, {created} bookings")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
