"""Tests for homestay and guide listing endpoints."""

import uuid

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


class TestHomestays:
    async def test_create_and_get(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/homestays",
            json={"title": "Tea Estate Heritage Home", "district": "Nilgiris", "base_price": 3500, "max_guests": 6},
        )
        assert response.status_code == 201
        created = response.json()
        assert created["status"] == "active"

        fetched = await client.get(f"/api/v1/homestays/{created['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["title"] == "Tea Estate Heritage Home"

    async def test_list_filters_by_district(self, client: AsyncClient) -> None:
        for title, district in [("A", "Kodagu"), ("B", "kodagu"), ("C", "Nilgiris")]:
            await client.post("/api/v1/homestays", json={"title": title, "district": district})

        response = await client.get("/api/v1/homestays", params={"district": "KODAGU"})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert {item["title"] for item in data["items"]} == {"A", "B"}

    async def test_get_missing(self, client: AsyncClient) -> None:
        response = await client.get(f"/api/v1/homestays/{uuid.uuid4()}")
        assert response.status_code == 404

    async def test_title_required(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/homestays", json={"district": "Kodagu"})
        assert response.status_code == 422

    async def test_update_keeps_booking_title_snapshot(self, client: AsyncClient) -> None:
        homestay = (await client.post("/api/v1/homestays", json={"title": "Riverside Bamboo Cottage"})).json()
        booking = await client.post(
            "/api/v1/bookings",
            json={
                "listing_type": "homestay",
                "listing_id": homestay["id"],
                "check_in": "2099-03-01",
                "check_out": "2099-03-04",
                "guests": {"adults": 2},
                "guest_details": {"name": "Priya Raman", "email": "priya@example.com"},
            },
        )
        assert booking.status_code == 201

        renamed = await client.put(
            f"/api/v1/homestays/{homestay['id']}", json={"title": "Riverside Cottage & Cafe", "max_guests": 5}
        )

        assert renamed.status_code == 200
        assert renamed.json()["title"] == "Riverside Cottage & Cafe"
        assert renamed.json()["max_guests"] == 5
        fetched = await client.get(f"/api/v1/bookings/{booking.json()['id']}")
        assert fetched.json()["listing_title"] == "Riverside Bamboo Cottage"

    async def test_update_missing(self, client: AsyncClient) -> None:
        response = await client.put(f"/api/v1/homestays/{uuid.uuid4()}", json={"title": "Nowhere"})
        assert response.status_code == 404

    async def test_delete_deactivates(self, client: AsyncClient) -> None:
        homestay = (await client.post("/api/v1/homestays", json={"title": "Tea Estate Heritage Home"})).json()

        response = await client.delete(f"/api/v1/homestays/{homestay['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "Homestay deleted"}
        assert (await client.get("/api/v1/homestays")).json()["total"] == 0
        fetched = await client.get(f"/api/v1/homestays/{homestay['id']}")
        assert fetched.json()["status"] == "inactive"


class TestGuides:
    async def test_create_and_list(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/guides",
            json={"name": "Arjun Bopanna", "district": "Kodagu", "languages": ["English", "Kannada"]},
        )
        assert response.status_code == 201

        listing = await client.get("/api/v1/guides")
        assert listing.json()["total"] == 1
        assert listing.json()["items"][0]["languages"] == ["English", "Kannada"]

    async def test_guide_booking_snapshots_name(self, client: AsyncClient) -> None:
        guide = (await client.post("/api/v1/guides", json={"name": "Meera Nair"})).json()

        response = await client.post(
            "/api/v1/bookings",
            json={
                "listing_type": "guide",
                "listing_id": guide["id"],
                "check_in": "2099-01-10",
                "check_out": "2099-01-11",
                "guests": {"adults": 1},
                "guest_details": {"name": "Lucas Martin", "email": "lucas@example.com"},
            },
        )

        assert response.status_code == 201
        assert response.json()["listing_title"] == "Meera Nair"
        assert response.json()["total_price"] is None

    async def test_rename_and_delete(self, client: AsyncClient) -> None:
        guide = (await client.post("/api/v1/guides", json={"name": "Arjun Bopanna"})).json()

        renamed = await client.put(f"/api/v1/guides/{guide['id']}", json={"name": "Arjun B.", "languages": ["Kodava"]})
        assert renamed.status_code == 200
        assert renamed.json()["name"] == "Arjun B."
        assert renamed.json()["languages"] == ["Kodava"]

        deleted = await client.delete(f"/api/v1/guides/{guide['id']}")
        assert deleted.json() == {"message": "Guide deleted"}
        assert (await client.get("/api/v1/guides")).json()["total"] == 0

    async def test_invalid_status_rejected(self, client: AsyncClient, guide) -> None:
        response = await client.put(f"/api/v1/guides/{guide.id}", json={"status": "archived"})
        assert response.status_code == 422


async def test_health(client: AsyncClient) -> None:
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
