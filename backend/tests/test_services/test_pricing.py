"""Tests for night, guest and refund arithmetic."""

from datetime import date
from decimal import Decimal

from app.models.booking import Booking
from app.services.pricing import compute_total, count_guests, count_nights, refund_amount


def test_count_nights() -> None:
    assert count_nights(date(2025, 6, 10), date(2025, 6, 15)) == 5
    assert count_nights(date(2025, 12, 30), date(2026, 1, 2)) == 3


def test_count_guests_ignores_missing_categories() -> None:
    assert count_guests({"adults": 2}) == 2
    assert count_guests({"adults": 2, "children": 1, "infants": 1}) == 4
    assert count_guests({"adults": 1, "children": None}) == 1


class TestComputeTotal:
    def test_explicit_total_wins(self) -> None:
        assert compute_total(Decimal("100"), 3, Decimal("250")) == Decimal("250.00")

    def test_derived_from_nightly_rate(self) -> None:
        assert compute_total(Decimal("2200.00"), 4) == Decimal("8800.00")

    def test_unknown_without_rate_or_total(self) -> None:
        assert compute_total(None, 4) is None


class TestRefundAmount:
    def test_full_refund_of_stored_total(self) -> None:
        booking = Booking(total_price=Decimal("8800.00"))
        assert refund_amount(booking) == Decimal("8800.00")

    def test_zero_when_no_total_stored(self) -> None:
        assert refund_amount(Booking(total_price=None)) == Decimal("0.00")
