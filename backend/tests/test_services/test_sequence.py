"""Tests for the durable booking-number sequence."""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from app.errors import InfrastructureError
from app.models.counter import Counter
from app.services.sequence import SequenceGenerator, increment_counter

pytestmark = pytest.mark.asyncio


async def test_first_value_is_one(session_factory) -> None:
    sequence = SequenceGenerator(session_factory, "booking_number")
    assert await sequence.next() == 1
    assert await sequence.next() == 2


async def test_counters_are_independent(session_factory) -> None:
    bookings = SequenceGenerator(session_factory, "booking_number")
    invoices = SequenceGenerator(session_factory, "invoice_number")

    assert await bookings.next() == 1
    assert await bookings.next() == 2
    assert await invoices.next() == 1


async def test_value_survives_new_generator(session_factory, db_session) -> None:
    """A restarted process continues from the stored counter."""
    await SequenceGenerator(session_factory, "booking_number").next()
    await SequenceGenerator(session_factory, "booking_number").next()

    assert await SequenceGenerator(session_factory, "booking_number").next() == 3
    counter = await db_session.get(Counter, "booking_number")
    assert counter.value == 3


async def test_concurrent_callers_get_distinct_values(session_factory) -> None:
    sequence = SequenceGenerator(session_factory, "booking_number")
    values = await asyncio.gather(*(sequence.next() for _ in range(10)))
    assert sorted(values) == list(range(1, 11))


async def test_increment_within_callers_transaction(db_session) -> None:
    assert await increment_counter(db_session, "booking_number") == 1
    assert await increment_counter(db_session, "booking_number") == 2
    await db_session.rollback()
    assert await increment_counter(db_session, "booking_number") == 1


async def test_unreachable_store_raises_infrastructure_error(session_factory) -> None:
    sequence = SequenceGenerator(session_factory, "booking_number")
    failure = OperationalError("UPDATE counters", {}, Exception("connection refused"))

    with patch("app.services.sequence.increment_counter", new=AsyncMock(side_effect=failure)):
        with pytest.raises(InfrastructureError) as exc_info:
            await sequence.next()

    assert exc_info.value.message == "Failed to allocate booking number"
    assert exc_info.value.__cause__ is failure


async def test_allocate_follows_callers_transaction(session_factory) -> None:
    sequence = SequenceGenerator(session_factory, "booking_number")

    async with session_factory() as session:
        assert await sequence.allocate(session) == 1
        await session.rollback()

    async with session_factory() as session:
        assert await sequence.allocate(session) == 1
        await session.commit()

    assert await sequence.next() == 2


async def test_allocate_failure_raises_infrastructure_error(session_factory) -> None:
    sequence = SequenceGenerator(session_factory, "booking_number")
    failure = OperationalError("INSERT INTO counters", {}, Exception("database is locked"))

    with patch("app.services.sequence.increment_counter", new=AsyncMock(side_effect=failure)):
        async with session_factory() as session:
            with pytest.raises(InfrastructureError) as exc_info:
                await sequence.allocate(session)

    assert exc_info.value.message == "Failed to allocate booking number"
