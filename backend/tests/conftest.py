"""Shared test configuration and fixtures.

Every test gets a fresh database: a throwaway SQLite file under ``tmp_path``
by default, or ``TEST_DATABASE_URL`` (e.g. a PostgreSQL test database) when
set. Services commit in their own sessions, so isolation comes from
recreating the schema rather than from a rolled-back outer transaction.
"""

import os
from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.database import Base, get_db, get_session_factory
from app.main import app
from app.models.guide import Guide
from app.models.homestay import Homestay
from app.services.booking_service import BookingService
from app.services.locks import KeyedLock

# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    url = os.getenv("TEST_DATABASE_URL") or f"sqlite+aiosqlite:///{tmp_path / 'bookings.db'}"
    engine = create_async_engine(url, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def booking_service(session_factory) -> BookingService:
    return BookingService(session_factory, locks=KeyedLock())


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to the test database."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def homestay(db_session: AsyncSession) -> Homestay:
    homestay = Homestay(title="Riverside Bamboo Cottage", district="Kodagu", max_guests=4, status="active")
    db_session.add(homestay)
    await db_session.commit()
    return homestay


@pytest_asyncio.fixture
async def guide(db_session: AsyncSession) -> Guide:
    guide = Guide(name="Meera Nair", district="Alappuzha", languages=["English"], status="active")
    db_session.add(guide)
    await db_session.commit()
    return guide
