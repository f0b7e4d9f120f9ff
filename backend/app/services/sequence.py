"""Durable, strictly increasing sequence numbers backed by the counters table."""

import logging

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.errors import InfrastructureError
from app.models.counter import Counter

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


async def increment_counter(session: AsyncSession, name: str) -> int:
    """Atomically bump counter ``name`` and return the new value.

    Missing counters start at 1. Runs inside the caller's transaction.
    """
    dialect = session.get_bind().dialect.name
    insert = _UPSERT_DIALECTS.get(dialect)

    if insert is not None:
        stmt = insert(Counter).values(name=name, value=1)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Counter.name],
            set_={"value": Counter.value + 1},
        ).returning(Counter.value)
        result = await session.execute(stmt)
        return result.scalar_one()

    counter = await session.get(Counter, name, with_for_update=True)
    if counter is None:
        counter = Counter(name=name, value=0)
        session.add(counter)
    counter.value += 1
    await session.flush()
    return counter.value


class SequenceGenerator:
    """Issues booking numbers.

    :meth:`next` commits its own short transaction, so the number is durable
    as soon as it is returned. :meth:`allocate` bumps the counter inside the
    caller's transaction, so the number commits or rolls back together with
    the row that uses it and no second connection is needed.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], name: str) -> None:
        self._session_factory = session_factory
        self.name = name

    async def allocate(self, session: AsyncSession) -> int:
        try:
            return await increment_counter(session, self.name)
        except SQLAlchemyError as exc:
            logger.exception("Failed to increment counter %r", self.name)
            raise InfrastructureError("Failed to allocate booking number") from exc

    async def next(self) -> int:
        try:
            async with self._session_factory() as session:
                value = await increment_counter(session, self.name)
                await session.commit()
        except SQLAlchemyError as exc:
            logger.exception("Failed to increment counter %r", self.name)
            raise InfrastructureError("Failed to allocate booking number") from exc
        return value
