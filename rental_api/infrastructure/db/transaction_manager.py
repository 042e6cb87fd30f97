from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rental_api.application.interfaces.transaction_manager import (
    ResourceKey,
    ResourceLocker,
    TransactionManager,
)
from rental_api.domain.entities.resource import ServiceKind
from rental_api.infrastructure.db.tables import offers, residences, vehicles

_TABLES = {
    ServiceKind.RESIDENCE: residences,
    ServiceKind.VEHICLE: vehicles,
    ServiceKind.OFFER: offers,
}


class SQLAlchemyTransactionManager(TransactionManager):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        if self._session.in_transaction():
            yield
        else:
            async with self._session.begin():
                yield


class SQLResourceLocker(ResourceLocker):
    """
    Row locks (SELECT ... FOR UPDATE) on the catalog rows being booked.

    Locks are released when the surrounding transaction ends. SQLite ignores
    FOR UPDATE; there the engine opens every transaction with BEGIN IMMEDIATE
    so booking transactions are serialized from their first statement.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @asynccontextmanager
    async def hold(self, keys: Sequence[ResourceKey]) -> AsyncIterator[None]:
        for kind, resource_id in sorted(set(keys), key=lambda k: (k[0].value, k[1])):
            table = _TABLES[kind]
            stmt = select(table.c.id).where(table.c.id == resource_id).with_for_update()
            await self._session.execute(stmt)
        yield
