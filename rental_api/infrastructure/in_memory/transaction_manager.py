import asyncio
from collections import defaultdict
from collections.abc import AsyncIterator, Sequence
from contextlib import AsyncExitStack, asynccontextmanager

from rental_api.application.interfaces.transaction_manager import (
    ResourceKey,
    ResourceLocker,
    TransactionManager,
)


class NoopTransactionManager(TransactionManager):
    @asynccontextmanager
    async def start(self):
        yield


class InMemoryResourceLocker(ResourceLocker):
    """Un asyncio.Lock por recurso, adquiridos siempre en el mismo orden."""

    def __init__(self) -> None:
        self._locks: dict[ResourceKey, asyncio.Lock] = defaultdict(asyncio.Lock)

    @asynccontextmanager
    async def hold(self, keys: Sequence[ResourceKey]) -> AsyncIterator[None]:
        async with AsyncExitStack() as stack:
            for key in sorted(set(keys), key=lambda k: (k[0].value, k[1])):
                await stack.enter_async_context(self._locks[key])
            yield
