from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Protocol

from rental_api.domain.entities.resource import ServiceKind

ResourceKey = tuple[ServiceKind, str]


class TransactionManager(Protocol):
    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        yield


class ResourceLocker(Protocol):
    """
    Serializa "leer reservas, decidir, escribir" por recurso.

    Debe usarse dentro de TransactionManager.start(); los locks se liberan
    al terminar la transacción (SQL) o al salir del contexto (in-memory).
    """

    @asynccontextmanager
    async def hold(self, keys: Sequence[ResourceKey]) -> AsyncIterator[None]:
        yield
