"""Re-run booking transactions that the database aborted because of lock contention."""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import DBAPIError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# MySQL deadlock / lock wait timeout, SQLSTATE serialization failure / deadlock, SQLite busy
_LOCK_CONTENTION_MARKERS = ("1213", "1205", "40001", "40P01", "database is locked")


def is_deadlock_error(error: BaseException) -> bool:
    if not isinstance(error, DBAPIError):
        return False
    text = str(error)
    return any(marker in text for marker in _LOCK_CONTENTION_MARKERS)


async def retry_on_deadlock(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    base_delay: float = 0.1,
) -> T:
    """
    Await ``operation`` again when the database rolled it back on lock contention.

    The n-th retry waits ``base_delay * 2 ** (n - 1)`` seconds. Domain errors and
    any other database error propagate on the first failure, and the last
    contention error propagates once ``max_attempts`` runs have failed.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    attempt = 1
    while True:
        try:
            return await operation()
        except DBAPIError as exc:
            if not is_deadlock_error(exc):
                raise
            if attempt >= max_attempts:
                logger.error(
                    "Booking transaction still contended, giving up",
                    extra={"attempts": attempt, "error": str(exc.orig)},
                )
                raise
            delay = base_delay * 2 ** (attempt - 1)
            logger.warning(
                "Booking transaction hit lock contention, retrying",
                extra={"attempt": attempt, "retry_delay": delay, "error": str(exc.orig)},
            )
            await asyncio.sleep(delay)
            attempt += 1
