from collections import defaultdict

from rental_api.application.interfaces.idempotency_repo import IdempotencyRecord, IdempotencyRepo
from rental_api.domain.errors import IdempotencyConflictError


class InMemoryIdempotencyRepo(IdempotencyRepo):
    def __init__(self) -> None:
        self._records: dict[str, dict[str, IdempotencyRecord]] = defaultdict(dict)

    async def get(self, scope: str, idem_key: str) -> IdempotencyRecord | None:
        return self._records.get(scope, {}).get(idem_key)

    async def save(self, record: IdempotencyRecord) -> None:
        if record.idem_key in self._records[record.scope]:
            raise IdempotencyConflictError(idem_key=record.idem_key, scope=record.scope)
        self._records[record.scope][record.idem_key] = record
