from collections import defaultdict

from experiencias_api.application.interfaces.idempotency_repo import (
    IdempotencyRecord,
    IdempotencyRepo,
)
from experiencias_api.domain.errors import DuplicateSideEffectError
from experiencias_api.infrastructure.in_memory.store import InMemoryStore


class InMemoryIdempotencyRepo(InMemoryStore, IdempotencyRepo):
    def __init__(self) -> None:
        self._records: dict[str, dict[str, IdempotencyRecord]] = defaultdict(dict)

    async def get(self, scope: str, idem_key: str) -> IdempotencyRecord | None:
        return self._records.get(scope, {}).get(idem_key)

    async def save(self, record: IdempotencyRecord) -> None:
        if record.idem_key in self._records[record.scope]:
            raise DuplicateSideEffectError(record.idem_key)
        self._records[record.scope][record.idem_key] = record
