from collections.abc import AsyncIterator

from experiencias_api.application.interfaces.request_ledger import RequestLedger
from experiencias_api.domain.entities.request_event import RequestEvent, Subject
from experiencias_api.domain.errors import ConcurrentTransitionError
from experiencias_api.infrastructure.in_memory.store import InMemoryStore


class InMemoryRequestLedger(InMemoryStore, RequestLedger):
    def __init__(self) -> None:
        self.events: list[RequestEvent] = []

    def _for(self, subject: Subject) -> list[RequestEvent]:
        return [e for e in self.events if e.subject == subject]

    async def append(self, event: RequestEvent) -> None:
        if any(e.sequence == event.sequence for e in self._for(event.subject)):
            raise ConcurrentTransitionError(event.subject.id, event.sequence - 1)
        self.events.append(event)

    async def history(self, subject: Subject) -> AsyncIterator[RequestEvent]:
        for event in sorted(self._for(subject), key=lambda e: (e.created_at, e.sequence)):
            yield event

    async def latest(self, subject: Subject) -> RequestEvent | None:
        events = self._for(subject)
        if not events:
            return None
        return max(events, key=lambda e: e.sequence)
