from experiencias_api.application.interfaces.request_ledger import RequestLedger
from experiencias_api.domain.entities.request_event import ProfessorRef, RequestEvent
from experiencias_api.domain.errors import SubjectHistoryNotFoundError


class GetLatestProfessorRequestUseCase:
    def __init__(self, request_ledger: RequestLedger) -> None:
        self._request_ledger = request_ledger

    async def execute(self, professor_id: str) -> RequestEvent:
        subject = ProfessorRef(professor_id)
        latest = await self._request_ledger.latest(subject)
        if latest is None:
            raise SubjectHistoryNotFoundError(
                subject.kind.value, professor_id, "Professor requests not found"
            )
        return latest
