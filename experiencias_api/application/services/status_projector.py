"""Proyector de estado: estado actual e historial de un sujeto."""

from experiencias_api.application.dtos.status_dto import HistoryEntryDTO, SubjectStatusDTO
from experiencias_api.application.interfaces.request_ledger import RequestLedger
from experiencias_api.application.interfaces.subject_status_repo import SubjectStatusRepo
from experiencias_api.domain.entities.request_event import RequestType, Subject
from experiencias_api.domain.errors import SubjectHistoryNotFoundError


class StatusProjector:
    def __init__(self, request_ledger: RequestLedger, status_repo: SubjectStatusRepo) -> None:
        self._request_ledger = request_ledger
        self._status_repo = status_repo

    async def current_status(self, subject: Subject) -> RequestType | None:
        """Tipo del último evento, leído de la proyección. None si no hay historial."""
        projection = await self._status_repo.get(subject)
        return projection.status if projection else None

    async def get_status(
        self,
        subject: Subject,
        request_user_id: str,
        viewer_id: str | None = None,
    ) -> SubjectStatusDTO:
        """
        Estado completo de un sujeto.

        `created_at` es el timestamp del primer evento y `status` el tipo del
        último. `request_user_id` es el dueño del grupo o el propio profesor.

        Raises:
            SubjectHistoryNotFoundError: El sujeto no tiene eventos.
        """
        events = [event async for event in self._request_ledger.history(subject)]
        if not events:
            raise SubjectHistoryNotFoundError(subject.kind.value, subject.id)

        projection = await self._status_repo.get(subject)
        version = projection.version if projection else events[-1].sequence

        return SubjectStatusDTO(
            subject=subject,
            status=events[-1].type,
            created_at=events[0].created_at,
            version=version,
            request_user_id=request_user_id,
            history=[
                HistoryEntryDTO(
                    event=event,
                    is_sender=viewer_id is not None and event.created_by_user_id == viewer_id,
                    is_requester=event.created_by_user_id == request_user_id,
                )
                for event in events
            ],
        )
