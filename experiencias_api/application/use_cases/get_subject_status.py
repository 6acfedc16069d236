from experiencias_api.application.dtos.status_dto import SubjectStatusDTO
from experiencias_api.application.interfaces.reservation_group_repo import ReservationGroupRepo
from experiencias_api.application.interfaces.user_repo import UserRepo
from experiencias_api.application.services.status_projector import StatusProjector
from experiencias_api.domain.entities.request_event import ProfessorRef, Subject
from experiencias_api.domain.errors import (
    ProfessorNotFoundError,
    ReservationGroupNotFoundError,
    SubjectHistoryNotFoundError,
)


class GetSubjectStatusUseCase:
    def __init__(
        self,
        projector: StatusProjector,
        reservation_repo: ReservationGroupRepo,
        user_repo: UserRepo,
    ) -> None:
        self._projector = projector
        self._reservation_repo = reservation_repo
        self._user_repo = user_repo

    async def execute(self, subject: Subject, viewer_id: str | None = None) -> SubjectStatusDTO:
        if isinstance(subject, ProfessorRef):
            professor = await self._user_repo.get_by_id(subject.id)
            if professor is None or not professor.is_professor:
                raise ProfessorNotFoundError(subject.id)
            request_user_id = professor.id
            label = "Professor"
        else:
            group = await self._reservation_repo.get_group(subject.id)
            if group is None:
                raise ReservationGroupNotFoundError(subject.id)
            request_user_id = group.user_id
            label = "ReservationGroup"

        try:
            return await self._projector.get_status(
                subject, request_user_id=request_user_id, viewer_id=viewer_id
            )
        except SubjectHistoryNotFoundError as exc:
            raise SubjectHistoryNotFoundError(
                subject.kind.value, subject.id, f"{label} requests not found"
            ) from exc
