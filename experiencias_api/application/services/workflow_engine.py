"""Motor del workflow: valida, agrega al ledger y despacha efectos en una transacción."""

from experiencias_api.application.interfaces.reservation_group_repo import ReservationGroupRepo
from experiencias_api.application.interfaces.transaction_manager import TransactionManager
from experiencias_api.application.interfaces.user_repo import UserRepo
from experiencias_api.application.services.ledger import EventLedger
from experiencias_api.application.services.side_effect_dispatcher import SideEffectDispatcher
from experiencias_api.application.services.status_projector import StatusProjector
from experiencias_api.domain.entities.request_event import (
    ProfessorRef,
    RequestEvent,
    RequestType,
    ReservationGroupRef,
    Subject,
)
from experiencias_api.domain.errors import ProfessorNotFoundError, ReservationGroupNotFoundError
from experiencias_api.domain.workflow import (
    is_group_active,
    validate_transition,
    validate_vocabulary,
)

_DOCUMENT_REVIEW_TYPES = frozenset({RequestType.DOCUMENT_APPROVED, RequestType.DOCUMENT_REJECTED})


class WorkflowEngine:
    def __init__(
        self,
        ledger: EventLedger,
        projector: StatusProjector,
        dispatcher: SideEffectDispatcher,
        reservation_repo: ReservationGroupRepo,
        user_repo: UserRepo,
        transaction_manager: TransactionManager,
        strict_transitions: bool = False,
    ) -> None:
        self._ledger = ledger
        self._projector = projector
        self._dispatcher = dispatcher
        self._reservation_repo = reservation_repo
        self._user_repo = user_repo
        self._transaction_manager = transaction_manager
        self._strict_transitions = strict_transitions

    async def append(
        self,
        subject: Subject,
        request_type: RequestType,
        actor_id: str,
        description: str | None = None,
        file_url: str | None = None,
        expected_version: int | None = None,
    ) -> RequestEvent:
        """
        Agrega un evento al sujeto y ejecuta sus efectos.

        Validación de vocabulario -> existencia del sujeto -> transición ->
        append -> proyección -> efectos, todo en una transacción. Las
        notificaciones se entregan al salir de ella.
        """
        validate_vocabulary(subject, request_type)

        async with self._transaction_manager.start():
            await self._ensure_subject_exists(subject)

            current = await self._projector.current_status(subject)
            validate_transition(subject, current, request_type, strict=self._strict_transitions)

            preceding = await self._ledger.latest(subject)
            if (
                request_type in _DOCUMENT_REVIEW_TYPES
                and file_url is None
                and preceding is not None
                and preceding.type == RequestType.DOCUMENT_REQUESTED
            ):
                file_url = preceding.file_url

            event = await self._ledger.append(
                subject,
                request_type,
                actor_id,
                description=description,
                file_url=file_url,
                expected_version=expected_version,
            )

            if isinstance(subject, ReservationGroupRef):
                await self._reservation_repo.set_active(subject.id, is_group_active(request_type))

            notifications = await self._dispatcher.dispatch(event, preceding)

        await self._dispatcher.deliver(notifications)
        return event

    async def _ensure_subject_exists(self, subject: Subject) -> None:
        if isinstance(subject, ReservationGroupRef):
            if await self._reservation_repo.get_group(subject.id) is None:
                raise ReservationGroupNotFoundError(subject.id)
            return

        if isinstance(subject, ProfessorRef):
            user = await self._user_repo.get_by_id(subject.id)
            if user is None or not user.is_professor:
                raise ProfessorNotFoundError(subject.id)
