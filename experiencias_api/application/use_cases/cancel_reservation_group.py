import logging

from experiencias_api.application.interfaces.reservation_group_repo import ReservationGroupRepo
from experiencias_api.application.services.status_projector import StatusProjector
from experiencias_api.application.services.workflow_engine import WorkflowEngine
from experiencias_api.application.use_cases.get_reservation_group import load_owned_group
from experiencias_api.domain.entities.request_event import (
    RequestEvent,
    RequestType,
    ReservationGroupRef,
)
from experiencias_api.domain.errors import InvalidTransitionError

NOT_CANCELABLE = frozenset(
    {
        RequestType.CANCELED_REQUESTED,
        RequestType.CANCELED,
        RequestType.PAYMENT_REJECTED,
    }
)


class CancelReservationGroupUseCase:
    """
    Solicitud de cancelación de un grupo por su dueño.

    Agrega CANCELED_REQUESTED; la cancelación efectiva (CANCELED) la
    registra un administrador con un evento posterior.
    """

    def __init__(
        self,
        reservation_repo: ReservationGroupRepo,
        projector: StatusProjector,
        engine: WorkflowEngine,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._projector = projector
        self._engine = engine
        self._logger = logging.getLogger(__name__)

    async def execute(
        self,
        reservation_group_id: str,
        actor_id: str,
        description: str | None = None,
    ) -> RequestEvent:
        await load_owned_group(self._reservation_repo, reservation_group_id, actor_id)

        subject = ReservationGroupRef(reservation_group_id)
        current = await self._projector.current_status(subject)
        if current in NOT_CANCELABLE:
            raise InvalidTransitionError(current.value, RequestType.CANCELED_REQUESTED.value)

        event = await self._engine.append(
            subject, RequestType.CANCELED_REQUESTED, actor_id, description=description
        )
        self._logger.info(
            "Cancellation requested",
            extra={"reservation_group_id": reservation_group_id, "actor_id": actor_id},
        )
        return event
