from experiencias_api.application.interfaces.reservation_group_repo import ReservationGroupRepo
from experiencias_api.application.services.workflow_engine import WorkflowEngine
from experiencias_api.application.use_cases.get_reservation_group import load_owned_group
from experiencias_api.domain.entities.request_event import (
    RequestEvent,
    RequestType,
    ReservationGroupRef,
)
from experiencias_api.domain.errors import ValidationError


class SubmitPaymentProofUseCase:
    """El dueño del grupo envía el comprobante de pago ya subido (PAYMENT_SENT)."""

    def __init__(self, reservation_repo: ReservationGroupRepo, engine: WorkflowEngine) -> None:
        self._reservation_repo = reservation_repo
        self._engine = engine

    async def execute(
        self,
        reservation_group_id: str,
        actor_id: str,
        file_url: str,
        description: str | None = None,
    ) -> RequestEvent:
        if not file_url:
            raise ValidationError("fileUrl is required for payment submissions")
        await load_owned_group(self._reservation_repo, reservation_group_id, actor_id)
        return await self._engine.append(
            ReservationGroupRef(reservation_group_id),
            RequestType.PAYMENT_SENT,
            actor_id,
            description=description,
            file_url=file_url,
        )
