import logging

from experiencias_api.application.services.workflow_engine import WorkflowEngine
from experiencias_api.domain.entities.request_event import (
    RequestEvent,
    RequestType,
    ReservationGroupRef,
)


class AppendReservationEventUseCase:
    def __init__(self, engine: WorkflowEngine) -> None:
        self._engine = engine
        self._logger = logging.getLogger(__name__)

    async def execute(
        self,
        reservation_group_id: str,
        request_type: RequestType,
        actor_id: str,
        description: str | None = None,
        file_url: str | None = None,
        expected_version: int | None = None,
    ) -> RequestEvent:
        event = await self._engine.append(
            ReservationGroupRef(reservation_group_id),
            request_type,
            actor_id,
            description=description,
            file_url=file_url,
            expected_version=expected_version,
        )
        self._logger.info(
            "Reservation group moved",
            extra={"reservation_group_id": reservation_group_id, "status": event.type.value},
        )
        return event
