import logging

from experiencias_api.application.dtos.reservation_group_dto import ReservationChangesDTO
from experiencias_api.application.interfaces.experience_lookup import ExperienceLookup
from experiencias_api.application.interfaces.reservation_group_repo import ReservationGroupRepo
from experiencias_api.application.interfaces.transaction_manager import TransactionManager
from experiencias_api.application.interfaces.user_repo import UserRepo
from experiencias_api.application.services.workflow_engine import WorkflowEngine
from experiencias_api.domain.entities.request_event import RequestType, ReservationGroupRef
from experiencias_api.domain.entities.reservation_group import Reservation
from experiencias_api.domain.errors import (
    InactiveExperienceError,
    ReservationNotFoundError,
    ValidationError,
)
from experiencias_api.domain.value_objects.date_range import DateRange


class UpdateReservationUseCase:
    """
    Edición administrativa de una reserva.

    Cambiar de experiencia vuelve a congelar el precio salvo que se
    indique uno explícito. Cada edición agrega EDITED al grupo.
    """

    def __init__(
        self,
        reservation_repo: ReservationGroupRepo,
        experience_lookup: ExperienceLookup,
        user_repo: UserRepo,
        engine: WorkflowEngine,
        transaction_manager: TransactionManager,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._experience_lookup = experience_lookup
        self._user_repo = user_repo
        self._engine = engine
        self._transaction_manager = transaction_manager
        self._logger = logging.getLogger(__name__)

    async def execute(
        self,
        reservation_id: str,
        actor_id: str,
        changes: ReservationChangesDTO,
    ) -> Reservation:
        if changes.is_empty():
            raise ValidationError("no changes given")
        if changes.price is not None and changes.price < 0:
            raise ValidationError("price must not be negative")

        actor = await self._user_repo.get_by_id(actor_id)
        if actor is None or not actor.is_admin:
            raise ReservationNotFoundError(reservation_id)

        async with self._transaction_manager.start():
            reservation = await self._reservation_repo.get_reservation(reservation_id)
            if reservation is None or not reservation.active:
                raise ReservationNotFoundError(reservation_id)

            if changes.experience_id and changes.experience_id != reservation.experience_id:
                found = await self._experience_lookup.find_active_by_ids([changes.experience_id])
                if not found:
                    raise InactiveExperienceError([changes.experience_id])
                reservation.experience_id = changes.experience_id
                reservation.price = found[0].price

            if changes.start_date is not None:
                reservation.start_date = changes.start_date
            if changes.end_date is not None:
                reservation.end_date = changes.end_date
            DateRange(start=reservation.start_date, end=reservation.end_date)

            if changes.price is not None:
                reservation.price = changes.price

            await self._reservation_repo.update_reservation(reservation)
            await self._engine.append(
                ReservationGroupRef(reservation.reservation_group_id),
                RequestType.EDITED,
                actor_id,
                description=f"reservation {reservation.id} edited",
            )

        self._logger.info(
            "Reservation updated",
            extra={"reservation_id": reservation_id, "actor_id": actor_id},
        )
        return reservation
