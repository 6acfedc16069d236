import logging

from experiencias_api.application.interfaces.reservation_group_repo import ReservationGroupRepo
from experiencias_api.application.interfaces.transaction_manager import TransactionManager
from experiencias_api.application.interfaces.user_repo import UserRepo
from experiencias_api.domain.errors import ReservationNotFoundError


class RemoveReservationUseCase:
    """
    Baja lógica de una reserva.

    Si el grupo queda sin reservas activas sus miembros también se dan de
    baja. El `active` del grupo no cambia: sólo lo deciden sus eventos.
    """

    def __init__(
        self,
        reservation_repo: ReservationGroupRepo,
        user_repo: UserRepo,
        transaction_manager: TransactionManager,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._user_repo = user_repo
        self._transaction_manager = transaction_manager
        self._logger = logging.getLogger(__name__)

    async def execute(self, reservation_id: str, actor_id: str) -> None:
        async with self._transaction_manager.start():
            reservation = await self._reservation_repo.get_reservation(reservation_id)
            if reservation is None or not reservation.active:
                raise ReservationNotFoundError(reservation_id)

            if reservation.user_id != actor_id:
                actor = await self._user_repo.get_by_id(actor_id)
                if actor is None or not actor.is_admin:
                    raise ReservationNotFoundError(reservation_id)

            reservation.active = False
            await self._reservation_repo.update_reservation(reservation)

            group = await self._reservation_repo.get_group(reservation.reservation_group_id)
            deactivated = 0
            if group is not None and not group.active_reservations:
                deactivated = await self._reservation_repo.deactivate_members(group.id)

        self._logger.info(
            "Reservation removed",
            extra={
                "reservation_id": reservation_id,
                "reservation_group_id": reservation.reservation_group_id,
                "members_deactivated": deactivated,
            },
        )
