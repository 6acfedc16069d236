from experiencias_api.application.interfaces.request_ledger import RequestLedger
from experiencias_api.application.interfaces.reservation_group_repo import ReservationGroupRepo
from experiencias_api.application.interfaces.user_repo import UserRepo
from experiencias_api.application.services.ledger import EventLedger
from experiencias_api.domain.entities.request_event import RequestEvent, ReservationGroupRef
from experiencias_api.domain.entities.reservation_group import ReservationGroup
from experiencias_api.domain.errors import ReservationGroupNotFoundError


async def load_history(
    ledger: EventLedger | RequestLedger, reservation_group_id: str
) -> list[RequestEvent]:
    return [event async for event in ledger.history(ReservationGroupRef(reservation_group_id))]


class GetReservationGroupUseCase:
    """Grupo hidratado (reservas, miembros, historial). Visible para el dueño y administradores."""

    def __init__(
        self,
        reservation_repo: ReservationGroupRepo,
        request_ledger: RequestLedger,
        user_repo: UserRepo,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._request_ledger = request_ledger
        self._user_repo = user_repo

    async def execute(self, reservation_group_id: str, viewer_id: str) -> ReservationGroup:
        group = await self._reservation_repo.get_group(reservation_group_id)
        if group is None:
            raise ReservationGroupNotFoundError(reservation_group_id)

        if group.user_id != viewer_id:
            viewer = await self._user_repo.get_by_id(viewer_id)
            if viewer is None or not viewer.is_admin:
                raise ReservationGroupNotFoundError(reservation_group_id)

        group.history = await load_history(self._request_ledger, reservation_group_id)
        return group


async def load_owned_group(
    reservation_repo: ReservationGroupRepo, reservation_group_id: str, actor_id: str
) -> ReservationGroup:
    """Grupo del actor. Un grupo ajeno se reporta como inexistente."""
    group = await reservation_repo.get_group(reservation_group_id)
    if group is None or group.user_id != actor_id:
        raise ReservationGroupNotFoundError(reservation_group_id)
    return group
