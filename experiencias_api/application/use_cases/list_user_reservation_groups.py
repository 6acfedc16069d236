from datetime import datetime, timezone

from experiencias_api.application.interfaces.request_ledger import RequestLedger
from experiencias_api.application.interfaces.reservation_group_repo import ReservationGroupRepo
from experiencias_api.application.interfaces.subject_status_repo import SubjectStatusRepo
from experiencias_api.application.use_cases.get_reservation_group import load_history
from experiencias_api.domain.entities.request_event import (
    RequestType,
    ReservationGroupRef,
    SubjectKind,
)
from experiencias_api.domain.entities.reservation_group import ReservationGroup
from experiencias_api.domain.errors import InvalidRequestTypeError
from experiencias_api.domain.workflow import PENDING_GROUP_TYPES, RESERVATION_GROUP_TYPES

STATUS_FILTER_ALL = "ALL"
STATUS_FILTER_PENDING = "PENDING"

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def parse_status_filter(value: str) -> frozenset[RequestType] | None:
    """
    Traduce el filtro de estado a un conjunto de tipos.

    ALL no filtra (None), PENDING usa los estados que esperan acción y
    cualquier otro valor debe ser un tipo del vocabulario del grupo.

    Raises:
        InvalidRequestTypeError: Valor que no es ALL, PENDING ni un tipo de grupo.
    """
    normalized = value.strip().upper()
    if normalized == STATUS_FILTER_ALL:
        return None
    if normalized == STATUS_FILTER_PENDING:
        return PENDING_GROUP_TYPES
    try:
        request_type = RequestType(normalized)
    except ValueError:
        raise InvalidRequestTypeError(value, SubjectKind.RESERVATION_GROUP.value) from None
    if request_type not in RESERVATION_GROUP_TYPES:
        raise InvalidRequestTypeError(value, SubjectKind.RESERVATION_GROUP.value)
    return frozenset({request_type})


class ListUserReservationGroupsUseCase:
    """
    Grupos propios del usuario filtrados por su estado proyectado.

    El filtro se resuelve contra la proyección de estado, así sólo se
    hidratan (reservas, miembros, historial) los grupos que pasan. Un
    grupo sin proyección todavía no tiene historial y no se lista.
    El resultado va del inicio más reciente al más antiguo.
    """

    def __init__(
        self,
        reservation_repo: ReservationGroupRepo,
        status_repo: SubjectStatusRepo,
        request_ledger: RequestLedger,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._status_repo = status_repo
        self._request_ledger = request_ledger

    async def execute(
        self, user_id: str, status_filter: str = STATUS_FILTER_ALL
    ) -> list[ReservationGroup]:
        wanted = parse_status_filter(status_filter)

        groups: list[ReservationGroup] = []
        for group_id in await self._reservation_repo.list_group_ids_by_user(user_id):
            record = await self._status_repo.get(ReservationGroupRef(group_id))
            if record is None:
                continue
            if wanted is not None and record.status not in wanted:
                continue

            group = await self._reservation_repo.get_group(group_id)
            if group is None:
                continue
            group.history = await load_history(self._request_ledger, group_id)
            groups.append(group)

        groups.sort(key=_start_of, reverse=True)
        return groups


def _start_of(group: ReservationGroup) -> datetime:
    span = group.date_range
    return span.start if span else _OLDEST
