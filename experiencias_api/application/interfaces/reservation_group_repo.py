from experiencias_api.domain.entities.reservation_group import (
    Member,
    Reservation,
    ReservationGroup,
)


class ReservationGroupRepo:
    """Persistencia del agregado grupo/reserva/miembro.

    `get_group` devuelve el grupo con reservas y miembros pero sin
    historial; el historial lo aporta el ledger.
    """

    async def create_group(self, group: ReservationGroup) -> None:
        raise NotImplementedError

    async def add_reservation(self, reservation: Reservation) -> None:
        raise NotImplementedError

    async def add_member(self, member: Member) -> None:
        raise NotImplementedError

    async def get_group(self, group_id: str) -> ReservationGroup | None:
        raise NotImplementedError

    async def list_group_ids_by_user(self, user_id: str) -> list[str]:
        raise NotImplementedError

    async def set_active(self, group_id: str, active: bool) -> None:
        raise NotImplementedError

    async def link_receipt(self, group_id: str, receipt_id: str) -> None:
        raise NotImplementedError

    async def get_reservation(self, reservation_id: str) -> Reservation | None:
        raise NotImplementedError

    async def update_reservation(self, reservation: Reservation) -> None:
        raise NotImplementedError

    async def deactivate_members(self, group_id: str) -> int:
        """Baja lógica de los miembros activos del grupo. Retorna cuántos cambiaron."""
        raise NotImplementedError
