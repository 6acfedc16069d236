import copy

from experiencias_api.application.interfaces.reservation_group_repo import ReservationGroupRepo
from experiencias_api.domain.entities.reservation_group import (
    Member,
    Reservation,
    ReservationGroup,
)
from experiencias_api.infrastructure.in_memory.store import InMemoryStore


class InMemoryReservationGroupRepo(InMemoryStore, ReservationGroupRepo):
    """Guarda filas planas y devuelve copias, igual que lo haría una base de datos."""

    def __init__(self) -> None:
        self.groups: dict[str, ReservationGroup] = {}
        self.reservations: dict[str, Reservation] = {}
        self.members: dict[str, Member] = {}

    async def create_group(self, group: ReservationGroup) -> None:
        if group.id in self.groups:
            raise ValueError("Reservation group already exists")
        stored = copy.deepcopy(group)
        stored.reservations, stored.members, stored.history = [], [], []
        self.groups[group.id] = stored

    async def add_reservation(self, reservation: Reservation) -> None:
        self.reservations[reservation.id] = copy.deepcopy(reservation)

    async def add_member(self, member: Member) -> None:
        self.members[member.id] = copy.deepcopy(member)

    async def get_group(self, group_id: str) -> ReservationGroup | None:
        stored = self.groups.get(group_id)
        if stored is None:
            return None
        group = copy.deepcopy(stored)
        group.reservations = sorted(
            (copy.deepcopy(r) for r in self.reservations.values() if r.reservation_group_id == group_id),
            key=lambda r: (r.start_date, r.id),
        )
        group.members = sorted(
            (copy.deepcopy(m) for m in self.members.values() if m.reservation_group_id == group_id),
            key=lambda m: (m.name, m.id),
        )
        return group

    async def list_group_ids_by_user(self, user_id: str) -> list[str]:
        return sorted(g.id for g in self.groups.values() if g.user_id == user_id)

    async def set_active(self, group_id: str, active: bool) -> None:
        self.groups[group_id].active = active

    async def link_receipt(self, group_id: str, receipt_id: str) -> None:
        self.groups[group_id].receipt_id = receipt_id

    async def get_reservation(self, reservation_id: str) -> Reservation | None:
        reservation = self.reservations.get(reservation_id)
        return copy.deepcopy(reservation) if reservation else None

    async def update_reservation(self, reservation: Reservation) -> None:
        if reservation.id not in self.reservations:
            raise ValueError("Reservation not found")
        self.reservations[reservation.id] = copy.deepcopy(reservation)

    async def deactivate_members(self, group_id: str) -> int:
        changed = 0
        for member in self.members.values():
            if member.reservation_group_id == group_id and member.active:
                member.deactivate()
                changed += 1
        return changed
