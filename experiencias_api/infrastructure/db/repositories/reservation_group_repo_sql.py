from typing import Any

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from experiencias_api.application.interfaces.reservation_group_repo import ReservationGroupRepo
from experiencias_api.domain.entities.reservation_group import (
    Member,
    Reservation,
    ReservationGroup,
)
from experiencias_api.infrastructure.db.tables import members, reservation_groups, reservations


def _row_to_reservation(row: Any) -> Reservation:
    return Reservation(
        id=row["id"],
        reservation_group_id=row["reservation_group_id"],
        user_id=row["user_id"],
        experience_id=row["experience_id"],
        start_date=row["start_date"],
        end_date=row["end_date"],
        price=row["price"],
        members_count=row["members_count"],
        active=bool(row["active"]),
    )


def _row_to_member(row: Any) -> Member:
    return Member(
        id=row["id"],
        reservation_group_id=row["reservation_group_id"],
        name=row["name"],
        document=row["document"],
        gender=row["gender"],
        phone=row["phone"],
        birth_date=row["birth_date"],
        active=bool(row["active"]),
    )


class ReservationGroupRepoSQL(ReservationGroupRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_group(self, group: ReservationGroup) -> None:
        stmt = insert(reservation_groups).values(
            id=group.id,
            user_id=group.user_id,
            notes=group.notes,
            active=group.active,
            receipt_id=group.receipt_id,
            created_at=group.created_at,
        )
        await self._session.execute(stmt)

    async def add_reservation(self, reservation: Reservation) -> None:
        stmt = insert(reservations).values(
            id=reservation.id,
            reservation_group_id=reservation.reservation_group_id,
            user_id=reservation.user_id,
            experience_id=reservation.experience_id,
            start_date=reservation.start_date,
            end_date=reservation.end_date,
            price=reservation.price,
            members_count=reservation.members_count,
            active=reservation.active,
        )
        await self._session.execute(stmt)

    async def add_member(self, member: Member) -> None:
        stmt = insert(members).values(
            id=member.id,
            reservation_group_id=member.reservation_group_id,
            name=member.name,
            document=member.document,
            gender=member.gender,
            phone=member.phone,
            birth_date=member.birth_date,
            active=member.active,
        )
        await self._session.execute(stmt)

    async def get_group(self, group_id: str) -> ReservationGroup | None:
        stmt = select(reservation_groups).where(reservation_groups.c.id == group_id).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None

        reservation_rows = await self._session.execute(
            select(reservations)
            .where(reservations.c.reservation_group_id == group_id)
            .order_by(reservations.c.start_date, reservations.c.id)
        )
        member_rows = await self._session.execute(
            select(members)
            .where(members.c.reservation_group_id == group_id)
            .order_by(members.c.name, members.c.id)
        )
        return ReservationGroup(
            id=row["id"],
            user_id=row["user_id"],
            notes=row["notes"],
            active=bool(row["active"]),
            receipt_id=row["receipt_id"],
            created_at=row["created_at"],
            reservations=[_row_to_reservation(r) for r in reservation_rows.mappings()],
            members=[_row_to_member(m) for m in member_rows.mappings()],
        )

    async def list_group_ids_by_user(self, user_id: str) -> list[str]:
        stmt = (
            select(reservation_groups.c.id)
            .where(reservation_groups.c.user_id == user_id)
            .order_by(reservation_groups.c.id)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def set_active(self, group_id: str, active: bool) -> None:
        stmt = (
            update(reservation_groups)
            .where(reservation_groups.c.id == group_id)
            .values(active=active)
        )
        await self._session.execute(stmt)

    async def link_receipt(self, group_id: str, receipt_id: str) -> None:
        stmt = (
            update(reservation_groups)
            .where(reservation_groups.c.id == group_id)
            .values(receipt_id=receipt_id)
        )
        await self._session.execute(stmt)

    async def get_reservation(self, reservation_id: str) -> Reservation | None:
        stmt = select(reservations).where(reservations.c.id == reservation_id).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return _row_to_reservation(row)

    async def update_reservation(self, reservation: Reservation) -> None:
        stmt = (
            update(reservations)
            .where(reservations.c.id == reservation.id)
            .values(
                experience_id=reservation.experience_id,
                start_date=reservation.start_date,
                end_date=reservation.end_date,
                price=reservation.price,
                members_count=reservation.members_count,
                active=reservation.active,
            )
        )
        await self._session.execute(stmt)

    async def deactivate_members(self, group_id: str) -> int:
        stmt = (
            update(members)
            .where(members.c.reservation_group_id == group_id, members.c.active.is_(True))
            .values(active=False, document=None)
        )
        result = await self._session.execute(stmt)
        return result.rowcount
