import logging

from experiencias_api.application.dtos.reservation_group_dto import MemberDTO, ReservationDTO
from experiencias_api.application.interfaces.clock import Clock
from experiencias_api.application.interfaces.experience_lookup import ExperienceLookup
from experiencias_api.application.interfaces.reservation_group_repo import ReservationGroupRepo
from experiencias_api.application.interfaces.transaction_manager import TransactionManager
from experiencias_api.application.interfaces.uuid_generator import UUIDGenerator
from experiencias_api.application.services.ledger import EventLedger
from experiencias_api.application.services.workflow_engine import WorkflowEngine
from experiencias_api.application.use_cases.get_reservation_group import load_history
from experiencias_api.domain.entities.request_event import RequestType, ReservationGroupRef
from experiencias_api.domain.entities.reservation_group import (
    Member,
    Reservation,
    ReservationGroup,
)
from experiencias_api.domain.errors import InactiveExperienceError, ValidationError
from experiencias_api.domain.value_objects.date_range import DateRange


class CreateReservationGroupUseCase:
    """
    Único punto de creación de grupos de reservas.

    Todo o nada: si alguna experiencia no está activa no se escribe nada.
    El grupo nace con su evento CREATED, así que siempre tiene historial.
    """

    def __init__(
        self,
        reservation_repo: ReservationGroupRepo,
        experience_lookup: ExperienceLookup,
        engine: WorkflowEngine,
        ledger: EventLedger,
        transaction_manager: TransactionManager,
        clock: Clock,
        uuid_generator: UUIDGenerator,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._experience_lookup = experience_lookup
        self._engine = engine
        self._ledger = ledger
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._uuid_generator = uuid_generator
        self._logger = logging.getLogger(__name__)

    async def execute(
        self,
        user_id: str,
        reservations: list[ReservationDTO],
        members: list[MemberDTO],
        notes: str | None = None,
    ) -> ReservationGroup:
        if not reservations:
            raise ValidationError("at least one reservation is required")
        for item in reservations:
            DateRange(start=item.start_date, end=item.end_date)
            if item.members_count < 1:
                raise ValidationError("membersCount must be at least 1")

        requested_ids = sorted({item.experience_id for item in reservations})
        active = {
            experience.id: experience
            for experience in await self._experience_lookup.find_active_by_ids(requested_ids)
        }
        inactive_ids = [experience_id for experience_id in requested_ids if experience_id not in active]
        if inactive_ids:
            raise InactiveExperienceError(inactive_ids)

        group = ReservationGroup(
            id=self._uuid_generator.generate_uuid(),
            user_id=user_id,
            notes=notes,
            active=True,
            created_at=self._clock.now(),
        )

        async with self._transaction_manager.start():
            await self._reservation_repo.create_group(group)

            for item in members:
                member = Member(
                    id=self._uuid_generator.generate_uuid(),
                    reservation_group_id=group.id,
                    name=item.name,
                    document=item.document,
                    gender=item.gender,
                    phone=item.phone,
                    birth_date=item.birth_date,
                )
                await self._reservation_repo.add_member(member)

            for item in reservations:
                reservation = Reservation(
                    id=self._uuid_generator.generate_uuid(),
                    reservation_group_id=group.id,
                    user_id=user_id,
                    experience_id=item.experience_id,
                    start_date=item.start_date,
                    end_date=item.end_date,
                    price=active[item.experience_id].price,
                    members_count=item.members_count,
                )
                await self._reservation_repo.add_reservation(reservation)

            await self._engine.append(
                ReservationGroupRef(group.id), RequestType.CREATED, user_id
            )

            created = await self._reservation_repo.get_group(group.id)
            created.history = await load_history(self._ledger, group.id)

        self._logger.info(
            "Reservation group created",
            extra={
                "reservation_group_id": group.id,
                "user_id": user_id,
                "reservations": len(reservations),
                "members": len(members),
            },
        )
        return created
