from experiencias_api.application.dtos.reservation_group_dto import MemberDTO
from experiencias_api.application.interfaces.reservation_group_repo import ReservationGroupRepo
from experiencias_api.application.interfaces.transaction_manager import TransactionManager
from experiencias_api.application.interfaces.uuid_generator import UUIDGenerator
from experiencias_api.application.services.workflow_engine import WorkflowEngine
from experiencias_api.application.use_cases.get_reservation_group import load_owned_group
from experiencias_api.domain.entities.request_event import RequestType, ReservationGroupRef
from experiencias_api.domain.entities.reservation_group import Member, ReservationGroup
from experiencias_api.domain.errors import ValidationError


class RegisterMembersUseCase:
    """Reemplaza la lista de participantes del grupo y agrega PEOPLE_SENT."""

    def __init__(
        self,
        reservation_repo: ReservationGroupRepo,
        engine: WorkflowEngine,
        transaction_manager: TransactionManager,
        uuid_generator: UUIDGenerator,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._engine = engine
        self._transaction_manager = transaction_manager
        self._uuid_generator = uuid_generator

    async def execute(
        self,
        reservation_group_id: str,
        actor_id: str,
        members: list[MemberDTO],
    ) -> ReservationGroup:
        if not members:
            raise ValidationError("at least one member is required")

        async with self._transaction_manager.start():
            await load_owned_group(self._reservation_repo, reservation_group_id, actor_id)
            await self._reservation_repo.deactivate_members(reservation_group_id)

            for item in members:
                await self._reservation_repo.add_member(
                    Member(
                        id=self._uuid_generator.generate_uuid(),
                        reservation_group_id=reservation_group_id,
                        name=item.name,
                        document=item.document,
                        gender=item.gender,
                        phone=item.phone,
                        birth_date=item.birth_date,
                    )
                )

            await self._engine.append(
                ReservationGroupRef(reservation_group_id), RequestType.PEOPLE_SENT, actor_id
            )
            return await self._reservation_repo.get_group(reservation_group_id)
