from functools import lru_cache
from typing import Any

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from experiencias_api.api.deps import AsyncSessionLocal
from experiencias_api.application.interfaces.clock import Clock, SystemClock
from experiencias_api.application.interfaces.mail_sender import MailSender
from experiencias_api.application.interfaces.uuid_generator import RealUUIDGenerator, UUIDGenerator
from experiencias_api.application.services.ledger import EventLedger
from experiencias_api.application.services.side_effect_dispatcher import SideEffectDispatcher
from experiencias_api.application.services.status_projector import StatusProjector
from experiencias_api.application.services.workflow_engine import WorkflowEngine
from experiencias_api.application.use_cases.append_professor_event import AppendProfessorEventUseCase
from experiencias_api.application.use_cases.append_reservation_event import (
    AppendReservationEventUseCase,
)
from experiencias_api.application.use_cases.cancel_reservation_group import (
    CancelReservationGroupUseCase,
)
from experiencias_api.application.use_cases.create_reservation_group import (
    CreateReservationGroupUseCase,
)
from experiencias_api.application.use_cases.get_latest_professor_request import (
    GetLatestProfessorRequestUseCase,
)
from experiencias_api.application.use_cases.get_reservation_group import GetReservationGroupUseCase
from experiencias_api.application.use_cases.get_subject_status import GetSubjectStatusUseCase
from experiencias_api.application.use_cases.list_user_reservation_groups import (
    ListUserReservationGroupsUseCase,
)
from experiencias_api.application.use_cases.register_members import RegisterMembersUseCase
from experiencias_api.application.use_cases.remove_reservation import RemoveReservationUseCase
from experiencias_api.application.use_cases.request_professor_verification import (
    RequestProfessorVerificationUseCase,
)
from experiencias_api.application.use_cases.submit_payment_proof import SubmitPaymentProofUseCase
from experiencias_api.application.use_cases.update_reservation import UpdateReservationUseCase
from experiencias_api.config import Settings, get_settings
from experiencias_api.infrastructure.db.repositories.experience_lookup_sql import (
    ExperienceLookupSQL,
)
from experiencias_api.infrastructure.db.repositories.idempotency_repo_sql import IdempotencyRepoSQL
from experiencias_api.infrastructure.db.repositories.receipt_repo_sql import ReceiptRepoSQL
from experiencias_api.infrastructure.db.repositories.request_ledger_sql import RequestLedgerSQL
from experiencias_api.infrastructure.db.repositories.reservation_group_repo_sql import (
    ReservationGroupRepoSQL,
)
from experiencias_api.infrastructure.db.repositories.subject_status_repo_sql import (
    SubjectStatusRepoSQL,
)
from experiencias_api.infrastructure.db.repositories.user_repo_sql import UserRepoSQL
from experiencias_api.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from experiencias_api.infrastructure.in_memory import (
    InMemoryExperienceLookup,
    InMemoryIdempotencyRepo,
    InMemoryReceiptRepo,
    InMemoryRequestLedger,
    InMemoryReservationGroupRepo,
    InMemorySubjectStatusRepo,
    InMemoryTransactionManager,
    InMemoryUserRepo,
)
from experiencias_api.infrastructure.mail.http_mail_sender import HTTPMailSender
from experiencias_api.infrastructure.mail.in_memory_mail_sender import InMemoryMailSender


async def get_session(settings: Settings = Depends(get_settings)) -> AsyncSession | None:
    if settings.use_in_memory:
        yield None
        return
    async with AsyncSessionLocal() as session:
        yield session


@lru_cache(maxsize=1)
def get_mail_sender() -> MailSender:
    settings = get_settings()
    if settings.mail_api_url:
        return HTTPMailSender(
            api_url=settings.mail_api_url,
            api_key=settings.mail_api_key,
            from_address=settings.mail_from,
            from_name=settings.mail_from_name,
            timeout_seconds=settings.mail_timeout_seconds,
        )
    return InMemoryMailSender()


def build_in_memory_repositories() -> dict[str, Any]:
    request_ledger = InMemoryRequestLedger()
    status_repo = InMemorySubjectStatusRepo()
    reservation_repo = InMemoryReservationGroupRepo()
    receipt_repo = InMemoryReceiptRepo()
    user_repo = InMemoryUserRepo()
    idempotency_repo = InMemoryIdempotencyRepo()
    tx_manager = InMemoryTransactionManager(
        request_ledger,
        status_repo,
        reservation_repo,
        receipt_repo,
        user_repo,
        idempotency_repo,
    )
    return {
        "request_ledger": request_ledger,
        "status_repo": status_repo,
        "reservation_repo": reservation_repo,
        "receipt_repo": receipt_repo,
        "user_repo": user_repo,
        "idempotency_repo": idempotency_repo,
        "experience_lookup": InMemoryExperienceLookup(),
        "tx_manager": tx_manager,
    }


@lru_cache(maxsize=1)
def _in_memory_bundle() -> dict[str, Any]:
    return build_in_memory_repositories()


def build_use_cases(
    repos: dict[str, Any],
    settings: Settings,
    mail_sender: MailSender,
    clock: Clock | None = None,
    uuid_generator: UUIDGenerator | None = None,
) -> dict[str, Any]:
    """Arma motor y casos de uso sobre un juego de repositorios (SQL o in-memory)."""
    clock = clock or SystemClock()
    uuid_generator = uuid_generator or RealUUIDGenerator()

    ledger = EventLedger(
        request_ledger=repos["request_ledger"],
        status_repo=repos["status_repo"],
        clock=clock,
        uuid_generator=uuid_generator,
    )
    projector = StatusProjector(
        request_ledger=repos["request_ledger"], status_repo=repos["status_repo"]
    )
    dispatcher = SideEffectDispatcher(
        reservation_repo=repos["reservation_repo"],
        receipt_repo=repos["receipt_repo"],
        user_repo=repos["user_repo"],
        idempotency_repo=repos["idempotency_repo"],
        mail_sender=mail_sender,
        clock=clock,
        uuid_generator=uuid_generator,
        frontend_url=settings.frontend_url,
    )
    engine = WorkflowEngine(
        ledger=ledger,
        projector=projector,
        dispatcher=dispatcher,
        reservation_repo=repos["reservation_repo"],
        user_repo=repos["user_repo"],
        transaction_manager=repos["tx_manager"],
        strict_transitions=settings.strict_transitions,
    )

    return {
        "append_reservation_event": AppendReservationEventUseCase(engine=engine),
        "append_professor_event": AppendProfessorEventUseCase(engine=engine),
        "request_professor_verification": RequestProfessorVerificationUseCase(engine=engine),
        "get_subject_status": GetSubjectStatusUseCase(
            projector=projector,
            reservation_repo=repos["reservation_repo"],
            user_repo=repos["user_repo"],
        ),
        "get_latest_professor_request": GetLatestProfessorRequestUseCase(
            request_ledger=repos["request_ledger"]
        ),
        "get_reservation_group": GetReservationGroupUseCase(
            reservation_repo=repos["reservation_repo"],
            request_ledger=repos["request_ledger"],
            user_repo=repos["user_repo"],
        ),
        "list_user_reservation_groups": ListUserReservationGroupsUseCase(
            reservation_repo=repos["reservation_repo"],
            status_repo=repos["status_repo"],
            request_ledger=repos["request_ledger"],
        ),
        "create_reservation_group": CreateReservationGroupUseCase(
            reservation_repo=repos["reservation_repo"],
            experience_lookup=repos["experience_lookup"],
            engine=engine,
            ledger=ledger,
            transaction_manager=repos["tx_manager"],
            clock=clock,
            uuid_generator=uuid_generator,
        ),
        "cancel_reservation_group": CancelReservationGroupUseCase(
            reservation_repo=repos["reservation_repo"],
            projector=projector,
            engine=engine,
        ),
        "register_members": RegisterMembersUseCase(
            reservation_repo=repos["reservation_repo"],
            engine=engine,
            transaction_manager=repos["tx_manager"],
            uuid_generator=uuid_generator,
        ),
        "submit_payment_proof": SubmitPaymentProofUseCase(
            reservation_repo=repos["reservation_repo"], engine=engine
        ),
        "update_reservation": UpdateReservationUseCase(
            reservation_repo=repos["reservation_repo"],
            experience_lookup=repos["experience_lookup"],
            user_repo=repos["user_repo"],
            engine=engine,
            transaction_manager=repos["tx_manager"],
        ),
        "remove_reservation": RemoveReservationUseCase(
            reservation_repo=repos["reservation_repo"],
            user_repo=repos["user_repo"],
            transaction_manager=repos["tx_manager"],
        ),
    }


def sql_repositories(session: AsyncSession) -> dict[str, Any]:
    return {
        "request_ledger": RequestLedgerSQL(session),
        "status_repo": SubjectStatusRepoSQL(session),
        "reservation_repo": ReservationGroupRepoSQL(session),
        "receipt_repo": ReceiptRepoSQL(session),
        "user_repo": UserRepoSQL(session),
        "idempotency_repo": IdempotencyRepoSQL(session),
        "experience_lookup": ExperienceLookupSQL(session),
        "tx_manager": SQLAlchemyTransactionManager(session),
    }


def get_use_cases(
    settings: Settings = Depends(get_settings),
    session: AsyncSession | None = Depends(get_session),
    mail_sender: MailSender = Depends(get_mail_sender),
) -> dict[str, Any]:
    if settings.use_in_memory:
        return build_use_cases(_in_memory_bundle(), settings, mail_sender)

    if not session:
        raise RuntimeError("DB session not available")
    return build_use_cases(sql_repositories(session), settings, mail_sender)
