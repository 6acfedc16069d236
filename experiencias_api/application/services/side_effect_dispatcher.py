"""
Despachador de efectos secundarios del workflow.

Reacciona a pares (sujeto, tipo de evento) creando comprobantes,
verificando profesores y preparando notificaciones por correo. Es el
único escritor de comprobantes y el único que modifica `verified`.
"""

import logging
from dataclasses import dataclass
from typing import Any

from experiencias_api.application.interfaces.clock import Clock
from experiencias_api.application.interfaces.idempotency_repo import (
    IdempotencyRecord,
    IdempotencyRepo,
)
from experiencias_api.application.interfaces.mail_sender import MailSender
from experiencias_api.application.interfaces.receipt_repo import ReceiptRepo
from experiencias_api.application.interfaces.reservation_group_repo import ReservationGroupRepo
from experiencias_api.application.interfaces.user_repo import UserRepo
from experiencias_api.application.interfaces.uuid_generator import UUIDGenerator
from experiencias_api.domain.entities.receipt import Receipt
from experiencias_api.domain.entities.request_event import RequestEvent, RequestType
from experiencias_api.domain.errors import (
    DuplicateSideEffectError,
    MailDeliveryError,
    MissingPreconditionError,
    ReservationGroupNotFoundError,
)

logger = logging.getLogger(__name__)

SIDE_EFFECT_SCOPE = "SIDE_EFFECT"
STATUS_CHANGE_SUBJECT = "Atualização de Reserva"
STATUS_CHANGE_TEMPLATE = "change-status"

EFFECTFUL_TYPES = frozenset(
    {
        RequestType.PAYMENT_APPROVED,
        RequestType.DOCUMENT_APPROVED,
        RequestType.DOCUMENT_REJECTED,
    }
)


@dataclass(frozen=True)
class Notification:
    to_address: str
    subject: str
    template_name: str
    context: dict[str, Any]


def side_effect_key(event: RequestEvent, preceding: RequestEvent | None) -> str:
    """Clave de idempotencia: (sujeto, tipo, evento precedente)."""
    preceding_id = preceding.id if preceding else "none"
    return f"{event.subject.id}:{event.type.value}:{preceding_id}"


class SideEffectDispatcher:
    def __init__(
        self,
        reservation_repo: ReservationGroupRepo,
        receipt_repo: ReceiptRepo,
        user_repo: UserRepo,
        idempotency_repo: IdempotencyRepo,
        mail_sender: MailSender,
        clock: Clock,
        uuid_generator: UUIDGenerator,
        frontend_url: str,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._receipt_repo = receipt_repo
        self._user_repo = user_repo
        self._idempotency_repo = idempotency_repo
        self._mail_sender = mail_sender
        self._clock = clock
        self._uuid_generator = uuid_generator
        self._frontend_url = frontend_url.rstrip("/")

    async def dispatch(
        self, event: RequestEvent, preceding: RequestEvent | None
    ) -> list[Notification]:
        """
        Ejecuta los efectos del evento recién agregado.

        Corre dentro de la transacción del append: si una precondición
        falla la excepción revierte también el evento. Las notificaciones
        no se envían aquí; se devuelven para entregarlas con deliver().

        Args:
            event: Evento recién agregado.
            preceding: Evento inmediatamente anterior del mismo sujeto.

        Returns:
            Notificaciones pendientes de envío.

        Raises:
            MissingPreconditionError: Falta el evento que habilita el efecto.
            DuplicateSideEffectError: El efecto ya fue aplicado.
        """
        if event.type not in EFFECTFUL_TYPES:
            return []

        if event.type == RequestType.PAYMENT_APPROVED:
            self._require_pending_payment(preceding)
            await self._guard(event, preceding)
            return await self._approve_payment(event, preceding)

        self._require_pending_document(preceding)
        await self._guard(event, preceding)
        if event.type == RequestType.DOCUMENT_APPROVED:
            await self._verify_professor(event, preceding)
        return []

    async def deliver(self, notifications: list[Notification]) -> None:
        """Envía notificaciones en modo best-effort: las fallas sólo se registran."""
        for notification in notifications:
            reason = "mail sender reported failure"
            try:
                sent = await self._mail_sender.send(
                    to_address=notification.to_address,
                    subject=notification.subject,
                    template_name=notification.template_name,
                    context=notification.context,
                )
            except Exception as exc:
                sent, reason = False, str(exc)

            if not sent:
                failure = MailDeliveryError(notification.to_address, reason)
                logger.warning(
                    "Status change e-mail not delivered",
                    extra={
                        "to_address": notification.to_address,
                        "template": notification.template_name,
                        "error_code": failure.code,
                        "error": failure.message,
                    },
                )

    @staticmethod
    def _require_pending_payment(preceding: RequestEvent | None) -> None:
        if (
            preceding is None
            or preceding.type != RequestType.PAYMENT_SENT
            or not preceding.file_url
        ):
            raise MissingPreconditionError("no pending payment submission")

    @staticmethod
    def _require_pending_document(preceding: RequestEvent | None) -> None:
        if (
            preceding is None
            or preceding.type != RequestType.DOCUMENT_REQUESTED
            or not preceding.file_url
        ):
            raise MissingPreconditionError("no pending document submission")

    async def _guard(self, event: RequestEvent, preceding: RequestEvent | None) -> None:
        idem_key = side_effect_key(event, preceding)
        existing = await self._idempotency_repo.get(scope=SIDE_EFFECT_SCOPE, idem_key=idem_key)
        if existing:
            raise DuplicateSideEffectError(idem_key)
        await self._idempotency_repo.save(
            IdempotencyRecord(
                scope=SIDE_EFFECT_SCOPE,
                idem_key=idem_key,
                reference_event_id=event.id,
                result_json={"type": event.type.value, "subject_id": event.subject.id},
                created_at=event.created_at,
            )
        )

    async def _approve_payment(
        self, event: RequestEvent, preceding: RequestEvent
    ) -> list[Notification]:
        group = await self._reservation_repo.get_group(event.subject.id)
        if group is None:
            raise ReservationGroupNotFoundError(event.subject.id)

        receipt = Receipt.create_payment(
            receipt_id=self._uuid_generator.generate_uuid(),
            url=preceding.file_url,
            user_id=group.user_id,
            reservation_group_id=group.id,
            value=group.total_price,
            created_at=self._clock.now(),
        )
        await self._receipt_repo.create(receipt)
        await self._reservation_repo.link_receipt(group.id, receipt.id)
        logger.info(
            "Payment receipt created",
            extra={
                "receipt_id": receipt.id,
                "reservation_group_id": group.id,
                "value": str(receipt.value),
            },
        )

        owner = await self._user_repo.get_by_id(group.user_id)
        if owner is None or not owner.email:
            logger.warning(
                "Status change e-mail skipped: owner has no e-mail",
                extra={"reservation_group_id": group.id, "user_id": group.user_id},
            )
            return []

        return [
            Notification(
                to_address=owner.email,
                subject=STATUS_CHANGE_SUBJECT,
                template_name=STATUS_CHANGE_TEMPLATE,
                context={
                    "userName": owner.name,
                    "systemUrl": f"{self._frontend_url}/user/my-reservations",
                },
            )
        ]

    async def _verify_professor(self, event: RequestEvent, preceding: RequestEvent) -> None:
        professor_id = event.subject.id
        await self._user_repo.mark_verified(professor_id)
        receipt = Receipt.create_docency(
            receipt_id=self._uuid_generator.generate_uuid(),
            url=preceding.file_url,
            professor_id=professor_id,
            created_at=self._clock.now(),
        )
        await self._receipt_repo.create(receipt)
        logger.info(
            "Professor verified",
            extra={"professor_id": professor_id, "receipt_id": receipt.id},
        )
