"""Ledger de eventos con numeración por sujeto y proyección de estado."""

import logging
from collections.abc import AsyncIterator

from experiencias_api.application.interfaces.clock import Clock
from experiencias_api.application.interfaces.request_ledger import RequestLedger
from experiencias_api.application.interfaces.subject_status_repo import (
    SubjectStatusRecord,
    SubjectStatusRepo,
)
from experiencias_api.application.interfaces.uuid_generator import UUIDGenerator
from experiencias_api.domain.entities.request_event import RequestEvent, RequestType, Subject
from experiencias_api.domain.errors import ConcurrentTransitionError

logger = logging.getLogger(__name__)


class EventLedger:
    """
    Fachada del ledger usada por el motor.

    Cada append escribe el evento con `sequence = version + 1` y avanza la
    proyección con un UPDATE condicional; ambas escrituras ocurren dentro
    de la transacción del llamador.
    """

    def __init__(
        self,
        request_ledger: RequestLedger,
        status_repo: SubjectStatusRepo,
        clock: Clock,
        uuid_generator: UUIDGenerator,
    ) -> None:
        self._request_ledger = request_ledger
        self._status_repo = status_repo
        self._clock = clock
        self._uuid_generator = uuid_generator

    async def append(
        self,
        subject: Subject,
        request_type: RequestType,
        actor_id: str,
        description: str | None = None,
        file_url: str | None = None,
        expected_version: int | None = None,
    ) -> RequestEvent:
        projection = await self._status_repo.get(subject)
        current_version = projection.version if projection else 0

        if expected_version is not None and expected_version != current_version:
            raise ConcurrentTransitionError(subject.id, expected_version, current_version)

        created_at = self._clock.now()
        # created_at nunca retrocede dentro de un sujeto
        if projection and created_at < projection.updated_at:
            created_at = projection.updated_at

        event = RequestEvent(
            id=self._uuid_generator.generate_uuid(),
            type=request_type,
            subject=subject,
            created_by_user_id=actor_id,
            created_at=created_at,
            sequence=current_version + 1,
            description=description,
            file_url=file_url,
        )
        await self._request_ledger.append(event)

        if projection is None:
            await self._status_repo.create(
                SubjectStatusRecord(
                    subject_kind=subject.kind,
                    subject_id=subject.id,
                    status=request_type,
                    version=event.sequence,
                    created_at=created_at,
                    updated_at=created_at,
                    last_event_id=event.id,
                )
            )
        else:
            advanced = await self._status_repo.advance(
                subject,
                expected_version=current_version,
                status=request_type,
                last_event_id=event.id,
                updated_at=created_at,
            )
            if not advanced:
                raise ConcurrentTransitionError(subject.id, current_version)

        logger.info(
            "Request event appended",
            extra={
                "subject_kind": subject.kind.value,
                "subject_id": subject.id,
                "type": request_type.value,
                "sequence": event.sequence,
                "actor_id": actor_id,
            },
        )
        return event

    def history(self, subject: Subject) -> AsyncIterator[RequestEvent]:
        return self._request_ledger.history(subject)

    async def latest(self, subject: Subject) -> RequestEvent | None:
        return await self._request_ledger.latest(subject)
