from collections.abc import AsyncIterator
from typing import Any

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from experiencias_api.application.interfaces.request_ledger import RequestLedger
from experiencias_api.domain.entities.request_event import (
    RequestEvent,
    RequestType,
    ReservationGroupRef,
    Subject,
    subject_from_columns,
)
from experiencias_api.domain.errors import ConcurrentTransitionError
from experiencias_api.infrastructure.db.tables import requests


def _subject_clause(subject: Subject):
    if isinstance(subject, ReservationGroupRef):
        return requests.c.reservation_group_id == subject.id
    return requests.c.professor_id == subject.id


def _row_to_event(row: Any) -> RequestEvent:
    return RequestEvent(
        id=row["id"],
        type=RequestType(row["type"]),
        subject=subject_from_columns(row["reservation_group_id"], row["professor_id"]),
        created_by_user_id=row["created_by_user_id"],
        created_at=row["created_at"],
        sequence=row["sequence"],
        description=row["description"],
        file_url=row["file_url"],
    )


class RequestLedgerSQL(RequestLedger):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def append(self, event: RequestEvent) -> None:
        stmt = insert(requests).values(
            id=event.id,
            type=event.type.value,
            description=event.description,
            file_url=event.file_url,
            created_by_user_id=event.created_by_user_id,
            created_at=event.created_at,
            sequence=event.sequence,
            reservation_group_id=event.reservation_group_id,
            professor_id=event.professor_id,
        )
        try:
            await self._session.execute(stmt)
        except IntegrityError as exc:
            # (sujeto, sequence) ya ocupado por otra transición
            raise ConcurrentTransitionError(event.subject.id, event.sequence - 1) from exc

    async def history(self, subject: Subject) -> AsyncIterator[RequestEvent]:
        stmt = (
            select(requests)
            .where(_subject_clause(subject))
            .order_by(requests.c.created_at, requests.c.sequence)
        )
        result = await self._session.execute(stmt)
        for row in result.mappings():
            yield _row_to_event(row)

    async def latest(self, subject: Subject) -> RequestEvent | None:
        stmt = (
            select(requests)
            .where(_subject_clause(subject))
            .order_by(requests.c.sequence.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return _row_to_event(row)
