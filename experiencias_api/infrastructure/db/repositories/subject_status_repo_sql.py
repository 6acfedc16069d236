from datetime import datetime

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from experiencias_api.application.interfaces.subject_status_repo import (
    SubjectStatusRecord,
    SubjectStatusRepo,
)
from experiencias_api.domain.entities.request_event import RequestType, Subject, SubjectKind
from experiencias_api.domain.errors import ConcurrentTransitionError
from experiencias_api.infrastructure.db.tables import subject_status


class SubjectStatusRepoSQL(SubjectStatusRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, subject: Subject) -> SubjectStatusRecord | None:
        stmt = (
            select(subject_status)
            .where(
                subject_status.c.subject_kind == subject.kind.value,
                subject_status.c.subject_id == subject.id,
            )
            .limit(1)
        )
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return SubjectStatusRecord(
            subject_kind=SubjectKind(row["subject_kind"]),
            subject_id=row["subject_id"],
            status=RequestType(row["status"]),
            version=row["version"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            last_event_id=row["last_event_id"],
        )

    async def create(self, record: SubjectStatusRecord) -> None:
        stmt = insert(subject_status).values(
            subject_kind=record.subject_kind.value,
            subject_id=record.subject_id,
            status=record.status.value,
            version=record.version,
            created_at=record.created_at,
            updated_at=record.updated_at,
            last_event_id=record.last_event_id,
        )
        try:
            await self._session.execute(stmt)
        except IntegrityError as exc:
            raise ConcurrentTransitionError(record.subject_id, 0) from exc

    async def advance(
        self,
        subject: Subject,
        expected_version: int,
        status: RequestType,
        last_event_id: str,
        updated_at: datetime,
    ) -> bool:
        stmt = (
            update(subject_status)
            .where(
                subject_status.c.subject_kind == subject.kind.value,
                subject_status.c.subject_id == subject.id,
                subject_status.c.version == expected_version,
            )
            .values(
                status=status.value,
                version=subject_status.c.version + 1,
                last_event_id=last_event_id,
                updated_at=updated_at,
            )
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1
