from dataclasses import replace
from datetime import datetime

from experiencias_api.application.interfaces.subject_status_repo import (
    SubjectStatusRecord,
    SubjectStatusRepo,
)
from experiencias_api.domain.entities.request_event import RequestType, Subject, SubjectKind
from experiencias_api.domain.errors import ConcurrentTransitionError
from experiencias_api.infrastructure.in_memory.store import InMemoryStore


class InMemorySubjectStatusRepo(InMemoryStore, SubjectStatusRepo):
    def __init__(self) -> None:
        self.records: dict[tuple[SubjectKind, str], SubjectStatusRecord] = {}

    async def get(self, subject: Subject) -> SubjectStatusRecord | None:
        record = self.records.get((subject.kind, subject.id))
        return replace(record) if record else None

    async def create(self, record: SubjectStatusRecord) -> None:
        key = (record.subject_kind, record.subject_id)
        if key in self.records:
            raise ConcurrentTransitionError(record.subject_id, 0)
        self.records[key] = replace(record)

    async def advance(
        self,
        subject: Subject,
        expected_version: int,
        status: RequestType,
        last_event_id: str,
        updated_at: datetime,
    ) -> bool:
        record = self.records.get((subject.kind, subject.id))
        if record is None or record.version != expected_version:
            return False
        record.status = status
        record.version += 1
        record.last_event_id = last_event_id
        record.updated_at = updated_at
        return True
