from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from experiencias_api.application.dtos.status_dto import HistoryEntryDTO, SubjectStatusDTO
from experiencias_api.domain.entities.request_event import RequestEvent, RequestType


class AppendEventRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: RequestType
    description: str | None = None
    file_url: str | None = Field(default=None, max_length=500)
    expected_version: int | None = Field(default=None, ge=0)


class RequestEventResponse(BaseModel):
    id: str
    type: RequestType
    description: str | None
    file_url: str | None
    created_by_user_id: str
    created_at: datetime
    sequence: int
    reservation_group_id: str | None
    professor_id: str | None

    @classmethod
    def from_entity(cls, event: RequestEvent) -> "RequestEventResponse":
        return cls(
            id=event.id,
            type=event.type,
            description=event.description,
            file_url=event.file_url,
            created_by_user_id=event.created_by_user_id,
            created_at=event.created_at,
            sequence=event.sequence,
            reservation_group_id=event.reservation_group_id,
            professor_id=event.professor_id,
        )


class HistoryEntryResponse(RequestEventResponse):
    is_sender: bool
    is_requester: bool

    @classmethod
    def from_dto(cls, entry: HistoryEntryDTO) -> "HistoryEntryResponse":
        base = RequestEventResponse.from_entity(entry.event).model_dump()
        return cls(**base, is_sender=entry.is_sender, is_requester=entry.is_requester)


class SubjectStatusResponse(BaseModel):
    subject_kind: str
    subject_id: str
    status: RequestType
    created_at: datetime
    version: int
    request_user_id: str
    history: list[HistoryEntryResponse]

    @classmethod
    def from_dto(cls, dto: SubjectStatusDTO) -> "SubjectStatusResponse":
        return cls(
            subject_kind=dto.subject.kind.value,
            subject_id=dto.subject.id,
            status=dto.status,
            created_at=dto.created_at,
            version=dto.version,
            request_user_id=dto.request_user_id,
            history=[HistoryEntryResponse.from_dto(entry) for entry in dto.history],
        )


class DocumentRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    file_url: str = Field(min_length=1, max_length=500)
    description: str | None = None
