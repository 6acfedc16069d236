"""DTOs de lectura del estado de un sujeto."""

from dataclasses import dataclass, field
from datetime import datetime

from experiencias_api.domain.entities.request_event import RequestEvent, RequestType, Subject


@dataclass
class HistoryEntryDTO:
    """Evento del historial con banderas relativas a quien consulta."""

    event: RequestEvent
    is_sender: bool
    is_requester: bool


@dataclass
class SubjectStatusDTO:
    """Estado actual de un sujeto: último tipo, primer timestamp e historial."""

    subject: Subject
    status: RequestType
    created_at: datetime
    version: int
    request_user_id: str
    history: list[HistoryEntryDTO] = field(default_factory=list)
