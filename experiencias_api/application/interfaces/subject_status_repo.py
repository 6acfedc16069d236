from dataclasses import dataclass
from datetime import datetime

from experiencias_api.domain.entities.request_event import (
    RequestType,
    Subject,
    SubjectKind,
)


@dataclass
class SubjectStatusRecord:
    """Proyección del estado actual de un sujeto.

    `version` coincide con el `sequence` del último evento y es el token
    de concurrencia optimista de las transiciones.
    """

    subject_kind: SubjectKind
    subject_id: str
    status: RequestType
    version: int
    created_at: datetime
    updated_at: datetime
    last_event_id: str


class SubjectStatusRepo:
    async def get(self, subject: Subject) -> SubjectStatusRecord | None:
        raise NotImplementedError

    async def create(self, record: SubjectStatusRecord) -> None:
        """Inserta la proyección inicial; falla si ya existe."""
        raise NotImplementedError

    async def advance(
        self,
        subject: Subject,
        expected_version: int,
        status: RequestType,
        last_event_id: str,
        updated_at: datetime,
    ) -> bool:
        """UPDATE condicional por versión. Retorna False si nadie fue actualizado."""
        raise NotImplementedError
