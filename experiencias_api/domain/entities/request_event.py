"""Entidad RequestEvent - unidad inmutable del ledger de solicitudes."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import ClassVar, Union


class RequestType(str, Enum):
    """Tipos de evento del workflow (ambos vocabularios)."""

    # Grupo de reservas
    CREATED = "CREATED"
    EDITED = "EDITED"
    PEOPLE_REQUESTED = "PEOPLE_REQUESTED"
    PEOPLE_SENT = "PEOPLE_SENT"
    PAYMENT_REQUESTED = "PAYMENT_REQUESTED"
    PAYMENT_SENT = "PAYMENT_SENT"
    PAYMENT_APPROVED = "PAYMENT_APPROVED"
    PAYMENT_REJECTED = "PAYMENT_REJECTED"
    CANCELED_REQUESTED = "CANCELED_REQUESTED"
    CANCELED = "CANCELED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    # Profesor
    DOCUMENT_REQUESTED = "DOCUMENT_REQUESTED"
    DOCUMENT_APPROVED = "DOCUMENT_APPROVED"
    DOCUMENT_REJECTED = "DOCUMENT_REJECTED"


class SubjectKind(str, Enum):
    """Máquina de estados a la que pertenece un evento."""

    RESERVATION_GROUP = "RESERVATION_GROUP"
    PROFESSOR = "PROFESSOR"


@dataclass(frozen=True)
class ReservationGroupRef:
    """Referencia a un grupo de reservas como sujeto del ledger."""

    id: str
    kind: ClassVar[SubjectKind] = SubjectKind.RESERVATION_GROUP


@dataclass(frozen=True)
class ProfessorRef:
    """Referencia a un profesor como sujeto del ledger."""

    id: str
    kind: ClassVar[SubjectKind] = SubjectKind.PROFESSOR


Subject = Union[ReservationGroupRef, ProfessorRef]


def subject_from_columns(
    reservation_group_id: str | None, professor_id: str | None
) -> Subject:
    """Reconstruye el sujeto a partir de las dos FKs mutuamente excluyentes."""
    if bool(reservation_group_id) == bool(professor_id):
        raise ValueError("Exactly one of reservation_group_id or professor_id must be set")
    if reservation_group_id:
        return ReservationGroupRef(reservation_group_id)
    return ProfessorRef(professor_id)


@dataclass(frozen=True)
class RequestEvent:
    """
    Evento del ledger ("Request").

    Nunca se actualiza ni se borra. El sujeto determina la máquina de
    estados; `sequence` es el número de orden dentro del sujeto (1, 2, ...).
    """

    id: str
    type: RequestType
    subject: Subject
    created_by_user_id: str
    created_at: datetime
    sequence: int
    description: str | None = None
    file_url: str | None = None

    @property
    def reservation_group_id(self) -> str | None:
        return self.subject.id if isinstance(self.subject, ReservationGroupRef) else None

    @property
    def professor_id(self) -> str | None:
        return self.subject.id if isinstance(self.subject, ProfessorRef) else None
