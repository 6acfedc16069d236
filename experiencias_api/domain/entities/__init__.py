"""Entidades del dominio."""

from experiencias_api.domain.entities.receipt import Receipt, ReceiptStatus, ReceiptType
from experiencias_api.domain.entities.request_event import (
    ProfessorRef,
    RequestEvent,
    RequestType,
    ReservationGroupRef,
    Subject,
    SubjectKind,
    subject_from_columns,
)
from experiencias_api.domain.entities.reservation_group import (
    Member,
    Reservation,
    ReservationGroup,
)
from experiencias_api.domain.entities.user import User, UserType

__all__ = [
    "Member",
    "ProfessorRef",
    "Receipt",
    "ReceiptStatus",
    "ReceiptType",
    "RequestEvent",
    "RequestType",
    "Reservation",
    "ReservationGroup",
    "ReservationGroupRef",
    "Subject",
    "SubjectKind",
    "User",
    "UserType",
    "subject_from_columns",
]
