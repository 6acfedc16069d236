"""DTOs (Data Transfer Objects) de la capa de aplicación."""

from experiencias_api.application.dtos.reservation_group_dto import (
    MemberDTO,
    ReservationChangesDTO,
    ReservationDTO,
)
from experiencias_api.application.dtos.status_dto import HistoryEntryDTO, SubjectStatusDTO

__all__ = [
    "HistoryEntryDTO",
    "MemberDTO",
    "ReservationChangesDTO",
    "ReservationDTO",
    "SubjectStatusDTO",
]
