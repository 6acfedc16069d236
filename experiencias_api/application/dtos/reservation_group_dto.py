"""DTOs para grupos de reservas."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass
class MemberDTO:
    """DTO para un participante del grupo."""

    name: str
    document: str | None = None
    gender: str | None = None
    phone: str | None = None
    birth_date: date | None = None


@dataclass
class ReservationDTO:
    """DTO para una reserva dentro de un grupo nuevo.

    El precio no viaja en el DTO: se congela desde la experiencia al crear.
    """

    experience_id: str
    start_date: datetime
    end_date: datetime
    members_count: int = 1


@dataclass
class ReservationChangesDTO:
    """Cambios que un administrador puede aplicar a una reserva."""

    experience_id: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    price: Decimal | None = None

    def is_empty(self) -> bool:
        return (
            self.experience_id is None
            and self.start_date is None
            and self.end_date is None
            and self.price is None
        )
