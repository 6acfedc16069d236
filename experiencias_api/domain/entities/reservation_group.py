"""Agregado ReservationGroup - grupo, reservas y miembros."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from experiencias_api.domain.entities.request_event import RequestEvent
from experiencias_api.domain.value_objects.date_range import DateRange


@dataclass
class Member:
    """Participante nombrado del grupo (no necesariamente usuario del sistema)."""

    id: str
    reservation_group_id: str
    name: str
    document: str | None = None
    gender: str | None = None
    phone: str | None = None
    birth_date: date | None = None
    active: bool = True

    def deactivate(self) -> None:
        """Baja lógica: se anula el documento y se marca inactivo."""
        self.document = None
        self.active = False


@dataclass
class Reservation:
    """Reserva de una experiencia dentro de un grupo."""

    id: str
    reservation_group_id: str
    user_id: str
    experience_id: str
    start_date: datetime
    end_date: datetime
    price: Decimal
    members_count: int
    active: bool = True

    @property
    def date_range(self) -> DateRange:
        return DateRange(start=self.start_date, end=self.end_date)

    @property
    def total(self) -> Decimal:
        """Precio congelado multiplicado por la cantidad de personas."""
        return self.price * self.members_count


@dataclass
class ReservationGroup:
    """
    Agregado raíz de una solicitud de reserva.

    El historial de eventos vive en el ledger; aquí sólo se hidrata para
    lectura, el agregado nunca lo modifica.
    """

    id: str
    user_id: str
    notes: str | None = None
    active: bool = True
    receipt_id: str | None = None
    created_at: datetime | None = None

    reservations: list[Reservation] = field(default_factory=list)
    members: list[Member] = field(default_factory=list)
    history: list[RequestEvent] = field(default_factory=list)

    @property
    def active_reservations(self) -> list[Reservation]:
        return [r for r in self.reservations if r.active]

    @property
    def active_members(self) -> list[Member]:
        return [m for m in self.members if m.active]

    @property
    def total_price(self) -> Decimal:
        return sum((r.total for r in self.active_reservations), Decimal("0"))

    @property
    def date_range(self) -> DateRange | None:
        """Del primer inicio al último fin entre las reservas activas."""
        return DateRange.spanning([r.date_range for r in self.active_reservations])

    @property
    def status(self) -> str | None:
        return self.history[-1].type.value if self.history else None
