"""Value Object DateRange - periodo de una reserva de experiencia."""

from dataclasses import dataclass
from datetime import datetime

from experiencias_api.domain.errors import InvalidDateRangeError


@dataclass(frozen=True)
class DateRange:
    """
    Value Object inmutable que representa el periodo de una reserva.

    A diferencia de un alquiler, una experiencia puede empezar y terminar
    el mismo instante (eventos de un día), por eso sólo se exige
    start <= end. Ambos extremos deben llevar zona horaria.

    Attributes:
        start: Fecha/hora de inicio.
        end: Fecha/hora de fin.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start.tzinfo is None or self.end.tzinfo is None:
            raise InvalidDateRangeError(
                f"startDate and endDate must include a timezone: {self.start}, {self.end}"
            )
        if self.start > self.end:
            raise InvalidDateRangeError(
                f"startDate must not be after endDate: {self.start} > {self.end}"
            )

    @classmethod
    def spanning(cls, ranges: list["DateRange"]) -> "DateRange | None":
        """Menor inicio y mayor fin de varios rangos; None si no hay ninguno."""
        if not ranges:
            return None
        return cls(start=min(r.start for r in ranges), end=max(r.end for r in ranges))

    def __str__(self) -> str:
        return f"{self.start.isoformat()} -> {self.end.isoformat()}"
