"""Interface Clock - Puerto para abstracción de tiempo."""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    """
    Puerto para abstracción del tiempo del sistema.

    El ledger ordena eventos por `created_at`, por eso los tests inyectan
    un reloj fake y avanzan el tiempo de forma explícita.
    """

    @abstractmethod
    def now(self) -> datetime:
        """
        Retorna la fecha/hora actual.

        Returns:
            datetime timezone-aware en UTC.
        """
        raise NotImplementedError


class SystemClock(Clock):
    """Implementación real que usa el reloj del sistema."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FakeClock(Clock):
    """
    Implementación fake para testing.

    Con `tick_seconds` cada llamada a now() avanza el reloj, lo que da
    timestamps estrictamente crecientes a eventos consecutivos.
    """

    def __init__(self, fixed_time: datetime | None = None, tick_seconds: int = 0):
        self._fixed_time = fixed_time or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        self._tick = timedelta(seconds=tick_seconds)

    def now(self) -> datetime:
        current = self._fixed_time
        self._fixed_time = self._fixed_time + self._tick
        return current

    def set_time(self, new_time: datetime) -> None:
        self._fixed_time = new_time
