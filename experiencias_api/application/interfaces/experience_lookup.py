from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ExperienceRecord:
    """Datos de la experiencia que el workflow necesita: id y precio vigente."""

    id: str
    price: Decimal


class ExperienceLookup:
    async def find_active_by_ids(self, ids: list[str]) -> list[ExperienceRecord]:
        """Subconjunto de `ids` que corresponde a experiencias activas."""
        raise NotImplementedError
