from decimal import Decimal

from experiencias_api.application.interfaces.experience_lookup import (
    ExperienceLookup,
    ExperienceRecord,
)


class InMemoryExperienceLookup(ExperienceLookup):
    def __init__(self) -> None:
        self.experiences: dict[str, tuple[Decimal, bool]] = {}

    def add(self, experience_id: str, price: Decimal | int | str, active: bool = True) -> None:
        self.experiences[experience_id] = (Decimal(str(price)), active)

    async def find_active_by_ids(self, ids: list[str]) -> list[ExperienceRecord]:
        found = []
        for experience_id in ids:
            entry = self.experiences.get(experience_id)
            if entry and entry[1]:
                found.append(ExperienceRecord(id=experience_id, price=entry[0]))
        return found
