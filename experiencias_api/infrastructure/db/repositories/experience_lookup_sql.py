from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from experiencias_api.application.interfaces.experience_lookup import (
    ExperienceLookup,
    ExperienceRecord,
)
from experiencias_api.infrastructure.db.tables import experiences


class ExperienceLookupSQL(ExperienceLookup):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_active_by_ids(self, ids: list[str]) -> list[ExperienceRecord]:
        if not ids:
            return []
        stmt = select(experiences.c.id, experiences.c.price).where(
            experiences.c.id.in_(ids),
            experiences.c.active.is_(True),
        )
        result = await self._session.execute(stmt)
        return [ExperienceRecord(id=row["id"], price=row["price"]) for row in result.mappings()]
