from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from experiencias_api.application.interfaces.user_repo import UserRepo
from experiencias_api.domain.entities.user import User, UserType
from experiencias_api.infrastructure.db.tables import users


class UserRepoSQL(UserRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, user_id: str) -> User | None:
        result = await self._session.execute(select(users).where(users.c.id == user_id).limit(1))
        row = result.mappings().first()
        if not row:
            return None
        return User(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            user_type=UserType(row["user_type"]),
            verified=bool(row["verified"]),
        )

    async def mark_verified(self, user_id: str) -> None:
        await self._session.execute(update(users).where(users.c.id == user_id).values(verified=True))
