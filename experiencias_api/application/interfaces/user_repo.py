from experiencias_api.domain.entities.user import User


class UserRepo:
    async def get_by_id(self, user_id: str) -> User | None:
        raise NotImplementedError

    async def mark_verified(self, user_id: str) -> None:
        raise NotImplementedError
