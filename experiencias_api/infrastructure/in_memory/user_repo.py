from dataclasses import replace

from experiencias_api.application.interfaces.user_repo import UserRepo
from experiencias_api.domain.entities.user import User
from experiencias_api.infrastructure.in_memory.store import InMemoryStore


class InMemoryUserRepo(InMemoryStore, UserRepo):
    def __init__(self, users: list[User] | None = None) -> None:
        self.users: dict[str, User] = {u.id: replace(u) for u in users or []}

    def add(self, user: User) -> None:
        self.users[user.id] = replace(user)

    async def get_by_id(self, user_id: str) -> User | None:
        user = self.users.get(user_id)
        return replace(user) if user else None

    async def mark_verified(self, user_id: str) -> None:
        self.users[user_id].verified = True
