"""Entidad User - subconjunto relevante para el workflow."""

from dataclasses import dataclass
from enum import Enum


class UserType(str, Enum):
    ROOT = "ROOT"
    ADMIN = "ADMIN"
    PROFESSOR = "PROFESSOR"
    GUEST = "GUEST"


@dataclass
class User:
    id: str
    name: str
    email: str | None = None
    user_type: UserType = UserType.GUEST
    verified: bool = False

    @property
    def is_admin(self) -> bool:
        return self.user_type in (UserType.ADMIN, UserType.ROOT)

    @property
    def is_professor(self) -> bool:
        return self.user_type == UserType.PROFESSOR
