import copy
from typing import Any


class InMemoryStore:
    """Base de los repositorios in-memory: su estado puede fotografiarse y restaurarse."""

    def snapshot(self) -> dict[str, Any]:
        return copy.deepcopy(self.__dict__)

    def restore(self, state: dict[str, Any]) -> None:
        self.__dict__.clear()
        self.__dict__.update(state)
