from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from experiencias_api.application.interfaces.transaction_manager import TransactionManager
from experiencias_api.infrastructure.in_memory.store import InMemoryStore


class InMemoryTransactionManager(TransactionManager):
    """
    Transacciones sobre repositorios in-memory.

    El bloque externo fotografía todos los stores registrados y los
    restaura si se lanza una excepción; los bloques anidados se unen a él.
    """

    def __init__(self, *stores: InMemoryStore) -> None:
        self._stores = list(stores)
        self._depth = 0

    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        if self._depth:
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
            return

        snapshots = [(store, store.snapshot()) for store in self._stores]
        self._depth = 1
        try:
            yield
        except BaseException:
            for store, state in snapshots:
                store.restore(state)
            raise
        finally:
            self._depth = 0
