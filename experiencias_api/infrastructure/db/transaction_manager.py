from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from experiencias_api.application.interfaces.transaction_manager import TransactionManager


class SQLAlchemyTransactionManager(TransactionManager):
    """
    Unidad de trabajo sobre una AsyncSession por request.

    Los start() anidados se unen al bloque externo. El bloque externo
    confirma al salir y revierte ante cualquier excepción, también cuando
    lecturas previas ya abrieron la transacción por autobegin.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
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

        self._depth = 1
        try:
            if not self._session.in_transaction():
                async with self._session.begin():
                    yield
                return
            try:
                yield
            except BaseException:
                await self._session.rollback()
                raise
            await self._session.commit()
        finally:
            self._depth = 0
