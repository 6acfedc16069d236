"""
Reintentos ante bloqueos transitorios de la base de datos.

Las transiciones de un mismo sujeto compiten por la fila de
`subject_status`; en MySQL eso puede terminar en deadlock (1213) o en
timeout de espera de lock (1205). Ambos se reintentan con backoff
exponencial. Los conflictos de versión (ConcurrentTransitionError) no se
reintentan: el cliente debe releer el estado.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.exc import DBAPIError, OperationalError

logger = logging.getLogger(__name__)

T = TypeVar("T")

MYSQL_DEADLOCK_ERROR = "1213"
MYSQL_LOCK_WAIT_TIMEOUT = "1205"
SQLITE_DATABASE_LOCKED = "database is locked"


def is_deadlock_error(error: Exception) -> bool:
    """True si el error es un bloqueo transitorio que vale la pena reintentar."""
    if isinstance(error, (OperationalError, DBAPIError)):
        error_str = str(error)
        return (
            MYSQL_DEADLOCK_ERROR in error_str
            or MYSQL_LOCK_WAIT_TIMEOUT in error_str
            or SQLITE_DATABASE_LOCKED in error_str
        )
    return False


async def retry_on_deadlock(
    func: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    base_delay: float = 0.1,
) -> T:
    """
    Ejecuta `func` reintentando ante deadlocks.

    Backoff: base_delay * (2 ** attempt).

    Args:
        func: Callable async sin argumentos.
        max_attempts: Intentos máximos (default: 3).
        base_delay: Espera base en segundos (default: 0.1).

    Raises:
        La excepción original si no es un deadlock o si se agotan los intentos.
    """
    for attempt in range(max_attempts):
        try:
            return await func()
        except Exception as e:
            if not is_deadlock_error(e):
                raise

            if attempt == max_attempts - 1:
                logger.error(
                    "Database deadlock persists after max retries",
                    extra={"attempts": max_attempts, "error": str(e)},
                )
                raise

            delay = base_delay * (2 ** attempt)
            logger.warning(
                "Database deadlock detected, retrying",
                extra={
                    "attempt": attempt + 1,
                    "max_attempts": max_attempts,
                    "retry_delay": delay,
                    "error": str(e),
                },
            )
            await asyncio.sleep(delay)

    raise RuntimeError("retry_on_deadlock called with max_attempts < 1")
