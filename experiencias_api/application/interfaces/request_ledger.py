from collections.abc import AsyncIterator

from experiencias_api.domain.entities.request_event import RequestEvent, Subject


class RequestLedger:
    """Almacén append-only de eventos. Nunca actualiza ni borra filas."""

    async def append(self, event: RequestEvent) -> None:
        raise NotImplementedError

    def history(self, subject: Subject) -> AsyncIterator[RequestEvent]:
        """Eventos del sujeto en orden (created_at, sequence) ascendente.

        Cada llamada devuelve un iterador nuevo, por lo que la secuencia
        puede recorrerse de nuevo.
        """
        raise NotImplementedError

    async def latest(self, subject: Subject) -> RequestEvent | None:
        raise NotImplementedError
