from experiencias_api.application.services.workflow_engine import WorkflowEngine
from experiencias_api.domain.entities.request_event import ProfessorRef, RequestEvent, RequestType


class AppendProfessorEventUseCase:
    def __init__(self, engine: WorkflowEngine) -> None:
        self._engine = engine

    async def execute(
        self,
        professor_id: str,
        request_type: RequestType,
        actor_id: str,
        file_url: str | None = None,
        description: str | None = None,
        expected_version: int | None = None,
    ) -> RequestEvent:
        """Agrega un evento del vocabulario de profesor.

        En DOCUMENT_APPROVED / DOCUMENT_REJECTED sin `file_url` el evento
        hereda la URL del documento pendiente.
        """
        return await self._engine.append(
            ProfessorRef(professor_id),
            request_type,
            actor_id,
            description=description,
            file_url=file_url,
            expected_version=expected_version,
        )
