from experiencias_api.application.services.workflow_engine import WorkflowEngine
from experiencias_api.domain.entities.request_event import ProfessorRef, RequestEvent, RequestType
from experiencias_api.domain.errors import ValidationError


class RequestProfessorVerificationUseCase:
    """Abre (o reabre) la verificación de un profesor con el documento subido."""

    def __init__(self, engine: WorkflowEngine) -> None:
        self._engine = engine

    async def execute(
        self,
        professor_id: str,
        actor_id: str,
        file_url: str,
        description: str | None = None,
    ) -> RequestEvent:
        if not file_url:
            raise ValidationError("fileUrl is required for document requests")
        return await self._engine.append(
            ProfessorRef(professor_id),
            RequestType.DOCUMENT_REQUESTED,
            actor_id,
            description=description,
            file_url=file_url,
        )
