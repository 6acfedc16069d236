from fastapi import APIRouter, Depends, status

from experiencias_api.api.dependencies import get_use_cases
from experiencias_api.api.deps import get_actor_id
from experiencias_api.api.schemas.requests import (
    AppendEventRequest,
    DocumentRequest,
    RequestEventResponse,
    SubjectStatusResponse,
)
from experiencias_api.domain.entities.request_event import ProfessorRef
from experiencias_api.infrastructure.db.retry import retry_on_deadlock

router = APIRouter(prefix="/professors")


@router.post(
    "/{professor_id}/documents",
    response_model=RequestEventResponse,
    status_code=status.HTTP_201_CREATED,
)
async def request_professor_verification(
    professor_id: str,
    payload: DocumentRequest,
    actor_id: str = Depends(get_actor_id),
    use_cases=Depends(get_use_cases),
) -> RequestEventResponse:
    event = await retry_on_deadlock(
        lambda: use_cases["request_professor_verification"].execute(
            professor_id=professor_id,
            actor_id=actor_id,
            file_url=payload.file_url,
            description=payload.description,
        )
    )
    return RequestEventResponse.from_entity(event)


@router.post(
    "/{professor_id}/events",
    response_model=RequestEventResponse,
    status_code=status.HTTP_201_CREATED,
)
async def append_professor_event(
    professor_id: str,
    payload: AppendEventRequest,
    actor_id: str = Depends(get_actor_id),
    use_cases=Depends(get_use_cases),
) -> RequestEventResponse:
    event = await retry_on_deadlock(
        lambda: use_cases["append_professor_event"].execute(
            professor_id=professor_id,
            request_type=payload.type,
            actor_id=actor_id,
            file_url=payload.file_url,
            description=payload.description,
            expected_version=payload.expected_version,
        )
    )
    return RequestEventResponse.from_entity(event)


@router.get("/{professor_id}/status", response_model=SubjectStatusResponse)
async def get_professor_status(
    professor_id: str,
    actor_id: str = Depends(get_actor_id),
    use_cases=Depends(get_use_cases),
) -> SubjectStatusResponse:
    result = await use_cases["get_subject_status"].execute(
        ProfessorRef(professor_id), viewer_id=actor_id
    )
    return SubjectStatusResponse.from_dto(result)


@router.get("/{professor_id}/requests/latest", response_model=RequestEventResponse)
async def get_latest_professor_request(
    professor_id: str,
    use_cases=Depends(get_use_cases),
) -> RequestEventResponse:
    event = await use_cases["get_latest_professor_request"].execute(professor_id=professor_id)
    return RequestEventResponse.from_entity(event)
