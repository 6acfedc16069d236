from fastapi import APIRouter, Depends, Query, status

from experiencias_api.api.dependencies import get_use_cases
from experiencias_api.api.deps import get_actor_id
from experiencias_api.api.schemas.requests import (
    AppendEventRequest,
    RequestEventResponse,
    SubjectStatusResponse,
)
from experiencias_api.api.schemas.reservation_groups import (
    CancelGroupRequest,
    CreateReservationGroupRequest,
    PaymentProofRequest,
    RegisterMembersRequest,
    ReservationGroupResponse,
)
from experiencias_api.domain.entities.request_event import ReservationGroupRef
from experiencias_api.infrastructure.db.retry import retry_on_deadlock

router = APIRouter(prefix="/reservation-groups")


@router.post(
    "",
    response_model=ReservationGroupResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_reservation_group(
    payload: CreateReservationGroupRequest,
    actor_id: str = Depends(get_actor_id),
    use_cases=Depends(get_use_cases),
) -> ReservationGroupResponse:
    group = await retry_on_deadlock(
        lambda: use_cases["create_reservation_group"].execute(
            user_id=actor_id,
            reservations=[r.to_dto() for r in payload.reservations],
            members=[m.to_dto() for m in payload.members],
            notes=payload.notes,
        )
    )
    return ReservationGroupResponse.from_entity(group)


@router.get("", response_model=list[ReservationGroupResponse])
async def list_reservation_groups(
    status_filter: str = Query(default="ALL", alias="status", max_length=32),
    actor_id: str = Depends(get_actor_id),
    use_cases=Depends(get_use_cases),
) -> list[ReservationGroupResponse]:
    groups = await use_cases["list_user_reservation_groups"].execute(
        user_id=actor_id, status_filter=status_filter
    )
    return [ReservationGroupResponse.from_entity(g) for g in groups]


@router.get("/{reservation_group_id}", response_model=ReservationGroupResponse)
async def get_reservation_group(
    reservation_group_id: str,
    actor_id: str = Depends(get_actor_id),
    use_cases=Depends(get_use_cases),
) -> ReservationGroupResponse:
    group = await use_cases["get_reservation_group"].execute(
        reservation_group_id=reservation_group_id, viewer_id=actor_id
    )
    return ReservationGroupResponse.from_entity(group)


@router.post(
    "/{reservation_group_id}/cancel",
    response_model=RequestEventResponse,
    status_code=status.HTTP_201_CREATED,
)
async def cancel_reservation_group(
    reservation_group_id: str,
    payload: CancelGroupRequest | None = None,
    actor_id: str = Depends(get_actor_id),
    use_cases=Depends(get_use_cases),
) -> RequestEventResponse:
    event = await retry_on_deadlock(
        lambda: use_cases["cancel_reservation_group"].execute(
            reservation_group_id=reservation_group_id,
            actor_id=actor_id,
            description=payload.description if payload else None,
        )
    )
    return RequestEventResponse.from_entity(event)


@router.post(
    "/{reservation_group_id}/members",
    response_model=ReservationGroupResponse,
    status_code=status.HTTP_200_OK,
)
async def register_members(
    reservation_group_id: str,
    payload: RegisterMembersRequest,
    actor_id: str = Depends(get_actor_id),
    use_cases=Depends(get_use_cases),
) -> ReservationGroupResponse:
    group = await retry_on_deadlock(
        lambda: use_cases["register_members"].execute(
            reservation_group_id=reservation_group_id,
            actor_id=actor_id,
            members=[m.to_dto() for m in payload.members],
        )
    )
    return ReservationGroupResponse.from_entity(group)


@router.post(
    "/{reservation_group_id}/payment-proof",
    response_model=RequestEventResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_payment_proof(
    reservation_group_id: str,
    payload: PaymentProofRequest,
    actor_id: str = Depends(get_actor_id),
    use_cases=Depends(get_use_cases),
) -> RequestEventResponse:
    event = await retry_on_deadlock(
        lambda: use_cases["submit_payment_proof"].execute(
            reservation_group_id=reservation_group_id,
            actor_id=actor_id,
            file_url=payload.file_url,
            description=payload.description,
        )
    )
    return RequestEventResponse.from_entity(event)


@router.post(
    "/{reservation_group_id}/events",
    response_model=RequestEventResponse,
    status_code=status.HTTP_201_CREATED,
)
async def append_reservation_event(
    reservation_group_id: str,
    payload: AppendEventRequest,
    actor_id: str = Depends(get_actor_id),
    use_cases=Depends(get_use_cases),
) -> RequestEventResponse:
    event = await retry_on_deadlock(
        lambda: use_cases["append_reservation_event"].execute(
            reservation_group_id=reservation_group_id,
            request_type=payload.type,
            actor_id=actor_id,
            description=payload.description,
            file_url=payload.file_url,
            expected_version=payload.expected_version,
        )
    )
    return RequestEventResponse.from_entity(event)


@router.get("/{reservation_group_id}/status", response_model=SubjectStatusResponse)
async def get_reservation_group_status(
    reservation_group_id: str,
    actor_id: str = Depends(get_actor_id),
    use_cases=Depends(get_use_cases),
) -> SubjectStatusResponse:
    result = await use_cases["get_subject_status"].execute(
        ReservationGroupRef(reservation_group_id), viewer_id=actor_id
    )
    return SubjectStatusResponse.from_dto(result)
