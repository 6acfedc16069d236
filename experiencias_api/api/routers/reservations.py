from fastapi import APIRouter, Depends, Response, status

from experiencias_api.api.dependencies import get_use_cases
from experiencias_api.api.deps import get_actor_id
from experiencias_api.api.schemas.reservation_groups import (
    ReservationResponse,
    UpdateReservationRequest,
)
from experiencias_api.infrastructure.db.retry import retry_on_deadlock

router = APIRouter(prefix="/reservations")


@router.patch("/{reservation_id}", response_model=ReservationResponse)
async def update_reservation(
    reservation_id: str,
    payload: UpdateReservationRequest,
    actor_id: str = Depends(get_actor_id),
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    reservation = await retry_on_deadlock(
        lambda: use_cases["update_reservation"].execute(
            reservation_id=reservation_id,
            actor_id=actor_id,
            changes=payload.to_dto(),
        )
    )
    return ReservationResponse.from_entity(reservation)


@router.delete("/{reservation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_reservation(
    reservation_id: str,
    actor_id: str = Depends(get_actor_id),
    use_cases=Depends(get_use_cases),
) -> Response:
    await retry_on_deadlock(
        lambda: use_cases["remove_reservation"].execute(
            reservation_id=reservation_id, actor_id=actor_id
        )
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
