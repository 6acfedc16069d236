from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from experiencias_api.api.schemas.requests import AppendEventRequest, SubjectStatusResponse
from experiencias_api.api.schemas.reservation_groups import (
    CreateReservationGroupRequest,
    ReservationGroupResponse,
    UpdateReservationRequest,
)
from experiencias_api.application.dtos.status_dto import HistoryEntryDTO, SubjectStatusDTO
from experiencias_api.domain.entities.request_event import (
    ProfessorRef,
    RequestEvent,
    RequestType,
    ReservationGroupRef,
)
from experiencias_api.domain.entities.reservation_group import Reservation, ReservationGroup
from tests.conftest import group_payload

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def base_request_payload():
    return group_payload()


def test_create_group_request_valid(base_request_payload):
    req = CreateReservationGroupRequest(**base_request_payload)
    assert req.reservations[0].members_count == 2
    assert req.members[1].document is None

    dto = req.reservations[0].to_dto()
    assert dto.experience_id == "exp-trail"
    assert dto.start_date.tzinfo is not None


def test_create_group_request_rejects_zero_members_count(base_request_payload):
    base_request_payload["reservations"][0]["members_count"] = 0
    with pytest.raises(ValidationError):
        CreateReservationGroupRequest(**base_request_payload)


def test_create_group_request_rejects_blank_member_name(base_request_payload):
    base_request_payload["members"][0]["name"] = "   "
    with pytest.raises(ValidationError):
        CreateReservationGroupRequest(**base_request_payload)


def test_append_event_request_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        AppendEventRequest(type="EDITED", status="EDITED")
    with pytest.raises(ValidationError):
        AppendEventRequest(type="EDITED", expected_version=-1)


def test_update_reservation_request_needs_a_field():
    with pytest.raises(ValidationError):
        UpdateReservationRequest()

    dto = UpdateReservationRequest(price="12.50").to_dto()
    assert dto.price == Decimal("12.50")
    assert dto.experience_id is None


def test_group_response_serialization():
    created = RequestEvent(
        id="ev-1",
        type=RequestType.CREATED,
        subject=ReservationGroupRef("g-1"),
        created_by_user_id="guest-1",
        created_at=NOW,
        sequence=1,
    )
    group = ReservationGroup(
        id="g-1",
        user_id="guest-1",
        reservations=[
            Reservation(
                id="r-1",
                reservation_group_id="g-1",
                user_id="guest-1",
                experience_id="exp-trail",
                start_date=NOW,
                end_date=NOW,
                price=Decimal("100.00"),
                members_count=3,
            )
        ],
        history=[created],
    )

    serialized = ReservationGroupResponse.from_entity(group).model_dump()
    assert serialized["status"] == "CREATED"
    assert serialized["total_price"] == Decimal("300.00")
    assert serialized["history"][0]["reservation_group_id"] == "g-1"
    assert serialized["history"][0]["professor_id"] is None


def test_status_response_serialization():
    event = RequestEvent(
        id="ev-1",
        type=RequestType.DOCUMENT_REQUESTED,
        subject=ProfessorRef("prof-1"),
        created_by_user_id="prof-1",
        created_at=NOW,
        sequence=1,
        file_url="doc.pdf",
    )
    dto = SubjectStatusDTO(
        subject=event.subject,
        status=event.type,
        created_at=NOW,
        version=1,
        request_user_id="prof-1",
        history=[HistoryEntryDTO(event=event, is_sender=True, is_requester=True)],
    )

    serialized = SubjectStatusResponse.from_dto(dto).model_dump()
    assert serialized["subject_kind"] == "PROFESSOR"
    assert serialized["history"][0]["file_url"] == "doc.pdf"
    assert serialized["history"][0]["is_sender"] is True
