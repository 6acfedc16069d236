"""
Tests del despachador de efectos secundarios.

El despachador se prueba aislado: los eventos se construyen a mano y los
repositorios son in-memory, sin pasar por el motor.
"""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from experiencias_api.application.services.side_effect_dispatcher import (
    SIDE_EFFECT_SCOPE,
    STATUS_CHANGE_SUBJECT,
    STATUS_CHANGE_TEMPLATE,
    Notification,
    SideEffectDispatcher,
    side_effect_key,
)
from experiencias_api.domain.entities.receipt import ReceiptType
from experiencias_api.domain.entities.request_event import (
    ProfessorRef,
    RequestEvent,
    RequestType,
    ReservationGroupRef,
)
from experiencias_api.domain.entities.reservation_group import Reservation, ReservationGroup
from experiencias_api.domain.errors import DuplicateSideEffectError, MissingPreconditionError
from tests.conftest import END, OTHER_USER_ID, OWNER_ID, PROFESSOR_ID, START

NOW = datetime(2024, 2, 1, 10, 0, tzinfo=timezone.utc)


def make_event(subject, request_type, sequence, event_id=None, file_url=None):
    return RequestEvent(
        id=event_id or f"ev-{sequence}",
        type=request_type,
        subject=subject,
        created_by_user_id="admin-1",
        created_at=NOW,
        sequence=sequence,
        file_url=file_url,
    )


async def seed_group(repos, group_id="g-1", owner_id=OWNER_ID):
    reservation_repo = repos["reservation_repo"]
    await reservation_repo.create_group(ReservationGroup(id=group_id, user_id=owner_id))
    await reservation_repo.add_reservation(
        Reservation(
            id=f"{group_id}-r1",
            reservation_group_id=group_id,
            user_id=owner_id,
            experience_id="exp-trail",
            start_date=START,
            end_date=END,
            price=Decimal("100.00"),
            members_count=2,
        )
    )
    return ReservationGroupRef(group_id)


@pytest.fixture
def dispatcher(repos, mail_sender, clock, uuid_generator):
    return SideEffectDispatcher(
        reservation_repo=repos["reservation_repo"],
        receipt_repo=repos["receipt_repo"],
        user_repo=repos["user_repo"],
        idempotency_repo=repos["idempotency_repo"],
        mail_sender=mail_sender,
        clock=clock,
        uuid_generator=uuid_generator,
        frontend_url="https://experiencias.test/",
    )


class TestPaymentApproval:
    @pytest.mark.asyncio
    async def test_creates_receipt_with_group_total(self, dispatcher, repos):
        subject = await seed_group(repos)
        sent = make_event(subject, RequestType.PAYMENT_SENT, 3, file_url="r.pdf")
        approved = make_event(subject, RequestType.PAYMENT_APPROVED, 4)

        notifications = await dispatcher.dispatch(approved, sent)

        [receipt] = await repos["receipt_repo"].list_by_user(OWNER_ID)
        assert receipt.type == ReceiptType.PAYMENT
        assert receipt.url == "r.pdf"
        assert receipt.value == Decimal("200.00")
        group = await repos["reservation_repo"].get_group("g-1")
        assert group.receipt_id == receipt.id

        assert notifications == [
            Notification(
                to_address="ana@example.com",
                subject=STATUS_CHANGE_SUBJECT,
                template_name=STATUS_CHANGE_TEMPLATE,
                context={
                    "userName": "Ana Souza",
                    "systemUrl": "https://experiencias.test/user/my-reservations",
                },
            )
        ]

    @pytest.mark.asyncio
    async def test_owner_without_email_gets_no_notification(self, dispatcher, repos):
        subject = await seed_group(repos, owner_id=OTHER_USER_ID)
        sent = make_event(subject, RequestType.PAYMENT_SENT, 2, file_url="r.pdf")

        notifications = await dispatcher.dispatch(
            make_event(subject, RequestType.PAYMENT_APPROVED, 3), sent
        )

        assert notifications == []
        assert len(await repos["receipt_repo"].list_by_user(OTHER_USER_ID)) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "preceding_type,file_url",
        [
            (None, None),
            (RequestType.CREATED, None),
            (RequestType.PAYMENT_SENT, None),
        ],
    )
    async def test_requires_pending_submission(self, dispatcher, repos, preceding_type, file_url):
        subject = await seed_group(repos)
        preceding = (
            make_event(subject, preceding_type, 1, file_url=file_url) if preceding_type else None
        )

        with pytest.raises(MissingPreconditionError, match="no pending payment submission"):
            await dispatcher.dispatch(make_event(subject, RequestType.PAYMENT_APPROVED, 2), preceding)

        assert repos["receipt_repo"].receipts == {}

    @pytest.mark.asyncio
    async def test_second_run_for_same_transition_is_rejected(self, dispatcher, repos):
        subject = await seed_group(repos)
        sent = make_event(subject, RequestType.PAYMENT_SENT, 2, file_url="r.pdf")
        approved = make_event(subject, RequestType.PAYMENT_APPROVED, 3)
        await dispatcher.dispatch(approved, sent)

        retry = make_event(subject, RequestType.PAYMENT_APPROVED, 4, event_id="ev-retry")
        with pytest.raises(DuplicateSideEffectError) as exc_info:
            await dispatcher.dispatch(retry, sent)

        assert exc_info.value.idem_key == side_effect_key(approved, sent)
        assert len(repos["receipt_repo"].receipts) == 1
        record = await repos["idempotency_repo"].get(SIDE_EFFECT_SCOPE, "g-1:PAYMENT_APPROVED:ev-2")
        assert record.reference_event_id == "ev-3"


class TestDocumentReview:
    @pytest.mark.asyncio
    async def test_approval_verifies_and_creates_docency_receipt(self, dispatcher, repos):
        subject = ProfessorRef(PROFESSOR_ID)
        requested = make_event(subject, RequestType.DOCUMENT_REQUESTED, 1, file_url="doc.pdf")

        notifications = await dispatcher.dispatch(
            make_event(subject, RequestType.DOCUMENT_APPROVED, 2), requested
        )

        assert notifications == []
        professor = await repos["user_repo"].get_by_id(PROFESSOR_ID)
        assert professor.verified is True
        [receipt] = await repos["receipt_repo"].list_by_user(PROFESSOR_ID)
        assert receipt.type == ReceiptType.DOCENCY
        assert receipt.url == "doc.pdf"
        assert receipt.value is None

    @pytest.mark.asyncio
    async def test_rejection_has_no_receipt(self, dispatcher, repos):
        subject = ProfessorRef(PROFESSOR_ID)
        requested = make_event(subject, RequestType.DOCUMENT_REQUESTED, 1, file_url="doc.pdf")

        await dispatcher.dispatch(make_event(subject, RequestType.DOCUMENT_REJECTED, 2), requested)

        assert repos["receipt_repo"].receipts == {}
        assert (await repos["user_repo"].get_by_id(PROFESSOR_ID)).verified is False

    @pytest.mark.asyncio
    async def test_review_requires_pending_document(self, dispatcher):
        subject = ProfessorRef(PROFESSOR_ID)
        rejected = make_event(subject, RequestType.DOCUMENT_REJECTED, 2)

        with pytest.raises(MissingPreconditionError, match="no pending document submission"):
            await dispatcher.dispatch(make_event(subject, RequestType.DOCUMENT_APPROVED, 3), rejected)


class TestEffectlessTypes:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "request_type",
        [RequestType.CREATED, RequestType.PAYMENT_SENT, RequestType.CANCELED, RequestType.EDITED],
    )
    async def test_no_effect_and_no_guard(self, dispatcher, repos, request_type):
        subject = await seed_group(repos)

        assert await dispatcher.dispatch(make_event(subject, request_type, 1), None) == []
        assert repos["receipt_repo"].receipts == {}
        assert await repos["idempotency_repo"].get(
            SIDE_EFFECT_SCOPE, f"g-1:{request_type.value}:none"
        ) is None


class TestDelivery:
    NOTIFICATION = Notification(
        to_address="ana@example.com",
        subject=STATUS_CHANGE_SUBJECT,
        template_name=STATUS_CHANGE_TEMPLATE,
        context={"userName": "Ana Souza", "systemUrl": "https://experiencias.test"},
    )

    @pytest.mark.asyncio
    async def test_sends_notifications(self, dispatcher, mail_sender):
        await dispatcher.deliver([self.NOTIFICATION])

        assert [m.to_address for m in mail_sender.sent] == ["ana@example.com"]
        assert mail_sender.sent[0].template_name == "change-status"

    @pytest.mark.asyncio
    async def test_reported_failure_is_logged_not_raised(self, dispatcher, mail_sender, caplog):
        mail_sender.fail = True

        await dispatcher.deliver([self.NOTIFICATION])

        assert mail_sender.sent == []
        assert "Status change e-mail not delivered" in caplog.text

    @pytest.mark.asyncio
    async def test_raising_sender_is_swallowed(self, dispatcher, mail_sender, caplog):
        mail_sender.send = AsyncMock(side_effect=RuntimeError("boom"))

        await dispatcher.deliver([self.NOTIFICATION, self.NOTIFICATION])

        assert mail_sender.send.await_count == 2
        assert caplog.text.count("Status change e-mail not delivered") == 2
