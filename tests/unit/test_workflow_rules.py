"""
Tests de las reglas puras del workflow.

Vocabulario por sujeto, evento semilla, grafo estricto de transiciones,
estados terminales y actividad del grupo.
"""

from datetime import datetime, timedelta, timezone

import pytest

from experiencias_api.domain.entities.request_event import (
    ProfessorRef,
    RequestType,
    ReservationGroupRef,
    SubjectKind,
    subject_from_columns,
)
from experiencias_api.domain.errors import (
    InvalidDateRangeError,
    InvalidRequestTypeError,
    InvalidTransitionError,
)
from experiencias_api.domain.value_objects.date_range import DateRange
from experiencias_api.domain.workflow import (
    PROFESSOR_TYPES,
    RESERVATION_GROUP_TYPES,
    is_group_active,
    validate_transition,
    validate_vocabulary,
)

GROUP = ReservationGroupRef("g-1")
PROFESSOR = ProfessorRef("p-1")


class TestVocabulary:
    """Cada máquina de estados sólo acepta su propio vocabulario."""

    def test_vocabularies_are_disjoint_and_complete(self):
        assert RESERVATION_GROUP_TYPES.isdisjoint(PROFESSOR_TYPES)
        assert RESERVATION_GROUP_TYPES | PROFESSOR_TYPES == set(RequestType)

    @pytest.mark.parametrize("request_type", sorted(PROFESSOR_TYPES))
    def test_professor_types_rejected_for_groups(self, request_type):
        with pytest.raises(InvalidRequestTypeError) as exc_info:
            validate_vocabulary(GROUP, request_type)
        assert "not valid for reservation requests" in exc_info.value.message

    @pytest.mark.parametrize("request_type", sorted(RESERVATION_GROUP_TYPES))
    def test_group_types_rejected_for_professors(self, request_type):
        with pytest.raises(InvalidRequestTypeError) as exc_info:
            validate_vocabulary(PROFESSOR, request_type)
        assert exc_info.value.message == f"{request_type.value} is not valid for professor requests"

    def test_valid_types_pass(self):
        validate_vocabulary(GROUP, RequestType.PAYMENT_SENT)
        validate_vocabulary(PROFESSOR, RequestType.DOCUMENT_APPROVED)


class TestSubjectRefs:
    def test_kind_is_fixed_per_ref(self):
        assert GROUP.kind == SubjectKind.RESERVATION_GROUP
        assert PROFESSOR.kind == SubjectKind.PROFESSOR

    def test_refs_with_same_id_are_different_subjects(self):
        assert ReservationGroupRef("x") != ProfessorRef("x")

    def test_subject_from_columns(self):
        assert subject_from_columns("g-1", None) == GROUP
        assert subject_from_columns(None, "p-1") == PROFESSOR

    @pytest.mark.parametrize("group_id,professor_id", [("g", "p"), (None, None)])
    def test_subject_from_columns_requires_exactly_one(self, group_id, professor_id):
        with pytest.raises(ValueError):
            subject_from_columns(group_id, professor_id)


class TestTransitions:
    """Primer evento obligatorio y grafo estricto opcional."""

    def test_group_must_start_with_created(self):
        validate_transition(GROUP, None, RequestType.CREATED)
        with pytest.raises(InvalidTransitionError):
            validate_transition(GROUP, None, RequestType.PAYMENT_SENT)

    def test_professor_must_start_with_document_requested(self):
        validate_transition(PROFESSOR, None, RequestType.DOCUMENT_REQUESTED)
        with pytest.raises(InvalidTransitionError):
            validate_transition(PROFESSOR, None, RequestType.DOCUMENT_APPROVED)

    def test_lenient_mode_allows_out_of_graph_moves(self):
        validate_transition(GROUP, RequestType.CREATED, RequestType.PAYMENT_APPROVED)
        validate_transition(GROUP, RequestType.CANCELED, RequestType.EDITED)

    def test_strict_mode_follows_graph(self):
        validate_transition(
            GROUP, RequestType.PAYMENT_REQUESTED, RequestType.PAYMENT_SENT, strict=True
        )
        validate_transition(
            GROUP, RequestType.CANCELED_REQUESTED, RequestType.CANCELED, strict=True
        )
        with pytest.raises(InvalidTransitionError) as exc_info:
            validate_transition(
                GROUP, RequestType.CREATED, RequestType.PAYMENT_APPROVED, strict=True
            )
        assert exc_info.value.current_status == "CREATED"

    def test_strict_mode_rejects_leaving_terminal_states(self):
        for terminal in (RequestType.PAYMENT_APPROVED, RequestType.CANCELED):
            with pytest.raises(InvalidTransitionError):
                validate_transition(GROUP, terminal, RequestType.EDITED, strict=True)

    def test_strict_professor_resubmission_after_rejection(self):
        validate_transition(
            PROFESSOR, RequestType.DOCUMENT_REJECTED, RequestType.DOCUMENT_REQUESTED, strict=True
        )
        with pytest.raises(InvalidTransitionError):
            validate_transition(
                PROFESSOR, RequestType.DOCUMENT_APPROVED, RequestType.DOCUMENT_REQUESTED, strict=True
            )

    def test_vocabulary_checked_before_graph(self):
        with pytest.raises(InvalidRequestTypeError):
            validate_transition(GROUP, RequestType.CREATED, RequestType.DOCUMENT_APPROVED)


class TestTerminalStates:
    @pytest.mark.parametrize(
        "subject,terminal,follow_up",
        [
            (GROUP, RequestType.PAYMENT_APPROVED, RequestType.EDITED),
            (GROUP, RequestType.PAYMENT_REJECTED, RequestType.PAYMENT_SENT),
            (GROUP, RequestType.CANCELED, RequestType.CANCELED_REQUESTED),
            (PROFESSOR, RequestType.DOCUMENT_APPROVED, RequestType.DOCUMENT_REQUESTED),
        ],
    )
    def test_terminal_states_admit_nothing_in_strict_mode(self, subject, terminal, follow_up):
        with pytest.raises(InvalidTransitionError):
            validate_transition(subject, terminal, follow_up, strict=True)
        validate_transition(subject, terminal, follow_up)

    @pytest.mark.parametrize(
        "status,active",
        [
            (RequestType.CREATED, True),
            (RequestType.PAYMENT_APPROVED, True),
            (RequestType.CANCELED_REQUESTED, True),
            (RequestType.CANCELED, False),
            (RequestType.PAYMENT_REJECTED, False),
        ],
    )
    def test_group_activity(self, status, active):
        assert is_group_active(status) is active


class TestDateRange:
    def test_same_day_range_is_valid(self):
        moment = datetime(2024, 5, 1, 10, tzinfo=timezone.utc)
        assert DateRange(moment, moment).start == moment

    def test_end_before_start_is_rejected(self):
        start = datetime(2024, 5, 2, tzinfo=timezone.utc)
        with pytest.raises(InvalidDateRangeError):
            DateRange(start=start, end=start - timedelta(days=1))

    def test_mixed_naive_and_aware_is_rejected(self):
        aware = datetime(2024, 3, 10, 9, tzinfo=timezone.utc)
        naive = datetime(2024, 3, 10, 17)
        with pytest.raises(InvalidDateRangeError):
            DateRange(start=aware, end=naive)
        with pytest.raises(InvalidDateRangeError):
            DateRange(start=naive, end=naive)

    def test_spanning_takes_earliest_start_and_latest_end(self):
        base = datetime(2024, 5, 1, tzinfo=timezone.utc)
        first = DateRange(base + timedelta(days=1), base + timedelta(days=2))
        second = DateRange(base, base + timedelta(hours=3))

        span = DateRange.spanning([first, second])

        assert span == DateRange(base, base + timedelta(days=2))
        assert DateRange.spanning([]) is None
