"""
Reglas del workflow de solicitudes.

Tablas estáticas de vocabulario y transiciones para las dos máquinas de
estados (grupo de reservas y profesor). Todo aquí es puro: no hay I/O.
"""

from experiencias_api.domain.entities.request_event import RequestType, Subject, SubjectKind
from experiencias_api.domain.errors import InvalidRequestTypeError, InvalidTransitionError

RESERVATION_GROUP_TYPES: frozenset[RequestType] = frozenset(
    {
        RequestType.CREATED,
        RequestType.EDITED,
        RequestType.PEOPLE_REQUESTED,
        RequestType.PEOPLE_SENT,
        RequestType.PAYMENT_REQUESTED,
        RequestType.PAYMENT_SENT,
        RequestType.PAYMENT_APPROVED,
        RequestType.PAYMENT_REJECTED,
        RequestType.CANCELED_REQUESTED,
        RequestType.CANCELED,
        RequestType.APPROVED,
        RequestType.REJECTED,
    }
)

PROFESSOR_TYPES: frozenset[RequestType] = frozenset(
    {
        RequestType.DOCUMENT_REQUESTED,
        RequestType.DOCUMENT_APPROVED,
        RequestType.DOCUMENT_REJECTED,
    }
)

VOCABULARY: dict[SubjectKind, frozenset[RequestType]] = {
    SubjectKind.RESERVATION_GROUP: RESERVATION_GROUP_TYPES,
    SubjectKind.PROFESSOR: PROFESSOR_TYPES,
}

# Primer evento obligatorio de cada sujeto.
SEED_TYPES: dict[SubjectKind, RequestType] = {
    SubjectKind.RESERVATION_GROUP: RequestType.CREATED,
    SubjectKind.PROFESSOR: RequestType.DOCUMENT_REQUESTED,
}

_EDITABLE = frozenset(
    {
        RequestType.EDITED,
        RequestType.PEOPLE_REQUESTED,
        RequestType.PAYMENT_REQUESTED,
        RequestType.CANCELED_REQUESTED,
        RequestType.APPROVED,
        RequestType.REJECTED,
    }
)

TRANSITIONS: dict[RequestType, frozenset[RequestType]] = {
    RequestType.CREATED: _EDITABLE,
    RequestType.EDITED: _EDITABLE,
    RequestType.PEOPLE_REQUESTED: frozenset(
        {RequestType.PEOPLE_SENT, RequestType.CANCELED_REQUESTED, RequestType.EDITED}
    ),
    RequestType.PEOPLE_SENT: frozenset(
        {
            RequestType.PAYMENT_REQUESTED,
            RequestType.PEOPLE_REQUESTED,
            RequestType.CANCELED_REQUESTED,
            RequestType.EDITED,
            RequestType.APPROVED,
            RequestType.REJECTED,
        }
    ),
    RequestType.PAYMENT_REQUESTED: frozenset(
        {RequestType.PAYMENT_SENT, RequestType.CANCELED_REQUESTED}
    ),
    RequestType.PAYMENT_SENT: frozenset(
        {RequestType.PAYMENT_APPROVED, RequestType.PAYMENT_REJECTED}
    ),
    RequestType.CANCELED_REQUESTED: frozenset({RequestType.CANCELED}),
    RequestType.APPROVED: frozenset(
        {
            RequestType.PAYMENT_REQUESTED,
            RequestType.PEOPLE_REQUESTED,
            RequestType.CANCELED_REQUESTED,
        }
    ),
    RequestType.REJECTED: frozenset({RequestType.EDITED, RequestType.CANCELED_REQUESTED}),
    RequestType.PAYMENT_APPROVED: frozenset(),
    RequestType.PAYMENT_REJECTED: frozenset(),
    RequestType.CANCELED: frozenset(),
    RequestType.DOCUMENT_REQUESTED: frozenset(
        {RequestType.DOCUMENT_APPROVED, RequestType.DOCUMENT_REJECTED}
    ),
    RequestType.DOCUMENT_REJECTED: frozenset({RequestType.DOCUMENT_REQUESTED}),
    RequestType.DOCUMENT_APPROVED: frozenset(),
}

INACTIVE_GROUP_TYPES: frozenset[RequestType] = frozenset(
    {RequestType.CANCELED, RequestType.PAYMENT_REJECTED}
)

# Estados en los que el grupo espera una acción del usuario o del administrador.
PENDING_GROUP_TYPES: frozenset[RequestType] = frozenset(
    {
        RequestType.CREATED,
        RequestType.PEOPLE_REQUESTED,
        RequestType.PAYMENT_REQUESTED,
        RequestType.CANCELED_REQUESTED,
    }
)


def validate_vocabulary(subject: Subject, request_type: RequestType) -> None:
    """Rechaza un tipo que no pertenece al vocabulario del sujeto."""
    if request_type not in VOCABULARY[subject.kind]:
        raise InvalidRequestTypeError(request_type.value, subject.kind.value)


def validate_transition(
    subject: Subject,
    current: RequestType | None,
    request_type: RequestType,
    strict: bool = False,
) -> None:
    """
    Valida un evento entrante contra el estado actual del sujeto.

    Siempre se exige vocabulario correcto y que el primer evento de un
    sujeto sea su evento semilla. El grafo completo de transiciones sólo
    se aplica en modo estricto.

    Raises:
        InvalidRequestTypeError: Tipo ajeno al vocabulario del sujeto.
        InvalidTransitionError: Primer evento incorrecto o transición ilegal.
    """
    validate_vocabulary(subject, request_type)

    if current is None:
        if request_type != SEED_TYPES[subject.kind]:
            raise InvalidTransitionError(None, request_type.value)
        return

    if strict and request_type not in TRANSITIONS.get(current, frozenset()):
        raise InvalidTransitionError(current.value, request_type.value)


def is_group_active(status: RequestType) -> bool:
    """Un grupo deja de estar activo sólo al cancelarse o rechazarse el pago."""
    return status not in INACTIVE_GROUP_TYPES
