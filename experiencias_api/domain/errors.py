"""Excepciones de dominio para el motor de reservas y solicitudes."""


class DomainError(Exception):
    """Clase base para todos los errores de dominio."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


# === No encontrado ===


class NotFoundError(DomainError):
    """El sujeto o registro solicitado no existe."""


class ReservationGroupNotFoundError(NotFoundError):
    """El grupo de reservas no existe (o no pertenece al usuario)."""

    def __init__(self, reservation_group_id: str):
        super().__init__(
            message=f"Reservation group not found: {reservation_group_id}",
            code="RESERVATION_GROUP_NOT_FOUND",
        )
        self.reservation_group_id = reservation_group_id


class ReservationNotFoundError(NotFoundError):
    """La reserva no existe."""

    def __init__(self, reservation_id: str):
        super().__init__(
            message=f"Reservation not found: {reservation_id}",
            code="RESERVATION_NOT_FOUND",
        )
        self.reservation_id = reservation_id


class ProfessorNotFoundError(NotFoundError):
    """El profesor no existe."""

    def __init__(self, professor_id: str):
        super().__init__(
            message=f"Professor not found: {professor_id}",
            code="PROFESSOR_NOT_FOUND",
        )
        self.professor_id = professor_id


class SubjectHistoryNotFoundError(NotFoundError):
    """El sujeto no tiene ningún evento en el ledger."""

    def __init__(self, subject_kind: str, subject_id: str, message: str | None = None):
        super().__init__(
            message=message or f"No requests found for {subject_kind} {subject_id}",
            code="SUBJECT_HISTORY_NOT_FOUND",
        )
        self.subject_kind = subject_kind
        self.subject_id = subject_id


# === Validación ===


class ValidationError(DomainError):
    """Error de validación de una operación del workflow."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(message=message, code=code)


class InvalidRequestTypeError(ValidationError):
    """El tipo de evento no pertenece al vocabulario del sujeto."""

    def __init__(self, request_type: str, subject_kind: str):
        label = "professor" if subject_kind == "PROFESSOR" else "reservation"
        super().__init__(
            message=f"{request_type} is not valid for {label} requests",
            code="INVALID_REQUEST_TYPE",
        )
        self.request_type = request_type
        self.subject_kind = subject_kind


class InvalidTransitionError(ValidationError):
    """El estado actual no admite el evento solicitado."""

    def __init__(self, current_status: str | None, request_type: str):
        super().__init__(
            message=f"Cannot move from '{current_status or 'EMPTY'}' to '{request_type}'",
            code="INVALID_TRANSITION",
        )
        self.current_status = current_status
        self.request_type = request_type


class MissingPreconditionError(ValidationError):
    """Falta el evento previo que habilita el efecto secundario."""

    def __init__(self, message: str):
        super().__init__(message=message, code="MISSING_PRECONDITION")


class InactiveExperienceError(ValidationError):
    """Una o más experiencias referenciadas no están activas."""

    def __init__(self, experience_ids: list[str]):
        super().__init__(
            message="experience not active: " + ", ".join(sorted(experience_ids)),
            code="EXPERIENCE_NOT_ACTIVE",
        )
        self.experience_ids = experience_ids


class InvalidDateRangeError(ValidationError):
    """Rango de fechas inválido."""

    def __init__(self, message: str):
        super().__init__(message=message, code="INVALID_DATE_RANGE")


# === Conflictos ===


class ConflictError(DomainError):
    """Dos transiciones compiten por el mismo sujeto."""


class ConcurrentTransitionError(ConflictError):
    """La versión del sujeto cambió entre la lectura y la escritura."""

    def __init__(self, subject_id: str, expected_version: int, actual_version: int | None = None):
        actual = "unknown" if actual_version is None else str(actual_version)
        super().__init__(
            message=f"Concurrent transition on {subject_id}: "
            f"expected version {expected_version}, actual version {actual}",
            code="CONCURRENT_TRANSITION",
        )
        self.subject_id = subject_id
        self.expected_version = expected_version
        self.actual_version = actual_version


class DuplicateSideEffectError(ConflictError):
    """El efecto secundario de esta transición ya fue aplicado."""

    def __init__(self, idem_key: str):
        super().__init__(
            message=f"Transition already applied: {idem_key}",
            code="DUPLICATE_SIDE_EFFECT",
        )
        self.idem_key = idem_key


# === Colaboradores externos ===


class DownstreamFailure(DomainError):
    """Falla de un colaborador externo; nunca se propaga al llamador."""


class MailDeliveryError(DownstreamFailure):
    """No se pudo enviar el correo de notificación."""

    def __init__(self, to_address: str, reason: str):
        super().__init__(
            message=f"Mail to {to_address} failed: {reason}",
            code="MAIL_DELIVERY_FAILED",
        )
        self.to_address = to_address
        self.reason = reason
