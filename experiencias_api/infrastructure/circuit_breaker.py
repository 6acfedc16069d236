"""
Circuit Breaker para llamadas a servicios externos.

Sólo la API de correo es externa en este servicio. Si falla de forma
repetida el circuito se abre y los envíos se descartan de inmediato, sin
esperar el timeout HTTP en cada transición que notifica.

Estados:
- CLOSED: operación normal, las llamadas pasan.
- OPEN: demasiadas fallas, las llamadas fallan de inmediato.
- HALF_OPEN: se deja pasar una llamada de prueba.
"""

import logging

from pybreaker import CircuitBreaker, CircuitBreakerError, CircuitBreakerListener

logger = logging.getLogger(__name__)


class CircuitBreakerLogListener(CircuitBreakerListener):
    """Registra cada cambio de estado del circuito."""

    def __init__(self, name: str):
        self.name = name

    def state_change(self, cb, old_state, new_state):
        logger.warning(
            "Circuit breaker state changed",
            extra={
                "breaker_name": self.name,
                "old_state": getattr(old_state, "name", None),
                "new_state": getattr(new_state, "name", None),
            },
        )


def build_mail_breaker(fail_max: int = 5, reset_timeout: int = 60) -> CircuitBreaker:
    return CircuitBreaker(
        fail_max=fail_max,
        reset_timeout=reset_timeout,
        name="mail_circuit_breaker",
        listeners=[CircuitBreakerLogListener("mail")],
    )


mail_breaker = build_mail_breaker()


__all__ = [
    "CircuitBreakerError",
    "build_mail_breaker",
    "mail_breaker",
]
