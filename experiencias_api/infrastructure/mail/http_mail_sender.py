"""Envío de correos: plantillas Jinja2 publicadas en una API HTTP de correo transaccional."""

import logging
from pathlib import Path
from typing import Any

import httpx
from jinja2 import Environment, FileSystemLoader, TemplateError
from pybreaker import CircuitBreaker, CircuitBreakerError

from experiencias_api.application.interfaces.mail_sender import MailSender
from experiencias_api.infrastructure.circuit_breaker import mail_breaker

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


def build_template_environment(template_dir: Path = TEMPLATES_DIR) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


class HTTPMailSender(MailSender):
    """
    Envía correos a través de una API HTTP (payload JSON estilo Resend).

    Cualquier falla (plantilla ausente, circuito abierto, timeout o
    respuesta no 2xx) se registra y se reporta como False; nunca se lanza.
    """

    def __init__(
        self,
        api_url: str,
        api_key: str | None,
        from_address: str,
        from_name: str,
        timeout_seconds: float = 5.0,
        breaker: CircuitBreaker = mail_breaker,
        client: httpx.AsyncClient | None = None,
        template_env: Environment | None = None,
    ) -> None:
        self._api_url = api_url
        self._api_key = api_key
        self._from = f"{from_name} <{from_address}>"
        self._timeout = timeout_seconds
        self._breaker = breaker
        self._client = client
        self._env = template_env or build_template_environment()

    def render(self, template_name: str, context: dict[str, Any]) -> str:
        """Renderiza `<template_name>.html` con autoescape."""
        template = self._env.get_template(f"{template_name}.html")
        return template.render(**context)

    async def send(
        self,
        to_address: str,
        subject: str,
        template_name: str,
        context: dict[str, Any],
    ) -> bool:
        try:
            html = self.render(template_name, context)
        except TemplateError as exc:
            logger.error(
                "No se pudo renderizar la plantilla de correo",
                extra={"template": template_name, "error": str(exc)},
            )
            return False

        payload = {
            "from": self._from,
            "to": [to_address],
            "subject": subject,
            "html": html,
        }
        try:
            with self._breaker.calling():
                await self._post(payload)
        except CircuitBreakerError:
            logger.warning(
                "Circuito de correo abierto, mensaje descartado",
                extra={"to_address": to_address, "template": template_name},
            )
            return False
        except httpx.HTTPError as exc:
            logger.warning(
                "Falló la llamada a la API de correo",
                extra={"to_address": to_address, "template": template_name, "error": str(exc)},
            )
            return False
        except Exception:
            logger.exception(
                "Falla inesperada al enviar correo",
                extra={"to_address": to_address, "template": template_name},
            )
            return False

        logger.info("Correo enviado", extra={"to_address": to_address, "template": template_name})
        return True

    async def _post(self, payload: dict[str, Any]) -> None:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        if self._client is not None:
            response = await self._client.post(self._api_url, json=payload, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._api_url, json=payload, headers=headers)
        response.raise_for_status()
