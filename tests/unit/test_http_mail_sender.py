"""
Tests del HTTPMailSender.

La API de correo se simula con httpx.MockTransport; cada test usa su
propio circuit breaker para no compartir contadores de fallas.
"""

import json

import httpx
import pytest

from experiencias_api.infrastructure.circuit_breaker import build_mail_breaker
from experiencias_api.infrastructure.mail.http_mail_sender import HTTPMailSender

API_URL = "https://mail.test/emails"
CONTEXT = {"userName": "Ana <Souza>", "systemUrl": "https://experiencias.test/user/my-reservations"}


def make_sender(handler, breaker=None):
    return HTTPMailSender(
        api_url=API_URL,
        api_key="secret",
        from_address="no-reply@experiencias.com.br",
        from_name="Experiencias",
        breaker=breaker or build_mail_breaker(),
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


class TestRender:
    def test_change_status_template_escapes_context(self):
        sender = make_sender(lambda request: httpx.Response(200))

        html = sender.render("change-status", CONTEXT)

        assert "Olá, Ana &lt;Souza&gt;!" in html
        assert 'href="https://experiencias.test/user/my-reservations"' in html


class TestSend:
    @pytest.mark.asyncio
    async def test_posts_rendered_payload(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"id": "mail-1"})

        sender = make_sender(handler)

        sent = await sender.send("ana@example.com", "Atualização de Reserva", "change-status", CONTEXT)

        assert sent is True
        [request] = requests
        assert str(request.url) == API_URL
        assert request.headers["Authorization"] == "Bearer secret"
        payload = json.loads(request.content)
        assert payload["from"] == "Experiencias <no-reply@experiencias.com.br>"
        assert payload["to"] == ["ana@example.com"]
        assert payload["subject"] == "Atualização de Reserva"
        assert "my-reservations" in payload["html"]

    @pytest.mark.asyncio
    async def test_error_status_returns_false(self):
        sender = make_sender(lambda request: httpx.Response(500))

        assert await sender.send("ana@example.com", "s", "change-status", CONTEXT) is False

    @pytest.mark.asyncio
    async def test_transport_error_returns_false(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        sender = make_sender(handler)

        assert await sender.send("ana@example.com", "s", "change-status", CONTEXT) is False

    @pytest.mark.asyncio
    async def test_missing_template_returns_false_without_request(self):
        calls = []
        sender = make_sender(lambda request: calls.append(request) or httpx.Response(200))

        assert await sender.send("ana@example.com", "s", "does-not-exist", CONTEXT) is False
        assert calls == []

    @pytest.mark.asyncio
    async def test_open_circuit_skips_api(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503)

        sender = make_sender(handler, breaker=build_mail_breaker(fail_max=2))

        results = [
            await sender.send("ana@example.com", "s", "change-status", CONTEXT) for _ in range(3)
        ]

        assert results == [False, False, False]
        assert len(calls) == 2
