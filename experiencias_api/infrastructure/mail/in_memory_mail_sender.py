import logging
from dataclasses import dataclass
from typing import Any

from experiencias_api.application.interfaces.mail_sender import MailSender

logger = logging.getLogger(__name__)


@dataclass
class SentMail:
    to_address: str
    subject: str
    template_name: str
    context: dict[str, Any]


class InMemoryMailSender(MailSender):
    """Registra los correos en memoria. Con `fail=True` simula una API caída."""

    def __init__(self, fail: bool = False) -> None:
        self.sent: list[SentMail] = []
        self.fail = fail

    async def send(
        self,
        to_address: str,
        subject: str,
        template_name: str,
        context: dict[str, Any],
    ) -> bool:
        if self.fail:
            return False
        self.sent.append(SentMail(to_address, subject, template_name, dict(context)))
        logger.info("Mail recorded", extra={"to_address": to_address, "template": template_name})
        return True
