from typing import Any


class MailSender:
    async def send(
        self,
        to_address: str,
        subject: str,
        template_name: str,
        context: dict[str, Any],
    ) -> bool:
        """Envía un correo renderizado desde una plantilla.

        Nunca lanza excepciones: cualquier falla se reporta como False.
        """
        raise NotImplementedError
