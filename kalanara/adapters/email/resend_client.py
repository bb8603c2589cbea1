"""
Client Resend pour l'envoi des vouchers par e-mail.

Implemente IEmailSender via l'API HTTP de Resend (POST /emails).
Sans cle API, le client est desactive et le service de livraison
saute l'envoi.
"""

from typing import Optional

import httpx
from loguru import logger

from kalanara.adapters.api.retry import request_with_retry
from kalanara.core.ports.payment import EmailMessage, IEmailSender


class ResendEmailSender(IEmailSender):
    """Client API Resend."""

    RESEND_BASE_URL = "https://api.resend.com"

    def __init__(self, api_key: Optional[str], sender: str) -> None:
        self._api_key = api_key
        self._sender = sender
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.RESEND_BASE_URL,
                headers={"Authorization": f"Bearer {self._api_key}"},
                timeout=15.0,
            )
        return self._client

    async def send(self, message: EmailMessage) -> str:
        """
        Envoie l'e-mail.

        Raises:
            RuntimeError: Si le client est desactive
            httpx.HTTPError: Si l'API refuse l'envoi
        """
        if not self.enabled:
            raise RuntimeError("Resend API key is not configured")

        payload = {
            "from": self._sender,
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
        }
        if message.text:
            payload["text"] = message.text

        response = await request_with_retry(self._get_client(), "POST", "/emails", json=payload)
        try:
            email_id = response.json().get("id", "")
        except ValueError:
            # 2xx sans corps JSON : l'e-mail est tout de meme accepte
            email_id = ""
        logger.debug("E-mail envoye", to=message.to, email_id=email_id)
        return email_id

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
