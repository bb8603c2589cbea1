"""
Client Midtrans Snap pour la creation de transactions.

Implemente l'interface IPaymentGateway. Le client cree un jeton Snap
(page de paiement hebergee) et verifie la signature des notifications.

Usage:
    config = MidtransConfig.from_settings(settings)
    client = MidtransSnapClient(config)
    session = await client.create_transaction(request)
    await client.close()
"""

import base64
from dataclasses import dataclass
from typing import Optional

import httpx
from loguru import logger

from kalanara.adapters.api.retry import RateLimitError, request_with_retry
from kalanara.adapters.payment.signature import verify_signature
from kalanara.config import Settings
from kalanara.core.errors import PaymentGatewayError
from kalanara.core.ports.payment import IPaymentGateway, PaymentRequest, PaymentSession

SNAP_API_URL = "https://app.midtrans.com/snap/v1"
SNAP_SANDBOX_API_URL = "https://app.sandbox.midtrans.com/snap/v1"
SNAP_JS_URL = "https://app.midtrans.com/snap/snap.js"
SNAP_SANDBOX_JS_URL = "https://app.sandbox.midtrans.com/snap/snap.js"


@dataclass(frozen=True)
class MidtransConfig:
    """
    Configuration Midtrans derivee des Settings.

    Attributes:
        server_key: Cle serveur (authentification API et signature webhook)
        client_key: Cle client (initialisation de snap.js, exposable)
        is_production: False pour le sandbox
    """

    server_key: Optional[str]
    client_key: Optional[str]
    is_production: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "MidtransConfig":
        return cls(
            server_key=settings.midtrans_server_key,
            client_key=settings.midtrans_client_key,
            is_production=settings.midtrans_is_production,
        )

    @property
    def api_url(self) -> str:
        return SNAP_API_URL if self.is_production else SNAP_SANDBOX_API_URL

    @property
    def snap_url(self) -> str:
        return SNAP_JS_URL if self.is_production else SNAP_SANDBOX_JS_URL

    def require_server_key(self) -> str:
        """
        Retourne la cle serveur.

        Raises:
            PaymentGatewayError: Si la cle n'est pas configuree
        """
        if not self.server_key or not self.server_key.strip():
            raise PaymentGatewayError("Missing required setting: KALANARA_MIDTRANS_SERVER_KEY")
        return self.server_key

    def require_client_key(self) -> str:
        if not self.client_key or not self.client_key.strip():
            raise PaymentGatewayError("Missing required setting: KALANARA_MIDTRANS_CLIENT_KEY")
        return self.client_key


def split_name(full_name: str) -> tuple[str, Optional[str]]:
    """Decoupe un nom complet en (prenom, nom) pour customer_details."""
    parts = full_name.split()
    if not parts:
        return "", None
    if len(parts) == 1:
        return parts[0], None
    return parts[0], " ".join(parts[1:])


def build_transaction_payload(request: PaymentRequest) -> dict:
    """Construit le corps JSON attendu par POST /transactions."""
    first_name, last_name = split_name(request.customer_name)
    customer: dict = {
        "first_name": first_name,
        "email": request.customer_email,
        "phone": request.customer_phone,
    }
    if last_name:
        customer["last_name"] = last_name

    payload: dict = {
        "transaction_details": {
            "order_id": request.order_id,
            "gross_amount": request.gross_amount,
        },
        "customer_details": customer,
    }
    if request.items:
        payload["item_details"] = [
            {"id": item.id, "name": item.name, "price": item.price, "quantity": item.quantity}
            for item in request.items
        ]
    if request.finish_url:
        payload["callbacks"] = {"finish": request.finish_url}
    return payload


class MidtransSnapClient(IPaymentGateway):
    """
    Client API Midtrans Snap.

    - Authentification HTTP Basic (server_key comme utilisateur, mot de passe vide)
    - Retry automatique sur rate limiting (429)
    - Toute autre erreur est convertie en PaymentGatewayError
    """

    def __init__(self, config: MidtransConfig) -> None:
        self._config = config
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def config(self) -> MidtransConfig:
        return self._config

    @property
    def is_configured(self) -> bool:
        return bool(self._config.server_key and self._config.server_key.strip())

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            server_key = self._config.require_server_key()
            auth = base64.b64encode(f"{server_key}:".encode()).decode("ascii")
            self._client = httpx.AsyncClient(
                base_url=self._config.api_url,
                headers={
                    "Accept": "application/json",
                    "Content-Type": "application/json",
                    "Authorization": f"Basic {auth}",
                },
                timeout=30.0,
            )
        return self._client

    async def create_transaction(self, request: PaymentRequest) -> PaymentSession:
        """
        Cree une transaction Snap.

        Raises:
            PaymentGatewayError: Configuration manquante, refus ou indisponibilite
        """
        client = self._get_client()
        payload = build_transaction_payload(request)
        try:
            response = await request_with_retry(client, "POST", "/transactions", json=payload)
        except RateLimitError as exc:
            logger.error("Midtrans rate limit", order_id=request.order_id)
            raise PaymentGatewayError("Payment gateway is rate limiting requests") from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Midtrans API error",
                order_id=request.order_id,
                status=exc.response.status_code,
                body=exc.response.text[:500],
            )
            raise PaymentGatewayError(
                f"Payment gateway refused transaction ({exc.response.status_code})"
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("Midtrans unreachable", order_id=request.order_id, error=str(exc))
            raise PaymentGatewayError("Payment gateway unreachable") from exc

        data = response.json()
        token = data.get("token")
        if not token:
            raise PaymentGatewayError("Payment gateway returned no token")
        logger.debug("Snap token created", order_id=request.order_id)
        return PaymentSession(token=token, redirect_url=data.get("redirect_url", ""))

    def verify_signature(
        self, order_id: str, status_code: str, gross_amount: str, signature_key: str
    ) -> bool:
        """Verifie la signature d'une notification avec la cle serveur."""
        return verify_signature(
            order_id,
            status_code,
            gross_amount,
            signature_key,
            self._config.require_server_key(),
        )

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
