"""
Ports pour les services externes : passerelle de paiement et envoi d'e-mails.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class PaymentItem:
    """Ligne de commande transmise à la passerelle."""

    id: str
    name: str
    price: int
    quantity: int = 1


@dataclass(frozen=True)
class PaymentRequest:
    """
    Demande de transaction envoyée à la passerelle de paiement.

    Attributes:
        order_id: Identifiant de commande côté passerelle (KSP-...)
        gross_amount: Montant total en IDR
        customer_name: Nom complet de l'acheteur (découpé prénom/nom par l'adaptateur)
        finish_url: URL de retour après paiement
    """

    order_id: str
    gross_amount: int
    customer_name: str
    customer_email: str
    customer_phone: str
    items: tuple[PaymentItem, ...] = field(default_factory=tuple)
    finish_url: Optional[str] = None


@dataclass(frozen=True)
class PaymentSession:
    """Jeton de paiement retourné par la passerelle."""

    token: str
    redirect_url: str


class IPaymentGateway(ABC):
    """Interface d'une passerelle de paiement hébergée."""

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """False si la clé serveur de la passerelle n'est pas configurée."""
        ...

    @abstractmethod
    async def create_transaction(self, request: PaymentRequest) -> PaymentSession:
        """
        Crée une transaction et retourne le jeton de paiement.

        Raises:
            PaymentGatewayError: Si la passerelle est injoignable ou refuse la demande
        """
        ...

    @abstractmethod
    def verify_signature(
        self, order_id: str, status_code: str, gross_amount: str, signature_key: str
    ) -> bool:
        """Vérifie la signature d'une notification webhook."""
        ...

    async def close(self) -> None:
        """Libère les connexions HTTP (aucune par défaut)."""


@dataclass(frozen=True)
class EmailMessage:
    """E-mail transactionnel."""

    to: str
    subject: str
    html: str
    text: Optional[str] = None


class IEmailSender(ABC):
    """Interface d'envoi d'e-mails transactionnels."""

    @property
    @abstractmethod
    def enabled(self) -> bool:
        """False si aucun fournisseur n'est configuré."""
        ...

    @abstractmethod
    async def send(self, message: EmailMessage) -> str:
        """Envoie l'e-mail et retourne l'identifiant du fournisseur."""
        ...

    async def close(self) -> None:
        """Libère les connexions HTTP (aucune par défaut)."""
