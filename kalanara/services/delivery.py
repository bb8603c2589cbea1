"""
Livraison du voucher apres paiement.

Le canal (e-mail, WhatsApp ou les deux) et le destinataire (acheteur ou
beneficiaire) viennent des preferences saisies au checkout. L'envoi par
e-mail passe par Resend ; WhatsApp n'a pas d'envoi serveur, seul le lien
wa.me pre-rempli est construit.

Aucune erreur n'est propagee : le paiement est deja confirme, un echec
d'envoi est journalise et reporte dans le DeliveryReport.
"""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import httpx
from jinja2 import Environment, FileSystemLoader, select_autoescape
from loguru import logger

from kalanara.adapters.api.retry import RateLimitError
from kalanara.core.entities import Order, Service, Voucher
from kalanara.core.ports.payment import EmailMessage, IEmailSender
from kalanara.core.ports.repositories import IServiceRepository
from kalanara.core.value_objects import SendTo
from kalanara.utils.constants import (
    SPA_ADDRESS,
    SPA_EMAIL,
    SPA_NAME,
    SPA_PHONE,
    SPA_TAGLINE,
)
from kalanara.utils.formatting import (
    WhatsAppVoucherData,
    build_verify_url,
    format_currency,
    format_date,
    generate_whatsapp_url,
)

_TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

_templates = Environment(
    loader=FileSystemLoader(_TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
)


@dataclass
class DeliveryReport:
    """Resultat de la livraison d'un voucher."""

    email_sent: bool = False
    whatsapp_url: Optional[str] = None
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DeliveryTarget:
    """Coordonnees effectivement utilisees pour l'envoi."""

    name: str
    email: Optional[str]
    phone: Optional[str]


def resolve_target(order: Order, voucher: Voucher) -> DeliveryTarget:
    """Choisit l'acheteur ou le beneficiaire selon send_to."""
    if order.send_to is SendTo.PURCHASER:
        return DeliveryTarget(
            name=order.customer_name,
            email=order.customer_email or None,
            phone=order.customer_phone or None,
        )
    return DeliveryTarget(
        name=voucher.recipient_name,
        email=voucher.recipient_email,
        phone=voucher.recipient_phone,
    )


class VoucherDeliveryService:
    """Envoie le voucher par e-mail et prepare le lien WhatsApp."""

    def __init__(
        self,
        email_sender: IEmailSender,
        service_repo: IServiceRepository,
        app_url: str,
    ) -> None:
        self._email_sender = email_sender
        self._services = service_repo
        self._app_url = app_url

    def _service_for(self, voucher: Voucher) -> Service:
        service = self._services.get_by_id(voucher.service_id) if voucher.service_id else None
        # Soin supprime entre-temps : le voucher reste livrable
        return service or Service(id=voucher.service_id, name="Spa Treatment")

    def render_email(self, voucher: Voucher, service: Service) -> EmailMessage:
        """Construit l'e-mail HTML du voucher (sans le destinataire)."""
        html = _templates.get_template("email/voucher.html").render(
            recipient_name=voucher.recipient_name,
            sender_name=voucher.sender_name,
            sender_message=voucher.sender_message,
            voucher_code=voucher.code,
            service_name=service.name,
            service_duration=service.duration,
            amount=format_currency(voucher.amount),
            expiry_date=format_date(voucher.expiry_date),
            verify_url=build_verify_url(self._app_url, voucher.code),
            spa_name=SPA_NAME,
            tagline=SPA_TAGLINE,
            spa_address=SPA_ADDRESS,
            spa_phone=SPA_PHONE,
            spa_email=SPA_EMAIL,
        )
        return EmailMessage(
            to="",
            subject=f"🎁 {voucher.sender_name} sent you a gift from Kalanara Spa!",
            html=html,
        )

    def whatsapp_url(self, voucher: Voucher, phone: Optional[str] = None) -> str:
        """
        Lien wa.me pre-rempli avec le message du voucher.

        Args:
            voucher: Voucher a partager
            phone: Numero cible (defaut : telephone du beneficiaire)

        Raises:
            ValueError: Si aucun numero n'est disponible
        """
        target_phone = phone or voucher.recipient_phone
        if not target_phone:
            raise ValueError("No phone number available for WhatsApp")
        return self._whatsapp_url(voucher, target_phone, self._service_for(voucher))

    def _whatsapp_url(self, voucher: Voucher, target_phone: str, service: Service) -> str:
        data = WhatsAppVoucherData(
            recipient_phone=target_phone,
            recipient_name=voucher.recipient_name,
            sender_name=voucher.sender_name,
            voucher_code=voucher.code,
            service_name=service.name,
            service_duration=service.duration,
            amount=voucher.amount,
            expiry_date=voucher.expiry_date,
            verify_url=build_verify_url(self._app_url, voucher.code),
            sender_message=voucher.sender_message,
        )
        return generate_whatsapp_url(data)

    async def deliver(self, order: Order, voucher: Voucher) -> DeliveryReport:
        """Livre le voucher selon les preferences de la commande."""
        report = DeliveryReport()
        target = resolve_target(order, voucher)
        method = order.delivery_method
        service = await asyncio.to_thread(self._service_for, voucher)

        if method.includes_email:
            await self._send_email(voucher, service, target, report)

        if method.includes_whatsapp:
            if target.phone:
                report.whatsapp_url = self._whatsapp_url(voucher, target.phone, service)
            else:
                report.errors.append("WhatsApp: aucun numero de telephone")
                logger.warning("Lien WhatsApp impossible sans numero", code=voucher.code)

        logger.info(
            "Voucher livre",
            code=voucher.code,
            method=method.value,
            email_sent=report.email_sent,
            errors=len(report.errors),
        )
        return report

    async def _send_email(
        self, voucher: Voucher, service: Service, target: DeliveryTarget, report: DeliveryReport
    ) -> None:
        if not target.email:
            report.errors.append("E-mail: aucune adresse")
            logger.warning("E-mail impossible sans adresse", code=voucher.code)
            return
        if not self._email_sender.enabled:
            logger.info("Envoi e-mail desactive (pas de cle Resend)", code=voucher.code)
            return

        draft = self.render_email(voucher, service)
        message = EmailMessage(to=target.email, subject=draft.subject, html=draft.html)
        try:
            await self._email_sender.send(message)
        except (httpx.HTTPError, RateLimitError, RuntimeError, ValueError) as exc:
            report.errors.append(f"E-mail: {exc}")
            logger.error("Echec d'envoi e-mail", code=voucher.code, error=str(exc))
            return
        report.email_sent = True
