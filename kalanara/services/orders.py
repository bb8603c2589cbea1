"""
Service de commandes : checkout et confirmation de paiement.

Flux nominal :
1. create_checkout : commande PENDING + jeton Snap Midtrans
2. handle_payment_notification (webhook) : PENDING -> PAID ou FAILED
3. Sur PAID : emission du voucher puis livraison

mark_paid offre le meme chemin que le webhook pour une confirmation
manuelle (back-office, CLI).
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from kalanara.adapters.payment.notification import (
    PaymentNotification,
    map_transaction_status,
    parse_notification,
)
from kalanara.core.entities import Order, Service, Voucher
from kalanara.core.errors import (
    InvalidCheckoutError,
    KalanaraError,
    OrderNotFoundError,
    OrderStatusError,
    PaymentGatewayError,
    ServiceUnavailableError,
)
from kalanara.core.ports.payment import IPaymentGateway, PaymentItem, PaymentRequest
from kalanara.core.ports.repositories import IOrderRepository, IServiceRepository
from kalanara.core.value_objects import DeliveryMethod, PaymentStatus, SendTo
from kalanara.services.delivery import DeliveryReport, VoucherDeliveryService
from kalanara.services.voucher_codes import generate_payment_order_id
from kalanara.services.vouchers import VoucherService
from kalanara.utils.clock import utcnow


@dataclass
class CheckoutRequest:
    """
    Donnees saisies par l'acheteur.

    Les champs texte arrivent bruts de l'API : la validation est faite par
    validate() pour produire un InvalidCheckoutError (HTTP 400).
    """

    service_id: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    recipient_name: Optional[str] = None
    recipient_email: Optional[str] = None
    recipient_phone: Optional[str] = None
    sender_message: Optional[str] = None
    delivery_method: Optional[str] = DeliveryMethod.EMAIL.value
    send_to: Optional[str] = SendTo.RECIPIENT.value

    def validate(self) -> tuple[DeliveryMethod, SendTo]:
        """
        Verifie les champs obligatoires et les preferences d'envoi.

        Raises:
            InvalidCheckoutError: Champ manquant ou valeur inconnue
        """
        required = {
            "service_id": self.service_id,
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "customer_phone": self.customer_phone,
            "recipient_name": self.recipient_name,
        }
        missing = [name for name, value in required.items() if not (value and value.strip())]
        if missing:
            raise InvalidCheckoutError(f"Champs manquants : {', '.join(missing)}")

        try:
            method = DeliveryMethod((self.delivery_method or "").upper())
            send_to = SendTo((self.send_to or "").upper())
        except ValueError as exc:
            raise InvalidCheckoutError("Preference d'envoi invalide") from exc

        if send_to is SendTo.RECIPIENT:
            if method.includes_email and not _filled(self.recipient_email):
                raise InvalidCheckoutError("E-mail du beneficiaire requis")
            if method.includes_whatsapp and not _filled(self.recipient_phone):
                raise InvalidCheckoutError("Telephone du beneficiaire requis")
        return method, send_to


def _filled(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def _clean(value: Optional[str]) -> Optional[str]:
    return value.strip() if _filled(value) else None


@dataclass(frozen=True)
class CheckoutResult:
    order_id: str
    payment_order_id: str
    token: str
    redirect_url: str


@dataclass(frozen=True)
class NotificationOutcome:
    """
    Reponse au webhook Midtrans.

    acknowledged=True repond 200 (Midtrans arrete de relancer) meme quand
    la notification est ignoree ; http_status=500 seulement si la
    configuration serveur empeche tout traitement.
    """

    acknowledged: bool
    message: str
    http_status: int = 200
    order_id: Optional[str] = None
    voucher_code: Optional[str] = None


@dataclass(frozen=True)
class OrderStats:
    total_orders: int
    paid_orders: int
    pending_orders: int
    failed_orders: int
    total_revenue: int


class OrderService:
    """
    Service de gestion des commandes.

    Example:
        result = await order_service.create_checkout(request)
        outcome = await order_service.handle_payment_notification(payload)
    """

    def __init__(
        self,
        order_repo: IOrderRepository,
        service_repo: IServiceRepository,
        payment_gateway: IPaymentGateway,
        voucher_service: VoucherService,
        delivery_service: VoucherDeliveryService,
        app_url: str,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._orders = order_repo
        self._services = service_repo
        self._gateway = payment_gateway
        self._vouchers = voucher_service
        self._delivery = delivery_service
        self._app_url = app_url
        self._clock = clock

    # ------------------------------------------------------------------
    # Checkout
    # ------------------------------------------------------------------

    async def create_checkout(self, request: CheckoutRequest) -> CheckoutResult:
        """
        Cree une commande PENDING et le jeton de paiement associe.

        Raises:
            InvalidCheckoutError: Donnees incompletes
            ServiceUnavailableError: Soin inconnu ou retire de la vente
            PaymentGatewayError: Passerelle non configuree ou en erreur
        """
        method, send_to = request.validate()

        service, order = await asyncio.to_thread(self._open_order, request, method, send_to)

        session = await self._gateway.create_transaction(
            PaymentRequest(
                order_id=order.payment_order_id,
                gross_amount=order.total_amount,
                customer_name=order.customer_name,
                customer_email=order.customer_email,
                customer_phone=order.customer_phone,
                items=(PaymentItem(id=service.id, name=service.name, price=service.price),),
                finish_url=f"{self._app_url}/checkout/success?order_id={order.payment_order_id}",
            )
        )
        return CheckoutResult(
            order_id=order.id,
            payment_order_id=order.payment_order_id,
            token=session.token,
            redirect_url=session.redirect_url,
        )

    def _open_order(
        self, request: CheckoutRequest, method: DeliveryMethod, send_to: SendTo
    ) -> tuple[Service, Order]:
        service = self._services.get_by_id(request.service_id.strip())
        if service is None:
            raise ServiceUnavailableError(request.service_id, "Soin introuvable")
        if not service.is_active:
            raise ServiceUnavailableError(service.id)

        if not self._gateway.is_configured:
            raise PaymentGatewayError("Service de paiement indisponible")

        order = self._orders.save(
            Order(
                customer_name=request.customer_name.strip(),
                customer_email=request.customer_email.strip(),
                customer_phone=request.customer_phone.strip(),
                service_id=service.id,
                total_amount=service.price,
                payment_status=PaymentStatus.PENDING,
                payment_order_id=generate_payment_order_id(self._clock()),
                recipient_name=_clean(request.recipient_name),
                recipient_email=_clean(request.recipient_email),
                recipient_phone=_clean(request.recipient_phone),
                sender_message=_clean(request.sender_message),
                delivery_method=method,
                send_to=send_to,
                created_at=self._clock(),
            )
        )
        logger.info(
            "Commande creee",
            order_id=order.id,
            payment_order_id=order.payment_order_id,
            amount=order.total_amount,
        )
        return service, order

    # ------------------------------------------------------------------
    # Consultation
    # ------------------------------------------------------------------

    def list_orders(self, status: Optional[PaymentStatus] = None) -> list[Order]:
        orders = self._orders.list_all()
        if status is None:
            return orders
        return [o for o in orders if o.payment_status is status]

    def get_order(self, order_id: str) -> Order:
        """Raises: OrderNotFoundError"""
        order = self._orders.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def order_stats(self) -> OrderStats:
        """Compteurs par statut et chiffre d'affaires (commandes PAID uniquement)."""
        orders = self._orders.list_all()
        by_status = {status: 0 for status in PaymentStatus}
        revenue = 0
        for order in orders:
            by_status[order.payment_status] += 1
            if order.is_paid:
                revenue += order.total_amount
        return OrderStats(
            total_orders=len(orders),
            paid_orders=by_status[PaymentStatus.PAID],
            pending_orders=by_status[PaymentStatus.PENDING],
            failed_orders=by_status[PaymentStatus.FAILED],
            total_revenue=revenue,
        )

    # ------------------------------------------------------------------
    # Confirmation de paiement
    # ------------------------------------------------------------------

    async def handle_payment_notification(self, payload: Any) -> NotificationOutcome:
        """
        Traite une notification Midtrans.

        Les notifications rejetees (structure, signature, commande inconnue)
        sont acquittees pour que Midtrans cesse de les relancer.
        """
        notification = parse_notification(payload)
        if notification is None:
            logger.warning("Notification Midtrans mal formee")
            return NotificationOutcome(True, "Invalid notification structure")

        if not self._gateway.is_configured:
            logger.error("Notification recue sans cle serveur Midtrans")
            return NotificationOutcome(False, "Server configuration error", http_status=500)

        outcome, paid_order_id = await asyncio.to_thread(self._apply_notification, notification)
        if paid_order_id is None:
            return outcome

        voucher = await self._fulfil(paid_order_id)
        return NotificationOutcome(
            True,
            "Notification processed",
            order_id=paid_order_id,
            voucher_code=voucher.code if voucher else None,
        )

    def _apply_notification(
        self, notification: PaymentNotification
    ) -> tuple[NotificationOutcome, Optional[str]]:
        """Verifie la notification et applique le statut ; retourne l'id de la commande passee PAID."""
        if not self._gateway.verify_signature(
            notification.order_id,
            notification.status_code,
            notification.gross_amount,
            notification.signature_key,
        ):
            logger.warning("Signature Midtrans invalide", payment_order_id=notification.order_id)
            return NotificationOutcome(True, "Invalid signature"), None

        order = self._orders.get_by_payment_order_id(notification.order_id)
        if order is None:
            logger.warning("Commande inconnue", payment_order_id=notification.order_id)
            return NotificationOutcome(True, "Order not found"), None

        new_status = map_transaction_status(notification)
        if order.payment_status.is_final:
            logger.info("Notification deja traitee", order_id=order.id, status=order.payment_status.value)
            return NotificationOutcome(True, "Already processed", order_id=order.id), None
        if new_status is PaymentStatus.PENDING:
            return NotificationOutcome(True, "Status unchanged", order_id=order.id), None

        if not self._orders.mark_payment_status(
            order.id,
            new_status,
            transaction_id=notification.transaction_id,
            payment_type=notification.payment_type,
            transaction_time=notification.transaction_time,
        ):
            logger.info("Notification concurrente deja appliquee", order_id=order.id)
            return NotificationOutcome(True, "Already processed", order_id=order.id), None

        logger.info(
            "Statut de paiement mis a jour",
            order_id=order.id,
            status=new_status.value,
            transaction_status=notification.transaction_status,
        )
        processed = NotificationOutcome(True, "Notification processed", order_id=order.id)
        if new_status is not PaymentStatus.PAID:
            return processed, None
        return processed, order.id

    async def mark_paid(self, order_id: str) -> tuple[Order, Voucher, DeliveryReport]:
        """
        Confirme manuellement le paiement d'une commande.

        Une commande deja PAID n'est pas modifiee : le voucher existant est
        retourne sans nouvel envoi. S'il manquait, il est emis et livre.

        Raises:
            OrderNotFoundError: Commande inconnue
            OrderStatusError: Commande FAILED
        """
        order, voucher, already_issued = await asyncio.to_thread(self._confirm_payment, order_id)
        if already_issued:
            logger.info("Voucher deja emis, pas de nouvel envoi", order_id=order.id)
            return order, voucher, DeliveryReport()
        report = await self._delivery.deliver(order, voucher)
        return await asyncio.to_thread(self.get_order, order_id), voucher, report

    def _confirm_payment(self, order_id: str) -> tuple[Order, Voucher, bool]:
        order = self.get_order(order_id)
        if order.payment_status is PaymentStatus.FAILED:
            raise OrderStatusError(f"Commande en echec, paiement non confirmable : {order_id}")

        if order.payment_status is PaymentStatus.PENDING:
            if self._orders.mark_payment_status(order.id, PaymentStatus.PAID, payment_type="manual"):
                logger.info("Paiement confirme manuellement", order_id=order.id)
            order = self.get_order(order_id)
            if not order.is_paid:
                raise OrderStatusError(f"Commande en echec, paiement non confirmable : {order_id}")

        already_issued = order.voucher_id is not None
        return order, self._vouchers.issue_for_order(order), already_issued

    async def _fulfil(self, order_id: str) -> Optional[Voucher]:
        """Emet et livre le voucher ; les erreurs sont journalisees sans remonter."""
        try:
            order = await asyncio.to_thread(self.get_order, order_id)
            voucher = await asyncio.to_thread(self._vouchers.issue_for_order, order)
        except (KalanaraError, SQLAlchemyError) as exc:
            logger.exception("Echec d'emission du voucher", order_id=order_id, error=str(exc))
            return None
        try:
            await self._delivery.deliver(order, voucher)
        except Exception as exc:
            logger.exception("Echec de livraison du voucher", code=voucher.code, error=str(exc))
        return voucher
