"""
Service de cycle de vie des vouchers.

Centralise les regles metier appliquees par le webhook, le back-office
et la CLI :

- Emission : exactement un voucher par commande PAID (idempotent)
- Verification publique : statut effectif, expiration paresseuse
- Utilisation : ACTIVE -> REDEEMED une seule fois, meme en concurrence
- Prolongation et annulation par le back-office

L'expiration n'est pas balayee en tache de fond : un voucher ACTIVE dont
la date est depassee est persiste EXPIRED au moment ou il est consulte.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from loguru import logger
from sqlalchemy.exc import IntegrityError

from kalanara.core.entities import Order, Service, Voucher
from kalanara.core.errors import (
    OrderNotPaidError,
    VoucherAlreadyRedeemedError,
    VoucherCodeExhaustedError,
    VoucherExpiredError,
    VoucherIssueError,
    VoucherNotActiveError,
    VoucherNotFoundError,
)
from kalanara.core.ports.repositories import (
    IOrderRepository,
    IServiceRepository,
    IVoucherRepository,
)
from kalanara.core.value_objects import VoucherStatus
from kalanara.services.voucher_codes import generate_unique_code, normalize_code
from kalanara.utils.clock import add_months, utcnow


@dataclass
class VoucherView:
    """Voucher accompagne de son soin et de son statut effectif."""

    voucher: Voucher
    service: Optional[Service]
    status: VoucherStatus

    @property
    def is_redeemable(self) -> bool:
        return self.status is VoucherStatus.ACTIVE


class VoucherService:
    """
    Service de gestion des vouchers.

    Example:
        service = VoucherService(voucher_repo, order_repo, service_repo)
        voucher = service.issue_for_order(paid_order)
        service.redeem(voucher.code)
    """

    def __init__(
        self,
        voucher_repo: IVoucherRepository,
        order_repo: IOrderRepository,
        service_repo: IServiceRepository,
        code_length: int = 5,
        max_code_attempts: int = 5,
        validity_months: int = 12,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """
        Initialise le service.

        Args:
            voucher_repo: Repository des vouchers
            order_repo: Repository des commandes
            service_repo: Repository des soins
            code_length: Longueur des codes generes
            max_code_attempts: Tirages maximum en cas de collision
            validity_months: Duree de validite d'un voucher emis
            clock: Horloge UTC (injectable pour les tests)
        """
        self._vouchers = voucher_repo
        self._orders = order_repo
        self._services = service_repo
        self._code_length = code_length
        self._max_code_attempts = max_code_attempts
        self._validity_months = validity_months
        self._clock = clock

    def _today(self) -> date:
        return self._clock().date()

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def issue_for_order(self, order: Order) -> Voucher:
        """
        Emet le voucher d'une commande payee.

        Idempotent : si la commande a deja un voucher, il est retourne tel
        quel. La contrainte d'unicite sur vouchers.order_id garantit qu'un
        appel concurrent ne peut pas en creer un second.

        Raises:
            OrderNotPaidError: Si la commande n'est pas PAID
            VoucherIssueError: Soin, beneficiaire ou contact manquant
            VoucherCodeExhaustedError: Si aucun code libre n'a ete trouve
        """
        if not order.is_paid:
            raise OrderNotPaidError(order.id)

        existing = self._vouchers.get_by_order_id(order.id)
        if existing:
            self._orders.attach_voucher(order.id, existing.id)
            return existing

        service = self._services.get_by_id(order.service_id) if order.service_id else None
        if service is None:
            raise VoucherIssueError(message=f"Soin introuvable pour la commande {order.id}")

        recipient_name = order.recipient_name or order.customer_name
        recipient_email = order.recipient_email or order.customer_email
        if not recipient_name:
            raise VoucherIssueError(message=f"Beneficiaire manquant pour la commande {order.id}")
        if not (recipient_email or order.recipient_phone):
            raise VoucherIssueError(message=f"Aucun contact pour la commande {order.id}")

        now = self._clock()
        draft = Voucher(
            order_id=order.id,
            service_id=service.id,
            recipient_name=recipient_name,
            recipient_email=recipient_email,
            recipient_phone=order.recipient_phone,
            sender_name=order.customer_name,
            sender_message=order.sender_message,
            amount=order.total_amount,
            status=VoucherStatus.ACTIVE,
            expiry_date=add_months(now.date(), self._validity_months),
            created_at=now,
        )

        # Le code libre peut etre pris entre la verification et l'insertion :
        # l'IntegrityError est alors traitee comme une collision de plus.
        for attempt in range(1, self._max_code_attempts + 1):
            draft.code = generate_unique_code(
                self._vouchers.code_exists,
                length=self._code_length,
                max_attempts=self._max_code_attempts,
            )
            try:
                voucher = self._vouchers.save(draft)
            except IntegrityError:
                concurrent = self._vouchers.get_by_order_id(order.id)
                if concurrent:
                    logger.info("Voucher deja emis en concurrence", order_id=order.id)
                    self._orders.attach_voucher(order.id, concurrent.id)
                    return concurrent
                logger.warning("Code voucher pris a l'insertion", attempt=attempt)
                continue

            self._orders.attach_voucher(order.id, voucher.id)
            logger.info(
                "Voucher emis",
                code=voucher.code,
                order_id=order.id,
                expiry_date=voucher.expiry_date.isoformat(),
            )
            return voucher

        raise VoucherCodeExhaustedError(self._max_code_attempts)

    # ------------------------------------------------------------------
    # Consultation
    # ------------------------------------------------------------------

    def _refresh_expiry(self, voucher: Voucher) -> Voucher:
        """Persiste EXPIRED pour un voucher ACTIVE dont la date est depassee."""
        if voucher.effective_status(self._today()) is not VoucherStatus.EXPIRED:
            return voucher
        if voucher.status is VoucherStatus.EXPIRED:
            return voucher
        if self._vouchers.transition_status(
            voucher.id, VoucherStatus.ACTIVE, VoucherStatus.EXPIRED
        ):
            logger.info("Voucher expire", code=voucher.code)
            voucher.status = VoucherStatus.EXPIRED
            return voucher
        # Modifie entre-temps (utilise ou deja expire) : relire
        return self._vouchers.get_by_id(voucher.id) or voucher

    def _view(self, voucher: Voucher) -> VoucherView:
        voucher = self._refresh_expiry(voucher)
        service = self._services.get_by_id(voucher.service_id) if voucher.service_id else None
        return VoucherView(
            voucher=voucher,
            service=service,
            status=voucher.effective_status(self._today()),
        )

    def get_by_id(self, voucher_id: str) -> Voucher:
        """Raises: VoucherNotFoundError"""
        voucher = self._vouchers.get_by_id(voucher_id)
        if voucher is None:
            raise VoucherNotFoundError()
        return self._refresh_expiry(voucher)

    def get_by_code(self, code: str) -> Voucher:
        """Raises: VoucherNotFoundError"""
        normalized = normalize_code(code)
        voucher = self._vouchers.get_by_code(normalized) if normalized else None
        if voucher is None:
            raise VoucherNotFoundError(normalized)
        return self._refresh_expiry(voucher)

    def get_view(self, voucher_id: str) -> VoucherView:
        """Voucher, soin associe et statut effectif, par ID."""
        return self._view(self.get_by_id(voucher_id))

    def verify(self, code: str) -> VoucherView:
        """
        Verification publique d'un code.

        Ne modifie rien d'autre que le passage paresseux a EXPIRED.

        Raises:
            VoucherNotFoundError: Si le code n'existe pas
        """
        return self._view(self.get_by_code(code))

    def list_vouchers(self, status: Optional[VoucherStatus] = None) -> list[Voucher]:
        """Liste les vouchers (plus recents en premier), filtres par statut effectif."""
        vouchers = [self._refresh_expiry(v) for v in self._vouchers.list_all()]
        if status is None:
            return vouchers
        today = self._today()
        return [v for v in vouchers if v.effective_status(today) is status]

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def redeem(self, code: str) -> Voucher:
        """
        Marque un voucher comme utilise.

        Raises:
            VoucherNotFoundError: Code inconnu
            VoucherExpiredError: Date d'expiration depassee ou voucher annule
            VoucherAlreadyRedeemedError: Deja utilise (y compris par une
                requete concurrente)
        """
        voucher = self.get_by_code(code)
        if voucher.status is VoucherStatus.EXPIRED or voucher.is_past_expiry(self._today()):
            raise VoucherExpiredError(voucher.code)
        if voucher.status is VoucherStatus.REDEEMED:
            raise VoucherAlreadyRedeemedError(voucher.code)

        redeemed_at = self._clock()
        if not self._vouchers.transition_status(
            voucher.id,
            VoucherStatus.ACTIVE,
            VoucherStatus.REDEEMED,
            redeemed_at=redeemed_at,
        ):
            current = self._vouchers.get_by_id(voucher.id)
            if current and current.status is VoucherStatus.EXPIRED:
                raise VoucherExpiredError(voucher.code)
            logger.warning("Double utilisation refusee", code=voucher.code)
            raise VoucherAlreadyRedeemedError(voucher.code)

        voucher.status = VoucherStatus.REDEEMED
        voucher.redeemed_at = redeemed_at
        logger.info("Voucher utilise", code=voucher.code)
        return voucher

    def extend(self, voucher_id: str, days: int) -> Voucher:
        """
        Prolonge un voucher ACTIVE de `days` jours.

        Raises:
            ValueError: Si days <= 0
            VoucherNotFoundError / VoucherNotActiveError
        """
        if days <= 0:
            raise ValueError("days must be positive")
        voucher = self.get_by_id(voucher_id)
        if voucher.status is not VoucherStatus.ACTIVE:
            raise VoucherNotActiveError(voucher.code)

        new_expiry = voucher.expiry_date + timedelta(days=days)
        if not self._vouchers.update_expiry(voucher.id, new_expiry):
            raise VoucherNotActiveError(voucher.code)

        logger.info("Voucher prolonge", code=voucher.code, days=days, expiry_date=new_expiry.isoformat())
        voucher.expiry_date = new_expiry
        return voucher

    def void(self, voucher_id: str) -> Voucher:
        """
        Annule un voucher ACTIVE (passage a EXPIRED).

        Raises:
            VoucherNotFoundError / VoucherNotActiveError
        """
        voucher = self.get_by_id(voucher_id)
        if voucher.status is not VoucherStatus.ACTIVE:
            raise VoucherNotActiveError(voucher.code)
        if not self._vouchers.transition_status(
            voucher.id, VoucherStatus.ACTIVE, VoucherStatus.EXPIRED
        ):
            raise VoucherNotActiveError(voucher.code)

        logger.info("Voucher annule", code=voucher.code)
        voucher.status = VoucherStatus.EXPIRED
        return voucher
