"""
Interfaces ports pour les repositories.

Interfaces abstraites (ports) définissant les contrats pour la persistance des données.
Les implémentations (adaptateurs) fournissent les mécanismes de stockage concrets
(SQLite via SQLModel).
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional

from kalanara.core.entities import AdminUser, Order, Review, Service, Voucher
from kalanara.core.value_objects import PaymentStatus, VoucherStatus


class IServiceRepository(ABC):
    """Interface de stockage du catalogue de soins."""

    @abstractmethod
    def get_by_id(self, service_id: str) -> Optional[Service]:
        """Récupère un soin par son ID."""
        ...

    @abstractmethod
    def list_active(self) -> list[Service]:
        """Liste les soins en vente, par date de création croissante."""
        ...

    @abstractmethod
    def list_all(self) -> list[Service]:
        """Liste tous les soins, y compris ceux retirés de la vente."""
        ...

    @abstractmethod
    def save(self, service: Service) -> Service:
        """Sauvegarde un soin (insertion ou mise à jour)."""
        ...

    @abstractmethod
    def deactivate(self, service_id: str) -> bool:
        """Retire un soin de la vente. Retourne True si le soin existait."""
        ...


class IOrderRepository(ABC):
    """Interface de stockage des commandes."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Optional[Order]:
        """Récupère une commande par son ID."""
        ...

    @abstractmethod
    def get_by_payment_order_id(self, payment_order_id: str) -> Optional[Order]:
        """Récupère une commande par l'identifiant envoyé à Midtrans."""
        ...

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Liste les commandes, les plus récentes en premier."""
        ...

    @abstractmethod
    def save(self, order: Order) -> Order:
        """Sauvegarde une commande (insertion ou mise à jour)."""
        ...

    @abstractmethod
    def mark_payment_status(
        self,
        order_id: str,
        status: PaymentStatus,
        transaction_id: Optional[str] = None,
        payment_type: Optional[str] = None,
        transaction_time: Optional[str] = None,
    ) -> bool:
        """
        Fait passer une commande PENDING vers le statut donné.

        Mise à jour conditionnelle : retourne False si la commande n'est
        plus PENDING (déjà traitée par une notification concurrente).
        """
        ...

    @abstractmethod
    def attach_voucher(self, order_id: str, voucher_id: str) -> bool:
        """Rattache le voucher émis à sa commande."""
        ...


class IVoucherRepository(ABC):
    """Interface de stockage des vouchers."""

    @abstractmethod
    def get_by_id(self, voucher_id: str) -> Optional[Voucher]:
        """Récupère un voucher par son ID."""
        ...

    @abstractmethod
    def get_by_code(self, code: str) -> Optional[Voucher]:
        """Récupère un voucher par son code (insensible à la casse)."""
        ...

    @abstractmethod
    def get_by_order_id(self, order_id: str) -> Optional[Voucher]:
        """Récupère le voucher émis pour une commande."""
        ...

    @abstractmethod
    def code_exists(self, code: str) -> bool:
        """Vérifie si un code est déjà attribué."""
        ...

    @abstractmethod
    def list_all(self) -> list[Voucher]:
        """Liste les vouchers, les plus récents en premier."""
        ...

    @abstractmethod
    def save(self, voucher: Voucher) -> Voucher:
        """Insère un nouveau voucher."""
        ...

    @abstractmethod
    def transition_status(
        self,
        voucher_id: str,
        expected: VoucherStatus,
        new: VoucherStatus,
        redeemed_at: Optional[datetime] = None,
    ) -> bool:
        """
        Change le statut si et seulement si le statut courant vaut `expected`.

        Garde atomique (UPDATE ... WHERE status = expected) : retourne False
        si une autre requête a modifié le voucher entre-temps.
        """
        ...

    @abstractmethod
    def update_expiry(self, voucher_id: str, expiry_date: date) -> bool:
        """Modifie la date d'expiration d'un voucher ACTIVE."""
        ...


class IReviewRepository(ABC):
    """Interface de stockage des avis clients."""

    @abstractmethod
    def list_all(self) -> list[Review]:
        """Liste les avis, les plus récents en premier."""
        ...

    @abstractmethod
    def list_by_min_rating(self, min_rating: int) -> list[Review]:
        """Liste les avis dont la note est au moins `min_rating`."""
        ...

    @abstractmethod
    def get_by_voucher_id(self, voucher_id: str) -> Optional[Review]:
        """Récupère l'avis laissé pour un voucher."""
        ...

    @abstractmethod
    def save(self, review: Review) -> Review:
        """Insère un avis."""
        ...

    @abstractmethod
    def delete(self, review_id: str) -> bool:
        """Supprime un avis. Retourne True si supprimé."""
        ...

    @abstractmethod
    def average_rating(self) -> float:
        """Note moyenne arrondie à une décimale (0 si aucun avis)."""
        ...


class IAdminUserRepository(ABC):
    """Interface de stockage des comptes du back-office."""

    @abstractmethod
    def get_by_id(self, user_id: str) -> Optional[AdminUser]:
        ...

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[AdminUser]:
        ...

    @abstractmethod
    def list_all(self) -> list[AdminUser]:
        ...

    @abstractmethod
    def save(self, user: AdminUser) -> AdminUser:
        """Sauvegarde un compte (insertion ou mise à jour)."""
        ...
