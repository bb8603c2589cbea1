"""
Énumérations du domaine.

Les valeurs sont stockées telles quelles en base (colonnes texte) et
exposées dans l'API JSON.
"""

from enum import Enum


class ServiceCategory(str, Enum):
    """Catégorie de soin proposé par le spa."""

    MASSAGE = "MASSAGE"
    FACIAL = "FACIAL"
    BODY_TREATMENT = "BODY_TREATMENT"
    PACKAGE = "PACKAGE"


class PaymentStatus(str, Enum):
    """
    Statut de paiement d'une commande.

    Transitions autorisées : PENDING -> PAID, PENDING -> FAILED.
    """

    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"

    @property
    def is_final(self) -> bool:
        return self is not PaymentStatus.PENDING


class VoucherStatus(str, Enum):
    """
    Statut d'un voucher.

    Transitions monotones : ACTIVE -> REDEEMED ou ACTIVE -> EXPIRED.
    """

    ACTIVE = "ACTIVE"
    REDEEMED = "REDEEMED"
    EXPIRED = "EXPIRED"


class DeliveryMethod(str, Enum):
    """Canal d'envoi du voucher après paiement."""

    EMAIL = "EMAIL"
    WHATSAPP = "WHATSAPP"
    BOTH = "BOTH"

    @property
    def includes_email(self) -> bool:
        return self in (DeliveryMethod.EMAIL, DeliveryMethod.BOTH)

    @property
    def includes_whatsapp(self) -> bool:
        return self in (DeliveryMethod.WHATSAPP, DeliveryMethod.BOTH)


class SendTo(str, Enum):
    """Destinataire de l'envoi : l'acheteur ou le bénéficiaire."""

    PURCHASER = "PURCHASER"
    RECIPIENT = "RECIPIENT"


class AdminRole(str, Enum):
    """Rôles du back-office, du plus large au plus restreint."""

    SUPER_ADMIN = "SUPER_ADMIN"
    MANAGER = "MANAGER"
    STAFF = "STAFF"


# Rôles autorisés à accéder au back-office
ADMIN_ROLES: frozenset[AdminRole] = frozenset(AdminRole)
