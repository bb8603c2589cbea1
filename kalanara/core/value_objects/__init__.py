"""
Objets valeur immutables du domaine.

Énumérations partagées entre entités, persistance et API :
- ServiceCategory : catégorie de soin
- PaymentStatus : statut de paiement d'une commande
- VoucherStatus : cycle de vie d'un voucher
- DeliveryMethod / SendTo : préférences d'envoi du voucher
- AdminRole : rôles du back-office
"""

from kalanara.core.value_objects.enums import (
    ADMIN_ROLES,
    AdminRole,
    DeliveryMethod,
    PaymentStatus,
    SendTo,
    ServiceCategory,
    VoucherStatus,
)

__all__ = [
    "ADMIN_ROLES",
    "AdminRole",
    "DeliveryMethod",
    "PaymentStatus",
    "SendTo",
    "ServiceCategory",
    "VoucherStatus",
]
