"""
Entités métier représentant les concepts centraux du domaine.

Exports:
- Service: Soin proposé à la vente
- Order: Commande d'un soin
- Voucher: Voucher émis pour une commande payée
- Review: Avis client
- AdminUser: Compte du back-office
"""

from kalanara.core.entities.catalog import AdminUser, Review, Service
from kalanara.core.entities.sales import Order, Voucher

__all__ = [
    "AdminUser",
    "Order",
    "Review",
    "Service",
    "Voucher",
]
