"""
Entités du catalogue et du back-office.

Soins proposés à la vente, avis clients et comptes administrateurs.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from kalanara.core.value_objects import AdminRole, ServiceCategory


@dataclass
class Service:
    """
    Soin proposé à la vente sous forme de voucher.

    Attributs :
        id : Identifiant unique
        name : Nom du soin
        description : Description commerciale
        duration : Durée du soin en minutes
        price : Prix en roupies (IDR, entier)
        category : Catégorie du soin
        image_url : URL de l'illustration
        is_active : False si le soin est retiré de la vente (suppression logique)
    """

    id: Optional[str] = None
    name: str = ""
    description: Optional[str] = None
    duration: int = 0
    price: int = 0
    category: ServiceCategory = ServiceCategory.MASSAGE
    image_url: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Review:
    """Avis laissé par le bénéficiaire après utilisation de son voucher."""

    id: Optional[str] = None
    voucher_id: str = ""
    rating: int = 0
    comment: Optional[str] = None
    customer_name: str = ""
    created_at: Optional[datetime] = None


@dataclass
class AdminUser:
    """
    Compte du back-office.

    Le hash du mot de passe n'est jamais exposé par l'API.
    """

    id: Optional[str] = None
    email: str = ""
    name: str = ""
    role: AdminRole = AdminRole.STAFF
    password_hash: str = ""
    is_active: bool = True
    created_at: Optional[datetime] = None
