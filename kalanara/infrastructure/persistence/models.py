"""
Modeles SQLModel pour la base de donnees Kalanara.

Ces modeles representent les tables de la base de donnees.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- services: Catalogue des soins
- orders: Commandes (une par checkout)
- vouchers: Vouchers emis pour les commandes payees
- reviews: Avis clients
- admin_users: Comptes du back-office

Les identifiants sont des UUID hexadecimaux : ils apparaissent dans les URLs
publiques (page voucher) et ne doivent pas etre devinables.

Les dates sont en UTC naif (colonnes DateTime sans fuseau), comme celles
fournies par kalanara.utils.clock.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from kalanara.utils.clock import utcnow


def _new_id() -> str:
    return uuid.uuid4().hex


class ServiceModel(SQLModel, table=True):
    """Modele representant un soin du catalogue."""

    __tablename__ = "services"

    id: str = Field(default_factory=_new_id, primary_key=True)
    name: str = Field(index=True)
    description: str | None = None
    duration: int  # minutes
    price: int  # IDR
    category: str = Field(default="MASSAGE")
    image_url: str | None = None
    is_active: bool = Field(default=True, index=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)


class OrderModel(SQLModel, table=True):
    """
    Modele representant une commande.

    Les champs transaction_* sont renseignes par le webhook Midtrans.
    """

    __tablename__ = "orders"

    id: str = Field(default_factory=_new_id, primary_key=True)
    customer_name: str
    customer_email: str = Field(index=True)
    customer_phone: str
    service_id: str | None = Field(default=None, foreign_key="services.id")
    total_amount: int
    payment_status: str = Field(default="PENDING", index=True)
    payment_method: str | None = None
    payment_order_id: str | None = Field(default=None, unique=True, index=True)
    transaction_id: str | None = None
    payment_type: str | None = None
    transaction_time: str | None = None
    recipient_name: str | None = None
    recipient_email: str | None = None
    recipient_phone: str | None = None
    sender_message: str | None = None
    delivery_method: str = Field(default="EMAIL")
    send_to: str = Field(default="RECIPIENT")
    voucher_id: str | None = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime, index=True)


class VoucherModel(SQLModel, table=True):
    """
    Modele representant un voucher.

    Contraintes d'unicite sur le code (codes courts, collision possible) et
    sur order_id (au plus un voucher par commande).
    """

    __tablename__ = "vouchers"

    id: str = Field(default_factory=_new_id, primary_key=True)
    code: str = Field(unique=True, index=True)
    order_id: str | None = Field(default=None, foreign_key="orders.id", unique=True)
    service_id: str | None = Field(default=None, foreign_key="services.id")
    recipient_name: str
    recipient_email: str | None = None
    recipient_phone: str | None = None
    sender_name: str
    sender_message: str | None = None
    amount: int
    status: str = Field(default="ACTIVE", index=True)
    expiry_date: date
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime, index=True)
    redeemed_at: datetime | None = Field(default=None, sa_type=DateTime)


class ReviewModel(SQLModel, table=True):
    """Modele representant un avis client (un avis par voucher)."""

    __tablename__ = "reviews"

    id: str = Field(default_factory=_new_id, primary_key=True)
    voucher_id: str = Field(foreign_key="vouchers.id", unique=True)
    rating: int
    comment: str | None = None
    customer_name: str
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime, index=True)


class AdminUserModel(SQLModel, table=True):
    """Modele representant un compte du back-office."""

    __tablename__ = "admin_users"

    id: str = Field(default_factory=_new_id, primary_key=True)
    email: str = Field(unique=True, index=True)
    name: str
    role: str = Field(default="STAFF")
    password_hash: str
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
