"""
Schemas pydantic de l'API JSON.

Les entrees de la boutique acceptent les noms camelCase du front
(serviceId, customerName...) comme les noms snake_case.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..core.value_objects import (
    AdminRole,
    DeliveryMethod,
    PaymentStatus,
    SendTo,
    ServiceCategory,
    VoucherStatus,
)


class _Input(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _Output(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# --- Catalogue --------------------------------------------------------------


class ServiceOut(_Output):
    id: str
    name: str
    description: Optional[str] = None
    duration: int
    price: int
    category: ServiceCategory
    image_url: Optional[str] = None
    is_active: bool


class ServiceCreate(_Input):
    name: str
    description: Optional[str] = None
    duration: int
    price: int
    category: ServiceCategory = ServiceCategory.MASSAGE
    image_url: Optional[str] = None
    is_active: bool = True


class ServiceUpdate(_Input):
    name: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[int] = None
    price: Optional[int] = None
    category: Optional[ServiceCategory] = None
    image_url: Optional[str] = None
    is_active: Optional[bool] = None


# --- Checkout et paiement ---------------------------------------------------


class CheckoutPayload(_Input):
    """Champs bruts : la validation metier produit un 400 explicite."""

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


class CheckoutOut(BaseModel):
    order_id: str
    payment_order_id: str
    token: str
    redirect_url: str


class PaymentConfigOut(BaseModel):
    enabled: bool
    client_key: Optional[str] = None
    snap_url: str
    is_production: bool


class NotificationOut(BaseModel):
    status: str
    message: str


# --- Commandes --------------------------------------------------------------


class OrderOut(_Output):
    id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    service_id: Optional[str] = None
    total_amount: int
    payment_status: PaymentStatus
    payment_method: Optional[str] = None
    payment_order_id: Optional[str] = None
    transaction_id: Optional[str] = None
    payment_type: Optional[str] = None
    transaction_time: Optional[str] = None
    recipient_name: Optional[str] = None
    recipient_email: Optional[str] = None
    recipient_phone: Optional[str] = None
    sender_message: Optional[str] = None
    delivery_method: DeliveryMethod
    send_to: SendTo
    voucher_id: Optional[str] = None
    created_at: Optional[datetime] = None


class OrderStatsOut(_Output):
    total_orders: int
    paid_orders: int
    pending_orders: int
    failed_orders: int
    total_revenue: int


class MarkPaidOut(BaseModel):
    order: OrderOut
    voucher_code: str
    email_sent: bool
    whatsapp_url: Optional[str] = None
    errors: list[str] = Field(default_factory=list)


# --- Vouchers ---------------------------------------------------------------


class VoucherOut(_Output):
    id: str
    code: str
    order_id: Optional[str] = None
    service_id: Optional[str] = None
    recipient_name: str
    recipient_email: Optional[str] = None
    recipient_phone: Optional[str] = None
    sender_name: str
    sender_message: Optional[str] = None
    amount: int
    status: VoucherStatus
    expiry_date: Optional[date] = None
    created_at: Optional[datetime] = None
    redeemed_at: Optional[datetime] = None


class VoucherDetailOut(_Output):
    voucher: VoucherOut
    service: Optional[ServiceOut] = None
    status: VoucherStatus
    is_redeemable: bool


class RedeemOut(BaseModel):
    success: bool
    message: str
    voucher: VoucherOut


class ExtendPayload(_Input):
    days: int = Field(gt=0)


class WhatsAppOut(BaseModel):
    url: str


# --- Avis -------------------------------------------------------------------


class ReviewPayload(_Input):
    voucher_id: str
    rating: int
    comment: Optional[str] = None
    customer_name: Optional[str] = None


class ReviewOut(_Output):
    id: str
    voucher_id: str
    rating: int
    comment: Optional[str] = None
    customer_name: str
    created_at: Optional[datetime] = None


# --- Back-office ------------------------------------------------------------


class LoginPayload(_Input):
    email: str
    password: str


class AdminUserOut(_Output):
    id: str
    email: str
    name: str
    role: AdminRole
    is_active: bool
    created_at: Optional[datetime] = None


class AdminUserCreate(_Input):
    email: str
    name: str = ""
    role: AdminRole = AdminRole.STAFF
    password: Optional[str] = None


class AdminUserCreated(BaseModel):
    user: AdminUserOut
    temporary_password: Optional[str] = None


class RoleUpdate(_Input):
    role: AdminRole


class SettingsOut(BaseModel):
    """Vue en lecture seule de la configuration (aucun secret)."""

    app_url: str
    voucher_code_length: int
    voucher_validity_months: int
    payment_enabled: bool
    midtrans_is_production: bool
    email_enabled: bool
    email_from: str
    session_ttl_minutes: int
