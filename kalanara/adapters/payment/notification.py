"""
Notifications webhook Midtrans.

Modele pydantic du payload et correspondance entre statuts de transaction
Midtrans et statuts de paiement internes.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from kalanara.core.value_objects import PaymentStatus

# Statuts Midtrans signifiant un echec definitif
FAILED_TRANSACTION_STATUSES = frozenset({"deny", "cancel", "expire"})


class PaymentNotification(BaseModel):
    """
    Payload envoye par Midtrans a chaque changement de statut.

    Les montants et codes sont des chaines dans le payload : ils entrent
    tels quels dans le calcul de signature.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    order_id: str
    transaction_status: str
    transaction_id: str
    status_code: str
    signature_key: str
    gross_amount: str
    payment_type: str
    transaction_time: Optional[str] = None
    fraud_status: Optional[str] = None
    merchant_id: Optional[str] = None
    status_message: Optional[str] = None


def parse_notification(payload: Any) -> Optional[PaymentNotification]:
    """
    Valide la structure du payload.

    Retourne None si un champ obligatoire manque ou n'est pas une chaine.
    """
    if not isinstance(payload, dict):
        return None
    try:
        return PaymentNotification.model_validate(payload, strict=True)
    except ValidationError:
        return None


def is_successful_payment(transaction_status: str, fraud_status: Optional[str]) -> bool:
    """settlement, ou capture carte acceptee par la detection de fraude."""
    if transaction_status == "settlement":
        return True
    return transaction_status == "capture" and fraud_status == "accept"


def is_failed_payment(transaction_status: str) -> bool:
    return transaction_status in FAILED_TRANSACTION_STATUSES


def map_transaction_status(notification: PaymentNotification) -> PaymentStatus:
    """
    Convertit le statut Midtrans en statut de paiement interne.

    pending, challenge (capture non acceptee), refund et statuts inconnus
    restent PENDING.
    """
    if is_successful_payment(notification.transaction_status, notification.fraud_status):
        return PaymentStatus.PAID
    if is_failed_payment(notification.transaction_status):
        return PaymentStatus.FAILED
    return PaymentStatus.PENDING
