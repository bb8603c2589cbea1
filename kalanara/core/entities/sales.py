"""
Entités de vente : commandes et vouchers.

Une commande (Order) est créée au checkout avec le statut PENDING. Quand le
paiement est confirmé, elle passe PAID et exactement un voucher lui est
rattaché.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from kalanara.core.value_objects import (
    DeliveryMethod,
    PaymentStatus,
    SendTo,
    VoucherStatus,
)


@dataclass
class Order:
    """
    Achat d'un soin, préalable à l'émission du voucher.

    Attributs :
        id : Identifiant unique
        customer_name / customer_email / customer_phone : Acheteur
        service_id : Soin acheté
        total_amount : Montant total en IDR
        payment_status : PENDING, PAID ou FAILED
        payment_method : Moyen de paiement déclaré (mis à jour par le webhook)
        payment_order_id : Identifiant envoyé à Midtrans (KSP-<ts>-<suffixe>)
        transaction_id / payment_type / transaction_time : Données Midtrans
        recipient_* : Bénéficiaire du voucher
        sender_message : Message personnel de l'acheteur
        delivery_method / send_to : Préférences d'envoi
        voucher_id : Voucher émis (None tant que la commande n'est pas payée)
    """

    id: Optional[str] = None
    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str = ""
    service_id: Optional[str] = None
    total_amount: int = 0
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_method: Optional[str] = None
    payment_order_id: Optional[str] = None
    transaction_id: Optional[str] = None
    payment_type: Optional[str] = None
    transaction_time: Optional[str] = None
    recipient_name: Optional[str] = None
    recipient_email: Optional[str] = None
    recipient_phone: Optional[str] = None
    sender_message: Optional[str] = None
    delivery_method: DeliveryMethod = DeliveryMethod.EMAIL
    send_to: SendTo = SendTo.RECIPIENT
    voucher_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_paid(self) -> bool:
        return self.payment_status is PaymentStatus.PAID


@dataclass
class Voucher:
    """
    Preuve d'achat d'un soin, identifiée par un code court.

    Attributs :
        id : Identifiant unique
        code : Code unique saisi à l'accueil du spa
        order_id : Commande d'origine (au plus un voucher par commande)
        service_id : Soin couvert par le voucher
        recipient_* / sender_* : Bénéficiaire et offrant
        amount : Valeur du voucher en IDR
        status : ACTIVE, REDEEMED ou EXPIRED (statut persisté)
        expiry_date : Dernier jour de validité (inclus)
        redeemed_at : Date d'utilisation
    """

    id: Optional[str] = None
    code: str = ""
    order_id: Optional[str] = None
    service_id: Optional[str] = None
    recipient_name: str = ""
    recipient_email: Optional[str] = None
    recipient_phone: Optional[str] = None
    sender_name: str = ""
    sender_message: Optional[str] = None
    amount: int = 0
    status: VoucherStatus = VoucherStatus.ACTIVE
    expiry_date: Optional[date] = None
    created_at: Optional[datetime] = None
    redeemed_at: Optional[datetime] = None

    def is_past_expiry(self, today: date) -> bool:
        """Vrai si la date du jour dépasse le dernier jour de validité."""
        return self.expiry_date is not None and today > self.expiry_date

    def effective_status(self, today: date) -> VoucherStatus:
        """
        Statut tenant compte de l'expiration paresseuse.

        Un voucher ACTIVE dont la date est dépassée est considéré EXPIRED ;
        un voucher REDEEMED reste REDEEMED (transitions monotones).
        """
        if self.status is VoucherStatus.ACTIVE and self.is_past_expiry(today):
            return VoucherStatus.EXPIRED
        return self.status
