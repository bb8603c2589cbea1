"""
Adaptateur de la passerelle de paiement Midtrans (Snap).

- MidtransSnapClient : creation de transactions (implemente IPaymentGateway)
- MidtransConfig : URLs sandbox / production et cles
- PaymentNotification, parse_notification, map_transaction_status : webhook
- compute_signature, verify_signature : signature SHA512 des notifications
"""

from kalanara.adapters.payment.midtrans_client import (
    MidtransConfig,
    MidtransSnapClient,
    build_transaction_payload,
    split_name,
)
from kalanara.adapters.payment.notification import (
    PaymentNotification,
    map_transaction_status,
    parse_notification,
)
from kalanara.adapters.payment.signature import compute_signature, verify_signature

__all__ = [
    "MidtransConfig",
    "MidtransSnapClient",
    "PaymentNotification",
    "build_transaction_payload",
    "compute_signature",
    "map_transaction_status",
    "parse_notification",
    "split_name",
    "verify_signature",
]
