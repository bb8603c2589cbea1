"""
Signature des notifications Midtrans.

Formule : SHA512(order_id + status_code + gross_amount + server_key), en hexadecimal.
Voir https://docs.midtrans.com/docs/https-notification-webhooks#signature-key
"""

import hashlib
import hmac


def compute_signature(
    order_id: str, status_code: str, gross_amount: str, server_key: str
) -> str:
    """Calcule la signature SHA512 attendue pour une notification."""
    payload = f"{order_id}{status_code}{gross_amount}{server_key}"
    return hashlib.sha512(payload.encode("utf-8")).hexdigest()


def verify_signature(
    order_id: str,
    status_code: str,
    gross_amount: str,
    signature_key: str,
    server_key: str,
) -> bool:
    """Compare la signature recue a la signature attendue en temps constant."""
    expected = compute_signature(order_id, status_code, gross_amount, server_key)
    return hmac.compare_digest(expected, signature_key)
