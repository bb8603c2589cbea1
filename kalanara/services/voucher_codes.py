"""
Generation des codes de voucher et des identifiants de commande Midtrans.

Les codes sont courts (5 caracteres par defaut) pour etre dictes au
telephone ou saisis a l'accueil : les collisions sont donc possibles et
chaque code tire est verifie contre la base avant attribution.
"""

import secrets
from collections.abc import Callable
from datetime import datetime
from typing import Optional

from loguru import logger

from kalanara.core.errors import VoucherCodeExhaustedError
from kalanara.utils.clock import utcnow
from kalanara.utils.constants import (
    CODE_ALPHABET,
    PAYMENT_ORDER_PREFIX,
    PAYMENT_ORDER_SUFFIX_LENGTH,
)


def normalize_code(code: str) -> str:
    """Les codes sont compares sans tenir compte de la casse ni des espaces."""
    return code.strip().upper()


def _random_string(length: int) -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def generate_voucher_code(length: int = 5) -> str:
    """Tire un code de `length` caracteres [A-Z0-9] via le CSPRNG."""
    if length <= 0:
        raise ValueError("Code length must be positive")
    return _random_string(length)


def generate_unique_code(
    exists: Callable[[str], bool],
    length: int = 5,
    max_attempts: int = 5,
) -> str:
    """
    Tire des codes jusqu'a en trouver un libre.

    Args:
        exists: Fonction retournant True si le code est deja attribue
        length: Longueur du code
        max_attempts: Nombre maximum de tirages

    Raises:
        VoucherCodeExhaustedError: Si tous les tirages sont deja attribues
    """
    for attempt in range(1, max_attempts + 1):
        code = generate_voucher_code(length)
        if not exists(code):
            return code
        logger.warning("Collision de code voucher", attempt=attempt, length=length)
    raise VoucherCodeExhaustedError(max_attempts)


def generate_payment_order_id(now: Optional[datetime] = None) -> str:
    """
    Identifiant de commande envoye a Midtrans : KSP-<epoch ms>-<6 caracteres>.

    Midtrans exige un order_id unique par transaction.
    """
    now = now or utcnow()
    epoch_ms = int((now - datetime(1970, 1, 1)).total_seconds() * 1000)
    suffix = _random_string(PAYMENT_ORDER_SUFFIX_LENGTH)
    return f"{PAYMENT_ORDER_PREFIX}-{epoch_ms}-{suffix}"
