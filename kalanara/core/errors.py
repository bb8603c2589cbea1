"""
Exceptions métier.

Levées par les services, traduites en réponses HTTP par la couche web
(voir kalanara.web.errors) et en messages par la CLI.
"""

from typing import Optional


class KalanaraError(Exception):
    """Base de toutes les erreurs métier de l'application."""


# --- Vouchers ---------------------------------------------------------------


class VoucherError(KalanaraError):
    """
    Erreur liée à un voucher.

    Attributes:
        code: Code du voucher concerné (si connu)
    """

    default_message = "Voucher invalide"

    def __init__(self, code: Optional[str] = None, message: Optional[str] = None) -> None:
        self.code = code
        super().__init__(message or self.default_message)


class VoucherNotFoundError(VoucherError):
    default_message = "Voucher introuvable"


class VoucherExpiredError(VoucherError):
    default_message = "Voucher expiré"


class VoucherAlreadyRedeemedError(VoucherError):
    default_message = "Voucher déjà utilisé"


class VoucherNotActiveError(VoucherError):
    default_message = "Voucher inactif"


class VoucherIssueError(VoucherError):
    default_message = "Impossible d'émettre le voucher"


class VoucherCodeExhaustedError(VoucherError):
    """Le générateur n'a pas trouvé de code libre dans le nombre d'essais autorisé."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(message=f"Aucun code libre après {attempts} tentatives")


# --- Commandes et paiement --------------------------------------------------


class OrderNotFoundError(KalanaraError):
    def __init__(self, order_id: str) -> None:
        self.order_id = order_id
        super().__init__(f"Commande introuvable : {order_id}")


class OrderNotPaidError(KalanaraError):
    def __init__(self, order_id: Optional[str]) -> None:
        self.order_id = order_id
        super().__init__(f"Commande non payée : {order_id}")


class InvalidCheckoutError(KalanaraError):
    """Données de checkout incomplètes ou invalides."""


class ServiceUnavailableError(KalanaraError):
    """Soin inexistant ou retiré de la vente."""

    def __init__(self, service_id: str, message: str = "Soin indisponible") -> None:
        self.service_id = service_id
        super().__init__(message)


class PaymentGatewayError(KalanaraError):
    """Passerelle de paiement non configurée ou en erreur."""


# --- Back-office ------------------------------------------------------------


class AdminUserError(KalanaraError):
    """Erreur de gestion des comptes administrateurs."""


class AuthenticationError(KalanaraError):
    def __init__(self, message: str = "Identifiants invalides") -> None:
        super().__init__(message)


class ReviewError(KalanaraError):
    """Avis refusé (note invalide, voucher non utilisé, doublon)."""


class OrderStatusError(KalanaraError):
    """Transition de statut de paiement interdite (ex : FAILED -> PAID)."""


class CatalogError(KalanaraError):
    """Soin invalide (nom vide, prix ou durée non positifs)."""
