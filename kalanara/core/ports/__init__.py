"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Ports repository : Contrats de persistance des données
- IServiceRepository, IOrderRepository, IVoucherRepository
- IReviewRepository, IAdminUserRepository

Ports services externes :
- IPaymentGateway : Passerelle de paiement (Midtrans Snap)
- IEmailSender : Envoi d'e-mails transactionnels (Resend)
"""

from kalanara.core.ports.payment import (
    EmailMessage,
    IEmailSender,
    IPaymentGateway,
    PaymentItem,
    PaymentRequest,
    PaymentSession,
)
from kalanara.core.ports.repositories import (
    IAdminUserRepository,
    IOrderRepository,
    IReviewRepository,
    IServiceRepository,
    IVoucherRepository,
)

__all__ = [
    # Repositories
    "IAdminUserRepository",
    "IOrderRepository",
    "IReviewRepository",
    "IServiceRepository",
    "IVoucherRepository",
    # Services externes
    "EmailMessage",
    "IEmailSender",
    "IPaymentGateway",
    "PaymentItem",
    "PaymentRequest",
    "PaymentSession",
]
