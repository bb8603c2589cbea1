"""
Adaptateur d'envoi d'e-mails transactionnels (Resend).
"""

from kalanara.adapters.email.resend_client import ResendEmailSender

__all__ = ["ResendEmailSender"]
