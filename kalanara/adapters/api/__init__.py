"""
Infrastructure partagee des clients HTTP externes (Midtrans, Resend).

- RateLimitError: Exception pour les erreurs 429
- with_retry: Decorateur avec backoff exponentiel pour gerer le rate limiting
- request_with_retry: Requete httpx avec retry automatique sur 429
"""

from kalanara.adapters.api.retry import RateLimitError, request_with_retry, with_retry

__all__ = [
    "RateLimitError",
    "request_with_retry",
    "with_retry",
]
