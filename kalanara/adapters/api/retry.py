"""
Relance des appels Midtrans et Resend sur rate limiting (HTTP 429).

Ces appels sont faits pendant une requete client (checkout) ou pendant le
traitement du webhook : les tentatives sont peu nombreuses et les delais
courts. Le header Retry-After est respecte quand l'API le fournit, dans la
limite de max_wait.

Usage:
    response = await request_with_retry(client, "POST", "/transactions", json=payload)
"""

from typing import Optional

import httpx
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)


class RateLimitError(Exception):
    """
    L'API a repondu 429 Too Many Requests.

    Attributes:
        retry_after: Secondes a attendre (header Retry-After), ou None.
    """

    def __init__(self, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


def parse_retry_after(response: httpx.Response) -> Optional[int]:
    """Lit Retry-After en secondes ; les dates HTTP sont ignorees."""
    value = response.headers.get("Retry-After", "").strip()
    return int(value) if value.isdigit() else None


class wait_retry_after:
    """
    Strategie d'attente tenacity : Retry-After si present, sinon backoff
    exponentiel aleatoire.
    """

    def __init__(self, max_wait: float) -> None:
        self._max_wait = max_wait
        self._fallback = wait_random_exponential(multiplier=1, min=1, max=max_wait)

    def __call__(self, retry_state: RetryCallState) -> float:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(error, RateLimitError) and error.retry_after is not None:
            return float(min(error.retry_after, self._max_wait))
        return self._fallback(retry_state)


def with_retry(max_attempts: int = 3, max_wait: int = 10):
    """
    Decorateur : relance sur RateLimitError uniquement.

    Args:
        max_attempts: Nombre total de tentatives
        max_wait: Attente maximale entre deux tentatives (secondes)
    """
    return retry(
        retry=retry_if_exception_type(RateLimitError),
        wait=wait_retry_after(max_wait),
        stop=stop_after_attempt(max_attempts),
        reraise=True,
    )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 3,
    **kwargs,
) -> httpx.Response:
    """
    Envoie la requete, relancee tant que l'API repond 429.

    Raises:
        RateLimitError: 429 sur toutes les tentatives
        httpx.HTTPStatusError: Toute autre reponse 4xx/5xx (sans relance)
        httpx.HTTPError: Erreur reseau
    """

    @with_retry(max_attempts=max_attempts)
    async def _send() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code == 429:
            raise RateLimitError(parse_retry_after(response))
        response.raise_for_status()
        return response

    return await _send()
