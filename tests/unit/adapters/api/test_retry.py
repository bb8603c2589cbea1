"""
Tests unitaires du retry sur rate limiting (429) des API Midtrans et Resend.

Ces tests verifient:
- RateLimitError conserve le header Retry-After
- with_retry ne relance que sur RateLimitError
- request_with_retry convertit les 429 et propage les autres erreurs
"""

import httpx
import pytest
import respx

from kalanara.adapters.api.retry import (
    RateLimitError,
    parse_retry_after,
    request_with_retry,
    with_retry,
)

SNAP_TRANSACTIONS_URL = "https://app.sandbox.midtrans.com/snap/v1/transactions"


class TestRateLimitError:
    """Tests pour l'exception RateLimitError."""

    def test_stores_retry_after(self) -> None:
        error = RateLimitError(retry_after=5)
        assert error.retry_after == 5
        assert "5" in str(error)

    def test_without_retry_after(self) -> None:
        assert RateLimitError().retry_after is None

    def test_parse_retry_after_seconds(self) -> None:
        assert parse_retry_after(httpx.Response(429, headers={"Retry-After": "3"})) == 3

    def test_parse_retry_after_http_date_ignored(self) -> None:
        response = httpx.Response(429, headers={"Retry-After": "Wed, 21 Oct 2026 07:28:00 GMT"})
        assert parse_retry_after(response) is None
        assert parse_retry_after(httpx.Response(429)) is None


class TestWithRetryDecorator:
    """Tests pour le decorateur with_retry."""

    @pytest.mark.asyncio
    async def test_retries_until_success(self) -> None:
        attempts = []

        @with_retry(max_attempts=3, max_wait=1)
        async def create_token() -> str:
            attempts.append(1)
            if len(attempts) < 2:
                raise RateLimitError(retry_after=1)
            return "snap-token"

        assert await create_token() == "snap-token"
        assert len(attempts) == 2

    @pytest.mark.asyncio
    async def test_reraises_after_last_attempt(self) -> None:
        attempts = []

        @with_retry(max_attempts=2, max_wait=1)
        async def always_limited() -> str:
            attempts.append(1)
            raise RateLimitError()

        with pytest.raises(RateLimitError):
            await always_limited()
        assert len(attempts) == 2

    @pytest.mark.asyncio
    async def test_other_errors_not_retried(self) -> None:
        attempts = []

        @with_retry(max_attempts=3, max_wait=1)
        async def broken() -> str:
            attempts.append(1)
            raise KeyError("token")

        with pytest.raises(KeyError):
            await broken()
        assert len(attempts) == 1


class TestRequestWithRetry:
    """Tests pour request_with_retry."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_success_on_first_call(self) -> None:
        route = respx.post(SNAP_TRANSACTIONS_URL).mock(
            return_value=httpx.Response(201, json={"token": "abc"})
        )

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(client, "POST", SNAP_TRANSACTIONS_URL, json={})

        assert response.json() == {"token": "abc"}
        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_429_then_success(self) -> None:
        route = respx.post(SNAP_TRANSACTIONS_URL).mock(
            side_effect=[
                httpx.Response(429),
                httpx.Response(201, json={"token": "abc"}),
            ]
        )

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(client, "POST", SNAP_TRANSACTIONS_URL, json={})

        assert response.status_code == 201
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_429_exhausted(self) -> None:
        route = respx.post(SNAP_TRANSACTIONS_URL).mock(
            return_value=httpx.Response(429, headers={"Retry-After": "1"})
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(RateLimitError) as exc_info:
                await request_with_retry(
                    client, "POST", SNAP_TRANSACTIONS_URL, max_attempts=2, json={}
                )

        assert exc_info.value.retry_after == 1
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_server_error_not_retried(self) -> None:
        route = respx.post(SNAP_TRANSACTIONS_URL).mock(
            return_value=httpx.Response(500, text="Internal Server Error")
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                await request_with_retry(client, "POST", SNAP_TRANSACTIONS_URL, json={})

        assert exc_info.value.response.status_code == 500
        assert route.call_count == 1
