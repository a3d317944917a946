"""
Tests unitaires pour le mecanisme de retry avec backoff exponentiel.

Ces tests verifient:
- RateLimitError capture le header Retry-After
- with_retry relance sur RateLimitError uniquement
- request_with_retry detecte les 429 et relance automatiquement
- Les autres statuts remontent immediatement
"""

import httpx
import pytest
import respx

from media_scraper.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from media_scraper.core.ports.api_clients import CatalogError


class TestRateLimitError:
    def test_stores_retry_after(self) -> None:
        error = RateLimitError(retry_after=60)
        assert error.retry_after == 60
        assert "60" in str(error)

    def test_is_a_catalog_error(self) -> None:
        assert isinstance(RateLimitError(), CatalogError)


class TestWithRetryDecorator:
    @pytest.mark.asyncio
    async def test_retries_on_rate_limit_error(self) -> None:
        """with_retry relance quand RateLimitError est levee."""
        call_count = 0

        @with_retry(max_attempts=3, max_wait=1)
        async def flaky_function() -> str:
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise RateLimitError(retry_after=1)
            return "success"

        assert await flaky_function() == "success"
        assert call_count == 3

    @pytest.mark.asyncio
    async def test_stops_after_max_attempts(self) -> None:
        call_count = 0

        @with_retry(max_attempts=2, max_wait=1)
        async def always_fails() -> str:
            nonlocal call_count
            call_count += 1
            raise RateLimitError()

        with pytest.raises(RateLimitError):
            await always_fails()
        assert call_count == 2

    @pytest.mark.asyncio
    async def test_does_not_retry_other_exceptions(self) -> None:
        call_count = 0

        @with_retry(max_attempts=3, max_wait=1)
        async def raises_value_error() -> str:
            nonlocal call_count
            call_count += 1
            raise ValueError("not a rate limit error")

        with pytest.raises(ValueError):
            await raises_value_error()
        assert call_count == 1


class TestRequestWithRetry:
    @pytest.mark.asyncio
    @respx.mock
    async def test_retries_429_then_succeeds(self) -> None:
        route = respx.get("https://api.example.com/data").mock(
            side_effect=[
                httpx.Response(429, headers={"Retry-After": "1"}),
                httpx.Response(200, json={"ok": True}),
            ]
        )

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(client, "GET", "https://api.example.com/data", max_wait=1)

        assert response.json() == {"ok": True}
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_server_error_is_not_retried(self) -> None:
        route = respx.get("https://api.example.com/data").mock(return_value=httpx.Response(500))

        async with httpx.AsyncClient() as client:
            with pytest.raises(httpx.HTTPStatusError):
                await request_with_retry(client, "GET", "https://api.example.com/data")

        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_exhausted_retries_raise_rate_limit_error(self) -> None:
        respx.get("https://api.example.com/data").mock(
            return_value=httpx.Response(429, headers={"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"})
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(RateLimitError) as exc_info:
                await request_with_retry(
                    client, "GET", "https://api.example.com/data", max_attempts=2, max_wait=1
                )

        assert exc_info.value.retry_after is None
