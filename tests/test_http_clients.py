"""Tests for HTTP-based adapters."""

import asyncio

import httpx
import pytest

from studio_api.adapters.exchange_rate_client import HttpxExchangeRateClient


def test_exchange_rate_client_fetches_open_endpoint() -> None:
    seen_urls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen_urls.append(str(request.url))
        return httpx.Response(200, json={"base": "USD", "rates": {"VND": 25000}})

    transport = httpx.MockTransport(handler)
    client = HttpxExchangeRateClient(
        base_url="https://api.test/v4",
        http_client=httpx.AsyncClient(transport=transport),
    )

    payload = asyncio.run(client.latest("USD"))

    assert payload["rates"] == {"VND": 25000}
    assert seen_urls == ["https://api.test/v4/latest/USD"]


def test_exchange_rate_client_uses_keyed_endpoint() -> None:
    seen_paths: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen_paths.append(request.url.path)
        return httpx.Response(
            200,
            json={"result": "success", "conversion_rates": {"GBP": 0.79}},
        )

    transport = httpx.MockTransport(handler)
    client = HttpxExchangeRateClient(
        base_url="https://api.test/v4",
        http_client=httpx.AsyncClient(transport=transport),
        api_key="secret-key",
        keyed_base_url="https://keyed.test/v6",
    )

    payload = asyncio.run(client.latest("USD"))

    assert payload["rates"] == {"GBP": 0.79}
    assert seen_paths == ["/v6/secret-key/latest/USD"]


def test_exchange_rate_client_raises_on_error_status() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    client = HttpxExchangeRateClient(
        base_url="https://api.test/v4",
        http_client=httpx.AsyncClient(transport=transport),
    )

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.latest("USD"))
