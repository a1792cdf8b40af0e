"""ExchangeRate-API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class ExchangeRateClient(Protocol):
    """Interface for the latest-rates lookup."""

    async def latest(self, base: str) -> dict[str, object]:
        """Return the raw latest-rates payload for a base currency."""


@dataclass
class HttpxExchangeRateClient(ExchangeRateClient):
    """HTTPX-backed ExchangeRate-API client.

    Without an API key the open ``/v4/latest/<base>`` endpoint is used; with a
    key the ``/v6/<key>/latest/<base>`` endpoint is used, which names its rate
    map ``conversion_rates`` rather than ``rates``.
    """

    base_url: str
    http_client: httpx.AsyncClient
    api_key: str | None = None
    keyed_base_url: str = "https://v6.exchangerate-api.com/v6"
    timeout: float = 5.0

    @classmethod
    def create(
        cls,
        base_url: str,
        api_key: str | None = None,
        keyed_base_url: str = "https://v6.exchangerate-api.com/v6",
        timeout: float = 5.0,
    ) -> "HttpxExchangeRateClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            api_key=api_key,
            keyed_base_url=keyed_base_url,
            timeout=timeout,
        )

    async def latest(self, base: str) -> dict[str, object]:
        """Fetch the latest rates for ``base``."""
        if self.api_key:
            url = f"{self.keyed_base_url}/{self.api_key}/latest/{base}"
        else:
            url = f"{self.base_url}/latest/{base}"
        response = await self.http_client.get(url, timeout=self.timeout)
        response.raise_for_status()
        payload = response.json()
        if isinstance(payload, dict) and "rates" not in payload:
            conversion_rates = payload.get("conversion_rates")
            if conversion_rates is not None:
                payload["rates"] = conversion_rates
        return payload

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
