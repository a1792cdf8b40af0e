"""Currency conversion with a static fallback table."""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from studio_api.adapters.exchange_rate_client import ExchangeRateClient
from studio_api.domain.currency import (
    DEFAULT_FROM_CURRENCY,
    DEFAULT_TO_CURRENCY,
    FALLBACK_NOTE,
    FALLBACK_RATES,
    SUPPORTED_CURRENCIES,
    ConversionResult,
    RateTable,
)
from studio_api.domain.errors import ConversionFailedError, InvalidInputError
from studio_api.services.cache import Cache
from studio_api.services.documents import utcnow

_logger = logging.getLogger(__name__)


@dataclass
class CurrencyService:
    """Live rate lookups that fall back to a fixed table on any failure."""

    client: ExchangeRateClient
    cache: Cache
    cache_ttl_seconds: int = 600
    clock: Callable[[], datetime] = utcnow

    async def convert(
        self,
        amount: object,
        from_currency: str | None = DEFAULT_FROM_CURRENCY,
        to_currency: str | None = DEFAULT_TO_CURRENCY,
    ) -> ConversionResult:
        """Convert ``amount`` using live rates, or the fallback table."""
        value = parse_amount(amount)
        source = parse_currency_code(from_currency, DEFAULT_FROM_CURRENCY)
        target = parse_currency_code(to_currency, DEFAULT_TO_CURRENCY)

        live = await self._live_rates(source)
        if live is not None and target in live:
            return self._result(value, source, target, live[target], note=None)
        if live is not None:
            _logger.warning("Rate provider has no %s rate for %s", target, source)

        rate = FALLBACK_RATES.get(source, {}).get(target)
        if rate is None:
            raise ConversionFailedError("Currency conversion failed")
        return self._result(value, source, target, rate, note=FALLBACK_NOTE)

    async def rates(self, base: str | None = DEFAULT_FROM_CURRENCY) -> RateTable:
        """Return rates for the supported currencies; never fails."""
        source = parse_currency_code(base, DEFAULT_FROM_CURRENCY)
        live = await self._live_rates(source)
        if live is not None:
            filtered = {
                code: live[code] for code in SUPPORTED_CURRENCIES if code in live
            }
            return RateTable(base=source, rates=filtered, timestamp=self.clock())
        fallback_base = source if source in FALLBACK_RATES else DEFAULT_FROM_CURRENCY
        return RateTable(
            base=fallback_base,
            rates=dict(FALLBACK_RATES[fallback_base]),
            timestamp=self.clock(),
            note=FALLBACK_NOTE,
        )

    async def _live_rates(self, base: str) -> dict[str, float] | None:
        cache_key = f"rates:{base}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, dict):
            return cached
        try:
            payload = await self.client.latest(base)
        except Exception as exc:
            _logger.warning(
                "Rate provider failed for %s (status=%s): %s",
                base,
                _status_code_from_exception(exc),
                exc,
            )
            return None
        rates = _extract_rates(payload)
        if rates is None:
            _logger.warning("Rate provider returned no rates for %s", base)
            return None
        self.cache.set(cache_key, rates, ttl_seconds=self.cache_ttl_seconds)
        return rates

    def _result(
        self,
        amount: float,
        source: str,
        target: str,
        rate: float,
        note: str | None,
    ) -> ConversionResult:
        return ConversionResult(
            original_amount=amount,
            from_currency=source,
            converted_amount=round(amount * rate, 2),
            to_currency=target,
            rate=rate,
            timestamp=self.clock(),
            note=note,
        )


def parse_amount(raw: object) -> float:
    """Parse a finite numeric amount from a query value."""
    if raw is None or isinstance(raw, bool):
        raise InvalidInputError("Valid amount is required")
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise InvalidInputError("Valid amount is required") from exc
    if not math.isfinite(value):
        raise InvalidInputError("Valid amount is required")
    return value


def parse_currency_code(raw: str | None, default: str) -> str:
    if raw is None or raw == "":
        return default
    code = raw.strip().upper()
    if len(code) != 3 or not code.isalpha() or not code.isascii():
        raise InvalidInputError("Invalid currency code")
    return code


def _extract_rates(payload: object) -> dict[str, float] | None:
    if not isinstance(payload, dict):
        return None
    raw_rates = payload.get("rates")
    if not isinstance(raw_rates, dict):
        return None
    return {
        str(code): float(rate)
        for code, rate in raw_rates.items()
        if isinstance(rate, int | float) and not isinstance(rate, bool)
    }


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"
