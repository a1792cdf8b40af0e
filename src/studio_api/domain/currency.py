"""Currency conversion domain models."""

from dataclasses import dataclass
from datetime import datetime

DEFAULT_FROM_CURRENCY = "USD"
DEFAULT_TO_CURRENCY = "VND"
SUPPORTED_CURRENCIES = ("USD", "GBP", "VND")
FALLBACK_NOTE = "Using fallback rates - API unavailable"

FALLBACK_RATES: dict[str, dict[str, float]] = {
    "USD": {"VND": 24750, "GBP": 0.79},
    "VND": {"USD": 0.000040, "GBP": 0.000032},
    "GBP": {"USD": 1.27, "VND": 31329},
}


@dataclass(frozen=True)
class ConversionResult:
    """An amount converted between two currencies."""

    original_amount: float
    from_currency: str
    converted_amount: float
    to_currency: str
    rate: float
    timestamp: datetime
    note: str | None = None


@dataclass(frozen=True)
class RateTable:
    """Rates relative to a base currency."""

    base: str
    rates: dict[str, float]
    timestamp: datetime
    note: str | None = None
