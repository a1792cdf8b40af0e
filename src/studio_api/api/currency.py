"""Currency conversion proxy endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, Request

from studio_api.domain.currency import ConversionResult, RateTable
from studio_api.services.documents import format_timestamp

if TYPE_CHECKING:
    from studio_api.containers import AppContainer

router = APIRouter(prefix="/api/currency", tags=["currency"])


@router.get("/convert")
async def convert(
    request: Request,
    amount: str | None = None,
    from_currency: str | None = Query(default=None, alias="from"),
    to_currency: str | None = Query(default=None, alias="to"),
) -> dict[str, object]:
    """Convert an amount between currencies."""
    container: AppContainer = request.app.state.container
    result = await container.currency_service.convert(
        amount, from_currency, to_currency
    )
    return _serialize_conversion(result)


@router.get("/rates")
async def rates(
    request: Request,
    from_currency: str | None = Query(default=None, alias="from"),
) -> dict[str, object]:
    """Return rates for the supported currencies."""
    container: AppContainer = request.app.state.container
    table = await container.currency_service.rates(from_currency)
    return _serialize_rates(table)


def _serialize_conversion(result: ConversionResult) -> dict[str, object]:
    payload: dict[str, object] = {
        "success": True,
        "original": {
            "amount": result.original_amount,
            "currency": result.from_currency,
        },
        "converted": {
            "amount": result.converted_amount,
            "currency": result.to_currency,
            "rate": result.rate,
        },
        "timestamp": format_timestamp(result.timestamp),
    }
    if result.note:
        payload["note"] = result.note
    return payload


def _serialize_rates(table: RateTable) -> dict[str, object]:
    payload: dict[str, object] = {
        "success": True,
        "base": table.base,
        "rates": table.rates,
        "timestamp": format_timestamp(table.timestamp),
    }
    if table.note:
        payload["note"] = table.note
    return payload
