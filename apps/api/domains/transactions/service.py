"""Transactions service — base-currency conversion before writes."""

from typing import Any

from apps.api.core.exchange import ExchangeRateClient
from apps.api.domains.transactions.schemas import TransactionIn


async def stored_values(
    body: TransactionIn, exchange: ExchangeRateClient, base_currency: str
) -> dict[str, Any]:
    """Record values for a write, with the base-currency amount filled in.

    The base amount stays None when the rate lookup fails.
    """
    values = body.model_dump()
    currency = (body.currency or base_currency).upper()
    values["currency"] = currency
    values["amount_in_base_currency"] = await exchange.convert(body.amount, currency)
    return values
