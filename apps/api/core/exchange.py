"""Currency conversion into the base currency.

A failed lookup is not an error for the caller: the transaction is stored
without a base amount and aggregation falls back to the original amount.
"""

from typing import Optional

import httpx
import structlog
from fastapi import Depends

from apps.api.core.config import Settings, get_settings

logger = structlog.get_logger()


class ExchangeRateClient:
    def __init__(
        self,
        base_currency: str = "BRL",
        url: str = "https://api.exchangerate.host/convert",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_currency = base_currency
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def convert(self, amount: float, currency: str) -> Optional[float]:
        """``amount`` in ``currency`` expressed in the base currency, or None."""
        if currency.upper() == self.base_currency.upper():
            return amount

        params = {"from": currency.upper(), "to": self.base_currency, "amount": amount}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.url, params=params)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("currency_conversion_failed", currency=currency, error=str(e))
            return None

        if not data.get("success") or data.get("result") is None:
            logger.warning("currency_conversion_failed", currency=currency, response=data)
            return None
        return float(data["result"])


def get_exchange_client(settings: Settings = Depends(get_settings)) -> ExchangeRateClient:
    return ExchangeRateClient(
        base_currency=settings.BASE_CURRENCY,
        url=settings.EXCHANGE_API_URL,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    )
