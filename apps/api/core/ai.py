"""Client for the OpenAI-compatible chat completions gateway.

One attempt per call. Rate limits and exhausted credits are reported with
their own errors so the user sees why the assistant is unavailable.
"""

from typing import Optional

import httpx
import structlog
from fastapi import Depends

from apps.api.core.config import Settings, get_settings
from apps.api.core.errors import (
    ConfigurationError,
    UpstreamError,
    UpstreamQuotaExhaustedError,
    UpstreamRateLimitedError,
)

logger = structlog.get_logger()


class AIGatewayClient:
    def __init__(
        self,
        api_key: str,
        url: str,
        model: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.url = url
        self.model = model
        self.timeout = timeout
        self.transport = transport

    async def complete(self, messages: list[dict]) -> str:
        """Send ``messages`` and return the assistant's reply text."""
        if not self.api_key:
            raise ConfigurationError("AI_API_KEY is not configured")

        payload = {"model": self.model, "messages": messages}
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error("ai_gateway_unreachable", error=str(e))
            raise UpstreamError("The AI service is unavailable, please try again later") from e

        if response.status_code == 429:
            logger.warning("ai_gateway_rate_limited")
            raise UpstreamRateLimitedError()
        if response.status_code == 402:
            logger.warning("ai_gateway_credits_exhausted")
            raise UpstreamQuotaExhaustedError()
        if response.is_error:
            logger.error(
                "ai_gateway_error", status=response.status_code, body=response.text[:500]
            )
            raise UpstreamError("The AI service returned an error, please try again later")

        try:
            return response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error("ai_gateway_bad_response", error=str(e))
            raise UpstreamError("The AI service returned an unexpected response") from e


def get_ai_client(settings: Settings = Depends(get_settings)) -> AIGatewayClient:
    return AIGatewayClient(
        api_key=settings.AI_API_KEY,
        url=settings.AI_GATEWAY_URL,
        model=settings.AI_MODEL,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    )
