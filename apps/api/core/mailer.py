"""Transactional e-mail through the Resend HTTP API."""

import base64
from typing import Optional, Sequence

import httpx
import structlog
from fastapi import Depends
from pydantic import BaseModel

from apps.api.core.config import Settings, get_settings
from apps.api.core.errors import ConfigurationError, UpstreamError

logger = structlog.get_logger()


class Attachment(BaseModel):
    filename: str
    content: bytes

    def as_payload(self) -> dict:
        return {
            "filename": self.filename,
            "content": base64.b64encode(self.content).decode("ascii"),
        }


class ResendMailer:
    def __init__(
        self,
        api_key: str,
        sender: str,
        url: str = "https://api.resend.com/emails",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.sender = sender
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def send(
        self,
        to: str,
        subject: str,
        html: str,
        attachments: Sequence[Attachment] = (),
    ) -> str:
        """Send one message and return the provider's message id."""
        if not self.api_key:
            raise ConfigurationError("RESEND_API_KEY is not configured")

        payload = {"from": self.sender, "to": [to], "subject": subject, "html": html}
        if attachments:
            payload["attachments"] = [attachment.as_payload() for attachment in attachments]

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.url,
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
        except httpx.HTTPError as e:
            logger.error("email_provider_unreachable", error=str(e))
            raise UpstreamError("Could not send the e-mail, please try again later") from e

        if response.is_error:
            logger.error(
                "email_provider_error", status=response.status_code, body=response.text[:500]
            )
            raise UpstreamError("Could not send the e-mail, please try again later")

        try:
            message_id = response.json()["id"]
        except (ValueError, KeyError, TypeError) as e:
            logger.error("email_provider_bad_response", error=str(e))
            raise UpstreamError("The e-mail service returned an unexpected response") from e
        logger.info("email_sent", message_id=message_id, attachments=len(attachments))
        return message_id


def get_mailer(settings: Settings = Depends(get_settings)) -> ResendMailer:
    return ResendMailer(
        api_key=settings.RESEND_API_KEY,
        sender=settings.REPORT_EMAIL_FROM,
        url=settings.RESEND_API_URL,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    )
