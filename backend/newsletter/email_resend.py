# newsletter/email_resend.py
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, Optional

import httpx
from pydantic import SecretStr

from .domain import SubscriberEmail

logger = logging.getLogger(__name__)

EMAILS_ENDPOINT = "/emails"


class EmailClientConfigError(Exception):
    """Raised at construction when the client cannot be set up."""


class EmailSendError(Exception):
    """Base class for a failed send."""


class EmailTransportError(EmailSendError):
    """The provider could not be reached (DNS, connect, TLS, IO)."""


class EmailTimeoutError(EmailTransportError):
    """The send exceeded the configured timeout."""


class EmailProviderError(EmailSendError):
    """The provider answered, but did not acknowledge the email."""

    def __init__(
        self,
        message: str,
        status_code: int,
        provider_response: Optional[Dict[str, Any] | str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.provider_response = provider_response


@dataclass(frozen=True)
class OutboundEmail:
    sender: str
    to: str
    subject: str
    html: str
    text: str

    def to_payload(self) -> dict:
        return {
            "from": self.sender,
            "to": [self.to],
            "subject": self.subject,
            "html": self.html,
            "text": self.text,
        }


def _validate_base_url(base_url: str) -> str:
    try:
        url = httpx.URL(base_url)
    except (httpx.InvalidURL, TypeError) as e:
        raise EmailClientConfigError(f"Invalid email base URL {base_url!r}: {e}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise EmailClientConfigError(f"Email base URL must be absolute http(s): {base_url!r}")
    return str(url).rstrip("/")


def _error_detail(response: httpx.Response) -> Dict[str, Any] | str:
    try:
        return response.json()
    except ValueError:
        return response.text


class ResendEmailClient:
    """
    Sends transactional email through the Resend HTTP API.

    One httpx.AsyncClient is built here and shared by every send, so
    concurrent sends reuse the same connection pool. base_url is fully
    overridable; tests point it at a local stand-in server.
    """

    def __init__(
        self,
        base_url: str,
        sender: SubscriberEmail,
        authorization_token: SecretStr,
        timeout: timedelta,
    ):
        if not isinstance(authorization_token, SecretStr):
            authorization_token = SecretStr(authorization_token)
        self.base_url = _validate_base_url(base_url)
        self.sender = sender
        self._authorization_token = authorization_token
        self.timeout = timeout
        try:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(timeout.total_seconds()),
            )
        except Exception as e:
            raise EmailClientConfigError(f"Failed to build HTTP client: {e}") from e

    def __repr__(self) -> str:
        return (
            f"ResendEmailClient(base_url={self.base_url!r}, sender={str(self.sender)!r}, "
            f"authorization_token={self._authorization_token!r}, timeout={self.timeout!r})"
        )

    async def aclose(self) -> None:
        await self._http_client.aclose()

    async def __aenter__(self) -> "ResendEmailClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def send_email(
        self,
        recipient: SubscriberEmail,
        subject: str,
        html_content: str,
        text_content: str,
    ) -> str:
        """
        Sends one email and returns the provider's message id.
        Raises an EmailSendError subclass on any failure; nothing is retried.
        """
        msg = OutboundEmail(
            sender=str(self.sender),
            to=str(recipient),
            subject=subject,
            html=html_content,
            text=text_content,
        )
        try:
            response = await asyncio.wait_for(
                self._http_client.post(
                    f"{self.base_url}{EMAILS_ENDPOINT}",
                    headers={
                        "Authorization": f"Bearer {self._authorization_token.get_secret_value()}",
                        "Content-Type": "application/json",
                    },
                    json=msg.to_payload(),
                ),
                timeout=self.timeout.total_seconds(),
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.warning(
                "Email send timed out",
                extra={"to": msg.to, "timeout_seconds": self.timeout.total_seconds()},
            )
            raise EmailTimeoutError(
                f"Email provider did not answer within {self.timeout.total_seconds()}s"
            ) from e
        except httpx.HTTPError as e:
            logger.warning(
                "Email send transport error",
                extra={"to": msg.to, "error": repr(e)},
            )
            raise EmailTransportError(f"Failed to reach email provider: {e!s}") from e

        if not response.is_success:
            detail = _error_detail(response)
            logger.error(
                "Email provider rejected send",
                extra={"to": msg.to, "status_code": response.status_code, "error": detail},
            )
            raise EmailProviderError(
                f"Email provider returned HTTP {response.status_code}",
                status_code=response.status_code,
                provider_response=detail,
            )

        detail = _error_detail(response)
        if not isinstance(detail, dict) or not detail.get("id"):
            logger.error(
                "Email provider returned no acknowledgment",
                extra={"to": msg.to, "status_code": response.status_code, "error": detail},
            )
            raise EmailProviderError(
                "Email provider response carried no message id",
                status_code=response.status_code,
                provider_response=detail,
            )

        message_id = str(detail["id"])
        logger.info(
            "Email accepted by provider",
            extra={"to": msg.to, "message_id": message_id},
        )
        return message_id
