"""Typed errors raised while dispatching robot messages."""

from __future__ import annotations

from typing import Optional


class DingTalkError(Exception):
    """Base class for webhook client errors."""


class WebhookTransportError(DingTalkError):
    """Raised when the HTTP exchange itself fails (connect, TLS, timeout)."""


class WebhookStatusError(WebhookTransportError):
    """Raised when the endpoint answers with a non-2xx HTTP status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class ResponseDecodeError(DingTalkError):
    """Raised when the response body is not a JSON object."""

    def __init__(self, message: str, body: Optional[str] = None) -> None:
        super().__init__(message)
        self.body = body


__all__ = [
    "DingTalkError",
    "ResponseDecodeError",
    "WebhookStatusError",
    "WebhookTransportError",
]
