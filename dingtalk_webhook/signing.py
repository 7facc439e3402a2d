"""Request signing for the DingTalk robot endpoint."""

from __future__ import annotations

import base64
import hmac
import json
import time
from dataclasses import dataclass
from hashlib import sha256
from typing import Any, Dict, Optional
from urllib.parse import quote_plus, urlencode

DEFAULT_ENDPOINT = "https://oapi.dingtalk.com/robot/send"


@dataclass(frozen=True, slots=True)
class SignedRequest:
    timestamp: int
    signature: str
    url: str
    body: bytes


def current_timestamp_ms() -> int:
    """Return wall-clock time in milliseconds, rounded to the nearest millisecond."""

    return (time.time_ns() + 500_000) // 1_000_000


def compute_signature(timestamp: int, secret: str) -> str:
    """Return the URL-encoded base64 HMAC-SHA256 of ``"{timestamp}\\n{secret}"``."""

    string_to_sign = f"{timestamp}\n{secret}".encode("utf-8")
    digest = hmac.new(secret.encode("utf-8"), string_to_sign, sha256).digest()
    return quote_plus(base64.b64encode(digest).decode("ascii"))


def build_url(endpoint: str, access_token: str, timestamp: int, signature: str) -> str:
    # signature is already percent-encoded and must not be quoted again
    query = urlencode({"access_token": access_token, "timestamp": timestamp})
    separator = "&" if "?" in endpoint else "?"
    return f"{endpoint}{separator}{query}&sign={signature}"


def encode_body(payload: Dict[str, Any]) -> bytes:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def sign_request(
    payload: Dict[str, Any],
    *,
    access_token: str,
    secret: str,
    endpoint: str = DEFAULT_ENDPOINT,
    timestamp: Optional[int] = None,
) -> SignedRequest:
    """Build a :class:`SignedRequest` for ``payload``.

    A fresh timestamp is taken on every call unless one is passed explicitly.
    """

    ts = timestamp if timestamp is not None else current_timestamp_ms()
    signature = compute_signature(ts, secret)
    return SignedRequest(
        timestamp=ts,
        signature=signature,
        url=build_url(endpoint, access_token, ts, signature),
        body=encode_body(payload),
    )


__all__ = [
    "DEFAULT_ENDPOINT",
    "SignedRequest",
    "build_url",
    "compute_signature",
    "current_timestamp_ms",
    "encode_body",
    "sign_request",
]
