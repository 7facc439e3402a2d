"""Webhook dispatch utilities."""

from __future__ import annotations

import threading
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Union

import httpx

from .errors import ResponseDecodeError, WebhookStatusError, WebhookTransportError
from .logging_config import get_logger
from .models import (
    MESSAGE_TYPES,
    ActionButton,
    ActionCardMessage,
    AtTargets,
    Credential,
    FeedCardLink,
    FeedCardMessage,
    LinkMessage,
    MarkdownMessage,
    Message,
    MultiActionCardMessage,
    TextMessage,
)
from .settings import Settings
from .signing import DEFAULT_ENDPOINT, sign_request

LOGGER = get_logger(__name__)

_HEADERS = {"Content-Type": "application/json; charset=utf-8"}


class WebhookDispatcher:
    """Send signed messages to a DingTalk group robot."""

    def __init__(
        self,
        access_token: str,
        secret: str,
        *,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = 30.0,
        connect_timeout: float = 5.0,
        verify: bool = True,
    ) -> None:
        self._credential = Credential(access_token=access_token, secret=secret)
        self._endpoint = endpoint
        self._timeout = httpx.Timeout(timeout, connect=connect_timeout)
        self._verify = verify
        self._client: Optional[httpx.Client] = None
        self._client_lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "WebhookDispatcher":
        if not settings.access_token or not settings.secret:
            raise RuntimeError("DINGTALK_ACCESS_TOKEN and DINGTALK_SECRET must be set")
        return cls(
            settings.access_token,
            settings.secret,
            endpoint=settings.endpoint,
            timeout=settings.timeout,
            connect_timeout=settings.connect_timeout,
            verify=settings.verify_tls,
        )

    @property
    def credential(self) -> Credential:
        return self._credential

    def _ensure_client(self) -> httpx.Client:
        with self._client_lock:
            if self._client is None:
                self._client = httpx.Client(timeout=self._timeout, verify=self._verify)
            return self._client

    def close(self) -> None:
        with self._client_lock:
            if self._client is not None:
                self._client.close()
                self._client = None

    def __enter__(self) -> "WebhookDispatcher":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @staticmethod
    def _to_payload(message: Union[Message, Mapping[str, Any]]) -> Dict[str, Any]:
        if isinstance(message, MESSAGE_TYPES):
            return message.to_payload()
        if isinstance(message, Mapping) and "msgtype" in message:
            return dict(message)
        raise TypeError(f"Unsupported message type: {type(message).__name__}")

    def send(self, message: Union[Message, Mapping[str, Any]]) -> Dict[str, Any]:
        """Sign and post ``message``, returning the decoded JSON response.

        Application-level failures (a non-zero ``errcode``) are returned as-is;
        transport and decoding failures raise.
        """

        payload = self._to_payload(message)
        signed = sign_request(
            payload,
            access_token=self._credential.access_token,
            secret=self._credential.secret,
            endpoint=self._endpoint,
        )
        LOGGER.info(
            "Dispatching DingTalk message",
            extra={"msgtype": payload.get("msgtype"), "timestamp": signed.timestamp},
        )

        client = self._ensure_client()
        try:
            response = client.post(signed.url, content=signed.body, headers=_HEADERS)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            LOGGER.warning("DingTalk endpoint returned HTTP error", extra={"statusCode": status_code})
            raise WebhookStatusError(f"DingTalk endpoint returned HTTP {status_code}", status_code) from exc
        except httpx.HTTPError as exc:
            LOGGER.warning("DingTalk request failed", extra={"error": type(exc).__name__})
            raise WebhookTransportError(f"DingTalk request failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            LOGGER.warning("DingTalk response is not valid JSON")
            raise ResponseDecodeError("DingTalk response is not valid JSON", body=response.text) from exc
        if not isinstance(data, dict):
            raise ResponseDecodeError("DingTalk response is not a JSON object", body=response.text)
        return data

    def send_text(
        self,
        text: str,
        mobiles: Sequence[str] = (),
        user_ids: Sequence[str] = (),
        at_all: bool = False,
    ) -> Dict[str, Any]:
        at = AtTargets(mobiles=mobiles, user_ids=user_ids, at_all=at_all)
        return self.send(TextMessage(content=text, at=at))

    def send_markdown(
        self,
        markdown: str,
        title: str,
        mobiles: Sequence[str] = (),
        user_ids: Sequence[str] = (),
        at_all: bool = False,
    ) -> Dict[str, Any]:
        at = AtTargets(mobiles=mobiles, user_ids=user_ids, at_all=at_all)
        return self.send(MarkdownMessage(title=title, text=markdown, at=at))

    def send_action_card(self, markdown: str, title: str, button_title: str, button_url: str) -> Dict[str, Any]:
        return self.send(
            ActionCardMessage(title=title, text=markdown, single_title=button_title, single_url=button_url)
        )

    def send_multi_action_card(
        self,
        markdown: str,
        title: str,
        buttons: Iterable[Union[ActionButton, Mapping[str, str]]],
        vertical: bool = True,
    ) -> Dict[str, Any]:
        return self.send(
            MultiActionCardMessage(title=title, text=markdown, buttons=list(buttons), vertical=vertical)
        )

    def send_feed_card(self, links: Iterable[Union[FeedCardLink, Mapping[str, str]]]) -> Dict[str, Any]:
        return self.send(FeedCardMessage(links=list(links)))

    def send_link(
        self,
        text: str,
        title: str,
        message_url: str,
        pic_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        return self.send(LinkMessage(text=text, title=title, message_url=message_url, pic_url=pic_url))


__all__ = ["WebhookDispatcher"]
