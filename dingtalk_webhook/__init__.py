"""Client for posting signed messages to DingTalk group robots."""

from .errors import DingTalkError, ResponseDecodeError, WebhookStatusError, WebhookTransportError
from .models import (
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
from .signing import DEFAULT_ENDPOINT, SignedRequest, compute_signature, sign_request
from .webhook import WebhookDispatcher

__all__ = [
    "ActionButton",
    "ActionCardMessage",
    "AtTargets",
    "Credential",
    "DEFAULT_ENDPOINT",
    "DingTalkError",
    "FeedCardLink",
    "FeedCardMessage",
    "LinkMessage",
    "MarkdownMessage",
    "Message",
    "MultiActionCardMessage",
    "ResponseDecodeError",
    "SignedRequest",
    "TextMessage",
    "WebhookDispatcher",
    "WebhookStatusError",
    "WebhookTransportError",
    "compute_signature",
    "sign_request",
]
