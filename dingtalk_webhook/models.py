"""Credential and message models for the DingTalk robot API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Union, get_args

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True, slots=True)
class Credential:
    """Robot access token and the shared signing secret."""

    access_token: str
    secret: str = field(repr=False)


class AtTargets(BaseModel):
    """Mention block shared by text and markdown messages."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    mobiles: List[str] = Field(default_factory=list, alias="atMobiles")
    user_ids: List[str] = Field(default_factory=list, alias="atUserIds")
    at_all: bool = Field(default=False, alias="isAtAll")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class ActionButton(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str = Field(..., min_length=1)
    action_url: str = Field(..., min_length=1, alias="actionURL")


class FeedCardLink(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str = Field(..., min_length=1)
    message_url: str = Field(..., min_length=1, alias="messageURL")
    pic_url: str = Field(..., alias="picURL")


class TextMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    msgtype: Literal["text"] = "text"
    content: str = Field(..., min_length=1)
    at: AtTargets = Field(default_factory=AtTargets)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "msgtype": self.msgtype,
            "text": {"content": self.content},
            "at": self.at.to_payload(),
        }


class MarkdownMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    msgtype: Literal["markdown"] = "markdown"
    title: str = Field(..., min_length=1, description="Preview shown in the conversation list")
    text: str = Field(..., min_length=1)
    at: AtTargets = Field(default_factory=AtTargets)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "msgtype": self.msgtype,
            "markdown": {"title": self.title, "text": self.text},
            "at": self.at.to_payload(),
        }


class ActionCardMessage(BaseModel):
    """Action card whose whole body jumps to a single URL."""

    model_config = ConfigDict(frozen=True)

    msgtype: Literal["actionCard"] = "actionCard"
    title: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)
    single_title: str = Field(..., min_length=1)
    single_url: str = Field(..., min_length=1)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "msgtype": self.msgtype,
            "actionCard": {
                "title": self.title,
                "text": self.text,
                "singleTitle": self.single_title,
                "singleURL": self.single_url,
            },
        }


class MultiActionCardMessage(BaseModel):
    """Action card with independently linked buttons."""

    model_config = ConfigDict(frozen=True)

    msgtype: Literal["actionCard"] = "actionCard"
    title: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)
    buttons: List[ActionButton] = Field(..., min_length=1)
    vertical: bool = True

    @property
    def btn_orientation(self) -> str:
        return "0" if self.vertical else "1"

    def to_payload(self) -> Dict[str, Any]:
        return {
            "msgtype": self.msgtype,
            "actionCard": {
                "title": self.title,
                "text": self.text,
                "btnOrientation": self.btn_orientation,
                "btns": [button.model_dump(by_alias=True) for button in self.buttons],
            },
        }


class FeedCardMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    msgtype: Literal["feedCard"] = "feedCard"
    links: List[FeedCardLink] = Field(..., min_length=1)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "msgtype": self.msgtype,
            "feedCard": {"links": [link.model_dump(by_alias=True) for link in self.links]},
        }


class LinkMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    msgtype: Literal["link"] = "link"
    text: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    message_url: str = Field(..., min_length=1)
    pic_url: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        # picUrl is always sent; null when there is no image.
        return {
            "msgtype": self.msgtype,
            "link": {
                "text": self.text,
                "title": self.title,
                "picUrl": self.pic_url,
                "messageUrl": self.message_url,
            },
        }


Message = Union[
    TextMessage,
    MarkdownMessage,
    ActionCardMessage,
    MultiActionCardMessage,
    FeedCardMessage,
    LinkMessage,
]

MESSAGE_TYPES = get_args(Message)


__all__ = [
    "ActionButton",
    "ActionCardMessage",
    "AtTargets",
    "Credential",
    "FeedCardLink",
    "FeedCardMessage",
    "LinkMessage",
    "MESSAGE_TYPES",
    "MarkdownMessage",
    "Message",
    "MultiActionCardMessage",
    "TextMessage",
]
