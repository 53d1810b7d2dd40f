"""Small structures that make up a message."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, TypeVar

from .message_types import ButtonStyle, MessageComponentType, MessageStickerFormatType
from .util import Snowflake, get_snowflake

__all__ = [
    "MentionChannel",
    "MessageActivity",
    "MessageApplication",
    "MessageComponent",
    "MessageReference",
    "MessageSticker",
]

_E = TypeVar("_E", bound=IntEnum)


def _snowflake(value: Any) -> Snowflake:
    if value is None or value == "":
        return Snowflake(0)
    return get_snowflake(value)


def _int(value: Any) -> int:
    return int(value) if value is not None else 0


def _str(value: Any) -> str:
    return "" if value is None else str(value)


def _enum_or_int(enum: type[_E], value: Any) -> int:
    number = _int(value)
    try:
        return enum(number)
    except ValueError:
        return number


@dataclass
class MessageActivity:
    type: int = 0
    party_id: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MessageActivity":
        return cls(type=_int(data.get("type")), party_id=_str(data.get("party_id")))


@dataclass
class MentionChannel:
    id: Snowflake = field(default_factory=Snowflake)
    guild_id: Snowflake = field(default_factory=Snowflake)
    type: int = 0
    name: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MentionChannel":
        return cls(
            id=_snowflake(data.get("id")),
            guild_id=_snowflake(data.get("guild_id")),
            type=_int(data.get("type")),
            name=_str(data.get("name")),
        )


@dataclass
class MessageReference:
    message_id: Snowflake = field(default_factory=Snowflake)
    channel_id: Snowflake = field(default_factory=Snowflake)
    guild_id: Snowflake = field(default_factory=Snowflake)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MessageReference":
        return cls(
            message_id=_snowflake(data.get("message_id")),
            channel_id=_snowflake(data.get("channel_id")),
            guild_id=_snowflake(data.get("guild_id")),
        )


@dataclass
class MessageComponent:
    """A button or an action row holding other components."""

    type: int = 0
    style: int = 0
    label: str = ""
    emoji: dict[str, Any] | None = None
    custom_id: str = ""
    url: str = ""
    disabled: bool = False
    components: list["MessageComponent"] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MessageComponent":
        emoji = data.get("emoji")
        return cls(
            type=_enum_or_int(MessageComponentType, data.get("type")),
            style=_enum_or_int(ButtonStyle, data.get("style")),
            label=_str(data.get("label")),
            emoji=dict(emoji) if emoji is not None else None,
            custom_id=_str(data.get("custom_id")),
            url=_str(data.get("url")),
            disabled=bool(data.get("disabled", False)),
            components=[cls.from_dict(item) for item in data.get("components") or []],
        )


@dataclass
class MessageApplication:
    id: Snowflake = field(default_factory=Snowflake)
    cover_image: str = ""
    description: str = ""
    icon: str = ""
    name: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MessageApplication":
        return cls(
            id=_snowflake(data.get("id")),
            cover_image=_str(data.get("cover_image")),
            description=_str(data.get("description")),
            icon=_str(data.get("icon")),
            name=_str(data.get("name")),
        )


@dataclass
class MessageSticker:
    id: Snowflake = field(default_factory=Snowflake)
    pack_id: Snowflake = field(default_factory=Snowflake)
    name: str = ""
    description: str = ""
    tags: str = ""
    asset: str = ""
    preview_asset: str = ""
    format_type: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MessageSticker":
        return cls(
            id=_snowflake(data.get("id")),
            pack_id=_snowflake(data.get("pack_id")),
            name=_str(data.get("name")),
            description=_str(data.get("description")),
            tags=_str(data.get("tags")),
            asset=_str(data.get("asset")),
            preview_asset=_str(data.get("preview_asset")),
            format_type=_enum_or_int(MessageStickerFormatType, data.get("format_type")),
        )