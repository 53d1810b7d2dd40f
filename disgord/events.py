"""Message related gateway events."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from .message import Message
from .util import Snowflake

__all__ = [
    "MessageCreate",
    "MessageDelete",
    "MessageDeleteBulk",
    "MessageReactionAdd",
    "MessageReactionRemove",
    "MessageReactionRemoveAll",
    "MessageReactionRemoveEmoji",
    "MessageUpdate",
    "copy_msg_evt",
]


@dataclass
class MessageCreate:
    message: Message | None = None
    shard_id: int = 0


@dataclass
class MessageUpdate:
    message: Message | None = None
    shard_id: int = 0


@dataclass
class MessageDelete:
    message_id: Snowflake = field(default_factory=Snowflake)
    channel_id: Snowflake = field(default_factory=Snowflake)
    guild_id: Snowflake = field(default_factory=Snowflake)
    shard_id: int = 0


@dataclass
class MessageDeleteBulk:
    message_ids: list[Snowflake] = field(default_factory=list)
    channel_id: Snowflake = field(default_factory=Snowflake)
    shard_id: int = 0


@dataclass
class MessageReactionAdd:
    partial_emoji: Any = None
    message_id: Snowflake = field(default_factory=Snowflake)
    channel_id: Snowflake = field(default_factory=Snowflake)
    user_id: Snowflake = field(default_factory=Snowflake)
    shard_id: int = 0


@dataclass
class MessageReactionRemove:
    partial_emoji: Any = None
    message_id: Snowflake = field(default_factory=Snowflake)
    channel_id: Snowflake = field(default_factory=Snowflake)
    user_id: Snowflake = field(default_factory=Snowflake)
    shard_id: int = 0


@dataclass
class MessageReactionRemoveAll:
    message_id: Snowflake = field(default_factory=Snowflake)
    channel_id: Snowflake = field(default_factory=Snowflake)
    shard_id: int = 0


@dataclass
class MessageReactionRemoveEmoji:
    message_id: Snowflake = field(default_factory=Snowflake)
    guild_id: Snowflake = field(default_factory=Snowflake)
    channel_id: Snowflake = field(default_factory=Snowflake)
    emoji: Any = None
    shard_id: int = 0


def copy_msg_evt(event: Any) -> Any:
    """Copy a message event so middlewares can edit it without affecting other handlers.

    Returns None for anything that is not a message event.
    """
    match event:
        case MessageCreate():
            return MessageCreate(message=copy.deepcopy(event.message), shard_id=event.shard_id)
        case MessageUpdate():
            return MessageUpdate(message=copy.deepcopy(event.message), shard_id=event.shard_id)
        case MessageDelete():
            return MessageDelete(
                message_id=event.message_id,
                channel_id=event.channel_id,
                guild_id=event.guild_id,
                shard_id=event.shard_id,
            )
        case MessageDeleteBulk():
            return MessageDeleteBulk(
                message_ids=event.message_ids,
                channel_id=event.channel_id,
                shard_id=event.shard_id,
            )
        case MessageReactionAdd() | MessageReactionRemove():
            return type(event)(
                partial_emoji=copy.deepcopy(event.partial_emoji),
                message_id=event.message_id,
                channel_id=event.channel_id,
                user_id=event.user_id,
                shard_id=event.shard_id,
            )
        case MessageReactionRemoveAll():
            return MessageReactionRemoveAll(
                message_id=event.message_id,
                channel_id=event.channel_id,
                shard_id=event.shard_id,
            )
        case MessageReactionRemoveEmoji():
            return MessageReactionRemoveEmoji(
                message_id=event.message_id,
                guild_id=event.guild_id,
                channel_id=event.channel_id,
                emoji=copy.deepcopy(event.emoji),
                shard_id=event.shard_id,
            )
    return None