"""Middlewares that filter message events."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..events import MessageCreate, MessageUpdate
from ..message import Message
from ..util import Snowflake

__all__ = [
    "MsgFilter",
    "get_msg",
    "mention_string",
    "new_msg_filter",
    "nickname_mention_string",
]


def mention_string(user_id: int) -> str:
    return "<@" + str(user_id) + ">"


def nickname_mention_string(user_id: int) -> str:
    return "<@!" + str(user_id) + ">"


def get_msg(event: Any) -> Message | None:
    """Return the message of a create or update event, otherwise None."""
    if isinstance(event, (MessageCreate, MessageUpdate)):
        return event.message
    return None


def _message_has_prefix(event: Any, prefix: str, *alt_prefixes: str) -> Any:
    msg = get_msg(event)
    if msg is None:
        return None
    content = msg.content.strip()
    for candidate in (*alt_prefixes, prefix):
        if content.startswith(candidate):
            return event
    return None


def _message_is_bot(event: Any, is_bot: bool) -> Any:
    msg = get_msg(event)
    if msg is None:
        return None
    if msg.author is not None and msg.author.bot != is_bot:
        return None
    return event


def _message_is_webhook(event: Any, is_webhook: bool) -> Any:
    msg = get_msg(event)
    if msg is None:
        return None
    # only messages sourced from a webhook carry a webhook id
    if msg.webhook_id.is_zero() == is_webhook:
        return None
    return event


def new_msg_filter(client: Any) -> "MsgFilter":
    """Create a filter for the bot the client is logged in as."""
    user = client.current_user().get()
    return MsgFilter(bot_id=Snowflake(user.id), session=client)


@dataclass
class MsgFilter:
    """Message middlewares; each returns the event to pass it on, or None to stop it."""

    bot_id: Snowflake = field(default_factory=Snowflake)
    session: Any = None
    prefix: str = ""
    permissions: int = 0
    either_permissions: int = 0

    def set_prefix(self, prefix: str) -> None:
        """Set the prefix used by has_prefix and strip_prefix; do not use a space."""
        self.prefix = prefix

    def contains_bot_mention(self, event: Any) -> Any:
        msg = get_msg(event)
        if msg is None:
            return None
        mentions = (mention_string(self.bot_id), nickname_mention_string(self.bot_id))
        if any(mention in msg.content for mention in mentions):
            return event
        return None

    def not_by_bot(self, event: Any) -> Any:
        return _message_is_bot(event, False)

    def is_by_bot(self, event: Any) -> Any:
        return _message_is_bot(event, True)

    def not_by_webhook(self, event: Any) -> Any:
        return _message_is_webhook(event, False)

    def is_by_webhook(self, event: Any) -> Any:
        return _message_is_webhook(event, True)

    def has_bot_mention_prefix(self, event: Any) -> Any:
        return _message_has_prefix(
            event, mention_string(self.bot_id), nickname_mention_string(self.bot_id)
        )

    def has_prefix(self, event: Any) -> Any:
        if not self.prefix:
            return event
        return _message_has_prefix(event, self.prefix)

    def strip_prefix(self, event: Any) -> Any:
        """Remove the prefix, and spaces before it, from the message content."""
        if not self.prefix:
            return event
        if _message_has_prefix(event, self.prefix) is None:
            return None
        msg = get_msg(event)
        if msg is None:
            return None
        msg.content = msg.content.lstrip(" ")[len(self.prefix):]
        return event

    def has_permissions(self, event: Any) -> Any:
        """Pass the event only when the author holds the configured permissions."""
        msg = get_msg(event)
        if msg is None or msg.author is None or msg.author.id.is_zero():
            return None
        if self.session is None:
            return None
        try:
            granted = self.session.guild(msg.guild_id).member(msg.author.id).get_permissions()
        except Exception:
            return None
        if granted & self.permissions != self.permissions:
            return None
        if self.either_permissions > 0 and granted & self.either_permissions == 0:
            return None
        return event

    def set_min_permissions(self, minimum: int) -> None:
        """Require authors to have at least all of these permission bits."""
        self.permissions = minimum

    def set_alt_permissions(self, *args: int) -> None:
        """Require authors to have at least one of these permission bits."""
        combined = 0
        for bits in args:
            combined |= bits
        self.either_permissions = combined