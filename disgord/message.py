"""Discord messages, their authors and attachments."""

from __future__ import annotations

from dataclasses import MISSING, dataclass, field, fields
from typing import Any

from .message_parts import (
    MentionChannel,
    MessageActivity,
    MessageApplication,
    MessageComponent,
    MessageReference,
    MessageSticker,
)
from .message_types import ATTACHMENT_SPOILER_PREFIX, MessageFlag, MessageType
from .models import Discriminator, Time
from .util import Snowflake

__all__ = ["Attachment", "Message", "User"]

_SPOILER_TAGS = "||||"


def _reset_fields(obj: Any) -> None:
    """Set every dataclass field of obj back to its default value."""
    for item in fields(obj):
        if item.default is not MISSING:
            setattr(obj, item.name, item.default)
        elif item.default_factory is not MISSING:
            setattr(obj, item.name, item.default_factory())


@dataclass
class User:
    """A Discord user."""

    id: Snowflake = field(default_factory=Snowflake)
    username: str = ""
    discriminator: Discriminator = field(default_factory=Discriminator)
    avatar: str = ""
    bot: bool = False

    def __str__(self) -> str:
        return f"{self.username}#{self.discriminator}{{{self.id}}}"

    def reset(self) -> None:
        """Return every field to its zero value."""
        _reset_fields(self)


@dataclass
class Attachment:
    """A file attached to a message."""

    id: Snowflake = field(default_factory=Snowflake)
    filename: str = ""
    size: int = 0
    url: str = ""
    proxy_url: str = ""
    height: int = 0
    width: int = 0
    spoiler_tag: bool = False

    def update_internals(self) -> None:
        """Mark the attachment as a spoiler when its file name says so."""
        self.spoiler_tag = self.filename.startswith(ATTACHMENT_SPOILER_PREFIX)


@dataclass
class Message:
    """A message sent in a channel."""

    id: Snowflake = field(default_factory=Snowflake)
    channel_id: Snowflake = field(default_factory=Snowflake)
    guild_id: Snowflake = field(default_factory=Snowflake)
    author: User | None = None
    member: Any = None
    content: str = ""
    timestamp: Time = field(default_factory=Time)
    edited_timestamp: Time = field(default_factory=Time)
    tts: bool = False
    mention_everyone: bool = False
    mentions: list[User] = field(default_factory=list)
    mention_roles: list[Snowflake] = field(default_factory=list)
    mention_channels: list[MentionChannel] = field(default_factory=list)
    attachments: list[Attachment] = field(default_factory=list)
    embeds: list[Any] = field(default_factory=list)
    reactions: list[Any] = field(default_factory=list)
    nonce: Any = None  # not a snowflake
    pinned: bool = False
    webhook_id: Snowflake = field(default_factory=Snowflake)
    type: MessageType = MessageType.DEFAULT
    activity: MessageActivity = field(default_factory=MessageActivity)
    application: MessageApplication = field(default_factory=MessageApplication)
    message_reference: MessageReference | None = None
    referenced_message: Message | None = None
    flags: MessageFlag = MessageFlag(0)
    stickers: list[MessageSticker] = field(default_factory=list)
    components: list[MessageComponent] = field(default_factory=list)
    interaction: Any = None
    # true only when the whole text is wrapped in ||
    spoiler_tag_content: bool = False
    spoiler_tag_all_attachments: bool = False
    has_spoiler_image: bool = False

    def __str__(self) -> str:
        return "message{" + str(self.id) + "}"

    def discord_url(self) -> str:
        """Return the link that jumps to this message in a Discord client."""
        if self.id.is_zero():
            raise ValueError("missing message ID")
        if self.guild_id.is_zero():
            raise ValueError("missing guild ID")
        if self.channel_id.is_zero():
            raise ValueError("missing channel ID")
        return f"https://discord.com/channels/{int(self.guild_id)}/{int(self.channel_id)}/{int(self.id)}"

    def update_internals(self) -> None:
        """Derive the spoiler flags and link the member to the author."""
        if len(self.content) >= len(_SPOILER_TAGS):
            self.spoiler_tag_content = self.content[:2] + self.content[-2:] == _SPOILER_TAGS

        self.spoiler_tag_all_attachments = bool(self.attachments)
        for attachment in self.attachments:
            attachment.update_internals()
            if not attachment.spoiler_tag:
                self.spoiler_tag_all_attachments = False
                break
            self.has_spoiler_image = True

        if self.author is not None and self.member is not None:
            self.member.user_id = self.author.id

    def is_direct_message(self) -> bool:
        """Return whether the message comes from a direct message channel.

        Messages fetched over REST may lack a guild id, giving a false positive.
        """
        return self.type == MessageType.DEFAULT and self.guild_id.is_zero()

    def reset(self) -> None:
        """Return every field to its zero value."""
        _reset_fields(self)