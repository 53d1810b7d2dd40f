from types import SimpleNamespace

import pytest

from disgord.message import Attachment, Message, User
from disgord.message_types import ATTACHMENT_SPOILER_PREFIX, MessageType
from disgord.util import Snowflake


def test_update_internals_empty_message():
    m = Message()
    m.update_internals()
    assert m.spoiler_tag_content is False
    assert m.spoiler_tag_all_attachments is False


def test_update_internals_content_spoilers():
    m = Message()
    m.content = "||||"
    m.update_internals()
    assert m.spoiler_tag_content is True

    m.content = "|.||"
    m.update_internals()
    assert m.spoiler_tag_content is False

    m.content = "|| testing ||"
    m.update_internals()
    assert m.spoiler_tag_content is True


def test_update_internals_attachments():
    m = Message()
    m.attachments.append(Attachment(filename=ATTACHMENT_SPOILER_PREFIX))
    m.update_internals()
    assert m.spoiler_tag_all_attachments is True
    assert m.has_spoiler_image is True

    m.attachments.append(Attachment(filename="random"))
    m.update_internals()
    assert m.spoiler_tag_all_attachments is False


def test_update_internals_links_member_to_author():
    member = SimpleNamespace(user_id=Snowflake(0))
    m = Message(author=User(id=Snowflake(42)), member=member)
    m.update_internals()
    assert member.user_id == 42


def test_str():
    assert str(Message(id=Snowflake(7))) == "message{7}"


def test_discord_url():
    m = Message(
        id=Snowflake(646925626523254795),
        guild_id=Snowflake(319567980491046913),
        channel_id=Snowflake(644376487331495967),
    )
    assert (
        m.discord_url()
        == "https://discord.com/channels/319567980491046913/644376487331495967/646925626523254795"
    )


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"guild_id": Snowflake(1), "channel_id": Snowflake(2)}, "missing message ID"),
        ({"id": Snowflake(1), "channel_id": Snowflake(2)}, "missing guild ID"),
        ({"id": Snowflake(1), "guild_id": Snowflake(2)}, "missing channel ID"),
    ],
)
def test_discord_url_missing_ids(kwargs, message):
    with pytest.raises(ValueError, match=message):
        Message(**kwargs).discord_url()


def test_is_direct_message():
    assert Message().is_direct_message() is True
    assert Message(guild_id=Snowflake(3)).is_direct_message() is False
    assert Message(type=MessageType.REPLY).is_direct_message() is False


def test_reset_returns_defaults():
    m = Message(id=Snowflake(9), content="hello", author=User(id=Snowflake(1)))
    m.attachments.append(Attachment(filename="x"))
    m.reset()
    assert m == Message()


def test_user_reset():
    u = User(id=Snowflake(3), username="name", bot=True)
    u.reset()
    assert u == User()


def test_attachment_spoiler_tag():
    a = Attachment(filename=ATTACHMENT_SPOILER_PREFIX + "image.png")
    a.update_internals()
    assert a.spoiler_tag is True