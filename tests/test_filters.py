import pytest

from disgord.events import MessageCreate, MessageDelete, MessageUpdate
from disgord.message import Message, User
from disgord.std.filters import (
    MsgFilter,
    get_msg,
    mention_string,
    new_msg_filter,
    nickname_mention_string,
)
from disgord.util import Snowflake

BOT_ID = Snowflake(123)
WRONG_BOT_ID = Snowflake(126)


class FakeMember:
    def __init__(self, permissions):
        self.permissions = permissions

    def get_permissions(self):
        if isinstance(self.permissions, Exception):
            raise self.permissions
        return self.permissions


class FakeGuild:
    def __init__(self, permissions):
        self.permissions = permissions

    def member(self, user_id):
        return FakeMember(self.permissions)


class FakeCurrentUser:
    def __init__(self, user_id):
        self.user_id = user_id

    def get(self):
        return User(id=Snowflake(self.user_id))


class FakeClient:
    def __init__(self, user_id=0, permissions=0):
        self.user_id = user_id
        self.permissions = permissions

    def current_user(self):
        return FakeCurrentUser(self.user_id)

    def guild(self, guild_id):
        return FakeGuild(self.permissions)


def create(content):
    return MessageCreate(message=Message(content=content))


def update(content):
    return MessageUpdate(message=Message(content=content))


def bot_filter():
    return new_msg_filter(FakeClient(BOT_ID))


def test_new_msg_filter_takes_bot_id():
    assert new_msg_filter(FakeClient(BOT_ID)).bot_id == BOT_ID


def test_mention_strings():
    assert mention_string(BOT_ID) == "<@123>"
    assert nickname_mention_string(BOT_ID) == "<@!123>"


def test_get_msg():
    msg = Message(content="x")
    assert get_msg(MessageCreate(message=msg)) is msg
    assert get_msg(MessageUpdate(message=msg)) is msg
    assert get_msg(MessageDelete()) is None


FROM_BOT = Message(author=User(bot=True))
NOT_FROM_BOT = Message(author=User(bot=False))


@pytest.mark.parametrize(
    "evt, passes",
    [
        (MessageCreate(message=FROM_BOT), False),
        (MessageUpdate(message=FROM_BOT), False),
        (MessageCreate(message=NOT_FROM_BOT), True),
        (MessageUpdate(message=NOT_FROM_BOT), True),
    ],
)
def test_not_by_bot(evt, passes):
    assert (bot_filter().not_by_bot(evt) is evt) == passes


@pytest.mark.parametrize(
    "evt, passes",
    [
        (MessageCreate(message=FROM_BOT), True),
        (MessageUpdate(message=FROM_BOT), True),
        (MessageCreate(message=NOT_FROM_BOT), False),
        (MessageUpdate(message=NOT_FROM_BOT), False),
    ],
)
def test_is_by_bot(evt, passes):
    assert (bot_filter().is_by_bot(evt) is evt) == passes


WITH_WEBHOOK = Message(author=User(), webhook_id=Snowflake(456))
WITHOUT_WEBHOOK = Message(author=User(), webhook_id=Snowflake(0))


@pytest.mark.parametrize(
    "evt, passes",
    [
        (MessageCreate(message=WITH_WEBHOOK), False),
        (MessageUpdate(message=WITH_WEBHOOK), False),
        (MessageCreate(message=WITHOUT_WEBHOOK), True),
        (MessageUpdate(message=WITHOUT_WEBHOOK), True),
    ],
)
def test_not_by_webhook(evt, passes):
    assert (bot_filter().not_by_webhook(evt) is evt) == passes


@pytest.mark.parametrize(
    "evt, passes",
    [
        (MessageCreate(message=WITH_WEBHOOK), True),
        (MessageUpdate(message=WITH_WEBHOOK), True),
        (MessageCreate(message=WITHOUT_WEBHOOK), False),
        (MessageUpdate(message=WITHOUT_WEBHOOK), False),
    ],
)
def test_is_by_webhook(evt, passes):
    assert (bot_filter().is_by_webhook(evt) is evt) == passes


@pytest.mark.parametrize(
    "evt, passes",
    [
        (create("<@123> hello"), True),
        (create("<@!123> hello"), True),
        (update("<@123> hello"), True),
        (create("<@126> hello"), False),
        (update("<@126> hello"), False),
        (create("diff prefix <@123> hello"), True),
        (update("diff prefix <@123> hello"), True),
    ],
)
def test_contains_bot_mention(evt, passes):
    assert (bot_filter().contains_bot_mention(evt) is evt) == passes


@pytest.mark.parametrize(
    "evt, passes",
    [
        (create("<@123> hello"), True),
        (create("<@!123> hello"), True),
        (update("<@123> hello"), True),
        (create("<@126> hello"), False),
        (update("<@126> hello"), False),
        (create("diff prefix <@123> hello"), False),
        (update("diff prefix <@123> hello"), False),
    ],
)
def test_has_bot_mention_prefix(evt, passes):
    assert (bot_filter().has_bot_mention_prefix(evt) is evt) == passes


def test_set_prefix():
    f = new_msg_filter(FakeClient())
    assert f.prefix == ""
    f.set_prefix("!")
    assert f.prefix == "!"


@pytest.mark.parametrize(
    "evt, passes",
    [
        (create("!!hello"), True),
        (update("!!hello"), True),
        (create("diff prefix !!hello"), False),
        (update("diff prefix !!hello"), False),
    ],
)
def test_has_prefix(evt, passes):
    f = new_msg_filter(FakeClient())
    f.set_prefix("!!")
    assert (f.has_prefix(evt) is evt) == passes


@pytest.mark.parametrize(
    "evt",
    [
        create("!!hello"),
        update("!!hello"),
        update("   !!hello"),
        create("   !!  hello"),
        update("!!  hello"),
        update("  hello"),
    ],
)
def test_strip_prefix(evt):
    f = new_msg_filter(FakeClient())
    f.set_prefix("!!")
    result = f.strip_prefix(evt)
    assert f.has_prefix(result) is None


@pytest.mark.parametrize(
    "content, expected",
    [("!!hello", "hello"), ("   !!  hello", "  hello")],
)
def test_strip_prefix_content(content, expected):
    f = MsgFilter(prefix="!!")
    evt = create(content)
    assert f.strip_prefix(evt) is evt
    assert evt.message.content == expected


def test_empty_prefix_passes_everything():
    f = MsgFilter()
    evt = create("anything")
    assert f.has_prefix(evt) is evt
    assert f.strip_prefix(evt) is evt


def permission_event(author_id=42):
    return MessageCreate(message=Message(author=User(id=Snowflake(author_id)), guild_id=Snowflake(9)))


def test_has_permissions_minimum():
    f = new_msg_filter(FakeClient(BOT_ID, permissions=0b111))
    f.set_min_permissions(0b011)
    evt = permission_event()
    assert f.has_permissions(evt) is evt

    f.session = FakeClient(BOT_ID, permissions=0b001)
    assert f.has_permissions(evt) is None


def test_has_permissions_alternatives():
    f = new_msg_filter(FakeClient(BOT_ID, permissions=0b0011))
    f.set_alt_permissions(0b0100, 0b1000)
    assert f.either_permissions == 0b1100
    assert f.has_permissions(permission_event()) is None

    f.session = FakeClient(BOT_ID, permissions=0b1000)
    evt = permission_event()
    assert f.has_permissions(evt) is evt


def test_has_permissions_failures():
    f = new_msg_filter(FakeClient(BOT_ID, permissions=RuntimeError("fail")))
    assert f.has_permissions(permission_event()) is None
    f.session = FakeClient(BOT_ID, permissions=0b1)
    assert f.has_permissions(permission_event(author_id=0)) is None