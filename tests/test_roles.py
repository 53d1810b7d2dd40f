import pytest

from disgord.roles import Role, sort_roles
from disgord.util import Snowflake


def test_mention_format():
    role = Role(id=Snowflake(123))
    assert role.mention() == "<@&123>"


def test_str_is_name():
    role = Role(name="moderators")
    assert str(role) == "moderators"


def test_set_guild_id():
    role = Role()
    role.set_guild_id(987)
    assert role.guild_id == 987


def test_set_guild_id_rejects_negative():
    with pytest.raises(ValueError):
        Role().set_guild_id(-1)


def test_sort_highest_position_first():
    roles = [Role(id=Snowflake(i), position=p) for i, p in [(1, 0), (2, 5), (3, -1), (4, 2)]]
    ordered = sort_roles(roles)
    positions = [role.position for role in ordered]
    assert positions == sorted(positions, reverse=True)
    assert len(ordered) == len(roles)


def test_sort_ties_by_id_ascending():
    roles = [Role(id=Snowflake(i), position=1) for i in (30, 10, 20)]
    ordered = sort_roles(roles)
    ids = [int(role.id) for role in ordered]
    assert ids == sorted(ids)


def test_sort_does_not_modify_input():
    roles = [Role(id=Snowflake(1), position=0), Role(id=Snowflake(2), position=3)]
    original = list(roles)
    sort_roles(roles)
    assert roles == original