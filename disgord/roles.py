"""Guild roles and their display ordering."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .util import Snowflake


@dataclass
class Role:
    """A guild role."""

    id: Snowflake = field(default_factory=Snowflake)
    name: str = ""
    color: int = 0
    hoist: bool = False
    position: int = 0  # can be -1
    permissions: int = 0
    managed: bool = False
    mentionable: bool = False
    _guild_id: Snowflake = field(default_factory=Snowflake, init=False, repr=False, compare=False)

    def __str__(self) -> str:
        return self.name

    def mention(self) -> str:
        """Return the role mention understood by Discord clients."""
        return "<@&" + str(self.id) + ">"

    def set_guild_id(self, guild_id: int) -> None:
        """Link the role to a guild."""
        self._guild_id = Snowflake(guild_id)

    @property
    def guild_id(self) -> Snowflake:
        return self._guild_id


def sort_roles(roles: Iterable[Role]) -> list[Role]:
    """Order roles as Discord shows them: highest position first, then lowest id."""
    return sorted(roles, key=lambda role: (-role.position, int(role.id)))