"""Local rate limit keys for guild related endpoints."""

from __future__ import annotations

INVITES = "/invites"
VOICE = "/voice"
REGIONS = "/regions"


def guild(guild_id: int) -> str:
    return "g:" + str(guild_id)


def guild_audit_logs(guild_id: int) -> str:
    return guild(guild_id) + ":a-l"


def guild_emojis(guild_id: int) -> str:
    return "g:" + str(guild_id) + ":emojis"


def guild_emoji(guild_id: int, emoji_id: int) -> str:
    return guild_emojis(guild_id) + ":" + str(emoji_id)


def guild_embed(guild_id: int) -> str:
    return guild(guild_id) + ":e"


def guild_vanity_url(guild_id: int) -> str:
    return guild(guild_id) + ":vurl"


def guild_channels(guild_id: int) -> str:
    return guild(guild_id) + ":c"


def guild_members(guild_id: int) -> str:
    return guild(guild_id) + ":m"


def guild_bans(guild_id: int) -> str:
    return guild(guild_id) + ":b"


def guild_roles(guild_id: int) -> str:
    return guild(guild_id) + ":r"


def guild_regions(guild_id: int) -> str:
    return guild(guild_id) + ":regions"


def guild_integrations(guild_id: int) -> str:
    return guild(guild_id) + ":i"


def guild_invites(guild_id: int) -> str:
    return guild(guild_id) + ":inv"


def guild_prune(guild_id: int) -> str:
    return guild(guild_id) + ":p"


def guild_webhooks(guild_id: int) -> str:
    return guild(guild_id) + ":w"


def invites() -> str:
    return INVITES


def voice_regions() -> str:
    return VOICE + REGIONS