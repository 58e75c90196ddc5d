"""Moderation actions: ban, kick, unban, warn and mute, with DM notifications."""

from __future__ import annotations

import os
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from datetime import datetime
from enum import IntFlag

from .tags import NotInGuildError
from .warnings import WarnStore

DEFAULT_REASON = "No reason provided"
MUTED_ROLE_NAME = "Muted"
_U64_MAX = 2**64 - 1
_U64_TEXT = re.compile(r"\+?[0-9]+")


class Permissions(IntFlag):
    """Guild permission bits."""

    ADD_REACTIONS = 1 << 6
    VIEW_CHANNEL = 1 << 10
    SEND_MESSAGES = 1 << 11
    SEND_TTS_MESSAGES = 1 << 12
    SPEAK = 1 << 21
    SEND_MESSAGES_IN_THREADS = 1 << 38


_MUTED_ROLE_UNWANTED = (
    Permissions.SEND_MESSAGES
    | Permissions.SPEAK
    | Permissions.SEND_TTS_MESSAGES
    | Permissions.ADD_REACTIONS
)

_MUTED_CHANNEL_DENY = (
    Permissions.SEND_MESSAGES
    | Permissions.SPEAK
    | Permissions.ADD_REACTIONS
    | Permissions.SEND_MESSAGES_IN_THREADS
)


@dataclass(frozen=True)
class PermissionOverwrite:
    """A channel permission overwrite for a role or a member."""

    target_id: int
    allow: Permissions = Permissions(0)
    deny: Permissions = Permissions(0)
    kind: str = "role"


@dataclass(frozen=True)
class User:
    """A guild user as seen by the moderation commands."""

    id: int
    name: str


@dataclass(frozen=True)
class Role:
    """A guild role with its permissions."""

    id: int
    name: str
    permissions: Permissions = Permissions(0)


class GuildApi(ABC):
    """Operations on one guild; every method raises on failure."""

    def __init__(self, guild_id: int, name: str | None = None) -> None:
        self.id = guild_id
        self.name = name

    @abstractmethod
    def ban(self, user_id: int, delete_message_days: int, reason: str) -> None:
        """Ban a user from the guild."""

    @abstractmethod
    def kick(self, user_id: int, reason: str) -> None:
        """Kick a member from the guild."""

    @abstractmethod
    def unban(self, user_id: int) -> None:
        """Lift a user's ban."""

    @abstractmethod
    def send_dm(self, user: User, content: str) -> None:
        """Send a direct message to a user."""

    @abstractmethod
    def roles(self) -> Sequence[Role]:
        """Return the guild's roles."""

    @abstractmethod
    def create_role(self, name: str, permissions: Permissions) -> Role:
        """Create a role and return it."""

    @abstractmethod
    def edit_role(self, role_id: int, permissions: Permissions) -> None:
        """Replace a role's permissions."""

    @abstractmethod
    def add_member_role(self, user_id: int, role_id: int) -> None:
        """Give a role to a member."""

    @abstractmethod
    def channels(self) -> Mapping[int, Sequence[PermissionOverwrite]]:
        """Return each channel id with its permission overwrites."""

    @abstractmethod
    def edit_channel_permissions(
        self, channel_id: int, overwrites: Sequence[PermissionOverwrite]
    ) -> None:
        """Replace a channel's permission overwrites."""


def reason_or_default(reason: str | None) -> str:
    """Return the given reason, or the default text when there is none."""
    return DEFAULT_REASON if reason is None else reason


def _require(guild: GuildApi | None) -> GuildApi:
    if guild is None:
        raise NotInGuildError()
    return guild


def send_mod_action_reason_dm(
    guild: GuildApi | None, user: User, action: str, reason: str
) -> None:
    """Tell a user by DM which action was taken against them and why."""
    if guild is None:
        return
    guild_name = guild.name if guild.name is not None else "Unknown server"
    guild.send_dm(
        user, f"**{guild_name}**: You have been {action}.\n**Reason**: {reason}"
    )


def _dm_status(guild: GuildApi, user: User, action: str, reason: str) -> str:
    try:
        send_mod_action_reason_dm(guild, user, action, reason)
    except Exception:
        return "❌ Could not send DM."
    return "✅ DM sent successfully."


def _ban(guild: GuildApi | None, user: User, reason: str | None) -> str:
    guild = _require(guild)
    reason_text = reason_or_default(reason)
    try:
        guild.ban(user.id, 0, reason_text)
    except Exception as exc:
        return f"❌ Failed to ban user: {exc}\n"
    return f"✅ Banned {user.name}.\n" + _dm_status(guild, user, "banned", reason_text)


def ban(guild: GuildApi | None, user: User, reason: str | None = None) -> str:
    """Ban a member, DM them the reason and return the reply text."""
    return _ban(guild, user, reason)


def dban(guild: GuildApi | None, user: User, reason: str | None = None) -> str:
    """Ban a member meant to have their messages removed; return the reply text."""
    return _ban(guild, user, reason)


def kick(guild: GuildApi | None, user: User, reason: str | None = None) -> str:
    """Kick a member, DM them the reason and return the reply text."""
    guild = _require(guild)
    reason_text = reason_or_default(reason)
    try:
        guild.kick(user.id, reason_text)
    except Exception as exc:
        return f"❌ Failed to kick user: {exc}\n"
    return f"✅ Muted {user.name}.\n" + _dm_status(guild, user, "kicked", reason_text)


def unban(guild: GuildApi | None, user: User) -> str:
    """Lift a user's ban and return the reply text."""
    guild = _require(guild)
    try:
        guild.unban(user.id)
    except Exception as exc:
        return f"❌ Failed to unban user: {exc}"
    return f"✅ Unbanned {user.name}."


def warn(
    guild: GuildApi | None,
    store: WarnStore,
    user: User,
    reason: str | None = None,
    now: datetime | None = None,
) -> str:
    """Record a warning, DM the user and return the reply text."""
    guild = _require(guild)
    reason_text = reason_or_default(reason)
    store.add_warn(user.id, guild.id, reason_text, now)
    try:
        send_mod_action_reason_dm(guild, user, "warned", reason_text)
    except Exception:
        return "❌ Could not send DM."
    return f"✅ warned {user.name}."


def strip_muted_permissions(permissions: Permissions) -> Permissions:
    """Remove the permissions a muted role must not grant."""
    return Permissions(int(permissions) & ~int(_MUTED_ROLE_UNWANTED))


def apply_mute_overwrites(
    overwrites: Sequence[PermissionOverwrite], role_id: int
) -> list[PermissionOverwrite]:
    """Return the overwrites with the muted role denied speaking and sending."""
    updated = list(overwrites)
    for pos, overwrite in enumerate(updated):
        if overwrite.kind == "role" and overwrite.target_id == role_id:
            updated[pos] = replace(
                overwrite,
                deny=Permissions(int(overwrite.deny) | int(_MUTED_CHANNEL_DENY)),
                allow=Permissions(int(overwrite.allow) & ~int(_MUTED_CHANNEL_DENY)),
            )
            return updated
    updated.append(
        PermissionOverwrite(role_id, Permissions(0), _MUTED_CHANNEL_DENY, "role")
    )
    return updated


def _parse_u64(text: str) -> int | None:
    if not _U64_TEXT.fullmatch(text):
        return None
    value = int(text)
    return value if value <= _U64_MAX else None


def get_or_create_muted_role(
    guild: GuildApi, env: Mapping[str, str] | None = None
) -> int:
    """Return the id of the muted role, fixing or creating it as needed."""
    env = os.environ if env is None else env
    configured = env.get("MUTED_ROLE_ID")
    if configured is not None:
        role_id = _parse_u64(configured)
        if role_id is not None:
            return role_id

    try:
        roles = guild.roles()
    except Exception as exc:
        raise RuntimeError(f"Failed to fetch guild: {exc}") from exc

    existing = next(
        (r for r in roles if r.name.lower() == MUTED_ROLE_NAME.lower()), None
    )
    if existing is not None:
        if int(existing.permissions) & int(_MUTED_ROLE_UNWANTED):
            guild.edit_role(existing.id, strip_muted_permissions(existing.permissions))
        return existing.id

    return guild.create_role(MUTED_ROLE_NAME, Permissions(0)).id


def override_channel_perms(guild: GuildApi, role_id: int) -> None:
    """Deny the muted role sending and speaking in every channel."""
    for channel_id, overwrites in guild.channels().items():
        guild.edit_channel_permissions(
            channel_id, apply_mute_overwrites(overwrites, role_id)
        )


def mute(
    guild: GuildApi | None,
    user: User,
    reason: str | None = None,
    env: Mapping[str, str] | None = None,
) -> str:
    """Give a member the muted role, lock channels for it and return the reply text."""
    guild = _require(guild)
    reason_text = reason_or_default(reason)
    role_id = get_or_create_muted_role(guild, env)

    failures = []
    try:
        guild.add_member_role(user.id, role_id)
    except Exception as exc:
        failures.append(f"Failed to assign Muted role: {exc}")
    try:
        override_channel_perms(guild, role_id)
    except Exception:
        failures.append("❌ Could not update channel permissions.")

    if failures:
        return "\n".join(failures)
    return f"✅ Muted {user.name}.\n" + _dm_status(guild, user, "muted", reason_text)