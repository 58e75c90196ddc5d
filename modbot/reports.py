"""Moderator reports of messages and users."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone

from dotenv import load_dotenv

from .embeds import Color, Embed
from .mention import mention_role, mention_user

_U64_MAX = 2**64 - 1
_U64_TEXT = re.compile(r"\+?[0-9]+")


def _parse_u64(text: str) -> int | None:
    if not _U64_TEXT.fullmatch(text):
        return None
    value = int(text)
    return value if value <= _U64_MAX else None


@dataclass(frozen=True)
class ReportConfig:
    """Where reports go and which role, if any, is pinged."""

    channel_id: int
    notification_role_id: int | None = None

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> ReportConfig:
        """Read the report settings; with no mapping given, the process environment and .env."""
        if env is None:
            load_dotenv()
            env = os.environ
        raw_channel = env.get("REPORT_CHANNEL_ID")
        if raw_channel is None:
            raise RuntimeError(
                "Missing `REPORT_CHANNEL_ID` env var, please include this in your .env file"
            )
        channel_id = _parse_u64(raw_channel)
        if channel_id is None:
            raise ValueError("REPORT_CHANNEL_ID must be a valid u64 number")
        raw_role = env.get("REPORT_NOTIFICATION_ROLE")
        role_id = _parse_u64(raw_role) if raw_role is not None else None
        return cls(channel_id, role_id)


@dataclass(frozen=True)
class ReportMessage:
    """A message to post in the report channel."""

    channel_id: int
    embed: Embed
    content: str | None = None


def _now(now: datetime | None) -> datetime:
    return datetime.now(timezone.utc) if now is None else now


def build_message_report(
    content: str, author_id, reporter_id, reason: str, now: datetime | None = None
) -> Embed:
    """Return the embed reporting a message."""
    description = (
        f"**Message content:**\n{content}\n\n**Reason:**\n```\n{reason}\n```\n"
    )
    embed = Embed(
        title="New Report",
        description=description,
        color=Color.REPORT,
        timestamp=_now(now),
    )
    embed.add_field("Reported user", mention_user(author_id), True)
    embed.add_field("Reporter", mention_user(reporter_id), True)
    return embed


def build_user_report(
    user_id, reporter_id, reason: str, now: datetime | None = None
) -> Embed:
    """Return the embed reporting a user."""
    embed = Embed(
        title="New Report",
        description=f"```\n{reason}\n```\n",
        color=Color.REPORT,
        timestamp=_now(now),
    )
    embed.add_field("Reported User", mention_user(user_id), True)
    embed.add_field("Reporter", mention_user(reporter_id), True)
    return embed


def report_notification(config: ReportConfig, embed: Embed) -> ReportMessage:
    """Return the report message, pinging the notification role when one is set."""
    content = (
        mention_role(config.notification_role_id)
        if config.notification_role_id is not None
        else None
    )
    return ReportMessage(config.channel_id, embed, content)