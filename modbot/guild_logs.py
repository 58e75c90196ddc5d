"""Guild event logging to configured log channels."""

from __future__ import annotations

import os
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone

from .embeds import Color, Embed
from .mention import mention_user

_BOT_ID_FALLBACK = "set your user id env var bro"


class LogChannelStore:
    """Per-guild log channel ids, stored as 8-byte big-endian values."""

    def __init__(self, path) -> None:
        self.path = os.fspath(path)

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.path)
        try:
            with conn:
                conn.execute(
                    "CREATE TABLE IF NOT EXISTS log_channels ("
                    " guild_id TEXT NOT NULL,"
                    " key TEXT NOT NULL,"
                    " value BLOB NOT NULL,"
                    " PRIMARY KEY (guild_id, key))"
                )
                yield conn
        finally:
            conn.close()

    def set_channel(self, guild_id, key: str, channel_id: int) -> None:
        """Store the channel used for one kind of log in a guild."""
        try:
            value = int(channel_id).to_bytes(8, "big")
        except OverflowError as exc:
            raise ValueError(f"channel id out of range: {channel_id}") from exc
        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO log_channels (guild_id, key, value) VALUES (?, ?, ?) "
                "ON CONFLICT(guild_id, key) DO UPDATE SET value = excluded.value",
                (str(guild_id), key, value),
            )

    def get_channel(self, guild_id, key: str) -> int | None:
        """Return the configured channel id, or None if unset or unreadable."""
        if not os.path.exists(self.path):
            return None
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT value FROM log_channels WHERE guild_id = ? AND key = ?",
                    (str(guild_id), key),
                ).fetchone()
        except sqlite3.Error:
            return None
        if row is None or not isinstance(row[0], bytes) or len(row[0]) != 8:
            return None
        return int.from_bytes(row[0], "big")


@dataclass(frozen=True)
class LogEntry:
    """An embed to post in a log channel."""

    channel_id: int
    embed: Embed


def _now(now: datetime | None) -> datetime:
    return datetime.now(timezone.utc) if now is None else now


def message_sent_log(
    store: LogChannelStore,
    guild_id,
    author_id,
    content: str,
    bot_id: str | None = None,
    now: datetime | None = None,
) -> LogEntry | None:
    """Return the log entry for a sent message, or None if it is not logged."""
    if guild_id is None:
        return None
    channel = store.get_channel(guild_id, "MESSAGE_SENT_CHANNEL_ID")
    if channel is None:
        return None
    if bot_id is None:
        bot_id = os.environ.get("BOT_ID", _BOT_ID_FALLBACK)
    if str(author_id) == bot_id:
        return None
    embed = Embed(title="Message Sent", color=Color.BLURPLE, timestamp=_now(now))
    embed.add_field("User", mention_user(author_id), True)
    embed.add_field("Content", content, False)
    return LogEntry(channel, embed)


def user_banned_log(
    store: LogChannelStore, guild_id, user_id, now: datetime | None = None
) -> LogEntry | None:
    """Return the log entry for a ban, or None if bans are not logged."""
    channel = store.get_channel(guild_id, "BAN_CHANNEL_ID")
    if channel is None:
        return None
    embed = Embed(title="User Banned", color=Color.RED, timestamp=_now(now))
    embed.add_field("Banned User", mention_user(user_id), True)
    return LogEntry(channel, embed)