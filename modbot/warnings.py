"""Stored user warnings and their paginated display."""

from __future__ import annotations

import json
import os
import sqlite3
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import asdict, dataclass
from datetime import datetime, timezone

from .dates import format_timestamp_ddmmyyyy
from .embeds import Embed

WARNS_PER_PAGE = 10


@dataclass(frozen=True)
class WarnEntry:
    """One warning: its reason and an RFC 3339 timestamp."""

    reason: str
    timestamp: str


def _decode_warns(raw) -> list[WarnEntry]:
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError("warnings must be a list")
    entries = []
    for item in data:
        reason, timestamp = item["reason"], item["timestamp"]
        if not isinstance(reason, str) or not isinstance(timestamp, str):
            raise ValueError("warning fields must be strings")
        entries.append(WarnEntry(reason, timestamp))
    return entries


class WarnStore:
    """Warnings kept as a JSON list per user, one table per guild."""

    def __init__(self, path) -> None:
        self.path = os.fspath(path)

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.path)
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    @staticmethod
    def _table(guild_id) -> str:
        return f'"guild_{int(guild_id)}"'

    @staticmethod
    def _load(conn: sqlite3.Connection, table: str, user_id) -> list[WarnEntry]:
        row = conn.execute(
            f"SELECT warns FROM {table} WHERE user_id = ?", (str(user_id),)
        ).fetchone()
        if row is None:
            return []
        try:
            return _decode_warns(row[0])
        except (ValueError, TypeError, KeyError):
            return []

    def add_warn(self, user_id, guild_id, reason: str, now: datetime | None = None) -> WarnEntry:
        """Record a warning for a user and return it."""
        if now is None:
            now = datetime.now(timezone.utc)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        entry = WarnEntry(reason, now.astimezone(timezone.utc).isoformat())
        table = self._table(guild_id)
        with self._connect() as conn:
            conn.execute(
                f"CREATE TABLE IF NOT EXISTS {table} ("
                " user_id TEXT PRIMARY KEY,"
                " warns TEXT NOT NULL)"
            )
            warns = self._load(conn, table, user_id)
            warns.append(entry)
            conn.execute(
                f"INSERT INTO {table} (user_id, warns) VALUES (?, ?) "
                "ON CONFLICT(user_id) DO UPDATE SET warns = excluded.warns",
                (str(user_id), json.dumps([asdict(w) for w in warns])),
            )
        return entry

    def get_warns(self, user_id, guild_id) -> list[WarnEntry]:
        """Return a user's warnings, oldest first; raises if the guild has no table."""
        with self._connect() as conn:
            return self._load(conn, self._table(guild_id), user_id)


@dataclass(frozen=True)
class Button:
    """A navigation button of the warnings pager."""

    custom_id: str
    label: str
    style: str
    disabled: bool


class WarnPager:
    """Splits a user's warnings into pages of WARNS_PER_PAGE."""

    def __init__(self, user_name: str, warns: Iterable[WarnEntry]) -> None:
        self.user_name = user_name
        self.warns = list(warns)

    def total_pages(self) -> int:
        return -(-len(self.warns) // WARNS_PER_PAGE)

    def page_embed(self, page: int) -> Embed:
        """Return the embed showing one page of warnings."""
        total = self.total_pages()
        if not 0 <= page < total:
            raise IndexError(f"page {page} out of range for {total} pages")
        start = page * WARNS_PER_PAGE
        lines = (
            f"**{format_timestamp_ddmmyyyy(w.timestamp)}** - {w.reason}"
            for w in self.warns[start : start + WARNS_PER_PAGE]
        )
        return Embed(
            title=f"Warnings for {self.user_name}",
            description="\n".join(lines),
            footer=f"Page {page + 1}/{total} • Total Warnings: {len(self.warns)}",
        )

    def buttons(self, page: int) -> list[Button]:
        """Return the first/prev/next/last buttons for a page."""
        at_start = page == 0
        at_end = page + 1 >= self.total_pages()
        return [
            Button("first", "◀◀", "primary", at_start),
            Button("prev", "◀", "secondary", at_start),
            Button("next", "▶", "secondary", at_end),
            Button("last", "▶▶", "primary", at_end),
        ]

    def navigate(self, page: int, action: str) -> int:
        """Return the page reached from page by pressing the button named action."""
        total = self.total_pages()
        if action == "first":
            return 0
        if action == "prev":
            return max(page - 1, 0)
        if action == "next":
            return page + 1 if page + 1 < total else page
        if action == "last":
            return max(total - 1, 0)
        return page