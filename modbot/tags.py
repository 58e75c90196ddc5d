"""Per-guild tag storage in SQLite with typo-tolerant lookup."""

from __future__ import annotations

import os
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager

from .similarity import jaro_winkler

SIMILARITY_THRESHOLD = 0.80


class NotInGuildError(Exception):
    """Raised when a guild-only operation runs outside a guild."""

    def __init__(self) -> None:
        super().__init__("Not in Server")


def require_guild(guild_id) -> int:
    """Return the guild id as an int, or raise NotInGuildError if there is none."""
    if guild_id is None:
        raise NotInGuildError()
    return int(guild_id)


class TagDb:
    """Tags stored in one table per guild of an SQLite database."""

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
        return f'"tags_{int(guild_id)}"'

    def create_tag(self, name: str, content: str, guild_id) -> None:
        """Store a new tag; raises sqlite3.IntegrityError if the name is taken."""
        table = self._table(guild_id)
        with self._connect() as conn:
            conn.execute(
                f"CREATE TABLE IF NOT EXISTS {table} ("
                " name TEXT PRIMARY KEY,"
                " content TEXT NOT NULL)"
            )
            conn.execute(
                f"INSERT INTO {table} (name, content) VALUES (?, ?)", (name, content)
            )

    def delete_tag(self, name: str, guild_id) -> str | None:
        """Delete the tag best matching name; return its real name or None."""
        found = self.fix_typos(name, guild_id)
        if found is None:
            return None
        fixed_name, _ = found
        with self._connect() as conn:
            cursor = conn.execute(
                f"DELETE FROM {self._table(guild_id)} WHERE name = ?", (fixed_name,)
            )
        return fixed_name if cursor.rowcount else None

    def edit_tag(self, name: str, content: str, guild_id) -> str | None:
        """Replace the content of the tag best matching name; return its real name or None."""
        found = self.fix_typos(name, guild_id)
        if found is None:
            return None
        fixed_name, _ = found
        with self._connect() as conn:
            cursor = conn.execute(
                f"UPDATE {self._table(guild_id)} SET content = ? WHERE name = ?",
                (content, fixed_name),
            )
        return fixed_name if cursor.rowcount else None

    def _get_tag_exact(self, name: str, guild_id) -> tuple[str, str] | None:
        with self._connect() as conn:
            row = conn.execute(
                f"SELECT name, content FROM {self._table(guild_id)} WHERE name = ?",
                (name,),
            ).fetchone()
        return (row[0], row[1]) if row is not None else None

    def get_tag(self, name: str, guild_id) -> tuple[str, str] | None:
        """Return (name, content) of the tag best matching name, or None."""
        return self.fix_typos(name, guild_id)

    def get_all_tags(self, guild_id) -> list[str]:
        """Return the names of every tag of a guild."""
        with self._connect() as conn:
            rows = conn.execute(f"SELECT name FROM {self._table(guild_id)}").fetchall()
        return [row[0] for row in rows]

    def fix_typos(self, name: str, guild_id) -> tuple[str, str] | None:
        """Find the most similar tag name and return (name, content) if close enough."""
        best: str | None = None
        best_score = -1.0
        for tag in self.get_all_tags(guild_id):
            score = jaro_winkler(name, tag)
            if score >= best_score:
                best, best_score = tag, score
        if best is None or best_score <= SIMILARITY_THRESHOLD:
            return None
        return self._get_tag_exact(best, guild_id)