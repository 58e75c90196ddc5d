"""Replies of the tag commands."""

from __future__ import annotations

import logging
import sqlite3
import time
from dataclasses import dataclass

from .embeds import Embed, create_error_embed
from .tags import TagDb, require_guild

log = logging.getLogger(__name__)

_MARKDOWN_ESCAPES = str.maketrans({ch: "\\" + ch for ch in "`*_~#<>|"})


@dataclass(frozen=True)
class TagReply:
    """What a tag command answers with.

    ``in_channel`` marks a plain channel message (answering the referenced
    message, if any) rather than a command reply; ``delete_invocation`` asks
    for the invoking message to be removed.
    """

    content: str | None = None
    embed: Embed | None = None
    ephemeral: bool = False
    in_channel: bool = False
    delete_invocation: bool = False


def escape_backticks(text: str) -> str:
    """Escape backticks so the text can sit inside inline code."""
    return text.replace("`", "\\`")


def escape_markdown(text: str) -> str:
    """Escape the characters that chat markdown would interpret."""
    return text.translate(_MARKDOWN_ESCAPES)


def _missing(name: str, ephemeral: bool = False) -> TagReply:
    return TagReply(
        embed=create_error_embed(f"❌ Tag `{name}` does not exist"), ephemeral=ephemeral
    )


def _error(exc: Exception, ephemeral: bool = False) -> TagReply:
    return TagReply(embed=create_error_embed(str(exc)), ephemeral=ephemeral)


class TagCommands:
    """The tag command family for one tag database."""

    def __init__(self, db: TagDb) -> None:
        self.db = db

    def _lookup(self, name: str, guild_id: int) -> tuple[str, str] | None:
        try:
            return self.db.get_tag(name, guild_id)
        except sqlite3.Error:
            return None

    def show(self, name: str, guild_id) -> TagReply:
        """Post a tag's content in the channel."""
        start = time.monotonic()
        guild = require_guild(guild_id)
        found = self._lookup(name, guild)
        if found is not None:
            reply = TagReply(content=found[1], in_channel=True)
        else:
            reply = _missing(escape_backticks(name))
        log.info("tag took %d ms", (time.monotonic() - start) * 1000)
        return reply

    def dtag(self, name: str, guild_id) -> TagReply:
        """Post a tag's content and remove the invoking message."""
        start = time.monotonic()
        guild = require_guild(guild_id)
        found = self._lookup(name, guild)
        if found is not None:
            reply = TagReply(content=found[1], in_channel=True, delete_invocation=True)
        else:
            reply = TagReply(
                embed=create_error_embed(f"❌ Tag `{name}` does not exist"),
                delete_invocation=True,
            )
        log.info("dtag took %d ms", (time.monotonic() - start) * 1000)
        return reply

    def create(self, name: str, content: str, guild_id) -> TagReply:
        """Create a new tag."""
        guild = require_guild(guild_id)
        try:
            self.db.create_tag(name, content, guild)
        except sqlite3.Error as exc:
            return _error(exc)
        return TagReply(content=f"✅ Created tag `{name}`")

    def delete(self, name: str, guild_id) -> TagReply:
        """Delete the tag best matching name."""
        guild = require_guild(guild_id)
        try:
            fixed = self.db.delete_tag(name, guild)
        except sqlite3.Error as exc:
            return _error(exc)
        if fixed is None:
            return _missing(escape_backticks(name))
        return TagReply(content=f"✅ Deleted tag `{fixed}`")

    def edit(self, name: str, content: str, guild_id) -> TagReply:
        """Replace the content of the tag best matching name."""
        guild = require_guild(guild_id)
        try:
            fixed = self.db.edit_tag(name, content, guild)
        except sqlite3.Error as exc:
            return _error(exc)
        if fixed is None:
            return _missing(escape_backticks(name))
        return TagReply(content=f"✅ Updated tag `{fixed}`")

    def list(self, guild_id) -> TagReply:
        """List every tag of the guild, privately."""
        guild = require_guild(guild_id)
        try:
            tags = self.db.get_all_tags(guild)
        except sqlite3.Error as exc:
            return _error(exc, ephemeral=True)
        text = (
            ", ".join(tags)
            if tags
            else "No tags found. Try creating a tag with `/tag create`"
        )
        return TagReply(embed=Embed(title="All Tags", description=text), ephemeral=True)

    def preview(self, name: str, guild_id) -> TagReply:
        """Show a tag's content privately."""
        guild = require_guild(guild_id)
        found = self._lookup(name, guild)
        if found is None:
            return _missing(escape_backticks(name), ephemeral=True)
        return TagReply(content=found[1], ephemeral=True)

    def raw(self, name: str, guild_id) -> TagReply:
        """Show a tag's content with its markdown escaped."""
        guild = require_guild(guild_id)
        found = self._lookup(name, guild)
        if found is None:
            return _missing(escape_backticks(name))
        return TagReply(content=escape_markdown(found[1]))

    def alias(self, name: str, alias: str, guild_id) -> TagReply:
        """Create a new tag holding the content of an existing one."""
        guild = require_guild(guild_id)
        found = self._lookup(name, guild)
        if found is None:
            return _missing(name)
        try:
            self.db.create_tag(alias, found[1], guild)
        except sqlite3.Error as exc:
            return _error(exc)
        return TagReply(content=f"✅ Created tag alias `{alias}`")