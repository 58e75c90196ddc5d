"""Bot settings, the command registry and log line formats."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from dotenv import load_dotenv

_RED = "\x1b[31;1m"
_RESET = "\x1b[0m"


@dataclass(frozen=True)
class BotSettings:
    """How the bot connects and reads its commands."""

    token: str
    prefix: str = "-"
    edit_tracker_seconds: int = 3600
    tag_db_path: str = "data/tags.db"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> BotSettings:
        """Read the settings; with no mapping given, the process environment and .env."""
        if env is None:
            load_dotenv()
            env = os.environ
        token = env.get("BOT_TOKEN")
        if token is None:
            raise RuntimeError(
                "Missing `BOT_TOKEN` env var, please include this in your .env file"
            )
        return cls(token=token)


@dataclass(frozen=True)
class CommandInfo:
    """A registered command and how it can be invoked."""

    name: str
    description: str | None = None
    prefix: bool = True
    slash: bool = True
    guild_only: bool = True
    ephemeral: bool = False
    context_menu: str | None = None
    aliases: tuple[str, ...] = ()
    subcommands: tuple[CommandInfo, ...] = field(default_factory=tuple)


def _warn_command() -> CommandInfo:
    return CommandInfo(
        "warn",
        "Warn a guild member",
        subcommands=(CommandInfo("list", "Show all warns of a guild member"),),
    )


def _tag_command() -> CommandInfo:
    return CommandInfo(
        "tag",
        subcommands=(
            CommandInfo("create", "Create a new tag", aliases=("add",)),
            CommandInfo("edit", "Edit an existing tag"),
            CommandInfo("delete", "Delete an existing tag"),
            CommandInfo("list", "List all tags for this server"),
            CommandInfo("preview", "Privately preview a tag", prefix=False),
            CommandInfo("raw", "View a tag in raw text", guild_only=False),
            CommandInfo("alias", "Create an alias for an existing tag", guild_only=False),
        ),
    )


def get_all_commands() -> list[CommandInfo]:
    """Return every top-level command, in registration order."""
    return [
        CommandInfo("ban", "Ban a guild member"),
        CommandInfo("dban", "Ban a guild member and delete all messages"),
        CommandInfo("kick", "Kick a guild member"),
        CommandInfo("mute", "Mute a guild member", aliases=("timeout",)),
        CommandInfo("unban", "Unban a guild member"),
        _warn_command(),
        CommandInfo(
            "report_message",
            prefix=False,
            slash=False,
            guild_only=False,
            ephemeral=True,
            context_menu="Report Message",
        ),
        CommandInfo(
            "report_user",
            prefix=False,
            guild_only=False,
            ephemeral=True,
            context_menu="Report User",
        ),
        CommandInfo("dtag", slash=False),
        _tag_command(),
    ]


def format_command_error(command: str, error: BaseException) -> str:
    """Return the log line for an error raised inside a command."""
    return f"{_RED}[ERROR] in command '{command}':{_RESET} {error!r}"


def format_event(name: str) -> str:
    """Return the log line for a gateway event, its name quoted."""
    quoted = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'[EVENT HANDLER] "{quoted}"'