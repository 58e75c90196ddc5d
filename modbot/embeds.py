"""Rich message embeds."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any


class Color(IntEnum):
    """Embed colours used by the bot."""

    RED = 0xE74C3C
    BLURPLE = 0x5865F2
    REPORT = 0xD14821


@dataclass(frozen=True)
class EmbedField:
    """A single name/value field of an embed."""

    name: str
    value: str
    inline: bool = False


@dataclass
class Embed:
    """A message embed with optional title, description, colour, fields and footer."""

    title: str | None = None
    description: str | None = None
    color: int | None = None
    fields: list[EmbedField] = field(default_factory=list)
    footer: str | None = None
    timestamp: datetime | None = None

    def add_field(self, name: str, value: str, inline: bool = False) -> Embed:
        """Append a field and return the embed for chaining."""
        self.fields.append(EmbedField(name, value, inline))
        return self

    def to_dict(self) -> dict[str, Any]:
        """Return the embed as a JSON-ready dictionary, leaving out unset parts."""
        data: dict[str, Any] = {}
        if self.title is not None:
            data["title"] = self.title
        if self.description is not None:
            data["description"] = self.description
        if self.color is not None:
            data["color"] = int(self.color)
        if self.fields:
            data["fields"] = [
                {"name": f.name, "value": f.value, "inline": f.inline}
                for f in self.fields
            ]
        if self.footer is not None:
            data["footer"] = {"text": self.footer}
        if self.timestamp is not None:
            data["timestamp"] = self.timestamp.isoformat()
        return data


def create_error_embed(description: str) -> Embed:
    """Return a red embed titled "Error" with the given description."""
    return Embed(title="Error", description=description, color=Color.RED)