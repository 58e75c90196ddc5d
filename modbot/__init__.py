"""Moderation, tags, warnings, reports and guild logging for a chat bot."""

__version__ = "0.1.0"