from datetime import datetime, timezone

import pytest

from modbot.embeds import Color
from modbot.guild_logs import LogChannelStore, message_sent_log, user_banned_log
from modbot.mention import mention_user

NOW = datetime(2024, 1, 2, 3, 4, tzinfo=timezone.utc)


@pytest.fixture
def store(tmp_path):
    return LogChannelStore(tmp_path / "logs" / "channels.db")


def test_channel_round_trip(store):
    store.set_channel(1, "BAN_CHANNEL_ID", 555)
    assert store.get_channel(1, "BAN_CHANNEL_ID") == 555


def test_largest_u64_round_trips(store):
    store.set_channel(1, "BAN_CHANNEL_ID", 2**64 - 1)
    assert store.get_channel(1, "BAN_CHANNEL_ID") == 2**64 - 1


def test_out_of_range_channel_rejected(store):
    with pytest.raises(ValueError):
        store.set_channel(1, "BAN_CHANNEL_ID", 2**64)


def test_overwrite_and_separation(store):
    store.set_channel(1, "BAN_CHANNEL_ID", 10)
    store.set_channel(1, "BAN_CHANNEL_ID", 20)
    store.set_channel(2, "BAN_CHANNEL_ID", 30)
    assert store.get_channel(1, "BAN_CHANNEL_ID") == 20
    assert store.get_channel(2, "BAN_CHANNEL_ID") == 30
    assert store.get_channel(1, "MESSAGE_SENT_CHANNEL_ID") is None


def test_missing_database_gives_none(tmp_path):
    store = LogChannelStore(tmp_path / "absent.db")
    assert store.get_channel(1, "BAN_CHANNEL_ID") is None
    assert not (tmp_path / "absent.db").exists()


def test_message_sent_log(store):
    store.set_channel(7, "MESSAGE_SENT_CHANNEL_ID", 99)
    entry = message_sent_log(store, 7, 42, "hi all", bot_id="1", now=NOW)
    assert entry.channel_id == 99
    assert entry.embed.title == "Message Sent"
    assert entry.embed.color == Color.BLURPLE
    assert entry.embed.timestamp == NOW
    assert [(f.name, f.value, f.inline) for f in entry.embed.fields] == [
        ("User", mention_user(42), True),
        ("Content", "hi all", False),
    ]


def test_message_from_bot_not_logged(store):
    store.set_channel(7, "MESSAGE_SENT_CHANNEL_ID", 99)
    assert message_sent_log(store, 7, 42, "x", bot_id="42") is None


def test_message_outside_guild_not_logged(store):
    assert message_sent_log(store, None, 42, "x", bot_id="1") is None


def test_message_without_channel_not_logged(store):
    store.set_channel(7, "BAN_CHANNEL_ID", 99)
    assert message_sent_log(store, 7, 42, "x", bot_id="1") is None


def test_user_banned_log(store):
    store.set_channel(3, "BAN_CHANNEL_ID", 12)
    entry = user_banned_log(store, 3, 8, now=NOW)
    assert entry.channel_id == 12
    assert entry.embed.title == "User Banned"
    assert entry.embed.color == Color.RED
    assert entry.embed.fields[0].name == "Banned User"
    assert entry.embed.fields[0].value == mention_user(8)


def test_user_banned_without_channel(store):
    assert user_banned_log(store, 3, 8) is None