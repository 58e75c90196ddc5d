import sqlite3

import pytest

from modbot.tags import NotInGuildError, TagDb, require_guild

GUILD = 1001
OTHER_GUILD = 2002


@pytest.fixture
def db(tmp_path):
    return TagDb(tmp_path / "tags.db")


def test_create_and_get_exact(db):
    db.create_tag("hello", "Hello there!", GUILD)
    assert db.get_tag("hello", GUILD) == ("hello", "Hello there!")


def test_get_with_typo(db):
    db.create_tag("hello", "Hello there!", GUILD)
    assert db.get_tag("helo", GUILD) == ("hello", "Hello there!")


def test_unrelated_name_not_found(db):
    db.create_tag("hello", "Hello there!", GUILD)
    assert db.get_tag("zzzz", GUILD) is None


def test_duplicate_name_rejected(db):
    db.create_tag("hello", "one", GUILD)
    with pytest.raises(sqlite3.IntegrityError):
        db.create_tag("hello", "two", GUILD)
    assert db.get_tag("hello", GUILD) == ("hello", "one")


def test_list_tags(db):
    for name in ("rules", "faq", "install"):
        db.create_tag(name, f"{name} text", GUILD)
    assert sorted(db.get_all_tags(GUILD)) == ["faq", "install", "rules"]


def test_missing_guild_table_raises(db):
    db.create_tag("hello", "x", GUILD)
    with pytest.raises(sqlite3.OperationalError):
        db.get_all_tags(OTHER_GUILD)
    with pytest.raises(sqlite3.OperationalError):
        db.get_tag("hello", OTHER_GUILD)


def test_guilds_are_isolated(db):
    db.create_tag("hello", "first", GUILD)
    db.create_tag("hello", "second", OTHER_GUILD)
    assert db.get_tag("hello", GUILD) == ("hello", "first")
    assert db.get_tag("hello", OTHER_GUILD) == ("hello", "second")


def test_delete_with_typo_returns_real_name(db):
    db.create_tag("hello", "x", GUILD)
    db.create_tag("rules", "y", GUILD)
    assert db.delete_tag("helo", GUILD) == "hello"
    assert db.get_all_tags(GUILD) == ["rules"]


def test_delete_unknown_returns_none(db):
    db.create_tag("hello", "x", GUILD)
    assert db.delete_tag("zzzz", GUILD) is None
    assert db.get_all_tags(GUILD) == ["hello"]


def test_edit_updates_content(db):
    db.create_tag("hello", "old", GUILD)
    assert db.edit_tag("hello", "new", GUILD) == "hello"
    assert db.get_tag("hello", GUILD) == ("hello", "new")


def test_edit_unknown_returns_none(db):
    db.create_tag("hello", "old", GUILD)
    assert db.edit_tag("zzzz", "new", GUILD) is None
    assert db.get_tag("hello", GUILD) == ("hello", "old")


def test_fix_typos_on_empty_table(db):
    db.create_tag("hello", "x", GUILD)
    db.delete_tag("hello", GUILD)
    assert db.fix_typos("hello", GUILD) is None


def test_fix_typos_picks_closest(db):
    db.create_tag("install", "a", GUILD)
    db.create_tag("instance", "b", GUILD)
    assert db.fix_typos("instal", GUILD) == ("install", "a")


def test_require_guild():
    assert require_guild(5) == 5
    with pytest.raises(NotInGuildError) as info:
        require_guild(None)
    assert str(info.value) == "Not in Server"