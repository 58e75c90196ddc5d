import pytest

from modbot.tag_commands import TagCommands, escape_backticks, escape_markdown
from modbot.tags import NotInGuildError, TagDb

GUILD = 100


@pytest.fixture
def cmds(tmp_path):
    return TagCommands(TagDb(tmp_path / "tags.db"))


def test_escape_backticks():
    assert escape_backticks("a`b") == "a\\`b"


def test_escape_markdown_pins_every_character():
    assert escape_markdown("*a*") == "\\*a\\*"
    assert escape_markdown("`*_~#<>|") == "\\`\\*\\_\\~\\#\\<\\>\\|"
    assert escape_markdown("plain text") == "plain text"


def test_create_then_show(cmds):
    reply = cmds.create("hello", "world", GUILD)
    assert reply.content == "✅ Created tag `hello`"
    shown = cmds.show("hello", GUILD)
    assert shown.content == "world"
    assert shown.in_channel is True


def test_show_tolerates_typos(cmds):
    cmds.create("hello", "world", GUILD)
    assert cmds.show("helo", GUILD).content == "world"


def test_show_missing_escapes_name(cmds):
    reply = cmds.show("a`b", GUILD)
    assert reply.content is None
    assert reply.embed.title == "Error"
    assert reply.embed.description == "❌ Tag `a\\`b` does not exist"


def test_dtag_deletes_invocation(cmds):
    cmds.create("hello", "world", GUILD)
    reply = cmds.dtag("hello", GUILD)
    assert reply.content == "world"
    assert reply.delete_invocation is True
    missing = cmds.dtag("a`b", GUILD)
    assert missing.delete_invocation is True
    assert missing.embed.description == "❌ Tag `a`b` does not exist"


def test_create_duplicate_gives_error_embed(cmds):
    cmds.create("hello", "world", GUILD)
    reply = cmds.create("hello", "again", GUILD)
    assert reply.embed.title == "Error"
    assert "UNIQUE" in reply.embed.description


def test_edit_updates_content(cmds):
    cmds.create("hello", "world", GUILD)
    assert cmds.edit("helo", "earth", GUILD).content == "✅ Updated tag `hello`"
    assert cmds.show("hello", GUILD).content == "earth"


def test_edit_missing(cmds):
    cmds.create("hello", "world", GUILD)
    reply = cmds.edit("zzzz", "x", GUILD)
    assert reply.embed.description == "❌ Tag `zzzz` does not exist"


def test_delete_removes_tag(cmds):
    cmds.create("hello", "world", GUILD)
    cmds.create("other", "thing", GUILD)
    assert cmds.delete("helo", GUILD).content == "✅ Deleted tag `hello`"
    assert cmds.list(GUILD).embed.description == "other"


def test_delete_without_table_gives_error(cmds):
    reply = cmds.delete("hello", GUILD)
    assert reply.embed.title == "Error"
    assert "no such table" in reply.embed.description


def test_list_tags(cmds):
    cmds.create("one", "1", GUILD)
    cmds.create("two", "2", GUILD)
    reply = cmds.list(GUILD)
    assert reply.ephemeral is True
    assert reply.embed.title == "All Tags"
    assert sorted(reply.embed.description.split(", ")) == ["one", "two"]


def test_list_empty_guild(cmds):
    cmds.create("one", "1", GUILD)
    cmds.delete("one", GUILD)
    reply = cmds.list(GUILD)
    assert reply.embed.description == (
        "No tags found. Try creating a tag with `/tag create`"
    )


def test_preview_is_ephemeral(cmds):
    cmds.create("hello", "world", GUILD)
    reply = cmds.preview("hello", GUILD)
    assert (reply.content, reply.ephemeral) == ("world", True)
    assert cmds.preview("zzzz", GUILD).ephemeral is True


def test_raw_escapes_content(cmds):
    cmds.create("fmt", "**bold** <x>", GUILD)
    assert cmds.raw("fmt", GUILD).content == escape_markdown("**bold** <x>")


def test_alias_copies_content(cmds):
    cmds.create("hello", "world", GUILD)
    assert cmds.alias("hello", "hi", GUILD).content == "✅ Created tag alias `hi`"
    assert cmds.show("hi", GUILD).content == "world"


def test_alias_of_missing_tag(cmds):
    reply = cmds.alias("a`b", "x", GUILD)
    assert reply.embed.description == "❌ Tag `a`b` does not exist"


def test_guild_required(cmds):
    with pytest.raises(NotInGuildError):
        cmds.show("hello", None)
    with pytest.raises(NotInGuildError):
        cmds.list(None)