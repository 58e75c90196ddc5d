# modbot

The building blocks of a moderation bot for a chat server: tag storage,
warnings, moderation actions, reports and guild logs.

## What it provides

- **Tags** (`modbot.tags.TagDb`, `modbot.tag_commands.TagCommands`): per-guild
  text snippets kept in SQLite, one table per guild. Lookups tolerate typos: a
  name is matched to the stored tag with the highest Jaro-Winkler similarity,
  and the match counts only above 0.80 (`modbot.similarity.jaro_winkler`).
  `TagCommands` turns each tag command (`show`, `dtag`, `create`, `delete`,
  `edit`, `list`, `preview`, `raw`, `alias`) into a `TagReply` describing what
  to post.
- **Warnings** (`modbot.warnings.WarnStore`, `modbot.warnings.WarnPager`): the
  warnings for each user in each guild, stored as JSON in SQLite, and shown ten
  per page in embeds with first, previous, next and last buttons.
- **Moderation** (`modbot.moderation`): `ban`, `dban`, `kick`, `unban`, `warn`
  and `mute`, each returning the reply text. Each action except `unban` sends
  the user a direct message with the reason. `mute` uses a "Muted" role (or the
  one named by `MUTED_ROLE_ID`) and permission overwrites on every channel.
  The guild itself is reached through `GuildApi`, an abstract class you
  implement for your chat service.
- **Reports** (`modbot.reports`): report embeds for messages and users, and
  `ReportConfig.from_env`, which reads the target channel from
  `REPORT_CHANNEL_ID` and an optional role to ping from
  `REPORT_NOTIFICATION_ROLE` (loading a `.env` file when no mapping is given).
- **Guild logs** (`modbot.guild_logs`): `LogChannelStore` keeps the log channel
  for each guild and kind of log in SQLite; `message_sent_log` and
  `user_banned_log` build the log embeds, skipping messages sent by the bot
  (`BOT_ID`).
- **Bot settings** (`modbot.bot`): `BotSettings.from_env` reads `BOT_TOKEN`;
  `get_all_commands` lists the commands with their options;
  `format_command_error` and `format_event` produce log lines.
- **Helpers**: `modbot.dates.format_timestamp_ddmmyyyy`,
  `modbot.mention.mention_user`, `modbot.mention.mention_role`,
  `modbot.embeds.Embed` and `modbot.embeds.create_error_embed`.

## Installing

```
pip install .
```

## Example

```python
from modbot.tags import TagDb
from modbot.tag_commands import TagCommands

commands = TagCommands(TagDb("tags.db"))
commands.create("rules", "Be nice.", 1234)
print(commands.show("ruels", 1234).content)   # typo still finds "rules": Be nice.
```

## What it does not do

The package does not connect to a chat service and has no command to start a
bot: it builds replies, embeds and log entries, and leaves sending them to your
own code and your own `GuildApi` implementation. It includes no HTTP server.

## Tests

```
pip install .[test]
pytest
```