"""Tests for Telegram command definitions."""

import pytest

from macro_mate.telegram_commands import BotCommand, parse_command, telegram_commands


def test_telegram_commands_include_start() -> None:
    commands = telegram_commands()

    assert {"command": "start", "description": "Welcome message and usage"} in (
        commands
    )
    assert len(commands) == len(list(BotCommand))


@pytest.mark.parametrize(
    ("text", "command", "args"),
    [
        ("/start", BotCommand.START, ""),
        ("/help", BotCommand.START, ""),
        ("/t", BotCommand.TODAY, ""),
        ("/todaymacros@MacroMateBot", BotCommand.TODAY, ""),
        ("/pastmacros 7", BotCommand.PAST, "7"),
        ("/PastMacros   14 ", BotCommand.PAST, "14"),
        ("/r", BotCommand.REMOVE, ""),
        ("/managefavorites", BotCommand.MANAGE_FAVORITES, ""),
    ],
)
def test_parse_command_matches_names_and_aliases(
    text: str, command: BotCommand, args: str
) -> None:
    assert parse_command(text) == (command, args)


@pytest.mark.parametrize("text", ["/unknown", "chicken breast", ""])
def test_parse_command_ignores_other_text(text: str) -> None:
    assert parse_command(text) is None
