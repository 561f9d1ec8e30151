"""Telegram bot command configuration."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class TelegramCommand:
    """Declarative bot command definition."""

    command: str
    description: str
    aliases: tuple[str, ...] = ()


class BotCommand(Enum):
    """Enum of bot commands (single source of truth)."""

    START = TelegramCommand("start", "Welcome message and usage", ("help",))
    TODAY = TelegramCommand("todaymacros", "Today's totals and meals", ("t",))
    PAST = TelegramCommand("pastmacros", "Past daily totals, e.g. /pastmacros 7")
    REMOVE = TelegramCommand("remove", "Remove a meal logged today", ("r",))
    FAVORITES = TelegramCommand("favorites", "Log one of your favorite foods")
    MANAGE_FAVORITES = TelegramCommand(
        "managefavorites", "Remove items from your favorites"
    )


def telegram_commands() -> list[dict[str, str]]:
    """Return commands formatted for Telegram API."""
    return [
        {"command": entry.value.command, "description": entry.value.description}
        for entry in BotCommand
    ]


def parse_command(text: str) -> tuple[BotCommand, str] | None:
    """Match ``/name[@bot] args`` against known commands and aliases."""
    if not text.startswith("/"):
        return None
    head, _, args = text.strip().partition(" ")
    name = head[1:].split("@", maxsplit=1)[0].lower()
    for entry in BotCommand:
        if name == entry.value.command or name in entry.value.aliases:
            return entry, args.strip()
    return None


CHAT_MENU_BUTTON: dict[str, object] = {"type": "commands"}
