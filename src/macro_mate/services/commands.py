"""Command handlers for Telegram updates."""

from dataclasses import dataclass

from macro_mate.adapters.telegram_client import TelegramClient

WELCOME_TEXT = (
    "Welcome to MacroMate!\n\n"
    "I track your daily macros using AI-powered food analysis.\n\n"
    "How to use me:\n"
    '- Send what you ate, e.g. "100g chicken breast, 50g rice"\n'
    "- Or send a photo of a nutrition label with the weight as caption, "
    'e.g. "100g"\n\n'
    "Commands:\n"
    "/todaymacros - Today's totals and meals\n"
    "/pastmacros [days] - Past daily totals (default: 3 days)\n"
    "/remove - Remove a meal logged today\n"
    "/favorites - Log one of your favorite foods\n"
    "/managefavorites - Remove items from your favorites\n\n"
    "Note: macros are AI estimates and do not replace professional advice."
)


@dataclass
class StartCommandHandler:
    """Handle the /start and /help Telegram commands."""

    telegram_client: TelegramClient

    async def handle(self, chat_id: int) -> None:
        """Send the welcome message."""
        await self.telegram_client.send_message(chat_id=chat_id, text=WELCOME_TEXT)
