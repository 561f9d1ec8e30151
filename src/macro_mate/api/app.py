"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import date
from uuid import UUID
from zoneinfo import ZoneInfo

from fastapi import FastAPI, Request

from macro_mate.api.telegram_models import (
    TelegramCallbackQuery,
    TelegramMessage,
    TelegramPhotoSize,
    TelegramUpdate,
)
from macro_mate.app_logging import configure_logging
from macro_mate.config import parse_allowed_user_ids
from macro_mate.containers import AppContainer
from macro_mate.domain.actions import ActionName, Payload
from macro_mate.domain.errors import (
    DuplicateFavoriteError,
    EncodingTooLargeError,
    EstimationError,
    FavoriteNotFoundError,
    MealNotFoundError,
    TokenNotFoundError,
)
from macro_mate.domain.estimation import MacroEstimate
from macro_mate.domain.favorites import FavoriteFood
from macro_mate.domain.meals import MealRecord
from macro_mate.domain.stats import DailySummary, DayTotals
from macro_mate.services.actions import ActionTokenStore
from macro_mate.services.stats import round_macro
from macro_mate.telegram_commands import (
    CHAT_MENU_BUTTON,
    BotCommand,
    parse_command,
    telegram_commands,
)

logger = logging.getLogger(__name__)

EXPIRED_TEXT = "This action has expired. Please redo it."
GENERIC_ERROR_TEXT = "❌ Sorry, I encountered an error. Please try again later."
BUTTON_LABEL_LIMIT = 60
KEYBOARD_LIMIT = 50
LISTED_FAVORITES = 10
# Longest food description kept when a button payload is over budget.
TOKEN_FOOD_ITEM_LIMIT = 200

CallbackHandler = Callable[
    [AppContainer, TelegramCallbackQuery, Payload], Awaitable[None]
]


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    allowed_user_ids = parse_allowed_user_ids(
        container.settings.telegram_allowed_user_ids
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await app.state.container.telegram_client.set_my_commands(
                telegram_commands()
            )
            await app.state.container.telegram_client.set_chat_menu_button(
                CHAT_MENU_BUTTON
            )
        except Exception:
            logger.exception("Failed to sync Telegram bot commands")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/telegram/webhook")
    async def telegram_webhook(
        update: TelegramUpdate, request: Request
    ) -> dict[str, str]:
        """Handle Telegram webhook updates."""
        state_container: AppContainer = request.app.state.container
        user_id = update.sender_id
        if user_id is not None and not _is_user_allowed(user_id, allowed_user_ids):
            if update.callback_query:
                await state_container.telegram_client.answer_callback_query(
                    update.callback_query.id,
                    text="Not authorized.",
                )
            elif update.message:
                await state_container.telegram_client.send_message(
                    chat_id=update.message.chat.id,
                    text="This bot is private.",
                )
            return {"status": "ok"}

        if update.callback_query:
            await _handle_callback(state_container, update.callback_query)
        elif update.message:
            await _handle_message(state_container, update.message)
        return {"status": "ok"}

    return app


async def _handle_message(container: AppContainer, message: TelegramMessage) -> None:
    chat_id = message.chat.id
    user_id = message.owner_id
    photo = message.largest_photo()
    if photo:
        await _handle_label_photo(container, message, photo, user_id)
        return

    text = message.body
    if not text:
        return
    if text.startswith("/"):
        parsed = parse_command(text)
        if parsed is None:
            return
        command, args = parsed
        try:
            await _handle_command(container, command, args, chat_id, user_id)
        except Exception:
            logger.exception(
                "Command failed", extra={"command": command.name, "chat_id": chat_id}
            )
            await container.telegram_client.send_message(
                chat_id=chat_id, text=GENERIC_ERROR_TEXT
            )
        return
    await _handle_food_entry(container, text, chat_id, user_id)


async def _handle_command(
    container: AppContainer,
    command: BotCommand,
    args: str,
    chat_id: int,
    user_id: str,
) -> None:
    client = container.telegram_client
    if command is BotCommand.START:
        await container.start_command_handler.handle(chat_id=chat_id)
    elif command is BotCommand.TODAY:
        await client.send_chat_action(chat_id)
        summary = container.stats_service.get_day(user_id)
        if summary.is_empty:
            await client.send_message(
                chat_id=chat_id,
                text=(
                    "📊 No food entries logged for today yet!\n\n"
                    "Start by sending me what you've eaten, for example:\n"
                    '"100g oatmeal with banana"'
                ),
            )
            return
        await client.send_message(
            chat_id=chat_id, text=_format_daily_summary(container, summary)
        )
    elif command is BotCommand.PAST:
        await _handle_past_macros(container, args, chat_id, user_id)
    elif command is BotCommand.REMOVE:
        await client.send_chat_action(chat_id)
        meals = container.meal_log_service.list_today(user_id)
        if not meals:
            await client.send_message(
                chat_id=chat_id, text="🤔 No meals logged today to remove."
            )
            return
        await client.send_message(
            chat_id=chat_id,
            text="👇 Please select a meal to remove for today:",
            reply_markup=_remove_keyboard(container, meals),
        )
    elif command is BotCommand.FAVORITES:
        await _handle_favorites(container, chat_id, user_id, manage=False)
    elif command is BotCommand.MANAGE_FAVORITES:
        await _handle_favorites(container, chat_id, user_id, manage=True)


async def _handle_past_macros(
    container: AppContainer, args: str, chat_id: int, user_id: str
) -> None:
    settings = container.settings
    client = container.telegram_client
    days = int(args) if args.isdigit() else None
    if not args:
        days = settings.past_days_default
    if days is None or not 1 <= days <= settings.past_days_max:
        await client.send_message(
            chat_id=chat_id,
            text=(
                "📅 Please choose a number between 1 and "
                f"{settings.past_days_max} days."
            ),
        )
        return
    await client.send_chat_action(chat_id)
    rollup = container.stats_service.get_past_days(user_id, days)
    if not rollup:
        await client.send_message(
            chat_id=chat_id,
            text=(
                f"📊 No macro data found for the past {days} days.\n\n"
                "Start logging your meals to build your history!"
            ),
        )
        return
    await client.send_message(
        chat_id=chat_id,
        text=_format_rollup(days, rollup),
        reply_markup=_rollup_keyboard(container.action_store, rollup),
    )


async def _handle_favorites(
    container: AppContainer, chat_id: int, user_id: str, *, manage: bool
) -> None:
    client = container.telegram_client
    await client.send_chat_action(chat_id)
    favorites = container.favorites_service.list_for_user(user_id)
    if not favorites:
        await client.send_message(
            chat_id=chat_id,
            text=(
                "⭐ You don't have any favorite foods yet!\n\n"
                "Log some meals and use the 'Add to Favorites' button to build "
                "your favorites list."
            ),
        )
        return
    await client.send_message(
        chat_id=chat_id,
        text=_format_favorites(favorites, manage=manage),
        reply_markup=_favorites_keyboard(container.action_store, favorites, manage),
    )


async def _handle_food_entry(
    container: AppContainer, text: str, chat_id: int, user_id: str
) -> None:
    client = container.telegram_client
    await client.send_chat_action(chat_id)
    try:
        estimate = await container.estimation_service.estimate_text(text)
    except EstimationError as exc:
        logger.exception("Macro estimation failed", extra={"chat_id": chat_id})
        await client.send_message(
            chat_id=chat_id,
            text=_format_user_error(
                container,
                exc,
                (
                    "❌ Sorry, I couldn't process that food entry. Please try again "
                    "or be more specific about the food items."
                ),
            ),
        )
        return
    if estimate.is_empty:
        await client.send_message(
            chat_id=chat_id,
            text=(
                f'❓ I couldn\'t calculate macros for "{text}". Please try being '
                "more specific about the food items and quantities.\n\n"
                'Example: "100g chicken breast" or "1 medium apple"'
            ),
        )
        return
    await _log_and_confirm(container, estimate, chat_id, user_id)


async def _handle_label_photo(
    container: AppContainer,
    message: TelegramMessage,
    photo: TelegramPhotoSize,
    user_id: str,
) -> None:
    client = container.telegram_client
    chat_id = message.chat.id
    await client.send_chat_action(chat_id)
    try:
        image_bytes = await container.telegram_file_client.download_file_bytes(
            photo.file_id
        )
    except Exception as exc:
        logger.exception(
            "Failed to download Telegram photo", extra={"file_id": photo.file_id}
        )
        await client.send_message(
            chat_id=chat_id,
            text=_format_user_error(
                container,
                exc,
                (
                    "❌ Sorry, I encountered an error reading the image. "
                    "Please try again."
                ),
            ),
        )
        return

    try:
        estimate = await container.estimation_service.estimate_label(
            image_bytes, message.caption or ""
        )
    except EstimationError as exc:
        logger.exception("Label estimation failed", extra={"file_id": photo.file_id})
        await client.send_message(
            chat_id=chat_id,
            text=_format_user_error(
                container,
                exc,
                (
                    "❌ Sorry, I couldn't process that nutrition label. "
                    "Please try again with a clearer image."
                ),
            ),
        )
        return
    if estimate.is_empty:
        await client.send_message(
            chat_id=chat_id,
            text=(
                "❓ I couldn't calculate macros from this image. Please try again "
                "with a clearer nutrition label or include the weight in the "
                'caption.\n\nExample: send a photo with caption "100g"'
            ),
        )
        return
    await _log_and_confirm(container, estimate, chat_id, user_id)


async def _log_and_confirm(
    container: AppContainer, estimate: MacroEstimate, chat_id: int, user_id: str
) -> None:
    client = container.telegram_client
    try:
        record = container.meal_log_service.log_meal(user_id, estimate)
    except Exception as exc:
        logger.exception("Failed to save meal", extra={"user_id": user_id})
        await client.send_message(
            chat_id=chat_id,
            text=_format_user_error(
                container,
                exc,
                "❌ Sorry, I couldn't save that meal. Please try again.",
            ),
        )
        return
    await client.send_message(
        chat_id=chat_id,
        text=_format_logged(record),
        reply_markup=_add_favorite_keyboard(container.action_store, record),
    )


async def _handle_callback(
    container: AppContainer, callback: TelegramCallbackQuery
) -> None:
    client = container.telegram_client
    if not callback.data:
        await client.answer_callback_query(callback.id)
        return
    try:
        payload = container.action_store.resolve(callback.data)
    except TokenNotFoundError as exc:
        logger.info("Button token not resolved", extra={"code": exc.code})
        await client.answer_callback_query(callback.id, text=EXPIRED_TEXT)
        return

    handler = _CALLBACK_HANDLERS.get(str(payload.get("action")))
    if handler is None:
        logger.info("Unknown button action", extra={"action": payload.get("action")})
        await client.answer_callback_query(callback.id, text=EXPIRED_TEXT)
        return
    try:
        await handler(container, callback, payload)
    except Exception:
        logger.exception("Button action failed", extra={"action": payload["action"]})
        if callback.message:
            await client.send_message(
                chat_id=callback.message.chat.id, text=GENERIC_ERROR_TEXT
            )


async def _on_add_favorite(
    container: AppContainer, callback: TelegramCallbackQuery, payload: Payload
) -> None:
    client = container.telegram_client
    user_id = str(callback.from_user.id)
    food_item = str(payload.get("food_item") or "unknown")
    macros = {key: _as_float(payload.get(key)) for key in _MACRO_KEYS}
    try:
        container.favorites_service.add(user_id, food_item=food_item, **macros)
    except DuplicateFavoriteError:
        await client.answer_callback_query(callback.id, text="Already in favorites!")
        return
    except Exception:
        logger.exception("Failed to add favorite", extra={"user_id": user_id})
        await client.answer_callback_query(
            callback.id, text="Error adding to favorites."
        )
        return
    await client.answer_callback_query(callback.id, text="Added to favorites!")
    container.action_store.discard(str(callback.data))
    if callback.message:
        await client.edit_message_text(
            chat_id=callback.message.chat.id,
            message_id=callback.message.message_id,
            text=_format_macros_message(
                "✅ Logged successfully!",
                food_item,
                note="⭐ Added to favorites!",
                **macros,
            ),
        )


async def _on_log_favorite(
    container: AppContainer, callback: TelegramCallbackQuery, payload: Payload
) -> None:
    client = container.telegram_client
    user_id = str(callback.from_user.id)
    favorite_id = _payload_uuid(payload, "favorite_id")
    if favorite_id is None:
        await _reject_payload(container, callback, payload)
        return
    try:
        favorite = container.favorites_service.get(user_id, favorite_id)
    except FavoriteNotFoundError:
        await client.answer_callback_query(
            callback.id, text="Favorite food not found."
        )
        return
    try:
        container.meal_log_service.log_macros(
            user_id,
            food_item=favorite.food_item,
            protein_g=favorite.protein_g,
            carbs_g=favorite.carbs_g,
            fats_g=favorite.fats_g,
            calories=favorite.calories,
        )
    except Exception:
        logger.exception("Failed to log favorite", extra={"user_id": user_id})
        await client.answer_callback_query(callback.id, text="Error logging favorite.")
        return
    await client.answer_callback_query(callback.id, text="Logged from favorites!")
    if callback.message:
        await client.send_message(
            chat_id=callback.message.chat.id,
            text=_format_macros_message(
                "✅ Logged from favorites!",
                favorite.food_item,
                protein_g=favorite.protein_g,
                carbs_g=favorite.carbs_g,
                fats_g=favorite.fats_g,
                calories=favorite.calories,
            ),
        )


async def _on_delete_favorite(
    container: AppContainer, callback: TelegramCallbackQuery, payload: Payload
) -> None:
    client = container.telegram_client
    user_id = str(callback.from_user.id)
    favorite_id = _payload_uuid(payload, "favorite_id")
    if favorite_id is None:
        await _reject_payload(container, callback, payload)
        return
    try:
        container.favorites_service.delete(user_id, favorite_id)
    except FavoriteNotFoundError:
        await client.answer_callback_query(callback.id, text="Error removing favorite.")
        if callback.message:
            await client.send_message(
                chat_id=callback.message.chat.id,
                text=(
                    "❌ Failed to remove the favorite. "
                    "It might have been already deleted."
                ),
            )
        return
    container.action_store.discard(str(callback.data))
    await client.answer_callback_query(
        callback.id, text="Favorite removed successfully!"
    )
    if callback.message:
        await client.edit_message_text(
            chat_id=callback.message.chat.id,
            message_id=callback.message.message_id,
            text="✅ Favorite has been removed.",
        )


async def _on_remove_meal(
    container: AppContainer, callback: TelegramCallbackQuery, payload: Payload
) -> None:
    client = container.telegram_client
    user_id = str(callback.from_user.id)
    meal_id = _payload_uuid(payload, "meal_id")
    if meal_id is None:
        await _reject_payload(container, callback, payload)
        return
    try:
        container.meal_log_service.remove_meal(user_id, meal_id)
    except MealNotFoundError:
        await client.answer_callback_query(callback.id, text="Error removing meal.")
        if callback.message:
            await client.send_message(
                chat_id=callback.message.chat.id,
                text=(
                    "❌ Failed to remove the meal. "
                    "It might have been already deleted."
                ),
            )
        return
    container.action_store.discard(str(callback.data))
    await client.answer_callback_query(callback.id, text="Meal removed successfully!")
    if callback.message:
        await client.edit_message_text(
            chat_id=callback.message.chat.id,
            message_id=callback.message.message_id,
            text="✅ Meal has been removed.",
        )


async def _on_show_day(
    container: AppContainer, callback: TelegramCallbackQuery, payload: Payload
) -> None:
    client = container.telegram_client
    day = _payload_date(payload, "date")
    if day is None:
        await _reject_payload(container, callback, payload)
        return
    summary = container.stats_service.get_day(str(callback.from_user.id), day)
    await client.answer_callback_query(callback.id)
    if not callback.message:
        return
    text = (
        _format_daily_summary(container, summary)
        if not summary.is_empty
        else f"📊 No food entries logged for {day.isoformat()}."
    )
    await client.send_message(chat_id=callback.message.chat.id, text=text)


def _payload_uuid(payload: Payload, key: str) -> UUID | None:
    try:
        return UUID(str(payload.get(key)))
    except ValueError:
        return None


def _payload_date(payload: Payload, key: str) -> date | None:
    try:
        return date.fromisoformat(str(payload.get(key)))
    except ValueError:
        return None


async def _reject_payload(
    container: AppContainer, callback: TelegramCallbackQuery, payload: Payload
) -> None:
    logger.info("Button payload rejected", extra={"payload": payload})
    await container.telegram_client.answer_callback_query(
        callback.id, text=EXPIRED_TEXT
    )


_CALLBACK_HANDLERS: dict[str, CallbackHandler] = {
    ActionName.ADD_FAVORITE.value: _on_add_favorite,
    ActionName.LOG_FAVORITE.value: _on_log_favorite,
    ActionName.DELETE_FAVORITE.value: _on_delete_favorite,
    ActionName.REMOVE_MEAL.value: _on_remove_meal,
    ActionName.SHOW_DAY.value: _on_show_day,
}

_MACRO_KEYS = ("protein_g", "carbs_g", "fats_g", "calories")
_SUMMARY_HINT = "Use /todaymacros to see your daily summary!"


def _is_user_allowed(user_id: int, allowed: set[int] | None) -> bool:
    """Return true when the user is allowed to interact with the bot."""
    return allowed is None or user_id in allowed


def _format_user_error(container: AppContainer, exc: Exception, fallback: str) -> str:
    """Return a user-facing error message with local debug info."""
    if container.settings.environment == "local":
        detail = f"{type(exc).__name__}: {exc}".strip()
        if detail:
            return f"{fallback} (debug: {detail})"
    return fallback


def _as_float(value: object) -> float:
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, int | float):
        return float(value)
    try:
        return float(str(value))
    except ValueError:
        return 0.0


def _fmt(value: float) -> str:
    return f"{round_macro(value):.1f}"


def _button_label(text: str) -> str:
    return text[:BUTTON_LABEL_LIMIT]


def _format_macros_message(  # noqa: PLR0913
    heading: str,
    food_item: str,
    *,
    protein_g: float,
    carbs_g: float,
    fats_g: float,
    calories: float,
    note: str | None = None,
) -> str:
    lines = [
        heading,
        "",
        f"📝 Food: {food_item}",
        f"📊 Macros: P: {_fmt(protein_g)}g | C: {_fmt(carbs_g)}g | "
        f"F: {_fmt(fats_g)}g | Cal: {_fmt(calories)}",
        "",
    ]
    if note:
        lines.extend([note, ""])
    lines.append(_SUMMARY_HINT)
    return "\n".join(lines)


def _format_logged(record: MealRecord) -> str:
    """Format the confirmation for a freshly logged meal."""
    return _format_macros_message(
        "✅ Logged successfully!",
        record.food_item,
        protein_g=record.protein_g,
        carbs_g=record.carbs_g,
        fats_g=record.fats_g,
        calories=record.calories,
    )


def _format_daily_summary(container: AppContainer, summary: DailySummary) -> str:
    """Format totals and the meal list for one day."""
    tz = ZoneInfo(container.settings.timezone)
    totals = summary.totals
    lines = [
        f"📊 Daily Summary - {summary.date.isoformat()}",
        "",
        "🎯 TOTALS",
        f"💪 Protein: {_fmt(totals.protein_g)}g",
        f"🍞 Carbs: {_fmt(totals.carbs_g)}g",
        f"🥑 Fats: {_fmt(totals.fats_g)}g",
        f"🔥 Calories: {_fmt(totals.calories)}",
        "",
        "🍽 MEALS",
    ]
    for meal in summary.meals:
        time_label = meal.meal_time.astimezone(tz).strftime("%I:%M %p")
        lines.append(f"🕐 {time_label} - {meal.food_item}")
        lines.append(
            f"   📊 {_fmt(meal.calories)} cal • {_fmt(meal.protein_g)}g protein"
        )
    return "\n".join(lines)


def _format_rollup(days: int, rollup: list[DayTotals]) -> str:
    """Format per-day totals for the past days."""
    lines = [f"📈 Your past daily macros ({days} days):", ""]
    for entry in rollup:
        totals = entry.totals
        lines.append(
            f"{entry.date.strftime('%b %d, %Y')}: "
            f"P: {_fmt(totals.protein_g)}g | C: {_fmt(totals.carbs_g)}g | "
            f"F: {_fmt(totals.fats_g)}g | Cal: {_fmt(totals.calories)}"
        )
    lines.append("")
    lines.append("Use /todaymacros to see today's detailed breakdown! 📊")
    return "\n".join(lines)


def _format_favorites(favorites: list[FavoriteFood], *, manage: bool) -> str:
    if manage:
        lines = [
            "🗑️ Manage Your Favorites",
            "",
            "Select a food to remove it from your favorites:",
            "",
        ]
    else:
        lines = [
            "⭐ Your Favorite Foods",
            "",
            "Select a food to log it for today:",
            "",
        ]
    for index, favorite in enumerate(favorites[:LISTED_FAVORITES], start=1):
        lines.append(f"{index}. {favorite.food_item}")
        lines.append(
            f"   📊 P: {_fmt(favorite.protein_g)}g | C: {_fmt(favorite.carbs_g)}g | "
            f"F: {_fmt(favorite.fats_g)}g | Cal: {_fmt(favorite.calories)}"
        )
    if len(favorites) > LISTED_FAVORITES:
        lines.append("")
        lines.append(
            f"...and {len(favorites) - LISTED_FAVORITES} more favorites "
            "available below ⬇️"
        )
    if not manage:
        lines.append("")
        lines.append("Use /managefavorites to remove items from your favorites list.")
    return "\n".join(lines)


def _add_favorite_keyboard(
    store: ActionTokenStore, record: MealRecord
) -> dict | None:
    """Build the add-to-favorites button, shortening the food name to fit.

    Returns None when no shortening makes the payload fit, so the meal is
    still confirmed without a button.
    """
    food_item = record.food_item
    while True:
        payload: Payload = {
            "action": ActionName.ADD_FAVORITE.value,
            "protein_g": record.protein_g,
            "carbs_g": record.carbs_g,
            "fats_g": record.fats_g,
            "calories": record.calories,
            "food_item": food_item,
        }
        try:
            token = store.mint(payload)
            break
        except EncodingTooLargeError:
            if not food_item:
                logger.warning(
                    "Favorite button dropped, payload too large",
                    extra={"meal_id": str(record.id)},
                )
                return None
            food_item = food_item[: min(TOKEN_FOOD_ITEM_LIMIT, len(food_item) // 2)]
    return {
        "inline_keyboard": [
            [{"text": "⭐ Add to Favorites", "callback_data": token.token}]
        ]
    }


def _remove_keyboard(container: AppContainer, meals: list[MealRecord]) -> dict:
    tz = ZoneInfo(container.settings.timezone)
    rows = []
    for meal in meals:
        token = container.action_store.mint(
            {"action": ActionName.REMOVE_MEAL.value, "meal_id": str(meal.id)}
        )
        time_label = meal.meal_time.astimezone(tz).strftime("%I:%M %p")
        rows.append(
            [
                {
                    "text": _button_label(f"{time_label} - {meal.food_item}"),
                    "callback_data": token.token,
                }
            ]
        )
    return {"inline_keyboard": rows}


def _favorites_keyboard(
    store: ActionTokenStore, favorites: list[FavoriteFood], manage: bool
) -> dict:
    action = ActionName.DELETE_FAVORITE if manage else ActionName.LOG_FAVORITE
    prefix = "🗑️ " if manage else ""
    rows = []
    for favorite in favorites[:KEYBOARD_LIMIT]:
        token = store.mint({"action": action.value, "favorite_id": str(favorite.id)})
        label = _button_label(
            f"{favorite.food_item} ({_fmt(favorite.calories)} cal)"
        )
        rows.append([{"text": f"{prefix}{label}", "callback_data": token.token}])
    return {"inline_keyboard": rows}


def _rollup_keyboard(store: ActionTokenStore, rollup: list[DayTotals]) -> dict:
    rows = []
    for entry in rollup:
        token = store.mint(
            {"action": ActionName.SHOW_DAY.value, "date": entry.date.isoformat()}
        )
        rows.append(
            [
                {
                    "text": f"🍽 Meals on {entry.date.strftime('%b %d')}",
                    "callback_data": token.token,
                }
            ]
        )
    return {"inline_keyboard": rows}
