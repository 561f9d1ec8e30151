"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from macro_mate.adapters.openai_estimation_client import OpenAIEstimationClient
from macro_mate.adapters.supabase_favorites_repository import (
    SupabaseFavoritesRepository,
)
from macro_mate.adapters.supabase_meal_log_repository import (
    SupabaseMealLogRepository,
)
from macro_mate.adapters.telegram_client import (
    HttpxTelegramClient,
    TelegramClient,
)
from macro_mate.adapters.telegram_file_client import (
    HttpxTelegramFileClient,
    TelegramFileClient,
)
from macro_mate.config import Settings
from macro_mate.services.actions import ActionTokenStore
from macro_mate.services.cache import BoundedCache
from macro_mate.services.commands import StartCommandHandler
from macro_mate.services.estimation import MacroEstimationService
from macro_mate.services.favorites import FavoritesService
from macro_mate.services.meals import MealLogService
from macro_mate.services.stats import StatsService

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    telegram_client: TelegramClient
    telegram_file_client: TelegramFileClient
    start_command_handler: StartCommandHandler
    action_store: ActionTokenStore
    estimation_service: MacroEstimationService
    meal_log_service: MealLogService
    favorites_service: FavoritesService
    stats_service: StatsService
    close_resources: Callable[[], Awaitable[None]]


def build_action_store(settings: Settings) -> ActionTokenStore:
    """Create the process-wide button token store."""
    store = ActionTokenStore(
        cache=BoundedCache(
            capacity=settings.action_store_capacity,
            watermark=settings.action_store_watermark,
        ),
        max_token_bytes=settings.callback_data_max_bytes,
        max_payload_bytes=settings.action_payload_max_bytes,
    )
    logger.info(
        "Action token store ready",
        extra={
            "capacity": settings.action_store_capacity,
            "watermark": settings.action_store_watermark,
            "max_token_bytes": settings.callback_data_max_bytes,
        },
    )
    return store


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_key
    )
    meal_log_repository = SupabaseMealLogRepository(supabase_client)
    favorites_repository = SupabaseFavoritesRepository(supabase_client)
    telegram_client = HttpxTelegramClient.create(resolved_settings.telegram_bot_token)
    telegram_file_client = HttpxTelegramFileClient.create(
        resolved_settings.telegram_bot_token
    )
    openai_client = OpenAIEstimationClient.create(resolved_settings.openai_api_key)
    estimation_service = MacroEstimationService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    action_store = build_action_store(resolved_settings)
    meal_log_service = MealLogService(
        repository=meal_log_repository, timezone=resolved_settings.timezone
    )
    favorites_service = FavoritesService(favorites_repository)
    stats_service = StatsService(
        repository=meal_log_repository, timezone=resolved_settings.timezone
    )
    start_handler = StartCommandHandler(telegram_client)

    async def close_resources() -> None:
        await telegram_client.close()
        await telegram_file_client.close()
        await openai_client.client.close()
        action_store.clear()

    return AppContainer(
        settings=resolved_settings,
        telegram_client=telegram_client,
        telegram_file_client=telegram_file_client,
        start_command_handler=start_handler,
        action_store=action_store,
        estimation_service=estimation_service,
        meal_log_service=meal_log_service,
        favorites_service=favorites_service,
        stats_service=stats_service,
        close_resources=close_resources,
    )
