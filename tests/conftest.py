"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from macro_mate.adapters.telegram_client import TelegramClient
from macro_mate.config import Settings
from macro_mate.containers import AppContainer, build_action_store
from macro_mate.domain.favorites import FavoriteFood
from macro_mate.domain.meals import MealRecord
from macro_mate.services.commands import StartCommandHandler
from macro_mate.services.estimation import EstimationClient, MacroEstimationService
from macro_mate.services.favorites import FavoritesRepository, FavoritesService
from macro_mate.services.meals import MealLogRepository, MealLogService
from macro_mate.services.stats import StatsRepository, StatsService

FIXED_NOW = datetime(2024, 1, 10, 12, 30, tzinfo=UTC)


def make_record(  # noqa: PLR0913
    day: date,
    *,
    hour: int = 12,
    minute: int = 0,
    food_item: str = "oatmeal",
    protein_g: float = 10.0,
    carbs_g: float = 20.0,
    fats_g: float = 5.0,
    calories: float = 200.0,
    user_id: str = "42",
) -> MealRecord:
    return MealRecord(
        id=uuid4(),
        user_id=user_id,
        date=day,
        meal_time=datetime(day.year, day.month, day.day, hour, minute, tzinfo=UTC),
        food_item=food_item,
        protein_g=protein_g,
        carbs_g=carbs_g,
        fats_g=fats_g,
        calories=calories,
    )


@dataclass
class InMemoryMealLogRepository(MealLogRepository, StatsRepository):
    """In-memory meal log repository for tests."""

    records: list[MealRecord] = field(default_factory=list)

    def create_meal_log(  # noqa: PLR0913
        self,
        *,
        user_id: str,
        day: date,
        meal_time: datetime,
        food_item: str,
        protein_g: float,
        carbs_g: float,
        fats_g: float,
        calories: float,
    ) -> MealRecord:
        record = MealRecord(
            id=uuid4(),
            user_id=user_id,
            date=day,
            meal_time=meal_time,
            food_item=food_item,
            protein_g=protein_g,
            carbs_g=carbs_g,
            fats_g=fats_g,
            calories=calories,
        )
        self.records.append(record)
        return record

    def list_for_day(self, user_id: str, day: date) -> list[MealRecord]:
        return [r for r in self.records if r.user_id == user_id and r.date == day]

    def list_between(self, user_id: str, start: date, end: date) -> list[MealRecord]:
        return [
            r for r in self.records if r.user_id == user_id and start <= r.date < end
        ]

    def delete_meal_log(self, user_id: str, meal_id: UUID) -> MealRecord | None:
        for record in self.records:
            if record.id == meal_id and record.user_id == user_id:
                self.records.remove(record)
                return record
        return None


@dataclass
class InMemoryFavoritesRepository(FavoritesRepository):
    """In-memory favorites repository for tests."""

    favorites: dict[UUID, FavoriteFood] = field(default_factory=dict)

    def create_favorite(  # noqa: PLR0913
        self,
        *,
        user_id: str,
        food_item: str,
        protein_g: float,
        carbs_g: float,
        fats_g: float,
        calories: float,
    ) -> FavoriteFood:
        favorite = FavoriteFood(
            id=uuid4(),
            user_id=user_id,
            food_item=food_item,
            protein_g=protein_g,
            carbs_g=carbs_g,
            fats_g=fats_g,
            calories=calories,
        )
        self.favorites[favorite.id] = favorite
        return favorite

    def find_by_food_item(self, user_id: str, food_item: str) -> FavoriteFood | None:
        for favorite in self.favorites.values():
            if favorite.user_id == user_id and favorite.food_item == food_item:
                return favorite
        return None

    def list_favorites(self, user_id: str) -> list[FavoriteFood]:
        return [f for f in self.favorites.values() if f.user_id == user_id]

    def get_favorite(self, user_id: str, favorite_id: UUID) -> FavoriteFood | None:
        favorite = self.favorites.get(favorite_id)
        if favorite is None or favorite.user_id != user_id:
            return None
        return favorite

    def delete_favorite(self, user_id: str, favorite_id: UUID) -> FavoriteFood | None:
        favorite = self.get_favorite(user_id, favorite_id)
        if favorite is not None:
            del self.favorites[favorite_id]
        return favorite


@dataclass
class FakeTelegramClient(TelegramClient):
    """Fake Telegram client that records messages."""

    messages: list[tuple[int, str]] = field(default_factory=list)
    markups: list[dict | None] = field(default_factory=list)
    edits: list[tuple[int, int, str]] = field(default_factory=list)
    callbacks: list[tuple[str, str | None]] = field(default_factory=list)
    chat_actions: list[tuple[int, str]] = field(default_factory=list)
    commands: list[dict[str, str]] | None = None
    menu_button: dict[str, object] | None = None

    async def send_message(
        self, chat_id: int, text: str, reply_markup: dict | None = None
    ) -> None:
        self.messages.append((chat_id, text))
        self.markups.append(reply_markup)

    async def edit_message_text(
        self,
        chat_id: int,
        message_id: int,
        text: str,
        reply_markup: dict | None = None,
    ) -> None:
        self.edits.append((chat_id, message_id, text))

    async def answer_callback_query(
        self, callback_query_id: str, text: str | None = None
    ) -> None:
        self.callbacks.append((callback_query_id, text))

    async def send_chat_action(self, chat_id: int, action: str = "typing") -> None:
        self.chat_actions.append((chat_id, action))

    async def set_my_commands(self, commands: list[dict[str, str]]) -> None:
        self.commands = commands

    async def set_chat_menu_button(
        self, menu_button: dict[str, object] | None = None
    ) -> None:
        self.menu_button = menu_button

    def last_buttons(self) -> list[dict[str, str]]:
        """Return the buttons of the last message that had a keyboard."""
        for markup in reversed(self.markups):
            if markup:
                return [row[0] for row in markup["inline_keyboard"]]
        return []


@dataclass
class FakeTelegramFileClient:
    """Fake Telegram file client that returns static bytes."""

    content: bytes = b"\x89PNG\r\n\x1a\nlabel"
    requested: list[str] = field(default_factory=list)

    async def download_file_bytes(self, file_id: str) -> bytes:
        self.requested.append(file_id)
        return self.content


@dataclass
class FakeEstimationClient(EstimationClient):
    """Fake estimation client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "protein_g": 31,
            "carbs_g": 0,
            "fats_g": 3.6,
            "calories": 165,
            "parsed_food_item": "100g chicken breast",
        }
    )
    prompts: list[str] = field(default_factory=list)
    images: list[str | None] = field(default_factory=list)

    async def estimate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        self.images.append(image_data_url)
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        telegram_bot_token="test-token",
        supabase_url="https://example.supabase.co",
        supabase_key="test.service.key",
        openai_api_key="openai-key",
        environment="test",
    )


@pytest.fixture
def telegram_client() -> FakeTelegramClient:
    return FakeTelegramClient()


@pytest.fixture
def estimation_client() -> FakeEstimationClient:
    return FakeEstimationClient()


@pytest.fixture
def meal_repository() -> InMemoryMealLogRepository:
    return InMemoryMealLogRepository()


@pytest.fixture
def favorites_repository() -> InMemoryFavoritesRepository:
    return InMemoryFavoritesRepository()


@pytest.fixture
def container(
    settings: Settings,
    telegram_client: FakeTelegramClient,
    estimation_client: FakeEstimationClient,
    meal_repository: InMemoryMealLogRepository,
    favorites_repository: InMemoryFavoritesRepository,
) -> AppContainer:
    estimation_service = MacroEstimationService(
        client=estimation_client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )
    action_store = build_action_store(settings)

    async def close_resources() -> None:
        action_store.clear()

    return AppContainer(
        settings=settings,
        telegram_client=telegram_client,
        telegram_file_client=FakeTelegramFileClient(),
        start_command_handler=StartCommandHandler(telegram_client),
        action_store=action_store,
        estimation_service=estimation_service,
        meal_log_service=MealLogService(
            repository=meal_repository, clock=lambda: FIXED_NOW
        ),
        favorites_service=FavoritesService(favorites_repository),
        stats_service=StatsService(repository=meal_repository, clock=lambda: FIXED_NOW),
        close_resources=close_resources,
    )
