"""Meal logging service."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from macro_mate.domain.errors import MealNotFoundError
from macro_mate.domain.estimation import MacroEstimate
from macro_mate.domain.meals import MealRecord
from macro_mate.services.stats import round_macro


class MealLogRepository(Protocol):
    """Persistence interface for meal logs."""

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
        """Create a meal log row and return it."""

    def list_for_day(self, user_id: str, day: date) -> list[MealRecord]:
        """Return the user's meals logged on a date."""

    def delete_meal_log(self, user_id: str, meal_id: UUID) -> MealRecord | None:
        """Delete a meal owned by the user and return it, if it existed."""


@dataclass
class MealLogService:
    """Service that persists estimated meals."""

    repository: MealLogRepository
    timezone: str = "UTC"
    clock: Callable[[], datetime] = lambda: datetime.now(tz=UTC)

    def log_meal(self, user_id: str, estimate: MacroEstimate) -> MealRecord:
        """Persist an estimate as a meal eaten now."""
        return self.log_macros(
            user_id,
            food_item=estimate.parsed_food_item,
            protein_g=estimate.protein_g,
            carbs_g=estimate.carbs_g,
            fats_g=estimate.fats_g,
            calories=estimate.calories,
        )

    def log_macros(  # noqa: PLR0913
        self,
        user_id: str,
        *,
        food_item: str,
        protein_g: float,
        carbs_g: float,
        fats_g: float,
        calories: float,
    ) -> MealRecord:
        """Persist explicit macros as a meal eaten now."""
        now = self.clock().astimezone(ZoneInfo(self.timezone))
        return self.repository.create_meal_log(
            user_id=user_id,
            day=now.date(),
            meal_time=now,
            food_item=food_item,
            protein_g=round_macro(protein_g),
            carbs_g=round_macro(carbs_g),
            fats_g=round_macro(fats_g),
            calories=round_macro(calories),
        )

    def list_today(self, user_id: str) -> list[MealRecord]:
        """Return meals logged today, earliest first."""
        today = self.clock().astimezone(ZoneInfo(self.timezone)).date()
        records = self.repository.list_for_day(user_id, today)
        return sorted(records, key=lambda record: record.meal_time)

    def remove_meal(self, user_id: str, meal_id: UUID) -> MealRecord:
        """Delete a meal owned by the user."""
        deleted = self.repository.delete_meal_log(user_id, meal_id)
        if deleted is None:
            raise MealNotFoundError(
                "Log entry not found or user does not have permission to delete."
            )
        return deleted
