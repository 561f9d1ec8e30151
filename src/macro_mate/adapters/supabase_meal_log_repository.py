"""Supabase repository for meal logs."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from macro_mate.domain.meals import MealRecord
from macro_mate.services.meals import MealLogRepository
from macro_mate.services.stats import StatsRepository

TABLE = "macro_logs"
COLUMNS = (
    "id, user_id, log_date, meal_time, food_item, protein_g, carbs_g, fats_g, "
    "calories"
)


@dataclass
class SupabaseMealLogRepository(MealLogRepository, StatsRepository):
    """Supabase implementation for meal logs and their summaries."""

    client: Client

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
        """Insert a meal log row and return it."""
        response = (
            self.client.table(TABLE)
            .insert(
                {
                    "user_id": user_id,
                    "log_date": day.isoformat(),
                    "meal_time": meal_time.isoformat(),
                    "food_item": food_item,
                    "protein_g": protein_g,
                    "carbs_g": carbs_g,
                    "fats_g": fats_g,
                    "calories": calories,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save macro data")
        return _parse_row(response.data[0])

    def list_for_day(self, user_id: str, day: date) -> list[MealRecord]:
        """Return meal logs for a date ordered by meal time."""
        response = (
            self.client.table(TABLE)
            .select(COLUMNS)
            .eq("user_id", user_id)
            .eq("log_date", day.isoformat())
            .order("meal_time", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def list_between(self, user_id: str, start: date, end: date) -> list[MealRecord]:
        """Return meal logs with start <= log_date < end, newest day first."""
        response = (
            self.client.table(TABLE)
            .select(COLUMNS)
            .eq("user_id", user_id)
            .gte("log_date", start.isoformat())
            .lt("log_date", end.isoformat())
            .order("log_date", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def delete_meal_log(self, user_id: str, meal_id: UUID) -> MealRecord | None:
        """Delete a meal log owned by the user."""
        response = (
            self.client.table(TABLE)
            .delete()
            .eq("id", str(meal_id))
            .eq("user_id", user_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> MealRecord:
    return MealRecord(
        id=UUID(str(row["id"])),
        user_id=str(row.get("user_id", "")),
        date=date.fromisoformat(str(row["log_date"])),
        meal_time=datetime.fromisoformat(str(row["meal_time"])),
        food_item=str(row.get("food_item") or ""),
        protein_g=float(row.get("protein_g") or 0.0),
        carbs_g=float(row.get("carbs_g") or 0.0),
        fats_g=float(row.get("fats_g") or 0.0),
        calories=float(row.get("calories") or 0.0),
    )
