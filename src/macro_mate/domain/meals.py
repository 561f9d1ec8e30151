"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class MealRecord:
    """A logged meal row as stored in ``macro_logs``."""

    id: UUID
    user_id: str
    date: date
    meal_time: datetime
    food_item: str
    protein_g: float
    carbs_g: float
    fats_g: float
    calories: float
