"""Domain models for favorite foods."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class FavoriteFood:
    """A food saved by the user for one-tap logging."""

    id: UUID
    user_id: str
    food_item: str
    protein_g: float
    carbs_g: float
    fats_g: float
    calories: float
