"""Supabase repository for favorite foods."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from macro_mate.domain.favorites import FavoriteFood
from macro_mate.services.favorites import FavoritesRepository

TABLE = "favorite_foods"
COLUMNS = "id, user_id, food_item, protein_g, carbs_g, fats_g, calories"


@dataclass
class SupabaseFavoritesRepository(FavoritesRepository):
    """Supabase implementation for favorite foods."""

    client: Client

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
        """Insert a favorite row and return it."""
        response = (
            self.client.table(TABLE)
            .insert(
                {
                    "user_id": user_id,
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
            raise RuntimeError("Failed to save favorite food")
        return _parse_row(response.data[0])

    def find_by_food_item(self, user_id: str, food_item: str) -> FavoriteFood | None:
        """Return the user's favorite with an identical food item."""
        response = (
            self.client.table(TABLE)
            .select(COLUMNS)
            .eq("user_id", user_id)
            .eq("food_item", food_item)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def list_favorites(self, user_id: str) -> list[FavoriteFood]:
        """Return the user's favorites, newest first."""
        response = (
            self.client.table(TABLE)
            .select(COLUMNS)
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def get_favorite(self, user_id: str, favorite_id: UUID) -> FavoriteFood | None:
        """Return a favorite by id when the user owns it."""
        response = (
            self.client.table(TABLE)
            .select(COLUMNS)
            .eq("id", str(favorite_id))
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def delete_favorite(self, user_id: str, favorite_id: UUID) -> FavoriteFood | None:
        """Delete a favorite owned by the user."""
        response = (
            self.client.table(TABLE)
            .delete()
            .eq("id", str(favorite_id))
            .eq("user_id", user_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> FavoriteFood:
    return FavoriteFood(
        id=UUID(str(row["id"])),
        user_id=str(row.get("user_id", "")),
        food_item=str(row.get("food_item") or ""),
        protein_g=float(row.get("protein_g") or 0.0),
        carbs_g=float(row.get("carbs_g") or 0.0),
        fats_g=float(row.get("fats_g") or 0.0),
        calories=float(row.get("calories") or 0.0),
    )
