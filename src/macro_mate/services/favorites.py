"""Services for managing favorite foods."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from macro_mate.domain.errors import DuplicateFavoriteError, FavoriteNotFoundError
from macro_mate.domain.favorites import FavoriteFood


class FavoritesRepository(Protocol):
    """Persistence interface for favorite foods."""

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
        """Create a favorite and return it."""

    def find_by_food_item(self, user_id: str, food_item: str) -> FavoriteFood | None:
        """Return the user's favorite with this exact food item, if any."""

    def list_favorites(self, user_id: str) -> list[FavoriteFood]:
        """Return the user's favorites."""

    def get_favorite(self, user_id: str, favorite_id: UUID) -> FavoriteFood | None:
        """Return a favorite owned by the user, if present."""

    def delete_favorite(self, user_id: str, favorite_id: UUID) -> FavoriteFood | None:
        """Delete a favorite owned by the user and return it, if it existed."""


@dataclass
class FavoritesService:
    """Application service for favorite foods."""

    repository: FavoritesRepository

    def add(  # noqa: PLR0913
        self,
        user_id: str,
        *,
        food_item: str,
        protein_g: float,
        carbs_g: float,
        fats_g: float,
        calories: float,
    ) -> FavoriteFood:
        """Save a food as favorite unless it is already there."""
        if self.repository.find_by_food_item(user_id, food_item) is not None:
            raise DuplicateFavoriteError(f"{food_item} is already in your favorites")
        return self.repository.create_favorite(
            user_id=user_id,
            food_item=food_item,
            protein_g=protein_g,
            carbs_g=carbs_g,
            fats_g=fats_g,
            calories=calories,
        )

    def list_for_user(self, user_id: str) -> list[FavoriteFood]:
        """Return the user's favorites."""
        return self.repository.list_favorites(user_id)

    def get(self, user_id: str, favorite_id: UUID) -> FavoriteFood:
        """Return a favorite or raise when it is gone."""
        favorite = self.repository.get_favorite(user_id, favorite_id)
        if favorite is None:
            raise FavoriteNotFoundError("Favorite food not found.")
        return favorite

    def delete(self, user_id: str, favorite_id: UUID) -> FavoriteFood:
        """Remove a favorite."""
        deleted = self.repository.delete_favorite(user_id, favorite_id)
        if deleted is None:
            raise FavoriteNotFoundError("Favorite food not found.")
        return deleted
