"""Read access to the ingredient catalog."""

from dataclasses import dataclass
from typing import Protocol

from ecobite.domain.errors import NotFoundError
from ecobite.domain.ingredients import Ingredient


class IngredientRepository(Protocol):
    """Persistence interface for catalog ingredients."""

    def list_ingredients(self) -> list[Ingredient]:
        """Return all ingredients ordered by name."""

    def get_ingredient(self, ingredient_id: int) -> Ingredient | None:
        """Return an ingredient by id, if present."""

    def get_ingredients(self, ingredient_ids: list[int]) -> dict[int, Ingredient]:
        """Return the ingredients that exist among the ids, keyed by id."""

    def search_ingredients(self, query: str) -> list[Ingredient]:
        """Return ingredients whose name or category contains the query."""

    def list_lower_carbon(
        self, carbon_footprint_per_kg: float, exclude_id: int, limit: int
    ) -> list[Ingredient]:
        """Return ingredients below a carbon intensity, lowest first."""


@dataclass
class CatalogService:
    """Application service for catalog lookups."""

    repository: IngredientRepository

    def list_ingredients(self) -> list[Ingredient]:
        """Return the full catalog."""
        return self.repository.list_ingredients()

    def get_ingredient(self, ingredient_id: int) -> Ingredient:
        """Return an ingredient or raise if it does not exist."""
        ingredient = self.repository.get_ingredient(ingredient_id)
        if ingredient is None:
            raise NotFoundError("Ingredient", ingredient_id)
        return ingredient

    def search(self, query: str) -> list[Ingredient]:
        """Search by name or category."""
        cleaned = query.strip()
        if not cleaned:
            return self.repository.list_ingredients()
        return self.repository.search_ingredients(cleaned)

    def resolve(self, ingredient_ids: list[int]) -> dict[int, Ingredient]:
        """Resolve every id or raise for the first missing one."""
        found = self.repository.get_ingredients(list(dict.fromkeys(ingredient_ids)))
        for ingredient_id in ingredient_ids:
            if ingredient_id not in found:
                raise NotFoundError("Ingredient", ingredient_id)
        return found
