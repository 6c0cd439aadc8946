"""Supabase repository for the ingredient catalog."""

from dataclasses import dataclass

from supabase import Client

from ecobite.adapters.rows import parse_ingredient
from ecobite.domain.ingredients import Ingredient
from ecobite.services.catalog import IngredientRepository


@dataclass
class SupabaseIngredientRepository(IngredientRepository):
    """Supabase implementation for catalog reads."""

    client: Client

    def list_ingredients(self) -> list[Ingredient]:
        """Return all ingredients ordered by name."""
        response = self.client.table("ingredients").select("*").order("name").execute()
        return [parse_ingredient(row) for row in response.data or []]

    def get_ingredient(self, ingredient_id: int) -> Ingredient | None:
        """Return an ingredient by id, if present."""
        response = (
            self.client.table("ingredients")
            .select("*")
            .eq("id", ingredient_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_ingredient(response.data[0])

    def get_ingredients(self, ingredient_ids: list[int]) -> dict[int, Ingredient]:
        """Return existing ingredients among the ids, keyed by id."""
        if not ingredient_ids:
            return {}
        response = (
            self.client.table("ingredients")
            .select("*")
            .in_("id", ingredient_ids)
            .execute()
        )
        ingredients = [parse_ingredient(row) for row in response.data or []]
        return {ingredient.id: ingredient for ingredient in ingredients}

    def search_ingredients(self, query: str) -> list[Ingredient]:
        """Return ingredients whose name or category matches the query."""
        pattern = f"%{query}%"
        response = (
            self.client.table("ingredients")
            .select("*")
            .or_(f"name.ilike.{pattern},category.ilike.{pattern}")
            .order("name")
            .execute()
        )
        return [parse_ingredient(row) for row in response.data or []]

    def list_lower_carbon(
        self, carbon_footprint_per_kg: float, exclude_id: int, limit: int
    ) -> list[Ingredient]:
        """Return ingredients below a carbon intensity, lowest first."""
        response = (
            self.client.table("ingredients")
            .select("*")
            .neq("id", exclude_id)
            .lt("carbon_footprint_per_kg", carbon_footprint_per_kg)
            .order("carbon_footprint_per_kg", desc=False)
            .order("id", desc=False)
            .limit(limit)
            .execute()
        )
        return [parse_ingredient(row) for row in response.data or []]
