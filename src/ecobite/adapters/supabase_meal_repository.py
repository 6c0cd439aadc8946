"""Supabase repository for saved meals."""

from dataclasses import dataclass

from supabase import Client

from ecobite.adapters.rows import parse_datetime, to_float, to_int
from ecobite.domain.footprint import MealLineItem
from ecobite.domain.meals import MealIngredientRow, MealRecord
from ecobite.services.meals import MealRepository

_CREATE_FUNCTION = "create_meal_with_ingredients"
_MEAL_COLUMNS = (
    "id, user_id, name, description, total_carbon_footprint, total_calories, "
    "created_at"
)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals and their ingredient lines."""

    client: Client

    def create_meal(  # noqa: PLR0913
        self,
        user_id: int | None,
        name: str,
        description: str | None,
        total_carbon_footprint: float,
        total_calories: float,
        items: list[MealLineItem],
    ) -> int:
        """Create a meal and its ingredient lines in one transaction."""
        params = {
            "p_user_id": user_id,
            "p_name": name,
            "p_description": description,
            "p_total_carbon_footprint": total_carbon_footprint,
            "p_total_calories": total_calories,
            "p_ingredients": [
                {"ingredient_id": item.ingredient_id, "quantity": item.quantity_kg}
                for item in items
            ],
        }
        response = self.client.rpc(_CREATE_FUNCTION, params).execute()
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return to_int(response.data)

    def get_meal(self, meal_id: int) -> MealRecord | None:
        """Return a meal row by id."""
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("id", meal_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def list_meals(self, user_id: int | None) -> list[MealRecord]:
        """Return meals newest first, optionally for one user."""
        query = self.client.table("meals").select(_MEAL_COLUMNS)
        if user_id is not None:
            query = query.eq("user_id", user_id)
        response = (
            query.order("created_at", desc=True).order("id", desc=True).execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def get_meals(self, meal_ids: list[int]) -> dict[int, MealRecord]:
        """Return existing meals among the ids, keyed by id."""
        if not meal_ids:
            return {}
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .in_("id", meal_ids)
            .execute()
        )
        meals = [_parse_meal(row) for row in response.data or []]
        return {meal.id: meal for meal in meals}

    def list_meal_ingredients(self, meal_id: int) -> list[MealIngredientRow]:
        """Return a meal's ingredient lines in insertion order."""
        response = (
            self.client.table("meal_ingredients")
            .select("meal_id, ingredient_id, quantity")
            .eq("meal_id", meal_id)
            .order("id", desc=False)
            .execute()
        )
        return [_parse_line(row) for row in response.data or []]

    def list_user_meal_ingredients(self, user_id: int) -> list[MealIngredientRow]:
        """Return ingredient lines across all meals a user owns."""
        meals_response = (
            self.client.table("meals").select("id").eq("user_id", user_id).execute()
        )
        meal_ids = [to_int(row["id"]) for row in meals_response.data or []]
        if not meal_ids:
            return []
        response = (
            self.client.table("meal_ingredients")
            .select("meal_id, ingredient_id, quantity")
            .in_("meal_id", meal_ids)
            .order("id", desc=False)
            .execute()
        )
        return [_parse_line(row) for row in response.data or []]


def _parse_meal(row: dict[str, object]) -> MealRecord:
    user_id = row.get("user_id")
    return MealRecord(
        id=to_int(row["id"]),
        user_id=to_int(user_id) if user_id is not None else None,
        name=str(row.get("name", "")),
        description=row.get("description"),
        total_carbon_footprint=to_float(row.get("total_carbon_footprint")),
        total_calories=to_float(row.get("total_calories")),
        created_at=parse_datetime(row.get("created_at")),
    )


def _parse_line(row: dict[str, object]) -> MealIngredientRow:
    return MealIngredientRow(
        meal_id=to_int(row["meal_id"]),
        ingredient_id=to_int(row["ingredient_id"]),
        quantity=to_float(row.get("quantity")),
    )
