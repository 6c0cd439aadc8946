"""Domain models for saved meals."""

from dataclasses import dataclass
from datetime import datetime

from ecobite.domain.ingredients import NutritionalValue


@dataclass(frozen=True)
class MealIngredient:
    """Meal line with resolved ingredient details."""

    ingredient_id: int
    quantity: float
    name: str
    category: str
    carbon_footprint_per_kg: float
    nutritional_value: NutritionalValue


@dataclass(frozen=True)
class MealRecord:
    """Meal row as stored, without its lines."""

    id: int
    user_id: int | None
    name: str
    description: str | None
    total_carbon_footprint: float
    total_calories: float
    created_at: datetime | None


@dataclass(frozen=True)
class MealIngredientRow:
    """Stored (meal, ingredient, quantity) line."""

    meal_id: int
    ingredient_id: int
    quantity: float


@dataclass(frozen=True)
class Meal:
    """Saved meal with snapshotted totals and resolved ingredients."""

    id: int
    user_id: int | None
    name: str
    description: str | None
    total_carbon_footprint: float
    total_calories: float
    created_at: datetime | None
    ingredients: list[MealIngredient]
