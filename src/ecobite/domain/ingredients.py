"""Domain models for the ingredient catalog."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutritionalValue:
    """Nutrition per 100g of an ingredient."""

    protein: float
    carbs: float
    fats: float
    calories: float


@dataclass(frozen=True)
class Ingredient:
    """Catalog ingredient with its carbon intensity."""

    id: int
    name: str
    category: str
    carbon_footprint_per_kg: float
    nutritional_value: NutritionalValue
