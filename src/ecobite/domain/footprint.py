"""Domain models for footprint calculations."""

from dataclasses import dataclass

from ecobite.domain.ingredients import Ingredient


@dataclass(frozen=True)
class MealLineItem:
    """A quantity of one catalog ingredient."""

    ingredient_id: int
    quantity_kg: float


@dataclass(frozen=True)
class IngredientRef:
    """Minimal ingredient snapshot shown in a breakdown."""

    id: int
    name: str
    category: str


@dataclass(frozen=True)
class BreakdownItem:
    """Carbon and calories contributed by one line item."""

    ingredient: IngredientRef
    quantity: float
    carbon_footprint: float
    calories: float


@dataclass(frozen=True)
class CalculationResult:
    """Totals and score for a list of line items."""

    total_carbon_footprint: float
    total_calories: float
    sustainability_score: float
    ingredients: list[BreakdownItem]


@dataclass(frozen=True)
class IngredientFootprint:
    """Footprint of a single ingredient quantity."""

    ingredient: IngredientRef
    quantity: float
    carbon_footprint: float
    calories: float
    sustainability_score: float


def ingredient_ref(ingredient: Ingredient) -> IngredientRef:
    """Return the breakdown snapshot for an ingredient."""
    return IngredientRef(
        id=ingredient.id, name=ingredient.name, category=ingredient.category
    )
