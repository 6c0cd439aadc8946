"""Carbon footprint and sustainability scoring for meals."""

import logging
from dataclasses import dataclass

from ecobite.domain.errors import InvalidInputError
from ecobite.domain.footprint import (
    BreakdownItem,
    CalculationResult,
    IngredientFootprint,
    MealLineItem,
    ingredient_ref,
)
from ecobite.domain.ingredients import Ingredient
from ecobite.services.catalog import CatalogService

_GRAMS_PER_KG = 1000.0
_NUTRITION_BASIS_G = 100.0

_logger = logging.getLogger(__name__)


def sustainability_score(carbon_kg: float) -> float:
    """Map a carbon footprint to a 0-100 score, higher meaning lower impact.

    The scale drops 4 points per kg up to 15 kg, then 2.67 points per kg:
    0-5 kg -> 100-80, 5-10 -> 80-60, 10-15 -> 60-40, above 15 -> 40-0.
    """
    if carbon_kg <= 5:
        score = max(80.0, 100 - carbon_kg * 4)
    elif carbon_kg <= 10:
        score = max(60.0, 80 - (carbon_kg - 5) * 4)
    elif carbon_kg <= 15:
        score = max(40.0, 60 - (carbon_kg - 10) * 4)
    else:
        score = max(0.0, 40 - (carbon_kg - 15) * 2.67)
    return min(100.0, score)


def item_carbon(ingredient: Ingredient, quantity_kg: float) -> float:
    """Carbon for a quantity of an ingredient."""
    return quantity_kg * ingredient.carbon_footprint_per_kg


def item_calories(ingredient: Ingredient, quantity_kg: float) -> float:
    """Calories for a quantity, from the per-100g density."""
    grams = quantity_kg * _GRAMS_PER_KG
    return grams * ingredient.nutritional_value.calories / _NUTRITION_BASIS_G


def validate_items(items: list[MealLineItem]) -> None:
    """Reject empty item lists and non-positive quantities."""
    if not items:
        raise InvalidInputError("Ingredients array is required", field="ingredients")
    for item in items:
        _validate_quantity(item.quantity_kg)


def _validate_quantity(quantity_kg: float) -> None:
    if not quantity_kg > 0:
        raise InvalidInputError("Quantity must be greater than zero", field="quantity")


@dataclass
class FootprintCalculator:
    """Computes carbon and calorie totals from catalog ingredients."""

    catalog: CatalogService

    def calculate_meal(self, items: list[MealLineItem]) -> CalculationResult:
        """Compute totals, per-item breakdown and score for line items.

        Each line is rounded to 2 decimals and the totals are summed from
        the rounded lines, so the breakdown always adds up to the totals.
        """
        validate_items(items)
        ingredients = self.catalog.resolve([item.ingredient_id for item in items])

        breakdown: list[BreakdownItem] = []
        for item in items:
            ingredient = ingredients[item.ingredient_id]
            carbon = item_carbon(ingredient, item.quantity_kg)
            calories = item_calories(ingredient, item.quantity_kg)
            breakdown.append(
                BreakdownItem(
                    ingredient=ingredient_ref(ingredient),
                    quantity=item.quantity_kg,
                    carbon_footprint=round(carbon, 2),
                    calories=round(calories, 2),
                )
            )
        total_carbon = round(sum(line.carbon_footprint for line in breakdown), 2)
        total_calories = round(sum(line.calories for line in breakdown), 2)

        _logger.debug(
            "Calculated meal: items=%s carbon=%s calories=%s",
            len(items),
            total_carbon,
            total_calories,
        )
        return CalculationResult(
            total_carbon_footprint=total_carbon,
            total_calories=total_calories,
            sustainability_score=round(sustainability_score(total_carbon), 2),
            ingredients=breakdown,
        )

    def calculate_ingredient(
        self, ingredient_id: int, quantity_kg: float
    ) -> IngredientFootprint:
        """Compute the footprint of a single ingredient quantity."""
        _validate_quantity(quantity_kg)
        ingredient = self.catalog.get_ingredient(ingredient_id)
        carbon = item_carbon(ingredient, quantity_kg)
        return IngredientFootprint(
            ingredient=ingredient_ref(ingredient),
            quantity=quantity_kg,
            carbon_footprint=round(carbon, 2),
            calories=round(item_calories(ingredient, quantity_kg), 2),
            sustainability_score=round(sustainability_score(carbon), 2),
        )
