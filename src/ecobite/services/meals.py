"""Saved meal service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from ecobite.domain.errors import InvalidInputError, NotFoundError
from ecobite.domain.footprint import MealLineItem
from ecobite.domain.meals import Meal, MealIngredient, MealIngredientRow, MealRecord
from ecobite.services.catalog import CatalogService
from ecobite.services.footprint import FootprintCalculator

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for saved meals."""

    def create_meal(  # noqa: PLR0913
        self,
        user_id: int | None,
        name: str,
        description: str | None,
        total_carbon_footprint: float,
        total_calories: float,
        items: list[MealLineItem],
    ) -> int:
        """Create a meal row with its ingredient lines and return its id.

        The row and its lines are written as one unit; a failure leaves
        neither behind.
        """

    def get_meal(self, meal_id: int) -> MealRecord | None:
        """Return a meal row by id."""

    def list_meals(self, user_id: int | None) -> list[MealRecord]:
        """Return meals newest first, optionally for one user."""

    def get_meals(self, meal_ids: list[int]) -> dict[int, MealRecord]:
        """Return the meals that exist among the ids, keyed by id."""

    def list_meal_ingredients(self, meal_id: int) -> list[MealIngredientRow]:
        """Return the ingredient lines of a meal in insertion order."""

    def list_user_meal_ingredients(self, user_id: int) -> list[MealIngredientRow]:
        """Return the ingredient lines of every meal a user owns."""


@dataclass
class MealService:
    """Creates meals with snapshotted totals and reads them back."""

    calculator: FootprintCalculator
    catalog: CatalogService
    repository: MealRepository

    def create_meal(
        self,
        name: str,
        items: list[MealLineItem],
        description: str | None = None,
        user_id: int | None = None,
    ) -> Meal:
        """Compute totals for the items and persist the meal."""
        if not name or not name.strip():
            raise InvalidInputError("Meal name is required", field="name")
        result = self.calculator.calculate_meal(items)
        meal_id = self.repository.create_meal(
            user_id=user_id,
            name=name,
            description=description or None,
            total_carbon_footprint=result.total_carbon_footprint,
            total_calories=result.total_calories,
            items=items,
        )
        _logger.info(
            "Meal created: id=%s user_id=%s carbon=%s",
            meal_id,
            user_id,
            result.total_carbon_footprint,
        )
        return self.get_meal(meal_id)

    def get_meal(self, meal_id: int) -> Meal:
        """Return a meal with its ingredients resolved."""
        record = self.repository.get_meal(meal_id)
        if record is None:
            raise NotFoundError("Meal", meal_id)
        rows = self.repository.list_meal_ingredients(meal_id)
        return _build_meal(record, self._resolve_lines(rows))

    def list_meals(self, user_id: int | None = None) -> list[Meal]:
        """Return saved meals, newest first."""
        return [
            _build_meal(record, [])
            for record in self.repository.list_meals(user_id)
        ]

    def _resolve_lines(self, rows: list[MealIngredientRow]) -> list[MealIngredient]:
        ingredients = self.catalog.resolve([row.ingredient_id for row in rows])
        lines = []
        for row in rows:
            ingredient = ingredients[row.ingredient_id]
            lines.append(
                MealIngredient(
                    ingredient_id=row.ingredient_id,
                    quantity=row.quantity,
                    name=ingredient.name,
                    category=ingredient.category,
                    carbon_footprint_per_kg=ingredient.carbon_footprint_per_kg,
                    nutritional_value=ingredient.nutritional_value,
                )
            )
        return lines


def _build_meal(record: MealRecord, lines: list[MealIngredient]) -> Meal:
    return Meal(
        id=record.id,
        user_id=record.user_id,
        name=record.name,
        description=record.description,
        total_carbon_footprint=record.total_carbon_footprint,
        total_calories=record.total_calories,
        created_at=record.created_at,
        ingredients=lines,
    )
