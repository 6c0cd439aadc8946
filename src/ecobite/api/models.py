"""Pydantic request models for the HTTP API."""

from datetime import date

from pydantic import BaseModel, Field

from ecobite.domain.footprint import MealLineItem


class LineItemPayload(BaseModel):
    """An ingredient id with a quantity in kilograms."""

    ingredient_id: int
    quantity: float

    def to_domain(self) -> MealLineItem:
        """Convert to the domain line item."""
        return MealLineItem(ingredient_id=self.ingredient_id, quantity_kg=self.quantity)


class IngredientsPayload(BaseModel):
    """A list of line items."""

    ingredients: list[LineItemPayload] = Field(default_factory=list)

    def to_domain(self) -> list[MealLineItem]:
        """Convert every line item to the domain type."""
        return [item.to_domain() for item in self.ingredients]


class CreateMealPayload(IngredientsPayload):
    """Body for saving a named meal."""

    name: str
    description: str | None = None
    user_id: int | None = None


class LogMealPayload(BaseModel):
    """Body for logging a meal on a calendar date (YYYY-MM-DD)."""

    user_id: int
    day: date = Field(alias="date")
