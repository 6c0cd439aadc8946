"""Domain models for statistics and insights."""

from dataclasses import dataclass

from ecobite.domain.recommendations import RankedAlternative
from ecobite.domain.tracking import WeeklyTracker


@dataclass(frozen=True)
class PeriodTotals:
    """Carbon total and meal count for a date window."""

    total_carbon_footprint: float
    meal_count: int


@dataclass(frozen=True)
class AllTimeTotals:
    """Lifetime carbon totals for a user."""

    total_carbon_footprint: float
    meal_count: int
    average_per_meal: float


@dataclass(frozen=True)
class UserStats:
    """Dashboard statistics."""

    current_week: WeeklyTracker
    last_7_days: PeriodTotals
    all_time: AllTimeTotals
    weekly_average: float


@dataclass(frozen=True)
class IngredientUsage:
    """How much of an ingredient a user's meals contain."""

    ingredient_id: int
    name: str
    category: str
    carbon_footprint_per_kg: float
    total_quantity: float
    meal_count: int


@dataclass(frozen=True)
class CategoryCarbon:
    """Carbon attributed to one ingredient category."""

    category: str
    meal_count: int
    total_carbon: float
    avg_carbon: float


@dataclass(frozen=True)
class Improvement:
    """Week-over-week comparison of the two latest weeks."""

    carbon_reduction_percent: float
    is_improving: bool


@dataclass(frozen=True)
class MealPatterns:
    """Consumption patterns across a user's meals."""

    top_ingredients: list[IngredientUsage]
    category_distribution: list[CategoryCarbon]
    weekly_trends: list[WeeklyTracker]
    improvement: Improvement | None


@dataclass(frozen=True)
class SubstitutionSuggestion:
    """A high-carbon ingredient the user eats, with alternatives."""

    ingredient_id: int
    name: str
    category: str
    carbon_footprint_per_kg: float
    alternatives: list[RankedAlternative]


@dataclass(frozen=True)
class NutritionInsights:
    """Recent intake and substitution suggestions."""

    average_calories: float
    days_logged: int
    suggestions: list[SubstitutionSuggestion]
