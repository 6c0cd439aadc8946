"""Domain models for meal logging and weekly tracking."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class DailyMealLog:
    """A meal eaten by a user on a calendar date."""

    id: int
    user_id: int
    meal_id: int
    date: date
    carbon_footprint: float
    created_at: datetime | None = None
    meal_name: str | None = None


@dataclass(frozen=True)
class WeeklyTracker:
    """Running carbon totals for a user's Monday-based week."""

    user_id: int
    week_start_date: date
    total_carbon_footprint: float
    total_meals: int
    average_carbon_per_meal: float
    id: int | None = None


@dataclass(frozen=True)
class MealLogResult:
    """Outcome of logging a meal."""

    log: DailyMealLog
    week: WeeklyTracker
