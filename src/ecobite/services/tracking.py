"""Meal logging and weekly carbon tracking.

Each logged meal adds a daily log row and folds its carbon into the
user's tracker for the Monday-based week containing the log date.
Trackers only ever accumulate; there is no way to retract a log.
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol

from ecobite.domain.errors import AggregationConsistencyError, NotFoundError
from ecobite.domain.insights import PeriodTotals
from ecobite.domain.tracking import DailyMealLog, MealLogResult, WeeklyTracker
from ecobite.services.meals import MealRepository

DEFAULT_HISTORY_WEEKS = 12
MAX_HISTORY_WEEKS = 100
DEFAULT_DAILY_WINDOW_DAYS = 7

_logger = logging.getLogger(__name__)


class TrackingRepository(Protocol):
    """Persistence interface for daily logs and weekly trackers."""

    def record_meal_log(
        self,
        user_id: int,
        meal_id: int,
        day: date,
        carbon_footprint: float,
        week_start: date,
    ) -> MealLogResult:
        """Insert a daily log and add it to the week's tracker as one unit.

        Implementations must make the pair atomic and free of lost updates,
        raising AggregationConsistencyError when it cannot complete.
        """

    def get_weekly_tracker(
        self, user_id: int, week_start: date
    ) -> WeeklyTracker | None:
        """Return the tracker for a user's week, if present."""

    def list_weekly_trackers(
        self, user_id: int, limit: int | None = None
    ) -> list[WeeklyTracker]:
        """Return a user's trackers, newest week first."""

    def list_daily_logs(
        self, user_id: int, start: date | None = None, end: date | None = None
    ) -> list[DailyMealLog]:
        """Return a user's logs within inclusive bounds, newest first."""

    def summarize_logs(
        self, user_id: int, start: date | None = None, end: date | None = None
    ) -> PeriodTotals:
        """Return carbon total and log count within inclusive bounds.

        Aggregates over every matching log, however many there are.
        """

    def average_weekly_total(self, user_id: int) -> float:
        """Return the mean weekly carbon total over all of a user's trackers."""


def week_start_for(day: date) -> date:
    """Return the Monday of the week containing the date."""
    return day - timedelta(days=day.weekday())


def empty_week(user_id: int, week_start: date) -> WeeklyTracker:
    """Return a zero-valued tracker for a week with no logs."""
    return WeeklyTracker(
        user_id=user_id,
        week_start_date=week_start,
        total_carbon_footprint=0.0,
        total_meals=0,
        average_carbon_per_meal=0.0,
    )


def accumulate_week(
    current: WeeklyTracker | None, user_id: int, week_start: date, carbon: float
) -> WeeklyTracker:
    """Fold one logged meal's carbon into a week's tracker."""
    if current is None:
        return WeeklyTracker(
            user_id=user_id,
            week_start_date=week_start,
            total_carbon_footprint=carbon,
            total_meals=1,
            average_carbon_per_meal=carbon,
        )
    total = current.total_carbon_footprint + carbon
    count = current.total_meals + 1
    return WeeklyTracker(
        user_id=current.user_id,
        week_start_date=current.week_start_date,
        total_carbon_footprint=total,
        total_meals=count,
        average_carbon_per_meal=total / count,
        id=current.id,
    )


@dataclass
class TrackingService:
    """Logs meals against dates and reads weekly and daily tracking data."""

    meal_repository: MealRepository
    repository: TrackingRepository

    def log_meal(self, meal_id: int, user_id: int, day: date) -> MealLogResult:
        """Log a saved meal for a user on a date.

        The meal's stored total is snapshotted onto the log. Logging the
        same meal twice counts twice.
        """
        meal = self.meal_repository.get_meal(meal_id)
        if meal is None:
            raise NotFoundError("Meal", meal_id)
        week_start = week_start_for(day)
        try:
            result = self.repository.record_meal_log(
                user_id=user_id,
                meal_id=meal_id,
                day=day,
                carbon_footprint=meal.total_carbon_footprint,
                week_start=week_start,
            )
        except AggregationConsistencyError:
            _logger.error(
                "Meal log not applied: meal_id=%s user_id=%s date=%s",
                meal_id,
                user_id,
                day.isoformat(),
            )
            raise
        _logger.info(
            "Meal logged: meal_id=%s user_id=%s date=%s week=%s total_meals=%s",
            meal_id,
            user_id,
            day.isoformat(),
            week_start.isoformat(),
            result.week.total_meals,
        )
        return result

    def get_weekly(
        self, user_id: int, week_start: date | None = None, today: date | None = None
    ) -> WeeklyTracker:
        """Return the tracker for a week, zero-filled when nothing was logged.

        Any date within the week selects it.
        """
        start = week_start_for(week_start or today or date.today())
        tracker = self.repository.get_weekly_tracker(user_id, start)
        return tracker or empty_week(user_id, start)

    def get_weekly_history(
        self, user_id: int, limit: int = DEFAULT_HISTORY_WEEKS
    ) -> list[WeeklyTracker]:
        """Return recent weekly trackers, newest first."""
        bounded = max(1, min(limit, MAX_HISTORY_WEEKS))
        return self.repository.list_weekly_trackers(user_id, limit=bounded)

    def get_daily_logs(
        self,
        user_id: int,
        start: date | None = None,
        end: date | None = None,
        today: date | None = None,
    ) -> list[DailyMealLog]:
        """Return daily logs, defaulting to the trailing week."""
        if start is None:
            anchor = end or today or date.today()
            start = anchor - timedelta(days=DEFAULT_DAILY_WINDOW_DAYS - 1)
        return self.repository.list_daily_logs(user_id, start=start, end=end)
