"""Supabase repository for daily meal logs and weekly trackers."""

from dataclasses import dataclass
from datetime import date

from postgrest.exceptions import APIError
from supabase import Client

from ecobite.adapters.rows import parse_date, parse_datetime, to_float, to_int
from ecobite.domain.errors import AggregationConsistencyError
from ecobite.domain.insights import PeriodTotals
from ecobite.domain.tracking import DailyMealLog, MealLogResult, WeeklyTracker
from ecobite.services.tracking import TrackingRepository

_LOG_FUNCTION = "log_daily_meal"
_TOTALS_FUNCTION = "user_log_totals"
_WEEKLY_AVERAGE_FUNCTION = "user_weekly_average"
_LOG_COLUMNS = (
    "id, user_id, meal_id, date, carbon_footprint, created_at, meals(name)"
)
_TRACKER_COLUMNS = (
    "id, user_id, week_start_date, total_carbon_footprint, total_meals, "
    "average_carbon_per_meal"
)


@dataclass
class SupabaseTrackingRepository(TrackingRepository):
    """Supabase implementation for meal logging and weekly tracking.

    Logging goes through the log_daily_meal Postgres function, which inserts
    the daily log and upserts the weekly tracker in one transaction using
    server-side arithmetic, so concurrent logs for a week cannot overwrite
    each other.
    """

    client: Client

    def record_meal_log(
        self,
        user_id: int,
        meal_id: int,
        day: date,
        carbon_footprint: float,
        week_start: date,
    ) -> MealLogResult:
        """Insert a daily log and fold it into the week's tracker atomically."""
        params = {
            "p_user_id": user_id,
            "p_meal_id": meal_id,
            "p_date": day.isoformat(),
            "p_carbon_footprint": carbon_footprint,
            "p_week_start": week_start.isoformat(),
        }
        try:
            response = self.client.rpc(_LOG_FUNCTION, params).execute()
        except APIError as exc:
            raise AggregationConsistencyError(
                "Meal log and weekly tracker update did not complete",
                details={"meal_id": meal_id, "date": day.isoformat()},
            ) from exc
        rows = response.data
        if isinstance(rows, dict):
            rows = [rows]
        if not rows:
            raise AggregationConsistencyError(
                "Meal log and weekly tracker update returned no result",
                details={"meal_id": meal_id, "date": day.isoformat()},
            )
        row = rows[0]
        log = DailyMealLog(
            id=to_int(row["log_id"]),
            user_id=user_id,
            meal_id=meal_id,
            date=day,
            carbon_footprint=carbon_footprint,
            created_at=parse_datetime(row.get("log_created_at")),
        )
        week = WeeklyTracker(
            id=to_int(row["tracker_id"]),
            user_id=user_id,
            week_start_date=week_start,
            total_carbon_footprint=to_float(row.get("total_carbon_footprint")),
            total_meals=to_int(row.get("total_meals")),
            average_carbon_per_meal=to_float(row.get("average_carbon_per_meal")),
        )
        return MealLogResult(log=log, week=week)

    def get_weekly_tracker(
        self, user_id: int, week_start: date
    ) -> WeeklyTracker | None:
        """Return the tracker for a user's week, if present."""
        response = (
            self.client.table("weekly_tracker")
            .select(_TRACKER_COLUMNS)
            .eq("user_id", user_id)
            .eq("week_start_date", week_start.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_tracker(response.data[0])

    def list_weekly_trackers(
        self, user_id: int, limit: int | None = None
    ) -> list[WeeklyTracker]:
        """Return a user's trackers, newest week first."""
        query = (
            self.client.table("weekly_tracker")
            .select(_TRACKER_COLUMNS)
            .eq("user_id", user_id)
            .order("week_start_date", desc=True)
        )
        if limit is not None:
            query = query.limit(limit)
        response = query.execute()
        return [_parse_tracker(row) for row in response.data or []]

    def list_daily_logs(
        self, user_id: int, start: date | None = None, end: date | None = None
    ) -> list[DailyMealLog]:
        """Return a user's logs within inclusive date bounds, newest first."""
        query = (
            self.client.table("daily_meals")
            .select(_LOG_COLUMNS)
            .eq("user_id", user_id)
        )
        if start is not None:
            query = query.gte("date", start.isoformat())
        if end is not None:
            query = query.lte("date", end.isoformat())
        response = query.order("date", desc=True).order("id", desc=True).execute()
        return [_parse_log(row) for row in response.data or []]

    def summarize_logs(
        self, user_id: int, start: date | None = None, end: date | None = None
    ) -> PeriodTotals:
        """Return carbon total and log count, aggregated by Postgres."""
        params = {
            "p_user_id": user_id,
            "p_start": start.isoformat() if start else None,
            "p_end": end.isoformat() if end else None,
        }
        response = self.client.rpc(_TOTALS_FUNCTION, params).execute()
        rows = response.data
        if isinstance(rows, dict):
            rows = [rows]
        row = rows[0] if rows else {}
        return PeriodTotals(
            total_carbon_footprint=to_float(row.get("total_carbon_footprint")),
            meal_count=to_int(row.get("meal_count")),
        )

    def average_weekly_total(self, user_id: int) -> float:
        """Return the mean weekly total, aggregated by Postgres."""
        response = self.client.rpc(
            _WEEKLY_AVERAGE_FUNCTION, {"p_user_id": user_id}
        ).execute()
        return to_float(response.data)


def _parse_tracker(row: dict[str, object]) -> WeeklyTracker:
    return WeeklyTracker(
        id=to_int(row["id"]),
        user_id=to_int(row["user_id"]),
        week_start_date=parse_date(row["week_start_date"]),
        total_carbon_footprint=to_float(row.get("total_carbon_footprint")),
        total_meals=to_int(row.get("total_meals")),
        average_carbon_per_meal=to_float(row.get("average_carbon_per_meal")),
    )


def _parse_log(row: dict[str, object]) -> DailyMealLog:
    meal = row.get("meals")
    meal_name = meal.get("name") if isinstance(meal, dict) else None
    return DailyMealLog(
        id=to_int(row["id"]),
        user_id=to_int(row["user_id"]),
        meal_id=to_int(row["meal_id"]),
        date=parse_date(row["date"]),
        carbon_footprint=to_float(row.get("carbon_footprint")),
        created_at=parse_datetime(row.get("created_at")),
        meal_name=meal_name,
    )
