"""Tracking, statistics and insight endpoints."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from ecobite.services.tracking import DEFAULT_HISTORY_WEEKS

if TYPE_CHECKING:
    from ecobite.containers import AppContainer

tracker_router = APIRouter(prefix="/api/tracker", tags=["tracker"])
insights_router = APIRouter(prefix="/api/insights", tags=["insights"])


@tracker_router.get("/weekly/{user_id}")
async def weekly(
    user_id: int, request: Request, week_start: date | None = None
) -> dict[str, object]:
    """Return a week's tracker, the current week by default."""
    container: AppContainer = request.app.state.container
    return asdict(container.tracking_service.get_weekly(user_id, week_start))


@tracker_router.get("/weekly/{user_id}/history")
async def weekly_history(
    user_id: int, request: Request, limit: int = DEFAULT_HISTORY_WEEKS
) -> list[dict[str, object]]:
    """Return recent weekly trackers, newest first."""
    container: AppContainer = request.app.state.container
    weeks = container.tracking_service.get_weekly_history(user_id, limit)
    return [asdict(week) for week in weeks]


@tracker_router.get("/daily/{user_id}")
async def daily(
    user_id: int,
    request: Request,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[dict[str, object]]:
    """Return daily meal logs, the trailing week by default."""
    container: AppContainer = request.app.state.container
    logs = container.tracking_service.get_daily_logs(user_id, start_date, end_date)
    return [asdict(log) for log in logs]


@tracker_router.get("/stats/{user_id}")
async def stats(user_id: int, request: Request) -> dict[str, object]:
    """Return dashboard statistics."""
    container: AppContainer = request.app.state.container
    return asdict(container.insights_service.get_stats(user_id))


@insights_router.get("/patterns/{user_id}")
async def patterns(user_id: int, request: Request) -> dict[str, object]:
    """Return meal pattern analysis."""
    container: AppContainer = request.app.state.container
    return asdict(container.insights_service.get_meal_patterns(user_id))


@insights_router.get("/nutrition/{user_id}")
async def nutrition(user_id: int, request: Request) -> dict[str, object]:
    """Return calorie intake and substitution suggestions."""
    container: AppContainer = request.app.state.container
    return asdict(container.insights_service.get_nutrition_insights(user_id))
