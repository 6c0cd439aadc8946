"""Saved meal endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from ecobite.api.models import CreateMealPayload, LogMealPayload

if TYPE_CHECKING:
    from ecobite.containers import AppContainer

router = APIRouter(prefix="/api/meals", tags=["meals"])


@router.get("")
async def list_meals(
    request: Request, user_id: int | None = None
) -> list[dict[str, object]]:
    """Return saved meals, newest first."""
    container: AppContainer = request.app.state.container
    return [asdict(meal) for meal in container.meal_service.list_meals(user_id)]


@router.get("/{meal_id}")
async def get_meal(meal_id: int, request: Request) -> dict[str, object]:
    """Return a meal with its ingredients."""
    container: AppContainer = request.app.state.container
    return asdict(container.meal_service.get_meal(meal_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_meal(
    payload: CreateMealPayload, request: Request
) -> dict[str, object]:
    """Save a named meal with snapshotted totals."""
    container: AppContainer = request.app.state.container
    meal = container.meal_service.create_meal(
        name=payload.name,
        items=payload.to_domain(),
        description=payload.description,
        user_id=payload.user_id,
    )
    return asdict(meal)


@router.post("/{meal_id}/log")
async def log_meal(
    meal_id: int, payload: LogMealPayload, request: Request
) -> dict[str, object]:
    """Log a saved meal for a user on a date."""
    container: AppContainer = request.app.state.container
    result = container.tracking_service.log_meal(
        meal_id=meal_id, user_id=payload.user_id, day=payload.day
    )
    return {"message": "Meal logged successfully", **asdict(result)}
