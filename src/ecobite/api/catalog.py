"""Ingredient, calculator and recommendation endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from ecobite.api.models import IngredientsPayload, LineItemPayload

if TYPE_CHECKING:
    from ecobite.containers import AppContainer

ingredients_router = APIRouter(prefix="/api/ingredients", tags=["ingredients"])
calculator_router = APIRouter(prefix="/api/calculator", tags=["calculator"])
recommendations_router = APIRouter(
    prefix="/api/recommendations", tags=["recommendations"]
)


@ingredients_router.get("")
async def list_ingredients(request: Request) -> list[dict[str, object]]:
    """Return the ingredient catalog ordered by name."""
    container: AppContainer = request.app.state.container
    return [asdict(item) for item in container.catalog_service.list_ingredients()]


@ingredients_router.get("/search/{query}")
async def search_ingredients(query: str, request: Request) -> list[dict[str, object]]:
    """Search ingredients by name or category."""
    container: AppContainer = request.app.state.container
    return [asdict(item) for item in container.catalog_service.search(query)]


@ingredients_router.get("/{ingredient_id}")
async def get_ingredient(ingredient_id: int, request: Request) -> dict[str, object]:
    """Return one ingredient."""
    container: AppContainer = request.app.state.container
    return asdict(container.catalog_service.get_ingredient(ingredient_id))


@calculator_router.post("/meal")
async def calculate_meal(
    payload: IngredientsPayload, request: Request
) -> dict[str, object]:
    """Compute the footprint of a list of ingredients."""
    container: AppContainer = request.app.state.container
    result = container.footprint_calculator.calculate_meal(payload.to_domain())
    return asdict(result)


@calculator_router.post("/ingredient")
async def calculate_ingredient(
    payload: LineItemPayload, request: Request
) -> dict[str, object]:
    """Compute the footprint of one ingredient quantity."""
    container: AppContainer = request.app.state.container
    result = container.footprint_calculator.calculate_ingredient(
        payload.ingredient_id, payload.quantity
    )
    return asdict(result)


@recommendations_router.get("/alternatives/{ingredient_id}")
async def alternatives(ingredient_id: int, request: Request) -> dict[str, object]:
    """Return lower-carbon substitutes for an ingredient."""
    container: AppContainer = request.app.state.container
    return asdict(container.recommendation_service.find_alternatives(ingredient_id))


@recommendations_router.post("/meal")
async def meal_recommendations(
    payload: IngredientsPayload, request: Request
) -> dict[str, object]:
    """Return substitutes for each ingredient of a meal."""
    container: AppContainer = request.app.state.container
    recommendations = container.recommendation_service.recommend_for_meal(
        payload.to_domain()
    )
    return {"recommendations": [asdict(item) for item in recommendations]}
