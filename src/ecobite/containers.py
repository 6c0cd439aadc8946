"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from ecobite.adapters.supabase_ingredient_repository import (
    SupabaseIngredientRepository,
)
from ecobite.adapters.supabase_meal_repository import SupabaseMealRepository
from ecobite.adapters.supabase_tracking_repository import (
    SupabaseTrackingRepository,
)
from ecobite.config import Settings
from ecobite.services.catalog import CatalogService
from ecobite.services.footprint import FootprintCalculator
from ecobite.services.insights import InsightsService
from ecobite.services.meals import MealService
from ecobite.services.recommendations import RecommendationService
from ecobite.services.tracking import TrackingService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog_service: CatalogService
    footprint_calculator: FootprintCalculator
    recommendation_service: RecommendationService
    meal_service: MealService
    tracking_service: TrackingService
    insights_service: InsightsService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    ingredient_repository = SupabaseIngredientRepository(supabase_client)
    meal_repository = SupabaseMealRepository(supabase_client)
    tracking_repository = SupabaseTrackingRepository(supabase_client)
    catalog_service = CatalogService(ingredient_repository)
    footprint_calculator = FootprintCalculator(catalog_service)
    recommendation_service = RecommendationService(
        catalog=catalog_service,
        candidate_limit=resolved_settings.alternatives_candidate_limit,
    )
    meal_service = MealService(
        calculator=footprint_calculator,
        catalog=catalog_service,
        repository=meal_repository,
    )
    tracking_service = TrackingService(
        meal_repository=meal_repository,
        repository=tracking_repository,
    )
    insights_service = InsightsService(
        tracking_repository=tracking_repository,
        meal_repository=meal_repository,
        catalog=catalog_service,
        recommendations=recommendation_service,
    )

    return AppContainer(
        settings=resolved_settings,
        catalog_service=catalog_service,
        footprint_calculator=footprint_calculator,
        recommendation_service=recommendation_service,
        meal_service=meal_service,
        tracking_service=tracking_service,
        insights_service=insights_service,
    )
