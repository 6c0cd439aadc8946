"""Shared test fixtures."""

import itertools
import threading
from dataclasses import dataclass, field
from datetime import UTC, date, datetime

import pytest

from ecobite.config import Settings
from ecobite.containers import AppContainer
from ecobite.domain.errors import AggregationConsistencyError
from ecobite.domain.footprint import MealLineItem
from ecobite.domain.ingredients import Ingredient, NutritionalValue
from ecobite.domain.insights import PeriodTotals
from ecobite.domain.meals import MealIngredientRow, MealRecord
from ecobite.domain.tracking import DailyMealLog, MealLogResult, WeeklyTracker
from ecobite.services.catalog import CatalogService, IngredientRepository
from ecobite.services.footprint import FootprintCalculator
from ecobite.services.insights import InsightsService
from ecobite.services.meals import MealRepository, MealService
from ecobite.services.recommendations import RecommendationService
from ecobite.services.tracking import (
    TrackingRepository,
    TrackingService,
    accumulate_week,
)

TEST_SERVICE_KEY = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
    "c2lnbmF0dXJl"
)


def make_ingredient(  # noqa: PLR0913
    ingredient_id: int,
    name: str,
    category: str,
    carbon: float,
    protein: float = 0.0,
    carbs: float = 0.0,
    fats: float = 0.0,
    calories: float = 0.0,
) -> Ingredient:
    return Ingredient(
        id=ingredient_id,
        name=name,
        category=category,
        carbon_footprint_per_kg=carbon,
        nutritional_value=NutritionalValue(
            protein=protein, carbs=carbs, fats=fats, calories=calories
        ),
    )


def seed_catalog() -> list[Ingredient]:
    return [
        make_ingredient(1, "Beef", "Meat", 27.0, 26, 0, 15, 250),
        make_ingredient(2, "Chicken", "Meat", 6.9, 27, 0, 14, 239),
        make_ingredient(3, "Tofu", "Protein", 2.0, 8, 1.9, 4.8, 76),
        make_ingredient(4, "Lentils", "Legumes", 0.9, 9, 20, 0.4, 116),
        make_ingredient(5, "Rice", "Grains", 2.7, 2.7, 28, 0.3, 130),
        make_ingredient(6, "Pork", "Meat", 7.2, 27, 0, 14, 242),
        make_ingredient(7, "Cheese", "Dairy", 13.5, 25, 1.3, 33, 402),
        make_ingredient(8, "Tomato", "Vegetables", 1.4, 0.9, 3.9, 0.2, 18),
    ]


@dataclass
class InMemoryIngredientRepository(IngredientRepository):
    """In-memory catalog for tests."""

    ingredients: dict[int, Ingredient] = field(default_factory=dict)
    lower_carbon_calls: list[tuple[float, int, int]] = field(default_factory=list)

    def add(self, *ingredients: Ingredient) -> None:
        for ingredient in ingredients:
            self.ingredients[ingredient.id] = ingredient

    def list_ingredients(self) -> list[Ingredient]:
        return sorted(self.ingredients.values(), key=lambda item: item.name)

    def get_ingredient(self, ingredient_id: int) -> Ingredient | None:
        return self.ingredients.get(ingredient_id)

    def get_ingredients(self, ingredient_ids: list[int]) -> dict[int, Ingredient]:
        return {
            ingredient_id: self.ingredients[ingredient_id]
            for ingredient_id in ingredient_ids
            if ingredient_id in self.ingredients
        }

    def search_ingredients(self, query: str) -> list[Ingredient]:
        needle = query.lower()
        return [
            item
            for item in self.list_ingredients()
            if needle in item.name.lower() or needle in item.category.lower()
        ]

    def list_lower_carbon(
        self, carbon_footprint_per_kg: float, exclude_id: int, limit: int
    ) -> list[Ingredient]:
        self.lower_carbon_calls.append((carbon_footprint_per_kg, exclude_id, limit))
        candidates = [
            item
            for item in self.ingredients.values()
            if item.id != exclude_id
            and item.carbon_footprint_per_kg < carbon_footprint_per_kg
        ]
        candidates.sort(key=lambda item: (item.carbon_footprint_per_kg, item.id))
        return candidates[:limit]


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[int, MealRecord] = field(default_factory=dict)
    lines: list[MealIngredientRow] = field(default_factory=list)
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1))

    def create_meal(  # noqa: PLR0913
        self,
        user_id: int | None,
        name: str,
        description: str | None,
        total_carbon_footprint: float,
        total_calories: float,
        items: list[MealLineItem],
    ) -> int:
        meal_id = next(self._ids)
        self.meals[meal_id] = MealRecord(
            id=meal_id,
            user_id=user_id,
            name=name,
            description=description,
            total_carbon_footprint=total_carbon_footprint,
            total_calories=total_calories,
            created_at=datetime.now(tz=UTC),
        )
        for item in items:
            self.lines.append(
                MealIngredientRow(
                    meal_id=meal_id,
                    ingredient_id=item.ingredient_id,
                    quantity=item.quantity_kg,
                )
            )
        return meal_id

    def get_meal(self, meal_id: int) -> MealRecord | None:
        return self.meals.get(meal_id)

    def list_meals(self, user_id: int | None) -> list[MealRecord]:
        meals = [
            meal
            for meal in self.meals.values()
            if user_id is None or meal.user_id == user_id
        ]
        return sorted(meals, key=lambda meal: meal.id, reverse=True)

    def get_meals(self, meal_ids: list[int]) -> dict[int, MealRecord]:
        return {
            meal_id: self.meals[meal_id]
            for meal_id in meal_ids
            if meal_id in self.meals
        }

    def list_meal_ingredients(self, meal_id: int) -> list[MealIngredientRow]:
        return [line for line in self.lines if line.meal_id == meal_id]

    def list_user_meal_ingredients(self, user_id: int) -> list[MealIngredientRow]:
        owned = {meal.id for meal in self.meals.values() if meal.user_id == user_id}
        return [line for line in self.lines if line.meal_id in owned]


@dataclass
class InMemoryTrackingRepository(TrackingRepository):
    """In-memory tracking store that serializes writes behind a lock."""

    logs: list[DailyMealLog] = field(default_factory=list)
    trackers: dict[tuple[int, date], WeeklyTracker] = field(default_factory=dict)
    fail_tracker_update: bool = False
    _lock: threading.Lock = field(default_factory=threading.Lock)
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1))

    def record_meal_log(
        self,
        user_id: int,
        meal_id: int,
        day: date,
        carbon_footprint: float,
        week_start: date,
    ) -> MealLogResult:
        with self._lock:
            log = DailyMealLog(
                id=next(self._ids),
                user_id=user_id,
                meal_id=meal_id,
                date=day,
                carbon_footprint=carbon_footprint,
                created_at=datetime.now(tz=UTC),
            )
            self.logs.append(log)
            if self.fail_tracker_update:
                self.logs.remove(log)
                raise AggregationConsistencyError("tracker update failed")
            key = (user_id, week_start)
            week = accumulate_week(
                self.trackers.get(key), user_id, week_start, carbon_footprint
            )
            self.trackers[key] = week
            return MealLogResult(log=log, week=week)

    def get_weekly_tracker(
        self, user_id: int, week_start: date
    ) -> WeeklyTracker | None:
        return self.trackers.get((user_id, week_start))

    def list_weekly_trackers(
        self, user_id: int, limit: int | None = None
    ) -> list[WeeklyTracker]:
        weeks = [week for week in self.trackers.values() if week.user_id == user_id]
        weeks.sort(key=lambda week: week.week_start_date, reverse=True)
        return weeks if limit is None else weeks[:limit]

    def list_daily_logs(
        self, user_id: int, start: date | None = None, end: date | None = None
    ) -> list[DailyMealLog]:
        logs = [
            log
            for log in self.logs
            if log.user_id == user_id
            and (start is None or log.date >= start)
            and (end is None or log.date <= end)
        ]
        return sorted(logs, key=lambda log: (log.date, log.id), reverse=True)

    def summarize_logs(
        self, user_id: int, start: date | None = None, end: date | None = None
    ) -> PeriodTotals:
        logs = self.list_daily_logs(user_id, start=start, end=end)
        return PeriodTotals(
            total_carbon_footprint=sum((log.carbon_footprint for log in logs), 0.0),
            meal_count=len(logs),
        )

    def average_weekly_total(self, user_id: int) -> float:
        weeks = self.list_weekly_trackers(user_id)
        if not weeks:
            return 0.0
        return sum(week.total_carbon_footprint for week in weeks) / len(weeks)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=TEST_SERVICE_KEY,
    )


@pytest.fixture
def ingredient_repository() -> InMemoryIngredientRepository:
    repository = InMemoryIngredientRepository()
    repository.add(*seed_catalog())
    return repository


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def tracking_repository() -> InMemoryTrackingRepository:
    return InMemoryTrackingRepository()


@pytest.fixture
def catalog_service(
    ingredient_repository: InMemoryIngredientRepository,
) -> CatalogService:
    return CatalogService(ingredient_repository)


@pytest.fixture
def calculator(catalog_service: CatalogService) -> FootprintCalculator:
    return FootprintCalculator(catalog_service)


@pytest.fixture
def recommendation_service(catalog_service: CatalogService) -> RecommendationService:
    return RecommendationService(catalog=catalog_service)


@pytest.fixture
def meal_service(
    calculator: FootprintCalculator,
    catalog_service: CatalogService,
    meal_repository: InMemoryMealRepository,
) -> MealService:
    return MealService(
        calculator=calculator, catalog=catalog_service, repository=meal_repository
    )


@pytest.fixture
def tracking_service(
    meal_repository: InMemoryMealRepository,
    tracking_repository: InMemoryTrackingRepository,
) -> TrackingService:
    return TrackingService(
        meal_repository=meal_repository, repository=tracking_repository
    )


@pytest.fixture
def insights_service(
    tracking_repository: InMemoryTrackingRepository,
    meal_repository: InMemoryMealRepository,
    catalog_service: CatalogService,
    recommendation_service: RecommendationService,
) -> InsightsService:
    return InsightsService(
        tracking_repository=tracking_repository,
        meal_repository=meal_repository,
        catalog=catalog_service,
        recommendations=recommendation_service,
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    catalog_service: CatalogService,
    calculator: FootprintCalculator,
    recommendation_service: RecommendationService,
    meal_service: MealService,
    tracking_service: TrackingService,
    insights_service: InsightsService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        catalog_service=catalog_service,
        footprint_calculator=calculator,
        recommendation_service=recommendation_service,
        meal_service=meal_service,
        tracking_service=tracking_service,
        insights_service=insights_service,
    )
