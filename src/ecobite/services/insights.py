"""Statistics and insight rollups over a user's tracking history."""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta

from ecobite.domain.ingredients import Ingredient
from ecobite.domain.insights import (
    AllTimeTotals,
    CategoryCarbon,
    Improvement,
    IngredientUsage,
    MealPatterns,
    NutritionInsights,
    SubstitutionSuggestion,
    UserStats,
)
from ecobite.domain.meals import MealIngredientRow
from ecobite.domain.tracking import WeeklyTracker
from ecobite.services.catalog import CatalogService
from ecobite.services.meals import MealRepository
from ecobite.services.recommendations import MEAL_ALTERNATIVES, RecommendationService
from ecobite.services.tracking import (
    DEFAULT_HISTORY_WEEKS,
    TrackingRepository,
    empty_week,
    week_start_for,
)

TRAILING_DAYS = 7
TOP_INGREDIENTS = 10
SUGGESTED_INGREDIENTS = 5


@dataclass
class InsightsService:
    """Read-side reports built from logs, trackers and saved meals."""

    tracking_repository: TrackingRepository
    meal_repository: MealRepository
    catalog: CatalogService
    recommendations: RecommendationService

    def get_stats(self, user_id: int, today: date | None = None) -> UserStats:
        """Return current week, trailing 7 days and all-time totals."""
        today = today or date.today()
        week_start = week_start_for(today)
        current_week = self.tracking_repository.get_weekly_tracker(user_id, week_start)

        recent = self.tracking_repository.summarize_logs(
            user_id, start=_trailing_start(today), end=today
        )
        lifetime = self.tracking_repository.summarize_logs(user_id)

        return UserStats(
            current_week=current_week or empty_week(user_id, week_start),
            last_7_days=recent,
            all_time=AllTimeTotals(
                total_carbon_footprint=lifetime.total_carbon_footprint,
                meal_count=lifetime.meal_count,
                average_per_meal=(
                    lifetime.total_carbon_footprint / lifetime.meal_count
                    if lifetime.meal_count
                    else 0.0
                ),
            ),
            weekly_average=self.tracking_repository.average_weekly_total(user_id),
        )

    def get_meal_patterns(self, user_id: int) -> MealPatterns:
        """Return ingredient usage, category carbon and weekly trends."""
        rows = self.meal_repository.list_user_meal_ingredients(user_id)
        ingredients = self.catalog.resolve([row.ingredient_id for row in rows])
        weeks = self.tracking_repository.list_weekly_trackers(
            user_id, limit=DEFAULT_HISTORY_WEEKS
        )
        return MealPatterns(
            top_ingredients=_ingredient_usage(rows, ingredients)[:TOP_INGREDIENTS],
            category_distribution=_category_distribution(rows, ingredients),
            weekly_trends=list(reversed(weeks)),
            improvement=_improvement(weeks),
        )

    def get_nutrition_insights(
        self, user_id: int, today: date | None = None
    ) -> NutritionInsights:
        """Return recent calorie intake and substitutions for high-carbon staples.

        Staples are ranked by the carbon they contribute across the user's
        saved meals; ingredients with no lower-carbon alternative are skipped.
        """
        today = today or date.today()
        logs = self.tracking_repository.list_daily_logs(
            user_id, start=_trailing_start(today), end=today
        )
        meals = self.meal_repository.get_meals(sorted({log.meal_id for log in logs}))
        calories = [
            meals[log.meal_id].total_calories for log in logs if log.meal_id in meals
        ]

        rows = self.meal_repository.list_user_meal_ingredients(user_id)
        eaten = self.catalog.resolve([row.ingredient_id for row in rows])
        usage = _ingredient_usage(rows, eaten)
        usage.sort(
            key=lambda item: (
                -item.total_quantity * item.carbon_footprint_per_kg,
                item.ingredient_id,
            )
        )
        suggestions: list[SubstitutionSuggestion] = []
        for item in usage:
            if len(suggestions) == SUGGESTED_INGREDIENTS:
                break
            suggestion = self._suggest(eaten[item.ingredient_id])
            if suggestion.alternatives:
                suggestions.append(suggestion)

        return NutritionInsights(
            average_calories=sum(calories) / len(calories) if calories else 0.0,
            days_logged=len({log.date for log in logs}),
            suggestions=suggestions,
        )

    def _suggest(self, ingredient: Ingredient) -> SubstitutionSuggestion:
        return SubstitutionSuggestion(
            ingredient_id=ingredient.id,
            name=ingredient.name,
            category=ingredient.category,
            carbon_footprint_per_kg=ingredient.carbon_footprint_per_kg,
            alternatives=self.recommendations.alternatives_for(
                ingredient, limit=MEAL_ALTERNATIVES
            ),
        )


def _trailing_start(today: date) -> date:
    return today - timedelta(days=TRAILING_DAYS - 1)


def _ingredient_usage(
    rows: list[MealIngredientRow], ingredients: dict[int, Ingredient]
) -> list[IngredientUsage]:
    quantities: dict[int, float] = defaultdict(float)
    meal_ids: dict[int, set[int]] = defaultdict(set)
    for row in rows:
        quantities[row.ingredient_id] += row.quantity
        meal_ids[row.ingredient_id].add(row.meal_id)

    usage = []
    for ingredient_id, quantity in quantities.items():
        ingredient = ingredients[ingredient_id]
        usage.append(
            IngredientUsage(
                ingredient_id=ingredient_id,
                name=ingredient.name,
                category=ingredient.category,
                carbon_footprint_per_kg=ingredient.carbon_footprint_per_kg,
                total_quantity=quantity,
                meal_count=len(meal_ids[ingredient_id]),
            )
        )
    usage.sort(key=lambda item: (-item.total_quantity, item.ingredient_id))
    return usage


def _category_distribution(
    rows: list[MealIngredientRow], ingredients: dict[int, Ingredient]
) -> list[CategoryCarbon]:
    carbon: dict[str, float] = defaultdict(float)
    meal_ids: dict[str, set[int]] = defaultdict(set)
    intensities: dict[str, list[float]] = defaultdict(list)
    for row in rows:
        ingredient = ingredients[row.ingredient_id]
        category = ingredient.category
        carbon[category] += row.quantity * ingredient.carbon_footprint_per_kg
        meal_ids[category].add(row.meal_id)
        intensities[category].append(ingredient.carbon_footprint_per_kg)

    distribution = [
        CategoryCarbon(
            category=category,
            meal_count=len(meal_ids[category]),
            total_carbon=total,
            avg_carbon=sum(intensities[category]) / len(intensities[category]),
        )
        for category, total in carbon.items()
    ]
    distribution.sort(key=lambda item: (-item.total_carbon, item.category))
    return distribution


def _improvement(weeks: list[WeeklyTracker]) -> Improvement | None:
    """Compare the latest week against the one before it (newest first)."""
    if len(weeks) < 2:  # noqa: PLR2004
        return None
    latest = weeks[0].total_carbon_footprint
    previous = weeks[1].total_carbon_footprint
    improving = latest < previous
    reduction = (previous - latest) / previous * 100 if improving else 0.0
    return Improvement(
        carbon_reduction_percent=round(reduction, 2),
        is_improving=improving,
    )
