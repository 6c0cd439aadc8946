"""Ingredient substitution scoring."""

from dataclasses import dataclass

from ecobite.domain.footprint import MealLineItem
from ecobite.domain.ingredients import Ingredient, NutritionalValue
from ecobite.domain.recommendations import (
    AlternativesResult,
    MealRecommendation,
    RankedAlternative,
)
from ecobite.services.catalog import CatalogService

CATEGORY_WEIGHT = 0.3
NUTRITION_WEIGHT = 0.3
CARBON_WEIGHT = 0.4
MAX_ALTERNATIVES = 5
MEAL_ALTERNATIVES = 3


def nutrient_difference(target: float, candidate: float) -> float:
    """Percent difference from the target, or the raw gap when the target is 0."""
    if target > 0:
        return abs(candidate - target) / target * 100
    return abs(candidate - target)


def nutrition_similarity(
    target: NutritionalValue, candidate: NutritionalValue
) -> float:
    """Score 0-100 for how closely two nutrition profiles match."""
    diffs = (
        nutrient_difference(target.protein, candidate.protein),
        nutrient_difference(target.carbs, candidate.carbs),
        nutrient_difference(target.fats, candidate.fats),
        nutrient_difference(target.calories, candidate.calories),
    )
    return max(0.0, 100 - sum(diffs) / len(diffs))


def score_alternative(target: Ingredient, candidate: Ingredient) -> RankedAlternative:
    """Score one lower-carbon candidate against the target."""
    category_score = 100.0 if candidate.category == target.category else 0.0
    nutrition_score = nutrition_similarity(
        target.nutritional_value, candidate.nutritional_value
    )
    reduction = (
        (target.carbon_footprint_per_kg - candidate.carbon_footprint_per_kg)
        / target.carbon_footprint_per_kg
        * 100
    )
    overall = (
        category_score * CATEGORY_WEIGHT
        + nutrition_score * NUTRITION_WEIGHT
        + min(reduction, 100.0) * CARBON_WEIGHT
    )
    return RankedAlternative(
        ingredient=candidate,
        category_similarity=category_score,
        nutrition_similarity_score=round(nutrition_score, 2),
        carbon_reduction_percent=round(reduction, 2),
        overall_score=round(overall, 2),
    )


def rank_alternatives(
    target: Ingredient, pool: list[Ingredient], limit: int = MAX_ALTERNATIVES
) -> list[RankedAlternative]:
    """Rank lower-carbon candidates by overall score, ties by ascending id.

    Every eligible candidate in the pool is scored before truncating.
    """
    scored = [
        score_alternative(target, candidate)
        for candidate in pool
        if candidate.id != target.id
        and candidate.carbon_footprint_per_kg < target.carbon_footprint_per_kg
    ]
    scored.sort(key=lambda alt: (-alt.overall_score, alt.ingredient.id))
    return scored[:limit]


@dataclass
class RecommendationService:
    """Finds lower-carbon substitutes from the catalog."""

    catalog: CatalogService
    candidate_limit: int = 20

    def find_alternatives(self, ingredient_id: int) -> AlternativesResult:
        """Return the top ranked alternatives for a catalog ingredient."""
        target = self.catalog.get_ingredient(ingredient_id)
        return AlternativesResult(
            original_ingredient=target,
            alternatives=self.alternatives_for(target),
        )

    def alternatives_for(
        self, target: Ingredient, limit: int = MAX_ALTERNATIVES
    ) -> list[RankedAlternative]:
        """Rank the catalog's lower-carbon candidates for an ingredient."""
        pool = self.catalog.repository.list_lower_carbon(
            target.carbon_footprint_per_kg, target.id, self.candidate_limit
        )
        return rank_alternatives(target, pool, limit=limit)

    def recommend_for_meal(self, items: list[MealLineItem]) -> list[MealRecommendation]:
        """Suggest alternatives for each ingredient of a meal."""
        ingredients = self.catalog.resolve([item.ingredient_id for item in items])
        recommendations: list[MealRecommendation] = []
        for item in items:
            ingredient = ingredients[item.ingredient_id]
            alternatives = self.alternatives_for(ingredient, limit=MEAL_ALTERNATIVES)
            if not alternatives:
                continue
            recommendations.append(
                MealRecommendation(
                    original=ingredient,
                    quantity=item.quantity_kg,
                    alternatives=alternatives,
                )
            )
        return recommendations
