"""Domain models for ingredient substitution."""

from dataclasses import dataclass

from ecobite.domain.ingredients import Ingredient


@dataclass(frozen=True)
class RankedAlternative:
    """A lower-carbon candidate with its similarity scores."""

    ingredient: Ingredient
    category_similarity: float
    nutrition_similarity_score: float
    carbon_reduction_percent: float
    overall_score: float


@dataclass(frozen=True)
class AlternativesResult:
    """Ranked alternatives for one ingredient."""

    original_ingredient: Ingredient
    alternatives: list[RankedAlternative]


@dataclass(frozen=True)
class MealRecommendation:
    """Alternatives for one line item of a meal."""

    original: Ingredient
    quantity: float
    alternatives: list[RankedAlternative]
