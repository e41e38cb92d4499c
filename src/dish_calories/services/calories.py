"""Calorie lookup for dishes backed by USDA FDC."""

import logging
import math
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from dish_calories.domain.errors import (
    CaloriesUnavailableError,
    DishNotFoundError,
    InvalidServingsError,
    NoMatchError,
)
from dish_calories.domain.nutrition import CalorieEstimate, CalorieResult, FoodCandidate
from dish_calories.services.matching import CandidateMatcher
from dish_calories.services.nutrition import NutritionService

ENERGY_NUTRIENT_ID = 1008
SOURCE_LABEL = "USDA FoodData Central"

_logger = logging.getLogger(__name__)


@dataclass
class CalorieService:
    """Resolves a dish name to a calorie estimate."""

    nutrition_service: NutritionService
    matcher: CandidateMatcher = field(default_factory=CandidateMatcher)

    async def get_calories(self, dish_name: str, servings: float) -> CalorieResult:
        """Search, match, extract and scale calories for a dish.

        Raises DishNotFoundError, NoMatchError or CaloriesUnavailableError for
        lookups the user can retry with another name. NutritionSourceError is
        propagated unchanged.
        """
        validate_servings(servings)
        foods = await self.nutrition_service.search(dish_name)
        if not foods:
            raise DishNotFoundError(f'No nutrition data found for "{dish_name}"')

        best_match = self.matcher.select_best(foods, dish_name)
        if best_match is None:
            raise NoMatchError(f'Could not find a suitable match for "{dish_name}"')

        calories_per_100g = extract_calories(best_match)
        if calories_per_100g is None:
            raise CaloriesUnavailableError(
                f'Calorie information not available for "{dish_name}"'
            )

        estimate = compute_calories(calories_per_100g, servings)
        return CalorieResult(
            dish_name=dish_name,
            servings=servings,
            calories_per_serving=estimate.calories_per_serving,
            total_calories=estimate.total_calories,
            source=SOURCE_LABEL,
            matched_food=best_match.description,
            food_id=best_match.fdc_id,
        )


def extract_calories(food: FoodCandidate) -> float | None:
    """Return calories per 100g from the first energy nutrient entry."""
    for nutrient in food.nutrients or ():
        if (
            nutrient.nutrient_id == ENERGY_NUTRIENT_ID
            or "energy" in (nutrient.nutrient_name or "").lower()
        ):
            if not nutrient.value or not math.isfinite(nutrient.value):
                return None
            return float(nutrient.value)
    return None


def compute_calories(calories_per_100g: float, servings: float) -> CalorieEstimate:
    """Scale calories per 100g to servings, treating 100g as one serving.

    The per-serving value is rounded first (half up) and the total is
    rounded from that rounded value.
    """
    validate_servings(servings)
    per_serving = round_half_up(calories_per_100g)
    total = per_serving * servings
    if not math.isfinite(total):
        raise InvalidServingsError(f"Too many servings: {servings!r}")
    return CalorieEstimate(
        calories_per_serving=per_serving,
        total_calories=round_half_up(total),
    )


def validate_servings(servings: object) -> None:
    """Ensure servings is a finite positive number."""
    if (
        isinstance(servings, bool)
        or not isinstance(servings, int | float)
        or not math.isfinite(servings)
        or servings <= 0
    ):
        raise InvalidServingsError(f"Servings must be a positive number: {servings!r}")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if not math.isfinite(value):
        raise ValueError(f"Cannot round non-finite value: {value!r}")
    return int(Decimal(str(value)).to_integral_value(rounding=ROUND_HALF_UP))
