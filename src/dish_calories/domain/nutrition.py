"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutrientEntry:
    """One measured nutrient per 100g of a food."""

    nutrient_id: int | None
    nutrient_name: str
    value: float | None


@dataclass(frozen=True)
class FoodCandidate:
    """Food record returned by FDC for a search query."""

    fdc_id: int | str
    description: str
    brand_name: str | None = None
    ingredients: str | None = None
    nutrients: tuple[NutrientEntry, ...] = ()


@dataclass(frozen=True)
class CalorieEstimate:
    """Rounded calories for one serving and for all servings."""

    calories_per_serving: int
    total_calories: int


@dataclass(frozen=True)
class CalorieResult:
    """Calorie lookup result for a dish."""

    dish_name: str
    servings: float
    calories_per_serving: int
    total_calories: int
    source: str
    matched_food: str
    food_id: int | str
