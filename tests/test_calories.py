"""Tests for calorie extraction and scaling."""

import math
from decimal import Decimal

import pytest

from dish_calories.domain.errors import InvalidServingsError
from dish_calories.domain.nutrition import FoodCandidate, NutrientEntry
from dish_calories.services.calories import (
    compute_calories,
    extract_calories,
    round_half_up,
)


def _food(*nutrients: NutrientEntry) -> FoodCandidate:
    return FoodCandidate(fdc_id=1, description="Food", nutrients=nutrients)


def test_extract_calories_by_nutrient_id() -> None:
    food = _food(
        NutrientEntry(1003, "Protein", 9.0),
        NutrientEntry(1008, "Energy", 280.0),
    )

    assert extract_calories(food) == 280.0


def test_extract_calories_by_energy_name() -> None:
    food = _food(NutrientEntry(None, "Energy (Atwater General Factors)", 152.5))

    assert extract_calories(food) == 152.5


def test_extract_calories_first_qualifying_entry_wins() -> None:
    food = _food(
        NutrientEntry(1062, "Energy", 1171.0),
        NutrientEntry(1008, "Energy", 280.0),
    )

    assert extract_calories(food) == 1171.0


def test_extract_calories_missing_energy_returns_none() -> None:
    food = _food(NutrientEntry(1003, "Protein", 9.0), NutrientEntry(1004, "Fat", 3.0))

    assert extract_calories(food) is None


def test_extract_calories_empty_nutrients_returns_none() -> None:
    assert extract_calories(_food()) is None


def test_extract_calories_energy_without_value_returns_none() -> None:
    assert extract_calories(_food(NutrientEntry(1008, "Energy", None))) is None


@pytest.mark.parametrize(
    ("per_100g", "servings", "per_serving", "total"),
    [
        (280, 2, 280, 560),
        (87.4, 3, 87, 261),
        (87.5, 1, 88, 88),
        (100.4, 1.5, 100, 150),
        (33, 0.5, 33, 17),
    ],
)
def test_compute_calories(
    per_100g: float, servings: float, per_serving: int, total: int
) -> None:
    estimate = compute_calories(per_100g, servings)

    assert estimate.calories_per_serving == per_serving
    assert estimate.total_calories == total


def test_compute_rounds_per_serving_before_multiplying() -> None:
    estimate = compute_calories(87.4, 10)

    assert estimate.total_calories == 870
    assert estimate.total_calories != round(87.4 * 10)


@pytest.mark.parametrize("servings", [0, -1, math.nan, math.inf, True, "2"])
def test_compute_rejects_invalid_servings(servings: object) -> None:
    with pytest.raises(InvalidServingsError):
        compute_calories(100, servings)  # type: ignore[arg-type]


def test_round_half_up() -> None:
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4999) == 2


def test_extract_calories_zero_energy_returns_none() -> None:
    assert extract_calories(_food(NutrientEntry(1008, "Energy", 0.0))) is None


@pytest.mark.parametrize("servings", [1e308, 1.7e308])
def test_compute_rejects_servings_that_overflow_total(servings: float) -> None:
    with pytest.raises(InvalidServingsError):
        compute_calories(280, servings)


def test_compute_handles_large_finite_totals() -> None:
    estimate = compute_calories(280, 1e300)

    assert estimate.total_calories == int(Decimal(str(280 * 1e300)))


def test_round_half_up_rejects_non_finite() -> None:
    with pytest.raises(ValueError):
        round_half_up(math.inf)
