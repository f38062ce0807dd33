"""Nutrition totals for a list of food items."""

import math
from collections.abc import Iterable
from dataclasses import dataclass

from food_tracker.domain.nutrition import (
    MACRO_FIELDS,
    TRACKED_OPTIONAL_FIELDS,
    FoodItem,
    NutritionInfo,
)


@dataclass(frozen=True)
class NutritionTotals:
    """Total calories and summed nutrient profile of a meal."""

    total_calories: float
    total_nutrients: NutritionInfo


def accumulate(items: Iterable[FoodItem]) -> NutritionTotals:
    """Sum calories and tracked nutrients over the given items.

    Every tracked field is reported as a number in the result, even when no
    item supplied it. Missing or non-finite values count as zero.
    """
    total_calories = 0.0
    sums = dict.fromkeys(MACRO_FIELDS + TRACKED_OPTIONAL_FIELDS, 0.0)
    for item in items:
        total_calories += _finite_or_zero(item.calories)
        for name in sums:
            sums[name] += _finite_or_zero(getattr(item.nutrients, name))
    return NutritionTotals(
        total_calories=total_calories,
        total_nutrients=NutritionInfo(**sums),
    )


def _finite_or_zero(value: float | None) -> float:
    if value is None or not math.isfinite(value):
        return 0.0
    return float(value)
