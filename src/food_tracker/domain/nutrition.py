"""Nutrition models produced by food image analysis."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

MACRO_FIELDS = ("protein", "carbohydrates", "fat")

# Optional fields the analysis prompt asks for; totals always report them.
TRACKED_OPTIONAL_FIELDS = (
    "fiber",
    "sugar",
    "sodium",
    "calcium",
    "iron",
    "vitamin_a",
    "vitamin_c",
    "potassium",
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NutritionInfo(_CamelModel):
    """Nutrient profile. Optional fields are None when unknown."""

    protein: float = 0.0
    carbohydrates: float = 0.0
    fat: float = 0.0
    fiber: float | None = None
    sugar: float | None = None
    sodium: float | None = None
    calcium: float | None = None
    iron: float | None = None
    vitamin_a: float | None = None
    vitamin_c: float | None = None
    potassium: float | None = None
    magnesium: float | None = None
    zinc: float | None = None
    vitamin_d: float | None = None
    vitamin_e: float | None = None
    vitamin_k: float | None = None
    vitamin_b6: float | None = None
    vitamin_b12: float | None = None


class FoodItem(_CamelModel):
    """Single food item detected in a meal photo."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    calories: float = Field(ge=0.0)
    quantity: str | None = None
    nutrients: NutritionInfo = Field(default_factory=NutritionInfo)

    @field_validator("nutrients", mode="before")
    @classmethod
    def _missing_nutrients(cls, value: object) -> object:
        return {} if value is None else value


class FoodAnalysis(_CamelModel):
    """Detected items with their accumulated totals."""

    food_items: list[FoodItem]
    total_calories: float
    total_nutrients: NutritionInfo
