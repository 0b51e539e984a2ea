from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

MAX_INGREDIENT_SLOTS = 20
UNKNOWN_VALUE = "Unknown"
UNKNOWN_RECIPE_NAME = "Unknown Recipe"
SUMMARY_LENGTH = 100


def _coerce_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _coerce_tags(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [text for item in value if (text := _coerce_text(item))]
    return [text for part in str(value).split(",") if (text := part.strip())]


class IngredientMeasure(BaseModel):
    name: str
    measure: str = ""

    model_config = {"frozen": True}

    def display(self) -> str:
        if self.measure:
            return f"{self.name} ({self.measure})"
        return self.name


class RecipeDetail(BaseModel):
    id: str
    name: str = UNKNOWN_RECIPE_NAME
    category: str = UNKNOWN_VALUE
    area: str = UNKNOWN_VALUE
    thumbnail_url: str = ""
    instructions: str = ""
    ingredients: tuple[IngredientMeasure, ...] = Field(default=(), max_length=MAX_INGREDIENT_SLOTS)
    tags: tuple[str, ...] = ()
    youtube_url: str | None = None
    source_url: str | None = None

    model_config = {"frozen": True}

    @property
    def ingredient_names(self) -> list[str]:
        return [item.name.lower() for item in self.ingredients]

    @property
    def summary(self) -> str:
        return self.instructions[:SUMMARY_LENGTH] + "..."

    def instruction_steps(self) -> list[str]:
        return [line.strip() for line in self.instructions.splitlines() if line.strip()]


class MealSummary(BaseModel):
    id_meal: str = Field(alias="idMeal")
    name: str | None = Field(None, alias="strMeal")
    thumbnail: str | None = Field(None, alias="strMealThumb")

    model_config = {"populate_by_name": True}

    @field_validator("id_meal", mode="before")
    @classmethod
    def _normalize_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value


class MealSearchResponse(BaseModel):
    meals: list[MealSummary] | None = None


class MealPayload(BaseModel):
    """One entry of a catalog lookup response.

    The catalog spreads ingredients over twenty positional
    ``strIngredientN`` / ``strMeasureN`` keys; they are kept as extra fields
    and folded into ordered pairs by :meth:`ingredient_pairs`.
    """

    id_meal: str | None = Field(None, alias="idMeal")
    name: str | None = Field(None, alias="strMeal")
    category: str | None = Field(None, alias="strCategory")
    area: str | None = Field(None, alias="strArea")
    instructions: str | None = Field(None, alias="strInstructions")
    thumbnail: str | None = Field(None, alias="strMealThumb")
    tags: str | None = Field(None, alias="strTags")
    youtube: str | None = Field(None, alias="strYoutube")
    source: str | None = Field(None, alias="strSource")

    model_config = {
        "populate_by_name": True,
        "extra": "allow",
    }

    @field_validator("id_meal", mode="before")
    @classmethod
    def _normalize_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    def ingredient_pairs(self) -> list[IngredientMeasure]:
        extra = self.model_extra or {}
        pairs: list[IngredientMeasure] = []
        for index in range(1, MAX_INGREDIENT_SLOTS + 1):
            name = _coerce_text(extra.get(f"strIngredient{index}"))
            if not name:
                continue
            measure = _coerce_text(extra.get(f"strMeasure{index}"))
            pairs.append(IngredientMeasure(name=name, measure=measure))
        return pairs

    def to_detail(self, fallback_id: str) -> RecipeDetail:
        return RecipeDetail(
            id=_coerce_text(self.id_meal) or fallback_id,
            name=_coerce_text(self.name) or UNKNOWN_RECIPE_NAME,
            category=_coerce_text(self.category) or UNKNOWN_VALUE,
            area=_coerce_text(self.area) or UNKNOWN_VALUE,
            thumbnail_url=_coerce_text(self.thumbnail),
            instructions=self.instructions or "",
            ingredients=tuple(self.ingredient_pairs()),
            tags=tuple(_coerce_tags(self.tags)),
            youtube_url=_coerce_text(self.youtube) or None,
            source_url=_coerce_text(self.source) or None,
        )


class MealDetailResponse(BaseModel):
    meals: list[MealPayload] | None = None
