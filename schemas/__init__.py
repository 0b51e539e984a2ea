from schemas.recipe import (
    IngredientMeasure,
    MealDetailResponse,
    MealPayload,
    MealSearchResponse,
    MealSummary,
    RecipeDetail,
)

__all__ = [
    "IngredientMeasure",
    "MealDetailResponse",
    "MealPayload",
    "MealSearchResponse",
    "MealSummary",
    "RecipeDetail",
]
