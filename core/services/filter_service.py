from __future__ import annotations

from collections.abc import Iterable

from core.services.recipe_match_service import ScoredRecipe

ALL_RECIPES = "All Recipes"

FILTER_OPTIONS = (
    ALL_RECIPES,
    "Quick Meals",
    "Vegetarian",
    "Breakfast",
    "Lunch",
    "Dinner",
)

CATEGORY_FILTERS: dict[str, frozenset[str]] = {
    "Vegetarian": frozenset({"Vegetarian"}),
    "Quick Meals": frozenset({"Starter", "Side"}),
    "Breakfast": frozenset({"Breakfast"}),
    "Lunch": frozenset({"Main dish", "Dinner"}),
    "Dinner": frozenset({"Main dish", "Dinner"}),
}


def available_filters() -> list[str]:
    return list(FILTER_OPTIONS)


def filter_recipes(recipes: Iterable[ScoredRecipe], active_filter: str) -> list[ScoredRecipe]:
    # Unknown filter names, like "All Recipes", keep every recipe.
    categories = CATEGORY_FILTERS.get(active_filter)
    if categories is None:
        return list(recipes)
    return [recipe for recipe in recipes if recipe.detail.category in categories]
