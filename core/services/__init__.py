from core.services.catalog_service import (
    Candidate,
    CatalogError,
    NetworkError,
    NotFoundError,
    ParseError,
    RecipeCatalogClient,
)
from core.services.filter_service import ALL_RECIPES, FILTER_OPTIONS, filter_recipes
from core.services.ingredient_source import (
    AuthError,
    AvailableIngredient,
    ShoppingListIngredientSource,
    StaticIngredientSource,
    StoreError,
    UserContext,
)
from core.services.matching_session import Ingredient, MatchingResult, MatchingSession
from core.services.recipe_match_service import ScoredRecipe, match_recipes, rank_recipes, score_recipe

__all__ = [
    "ALL_RECIPES",
    "AuthError",
    "AvailableIngredient",
    "Candidate",
    "CatalogError",
    "FILTER_OPTIONS",
    "Ingredient",
    "MatchingResult",
    "MatchingSession",
    "NetworkError",
    "NotFoundError",
    "ParseError",
    "RecipeCatalogClient",
    "ScoredRecipe",
    "ShoppingListIngredientSource",
    "StaticIngredientSource",
    "StoreError",
    "UserContext",
    "filter_recipes",
    "match_recipes",
    "rank_recipes",
    "score_recipe",
]
