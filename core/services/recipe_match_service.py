from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Sequence
from dataclasses import dataclass

import structlog

from core.config import settings
from core.services.catalog_service import (
    Candidate,
    CatalogError,
    NetworkError,
    RecipeCatalog,
)
from schemas import RecipeDetail

logger = structlog.get_logger(__name__)

QUICK_CATEGORIES = frozenset({"Starter", "Side"})
QUICK_COOK_TIME = "15-25 mins"
DEFAULT_COOK_TIME = "30-45 mins"

DetailFetch = Callable[[Candidate], Awaitable[RecipeDetail]]


@dataclass(slots=True, frozen=True)
class ScoredRecipe:
    detail: RecipeDetail
    match_percentage: int
    matched_ingredients: tuple[str, ...] = ()
    missing_ingredients: tuple[str, ...] = ()

    @property
    def cook_time(self) -> str:
        if self.detail.category in QUICK_CATEGORIES:
            return QUICK_COOK_TIME
        return DEFAULT_COOK_TIME


@dataclass(slots=True, frozen=True)
class MatchOutcome:
    recipes: list[ScoredRecipe]
    error: str | None = None


def _normalize_selection(selected: Iterable[str]) -> list[str]:
    return [name for raw in selected if raw and (name := raw.strip().lower())]


def _matches_any(ingredient: str, selected: Sequence[str]) -> bool:
    return any(ingredient in name or name in ingredient for name in selected)


def score_recipe(selected: Iterable[str], detail: RecipeDetail) -> int:
    # Bidirectional substring match: "garlic" covers "garlic powder" and the reverse.
    names = _normalize_selection(selected)
    detail_ingredients = detail.ingredient_names
    if not detail_ingredients:
        return 0
    match_count = sum(1 for ingredient in detail_ingredients if _matches_any(ingredient, names))
    return 100 * match_count // len(detail_ingredients)


def build_scored_recipe(selected: Iterable[str], detail: RecipeDetail) -> ScoredRecipe:
    names = _normalize_selection(selected)
    matched: list[str] = []
    missing: list[str] = []
    for item in detail.ingredients:
        if _matches_any(item.name.lower(), names):
            matched.append(item.name)
        else:
            missing.append(item.display())
    return ScoredRecipe(
        detail=detail,
        match_percentage=score_recipe(names, detail),
        matched_ingredients=tuple(matched),
        missing_ingredients=tuple(missing),
    )


def aggregate_details(
    candidates: Sequence[Candidate],
    outcomes: Sequence[RecipeDetail | BaseException],
) -> list[RecipeDetail]:
    details: list[RecipeDetail] = []
    for candidate, outcome in zip(candidates, outcomes, strict=True):
        if isinstance(outcome, BaseException):
            logger.warning(
                "recipe_detail_failed",
                candidate_id=candidate.id,
                error_type=outcome.__class__.__name__,
                error=str(outcome),
            )
            continue
        details.append(outcome)
    return details


async def _bounded_fetch(fetch: DetailFetch, candidate: Candidate, timeout_seconds: float | None) -> RecipeDetail:
    if timeout_seconds is None:
        return await fetch(candidate)
    try:
        return await asyncio.wait_for(fetch(candidate), timeout=timeout_seconds)
    except asyncio.TimeoutError as exc:
        raise NetworkError(f"Timeout after {timeout_seconds}s: recipe {candidate.id}") from exc


async def fetch_all_details(
    fetch: DetailFetch,
    candidates: Sequence[Candidate],
    *,
    timeout_seconds: float | None = None,
) -> list[RecipeDetail]:
    if not candidates:
        return []
    outcomes = await asyncio.gather(
        *(_bounded_fetch(fetch, candidate, timeout_seconds) for candidate in candidates),
        return_exceptions=True,
    )
    return aggregate_details(candidates, outcomes)


def rank_recipes(selected: Iterable[str], details: Iterable[RecipeDetail]) -> list[ScoredRecipe]:
    names = _normalize_selection(selected)
    scored = [build_scored_recipe(names, detail) for detail in details]
    # sorted() is stable: equal scores keep discovery order.
    return sorted(scored, key=lambda recipe: recipe.match_percentage, reverse=True)


async def match_recipes(
    catalog: RecipeCatalog,
    selected: Sequence[str],
    *,
    timeout_seconds: float | None = None,
) -> MatchOutcome:
    names = _normalize_selection(selected)
    if not names:
        return MatchOutcome(recipes=[])

    timeout = timeout_seconds if timeout_seconds is not None else settings.catalog_timeout_seconds
    try:
        candidates = await asyncio.wait_for(catalog.find_candidates(names[0]), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("catalog_search_failed", ingredient=names[0], error_type="NetworkError", error="timeout")
        return MatchOutcome(recipes=[], error=f"Recipe search timed out after {timeout}s")
    except CatalogError as exc:
        logger.warning(
            "catalog_search_failed",
            ingredient=names[0],
            error_type=exc.__class__.__name__,
            error=str(exc),
        )
        return MatchOutcome(recipes=[], error=str(exc))

    details = await fetch_all_details(catalog.fetch_detail, candidates, timeout_seconds=timeout)
    error: str | None = None
    if candidates and not details:
        error = f"All {len(candidates)} recipe lookups failed"
    return MatchOutcome(recipes=rank_recipes(names, details), error=error)
