from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal
from uuid import uuid4

import structlog

from core.services.catalog_service import Candidate, RecipeCatalog
from core.services.filter_service import ALL_RECIPES, available_filters, filter_recipes
from core.services.ingredient_source import (
    IngredientSource,
    IngredientSourceError,
    UserContext,
)
from core.services.recipe_match_service import ScoredRecipe, build_scored_recipe, match_recipes

logger = structlog.get_logger(__name__)

SessionPhase = Literal["idle", "fetching_ingredients", "fetching_recipes", "ready"]


@dataclass(slots=True)
class Ingredient:
    name: str
    quantity: str = ""
    selected: bool = True
    id: str = field(default_factory=lambda: str(uuid4()))


@dataclass(slots=True, frozen=True)
class MatchingResult:
    generation: int
    ordered_recipes: tuple[ScoredRecipe, ...] = ()


class MatchingSession:
    def __init__(self, catalog: RecipeCatalog, *, timeout_seconds: float | None = None) -> None:
        self.catalog = catalog
        self.timeout_seconds = timeout_seconds
        self.ingredients: list[Ingredient] = []
        self.active_filter = ALL_RECIPES
        self.phase: SessionPhase = "idle"
        self.current_generation = 0
        self.last_completed_generation = 0
        self.last_error: str | None = None
        self._all_recipes: tuple[ScoredRecipe, ...] = ()
        self._displayed = MatchingResult(generation=0)
        self._tasks: set[asyncio.Task[None]] = set()

    def current_result(self) -> MatchingResult:
        return self._displayed

    def all_recipes(self) -> list[ScoredRecipe]:
        return list(self._all_recipes)

    def is_loading(self) -> bool:
        return self.phase in ("fetching_ingredients", "fetching_recipes")

    def available_filters(self) -> list[str]:
        return available_filters()

    def selected_names(self) -> list[str]:
        return [item.name.strip().lower() for item in self.ingredients if item.selected and item.name.strip()]

    async def load_ingredients(self, source: IngredientSource, user_context: UserContext) -> MatchingResult:
        self.phase = "fetching_ingredients"
        try:
            available = await source.get_available_ingredients(user_context)
        except IngredientSourceError as exc:
            logger.warning(
                "ingredient_source_failed",
                user_id=user_context.user_id,
                error_type=exc.__class__.__name__,
                error=str(exc),
            )
            self.phase = self._settled_phase()
            raise

        self.phase = self._settled_phase()
        self.ingredients = [Ingredient(name=item.name, quantity=item.quantity_description) for item in available]
        task = self._start_generation()
        if task is not None:
            await task
        return self.current_result()

    def set_ingredients(self, names: Sequence[str]) -> asyncio.Task[None] | None:
        self.ingredients = [Ingredient(name=name) for name in names]
        return self._start_generation()

    def toggle_ingredient(self, ingredient_id: str) -> asyncio.Task[None] | None:
        ingredient = next((item for item in self.ingredients if item.id == ingredient_id), None)
        if ingredient is None:
            raise KeyError(ingredient_id)
        ingredient.selected = not ingredient.selected
        return self._start_generation()

    def set_filter(self, name: str) -> MatchingResult:
        self.active_filter = name
        self._displayed = MatchingResult(
            generation=self._displayed.generation,
            ordered_recipes=tuple(filter_recipes(self._all_recipes, name)),
        )
        return self._displayed

    async def wait_idle(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def lookup_recipe(self, recipe_id: str) -> ScoredRecipe:
        detail = await self.catalog.fetch_detail(Candidate(id=recipe_id))
        return build_scored_recipe(self.selected_names(), detail)

    def _settled_phase(self) -> SessionPhase:
        if self.current_generation == 0:
            return "idle"
        if self.last_completed_generation == self.current_generation:
            return "ready"
        return "fetching_recipes"

    def _start_generation(self) -> asyncio.Task[None] | None:
        self.current_generation += 1
        generation = self.current_generation
        selected = self.selected_names()
        if not selected:
            logger.info("matching_short_circuit", generation=generation)
            self._apply(generation, [], None)
            return None

        self.phase = "fetching_recipes"
        logger.info("matching_generation_started", generation=generation, selected=selected)
        task = asyncio.get_running_loop().create_task(self._run(generation, selected))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, generation: int, selected: list[str]) -> None:
        try:
            outcome = await match_recipes(self.catalog, selected, timeout_seconds=self.timeout_seconds)
        except Exception as exc:
            logger.exception("matching_generation_failed", generation=generation)
            self._apply(generation, [], str(exc) or exc.__class__.__name__)
            return
        self._apply(generation, outcome.recipes, outcome.error)

    def _apply(self, generation: int, recipes: Sequence[ScoredRecipe], error: str | None) -> bool:
        if generation <= self.last_completed_generation:
            logger.info(
                "matching_result_discarded",
                generation=generation,
                last_completed_generation=self.last_completed_generation,
            )
            return False

        self.last_completed_generation = generation
        self.last_error = error
        self._all_recipes = tuple(recipes)
        self._displayed = MatchingResult(
            generation=generation,
            ordered_recipes=tuple(filter_recipes(self._all_recipes, self.active_filter)),
        )
        if generation == self.current_generation and self.phase != "fetching_ingredients":
            self.phase = "ready"
        logger.info(
            "matching_result_applied",
            generation=generation,
            recipes=len(self._all_recipes),
            displayed=len(self._displayed.ordered_recipes),
            error=error,
        )
        return True
