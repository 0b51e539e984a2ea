from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Protocol

import httpx
import structlog
from pydantic import ValidationError

from core.config import settings
from schemas import MealDetailResponse, MealSearchResponse, RecipeDetail

logger = structlog.get_logger(__name__)


class CatalogError(RuntimeError):
    pass


class NetworkError(CatalogError):
    pass


class ParseError(CatalogError):
    pass


class NotFoundError(CatalogError):
    pass


@dataclass(slots=True, frozen=True)
class Candidate:
    id: str


class RecipeCatalog(Protocol):
    async def find_candidates(self, ingredient_name: str) -> list[Candidate]: ...

    async def fetch_detail(self, candidate: Candidate) -> RecipeDetail: ...


def search_token(ingredient_name: str) -> str:
    parts = ingredient_name.split()
    return parts[0].lower() if parts else ""


class RecipeCatalogClient:
    def __init__(
        self,
        base_url: str | None = None,
        search_path: str | None = None,
        lookup_path: str | None = None,
        timeout_seconds: float | None = None,
        candidate_limit: int | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = (base_url if base_url is not None else settings.catalog_base_url).rstrip("/")
        self.search_path = (search_path if search_path is not None else settings.catalog_search_path).strip("/")
        self.lookup_path = (lookup_path if lookup_path is not None else settings.catalog_lookup_path).strip("/")
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else settings.catalog_timeout_seconds
        )
        self.candidate_limit = candidate_limit if candidate_limit is not None else settings.candidate_limit
        self._http_client = http_client
        self._owns_client = http_client is None

    async def __aenter__(self) -> RecipeCatalogClient:
        self._client()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        await self.aclose()
        return False

    async def aclose(self) -> None:
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    def _client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout_seconds)
            self._owns_client = True
        return self._http_client

    async def _get_json(
        self,
        path: str,
        params: dict[str, str],
        *,
        not_found: type[CatalogError] = NetworkError,
    ) -> dict[str, Any]:
        url = f"{self.base_url}/{path}"
        try:
            response = await self._client().get(url, params=params, timeout=self.timeout_seconds)
        except httpx.TimeoutException as exc:
            raise NetworkError(f"Timeout after {self.timeout_seconds}s: {url}") from exc
        except httpx.HTTPError as exc:
            raise NetworkError(str(exc) or exc.__class__.__name__) from exc

        if response.status_code == 404:
            raise not_found(f"HTTP 404: {url}")
        if response.status_code != 200:
            raise NetworkError(f"HTTP {response.status_code}: {url}")

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ParseError(f"Catalog returned non-JSON body for {url}") from exc
        if payload is None:
            return {}
        if not isinstance(payload, dict):
            raise ParseError(f"Catalog returned {type(payload).__name__} instead of object for {url}")
        return payload

    async def find_candidates(self, ingredient_name: str) -> list[Candidate]:
        token = search_token(ingredient_name)
        if not token:
            return []

        payload = await self._get_json(self.search_path, {"i": token})
        try:
            parsed = MealSearchResponse.model_validate(payload)
        except ValidationError as exc:
            raise ParseError(f"Malformed search response for {token!r}: {exc}") from exc

        meals = parsed.meals or []
        candidates: list[Candidate] = []
        seen: set[str] = set()
        for meal in meals:
            if meal.id_meal in seen:
                continue
            seen.add(meal.id_meal)
            candidates.append(Candidate(id=meal.id_meal))
            if len(candidates) >= self.candidate_limit:
                break

        logger.info(
            "catalog_candidates_found",
            token=token,
            returned=len(meals),
            kept=len(candidates),
        )
        return candidates

    async def fetch_detail(self, candidate: Candidate) -> RecipeDetail:
        payload = await self._get_json(self.lookup_path, {"i": candidate.id}, not_found=NotFoundError)
        try:
            parsed = MealDetailResponse.model_validate(payload)
            if not parsed.meals:
                raise NotFoundError(f"Recipe {candidate.id} not found")
            return parsed.meals[0].to_detail(fallback_id=candidate.id)
        except ValidationError as exc:
            raise ParseError(f"Malformed lookup response for {candidate.id}: {exc}") from exc
