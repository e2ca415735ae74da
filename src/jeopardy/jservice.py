"""Async client for the jService-style quiz API plus the sampling helpers."""

from __future__ import annotations

import logging
import random
from typing import Any, List, Optional, Sequence, TypeVar

import httpx
from pydantic import BaseModel, ValidationError, field_validator

from .errors import CategoryUnavailable, FetchError
from .game import Category, Clue

logger = logging.getLogger(__name__)

T = TypeVar("T")

MIN_CANDIDATE_POOL = 14


# ---------- Sampling ----------


def candidate_pool_size(count: int) -> int:
    """How many categories to request so ``count`` of them can be sampled fairly."""

    return max(MIN_CANDIDATE_POOL, 3 * count)


def fisher_yates(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """Return a uniformly shuffled copy of ``items``."""

    rng = rng or random.Random()
    pool = list(items)
    for i in range(len(pool) - 1, 0, -1):
        j = rng.randint(0, i)
        pool[i], pool[j] = pool[j], pool[i]
    return pool


def sample_clues(
    clues: Sequence[T], count: int, rng: Optional[random.Random] = None
) -> List[T]:
    """Pick ``count`` distinct clues without replacement.

    Raises ``ValueError`` when there are fewer than ``count`` to choose from.
    """
    if len(clues) < count:
        raise ValueError(f"only {len(clues)} clues available, need {count}")
    rng = rng or random.Random()
    return rng.sample(list(clues), count)


# ---------- Payloads ----------


class CategorySummary(BaseModel):
    id: int


class ApiClue(BaseModel):
    question: str = ""
    answer: str = ""

    @field_validator("question", "answer", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)


class ApiCategory(BaseModel):
    title: str = ""
    clues: List[ApiClue]

    @field_validator("title", mode="before")
    @classmethod
    def coerce_title(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)


# ---------- Client ----------


class JServiceClient:
    """Fetches category ids and category clue lists from the quiz API."""

    def __init__(
        self,
        base_url: str,
        *,
        num_clues: int = 5,
        http: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.num_clues = num_clues
        self.rng = rng or random.Random()
        self._http = http or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _get_json(self, path: str, params: dict) -> Any:
        response = await self._http.get(f"{self.base_url}/{path}", params=params)
        response.raise_for_status()
        return response.json()

    async def fetch_category_ids(self, count: int) -> List[int]:
        """Sample ``count`` distinct category ids from a larger random pool."""

        pool_size = candidate_pool_size(count)
        logger.debug("Fetching %d candidate categories", pool_size)
        try:
            payload = await self._get_json("categories", {"count": pool_size})
        except httpx.HTTPStatusError as exc:
            raise FetchError(
                f"categories request returned {exc.response.status_code}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise FetchError(f"categories request failed: {exc}") from exc

        if not isinstance(payload, list):
            raise FetchError("categories payload is not a list")
        try:
            summaries = [CategorySummary.model_validate(entry) for entry in payload]
        except ValidationError as exc:
            raise FetchError(f"malformed categories payload: {exc}") from exc

        ids: List[int] = list(dict.fromkeys(summary.id for summary in summaries))

        chosen = fisher_yates(ids, self.rng)[:count]
        if len(chosen) < count:
            logger.warning(
                "Only %d distinct categories available, wanted %d", len(chosen), count
            )
        return chosen

    async def fetch_category(self, category_id: int) -> Optional[Category]:
        """Return a playable category, or ``None`` if it cannot be used."""

        logger.debug("Fetching category %s", category_id)
        try:
            return await self._load_category(category_id)
        except CategoryUnavailable as exc:
            logger.warning(
                "Dropping category %s: %s", exc.category_id, exc.reason
            )
            return None

    async def _load_category(self, category_id: int) -> Category:
        try:
            payload = await self._get_json("category", {"id": category_id})
        except httpx.HTTPStatusError as exc:
            raise CategoryUnavailable(
                category_id, f"status {exc.response.status_code}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise CategoryUnavailable(category_id, f"request failed: {exc}") from exc

        try:
            data = ApiCategory.model_validate(payload)
        except ValidationError as exc:
            raise CategoryUnavailable(category_id, "malformed payload") from exc

        try:
            chosen = sample_clues(data.clues, self.num_clues, self.rng)
        except ValueError as exc:
            raise CategoryUnavailable(category_id, str(exc)) from exc

        clues = tuple(Clue(question=c.question, answer=c.answer) for c in chosen)
        return Category(title=data.title, clues=clues)
