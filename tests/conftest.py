"""Shared fixtures: fake quiz API payloads and an httpx mock transport."""

from __future__ import annotations

import random
from typing import Callable, Dict, Iterable, Optional, Set

import httpx
import pytest

from jeopardy.jservice import JServiceClient

API_BASE = "https://quiz.test/api"


def category_payload(category_id: int, clue_count: int = 8) -> Dict[str, object]:
    return {
        "id": category_id,
        "title": f"Category {category_id}",
        "clues_count": clue_count,
        "clues": [
            {
                "id": category_id * 100 + n,
                "question": f"Q{category_id}-{n}",
                "answer": f"A{category_id}-{n}",
                "value": 200 * (n % 5 + 1),
            }
            for n in range(clue_count)
        ],
    }


def _build_transport(
    category_ids: Iterable[int],
    *,
    failing: Optional[Set[int]] = None,
    categories_status: int = 200,
    clue_counts: Optional[Dict[int, int]] = None,
    seen: Optional[list] = None,
) -> httpx.MockTransport:
    ids = list(category_ids)
    failing = failing or set()
    clue_counts = clue_counts or {}

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if request.url.path == "/api/categories":
            if categories_status != 200:
                return httpx.Response(categories_status, json={"error": "down"})
            return httpx.Response(
                200, json=[{"id": i, "title": f"Category {i}"} for i in ids]
            )
        if request.url.path == "/api/category":
            category_id = int(request.url.params["id"])
            if category_id in failing:
                return httpx.Response(500, json={"error": "boom"})
            return httpx.Response(
                200, json=category_payload(category_id, clue_counts.get(category_id, 8))
            )
        return httpx.Response(404)

    return httpx.MockTransport(handler)


@pytest.fixture
def make_transport() -> Callable[..., httpx.MockTransport]:
    return _build_transport


@pytest.fixture
def client_factory() -> Callable[..., JServiceClient]:
    def factory(transport: httpx.MockTransport, num_clues: int = 5, seed: int = 1):
        return JServiceClient(
            API_BASE,
            num_clues=num_clues,
            http=httpx.AsyncClient(transport=transport),
            rng=random.Random(seed),
        )

    return factory
