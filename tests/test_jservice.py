"""Tests for the quiz API client and its sampling helpers."""

import asyncio
import random
from collections import Counter

import httpx
import pytest

from jeopardy.errors import FetchError
from jeopardy.game import RevealState
from jeopardy.jservice import (
    candidate_pool_size,
    fisher_yates,
    sample_clues,
)


class CountingRandom(random.Random):
    def __init__(self, seed=0):
        super().__init__(seed)
        self.randint_calls = []

    def randint(self, a, b):
        self.randint_calls.append((a, b))
        return super().randint(a, b)


# ---------- Sampling ----------


def test_candidate_pool_is_generous():
    assert candidate_pool_size(1) == 14
    assert candidate_pool_size(4) == 14
    assert candidate_pool_size(6) == 18
    assert candidate_pool_size(10) == 30


def test_fisher_yates_swaps_once_per_index():
    rng = CountingRandom(3)
    items = list(range(10))
    shuffled = fisher_yates(items, rng)

    assert len(rng.randint_calls) == 9
    assert rng.randint_calls == [(0, i) for i in range(9, 0, -1)]
    assert sorted(shuffled) == items
    assert items == list(range(10)), "input must not be modified"


def test_fisher_yates_small_pools():
    assert fisher_yates([], random.Random(0)) == []
    assert fisher_yates(["only"], random.Random(0)) == ["only"]


def test_fisher_yates_reaches_every_position():
    rng = random.Random(11)
    positions = Counter()
    for _ in range(400):
        positions[fisher_yates(["a", "b", "c", "d"], rng).index("a")] += 1
    assert set(positions) == {0, 1, 2, 3}


def test_sample_clues_distinct_and_exact():
    clues = [f"clue-{n}" for n in range(12)]
    chosen = sample_clues(clues, 5, random.Random(2))
    assert len(chosen) == 5
    assert len(set(chosen)) == 5
    assert set(chosen) <= set(clues)


def test_sample_clues_is_not_first_n():
    clues = list(range(50))
    picks = {tuple(sample_clues(clues, 5, random.Random(seed))) for seed in range(20)}
    assert picks != {tuple(range(5))}
    assert len(picks) > 1


def test_sample_clues_rejects_short_pool():
    with pytest.raises(ValueError):
        sample_clues([1, 2, 3], 5)


# ---------- Category ids ----------


def test_fetch_category_ids_requests_pool_and_samples(client_factory, make_transport):
    seen = []
    client = client_factory(make_transport(range(1, 19), seen=seen))

    ids = asyncio.run(client.fetch_category_ids(6))

    assert len(ids) == 6
    assert len(set(ids)) == 6
    assert set(ids) <= set(range(1, 19))
    assert seen[0].url.params["count"] == "18"


def test_fetch_category_ids_drops_duplicate_ids(client_factory, make_transport):
    client = client_factory(make_transport([1, 1, 2, 2, 3]))
    ids = asyncio.run(client.fetch_category_ids(3))
    assert sorted(ids) == [1, 2, 3]


def test_fetch_category_ids_short_pool_returns_what_exists(client_factory, make_transport):
    client = client_factory(make_transport([7, 8]))
    ids = asyncio.run(client.fetch_category_ids(6))
    assert sorted(ids) == [7, 8]


def test_fetch_category_ids_status_error(client_factory, make_transport):
    client = client_factory(make_transport([], categories_status=503))
    with pytest.raises(FetchError):
        asyncio.run(client.fetch_category_ids(6))


def test_fetch_category_ids_network_error(client_factory):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = client_factory(httpx.MockTransport(handler))
    with pytest.raises(FetchError):
        asyncio.run(client.fetch_category_ids(6))


def test_fetch_category_ids_malformed_payload(client_factory):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"id": 1}))
    client = client_factory(transport)
    with pytest.raises(FetchError):
        asyncio.run(client.fetch_category_ids(6))


# ---------- Categories ----------


def test_fetch_category_normalizes_clues(client_factory, make_transport):
    client = client_factory(make_transport([4]))

    category = asyncio.run(client.fetch_category(4))

    assert category.title == "Category 4"
    assert len(category.clues) == 5
    questions = [clue.question for clue in category.clues]
    assert len(set(questions)) == 5
    for clue in category.clues:
        assert clue.reveal_state is RevealState.HIDDEN
        assert clue.answer == clue.question.replace("Q", "A")
        assert not hasattr(clue, "value")


def test_fetch_category_failure_returns_none(client_factory, make_transport, caplog):
    client = client_factory(make_transport([5], failing={5}))

    with caplog.at_level("WARNING", logger="jeopardy.jservice"):
        assert asyncio.run(client.fetch_category(5)) is None

    assert "5" in caplog.text
    assert "status 500" in caplog.text


def test_fetch_category_too_few_clues_returns_none(client_factory, make_transport, caplog):
    client = client_factory(make_transport([9], clue_counts={9: 3}))

    with caplog.at_level("WARNING", logger="jeopardy.jservice"):
        assert asyncio.run(client.fetch_category(9)) is None

    assert "only 3 clues" in caplog.text


def test_fetch_category_malformed_payload_returns_none(client_factory):
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, json={"title": "No clues here"})
    )
    client = client_factory(transport)
    assert asyncio.run(client.fetch_category(1)) is None


def test_fetch_category_coerces_missing_text(client_factory):
    payload = {
        "title": "Numbers",
        "clues": [{"question": "1+1", "answer": 2}, {"question": None, "answer": "x"}],
    }
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=payload))
    client = client_factory(transport, num_clues=2)

    category = asyncio.run(client.fetch_category(1))

    by_question = {clue.question: clue.answer for clue in category.clues}
    assert by_question == {"1+1": "2", "": "x"}
