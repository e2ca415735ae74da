"""Exception types shared by the fetchers, the board and the orchestrator."""

from __future__ import annotations

from typing import Any


class JeopardyError(Exception):
    """Base class for board setup and play errors."""


class FetchError(JeopardyError):
    """The pool of category ids could not be fetched; aborts a game setup."""


class CategoryUnavailable(JeopardyError):
    """A single category could not be turned into a playable column."""

    def __init__(self, category_id: Any, reason: str) -> None:
        super().__init__(f"category {category_id}: {reason}")
        self.category_id = category_id
        self.reason = reason


class InvalidClick(JeopardyError):
    """A click coordinate that does not resolve to a clue on the board."""

    def __init__(self, coordinate: Any, reason: str) -> None:
        super().__init__(f"{tuple(coordinate)}: {reason}")
        self.coordinate = coordinate
        self.reason = reason
