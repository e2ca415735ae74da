"""Game setup sequencing and click routing."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import List, Optional, Protocol, Sequence

from .config import GameConfig
from .errors import FetchError, InvalidClick
from .game import Board, Category, Coordinate, build_board, reveal
from .sanitize import Sanitizer, get_sanitizer
from .surface import RenderSurface

logger = logging.getLogger(__name__)


class CategorySource(Protocol):
    async def fetch_category_ids(self, count: int) -> Sequence[int]: ...

    async def fetch_category(self, category_id: int) -> Optional[Category]: ...


class SetupOutcome(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"
    REJECTED = "rejected"


class GameOrchestrator:
    """Owns the live board and runs at most one game setup at a time."""

    def __init__(
        self,
        source: CategorySource,
        surface: RenderSurface,
        config: Optional[GameConfig] = None,
        sanitizer: Optional[Sanitizer] = None,
    ) -> None:
        self.source = source
        self.surface = surface
        self.config = config or GameConfig()
        self.sanitizer = sanitizer or get_sanitizer(self.config.sanitizer)
        self.board = Board.empty()
        self._setting_up = False
        surface.on_click(self.handle_click)

    @property
    def setting_up(self) -> bool:
        return self._setting_up

    async def start(self) -> SetupOutcome:
        """Fetch a fresh board and render it; rejected while a setup is running."""

        if self._setting_up:
            logger.info("Game setup already in progress; ignoring start request")
            return SetupOutcome.REJECTED

        self._setting_up = True
        self.surface.set_start_enabled(False)
        self.surface.set_loading(True)
        try:
            try:
                ids = await self.source.fetch_category_ids(self.config.num_categories)
            except FetchError:
                logger.error("Game setup aborted", exc_info=True)
                return SetupOutcome.FAILED

            results = await asyncio.gather(
                *(self.source.fetch_category(category_id) for category_id in ids),
                return_exceptions=True,
            )
            categories: List[Category] = []
            for category_id, result in zip(ids, results):
                if isinstance(result, BaseException):
                    if not isinstance(result, Exception):
                        raise result
                    logger.warning(
                        "Dropping category %s: %r", category_id, result
                    )
                elif result is not None:
                    categories.append(result)
            logger.debug(
                "Fetched %d of %d categories", len(categories), len(ids)
            )

            self.board = Board.from_categories(categories)
            self._render(self.board)
            return SetupOutcome.COMPLETED
        finally:
            self.surface.set_loading(False)
            self.surface.set_start_enabled(True)
            self._setting_up = False

    def _render(self, board: Board) -> None:
        layout = build_board(board.categories, self.sanitizer, self.config.num_clues)
        self.surface.render_header(layout.header)
        self.surface.render_body(layout.body)

    def handle_click(self, coordinate: Coordinate) -> None:
        coordinate = Coordinate(*coordinate)
        try:
            html = reveal(self.board, coordinate, self.sanitizer)
        except InvalidClick as exc:
            logger.warning("Ignoring click: %s", exc)
            return
        if html is not None:
            self.surface.update_cell(coordinate, html)
