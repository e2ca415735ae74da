"""Rendering surfaces the orchestrator draws the board onto."""

from __future__ import annotations

from typing import Callable, Dict, List, Protocol, Sequence, Set

from .game import Cell, Coordinate

ClickHandler = Callable[[Coordinate], None]


class RenderSurface(Protocol):
    def render_header(self, titles: Sequence[str]) -> None: ...

    def render_body(self, rows: Sequence[Sequence[Cell]]) -> None: ...

    def update_cell(self, coordinate: Coordinate, html: str) -> None: ...

    def set_loading(self, busy: bool) -> None: ...

    def set_start_enabled(self, enabled: bool) -> None: ...

    def on_click(self, handler: ClickHandler) -> None: ...


class WebSurface:
    """Keeps the rendered board in memory so the browser can fetch it as JSON.

    ``generation`` increases on every body render; the page uses it to tell a
    fresh board apart from a cell update.
    """

    def __init__(self) -> None:
        self.titles: List[str] = []
        self.rows: List[List[Coordinate]] = []
        self.cells: Dict[Coordinate, str] = {}
        self.revealed: Set[Coordinate] = set()
        self.generation = 0
        self.loading = False
        self.aria_busy = False
        self.start_enabled = True
        self._handlers: List[ClickHandler] = []

    def render_header(self, titles: Sequence[str]) -> None:
        self.titles = list(titles)

    def render_body(self, rows: Sequence[Sequence[Cell]]) -> None:
        self.rows = [[cell.coordinate for cell in row] for row in rows]
        self.cells = {cell.coordinate: cell.html for row in rows for cell in row}
        self.revealed = set()
        self.generation += 1

    def update_cell(self, coordinate: Coordinate, html: str) -> None:
        self.cells[coordinate] = html
        self.revealed.add(coordinate)

    def set_loading(self, busy: bool) -> None:
        self.loading = busy
        self.aria_busy = busy

    def set_start_enabled(self, enabled: bool) -> None:
        self.start_enabled = enabled

    def on_click(self, handler: ClickHandler) -> None:
        self._handlers.append(handler)

    def dispatch_click(self, coordinate: Coordinate) -> None:
        for handler in list(self._handlers):
            handler(coordinate)

    def snapshot(self) -> Dict[str, object]:
        return {
            "generation": self.generation,
            "loading": self.loading,
            "ariaBusy": self.aria_busy,
            "startEnabled": self.start_enabled,
            "categories": list(self.titles),
            "rows": [
                [
                    {
                        "categoryIndex": coord.category,
                        "clueIndex": coord.clue,
                        "html": self.cells.get(coord, ""),
                        "revealed": coord in self.revealed,
                    }
                    for coord in row
                ]
                for row in self.rows
            ],
        }
