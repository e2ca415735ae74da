"""Board model, board layout and the per-clue reveal state machine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence, Tuple

from .errors import InvalidClick
from .sanitize import Sanitizer

PLACEHOLDER = "?"


class RevealState(str, Enum):
    HIDDEN = "hidden"
    QUESTION = "question"
    ANSWER = "answer"


class Coordinate(NamedTuple):
    category: int
    clue: int


# ---------- Model ----------


@dataclass
class Clue:
    question: str
    answer: str
    reveal_state: RevealState = RevealState.HIDDEN

    def advance(self) -> Optional[str]:
        """Move one step towards the answer.

        Returns the raw text that should now be shown, or ``None`` when the
        answer is already showing and the click changes nothing.
        """
        if self.reveal_state is RevealState.HIDDEN:
            self.reveal_state = RevealState.QUESTION
            return self.question
        if self.reveal_state is RevealState.QUESTION:
            self.reveal_state = RevealState.ANSWER
            return self.answer
        return None


@dataclass(frozen=True)
class Category:
    title: str
    clues: Tuple[Clue, ...]


@dataclass(frozen=True)
class Board:
    """The categories of one game. Replaced as a whole, never edited in place."""

    categories: Tuple[Category, ...] = ()
    populated: bool = False

    @classmethod
    def empty(cls) -> "Board":
        return cls()

    @classmethod
    def from_categories(cls, categories: Sequence[Category]) -> "Board":
        return cls(categories=tuple(categories), populated=True)

    def clue_at(self, coordinate: Coordinate) -> Clue:
        if not self.populated:
            raise InvalidClick(coordinate, "board is not populated yet")
        cat_idx, clue_idx = coordinate
        # Negative indexes would silently wrap around on a tuple.
        if not 0 <= cat_idx < len(self.categories):
            raise InvalidClick(coordinate, "category index out of range")
        clues = self.categories[cat_idx].clues
        if not 0 <= clue_idx < len(clues):
            raise InvalidClick(coordinate, "clue index out of range")
        return clues[clue_idx]


def reveal(board: Board, coordinate: Coordinate, sanitizer: Sanitizer) -> Optional[str]:
    """Advance the clue under ``coordinate`` and return the HTML to display.

    Raises :class:`InvalidClick` when the coordinate is not on the board.
    """
    text = board.clue_at(coordinate).advance()
    if text is None:
        return None
    return sanitizer(text)


# ---------- Layout ----------


@dataclass(frozen=True)
class Cell:
    coordinate: Coordinate
    html: str = PLACEHOLDER


@dataclass
class BoardLayout:
    header: List[str] = field(default_factory=list)
    body: List[List[Cell]] = field(default_factory=list)


def build_board(
    categories: Sequence[Category], sanitizer: Sanitizer, clues_per_category: int
) -> BoardLayout:
    """Header of sanitized titles plus one placeholder row per clue slot."""

    header = [sanitizer(category.title) for category in categories]
    body: List[List[Cell]] = []
    for clue_idx in range(clues_per_category):
        body.append(
            [
                Cell(coordinate=Coordinate(cat_idx, clue_idx))
                for cat_idx in range(len(categories))
            ]
        )
    return BoardLayout(header=header, body=body)
