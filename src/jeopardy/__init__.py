"""Jeopardy package exposing the board model, the API client, and the web application."""

from .game import Board, Category, Clue, Coordinate, RevealState
from .jservice import JServiceClient
from .orchestrator import GameOrchestrator, SetupOutcome
from .ui import app

__all__ = [
    "Board",
    "Category",
    "Clue",
    "Coordinate",
    "GameOrchestrator",
    "JServiceClient",
    "RevealState",
    "SetupOutcome",
    "app",
]
