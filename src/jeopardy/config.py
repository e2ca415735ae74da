"""Run-time configuration for the Jeopardy board, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_API_BASE = "https://rithm-jeopardy.herokuapp.com/api"
SANITIZER_CHOICES = ("bleach", "escape")


def _positive_int(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from exc
    if value < 1:
        raise ValueError(f"{key} must be at least 1, got {value}")
    return value


def _positive_float(environ: Mapping[str, str], key: str, default: float) -> float:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{key} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class GameConfig:
    """Board dimensions, API endpoint and sanitizer choice."""

    api_base: str = DEFAULT_API_BASE
    num_categories: int = 6
    num_clues: int = 5
    sanitizer: str = "bleach"
    http_timeout: float = 10.0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GameConfig":
        env = os.environ if environ is None else environ

        api_base = (env.get("JEOPARDY_API_BASE") or DEFAULT_API_BASE).rstrip("/")
        sanitizer = (env.get("JEOPARDY_SANITIZER") or "bleach").strip().lower()
        if sanitizer not in SANITIZER_CHOICES:
            raise ValueError(
                f"Unsupported sanitizer {sanitizer!r}. "
                f"Choose one of {', '.join(SANITIZER_CHOICES)}."
            )

        return cls(
            api_base=api_base,
            num_categories=_positive_int(env, "JEOPARDY_NUM_CATEGORIES", 6),
            num_clues=_positive_int(env, "JEOPARDY_NUM_CLUES", 5),
            sanitizer=sanitizer,
            http_timeout=_positive_float(env, "JEOPARDY_HTTP_TIMEOUT", 10.0),
        )
