"""Allow-list cleaning for HTML fragments that come back from the quiz API."""

from __future__ import annotations

import html
from typing import FrozenSet, Optional, Protocol

import bleach

ALLOWED_TAGS: FrozenSet[str] = frozenset(
    {"b", "strong", "i", "em", "u", "br", "p", "span", "small", "sub", "sup"}
)


class Sanitizer(Protocol):
    def __call__(self, raw: Optional[object]) -> str: ...


def unescape_quotes(text: str) -> str:
    """Undo the backslash-escaped quotes some clues carry (``it\\'s``)."""

    return text.replace("\\'", "'").replace('\\"', '"')


def _prepare(raw: Optional[object]) -> str:
    if raw is None:
        return ""
    text = raw if isinstance(raw, str) else str(raw)
    return unescape_quotes(text)


class BleachSanitizer:
    """Keep the inline formatting tags, strip every other tag and all attributes."""

    def __init__(self, tags: FrozenSet[str] = ALLOWED_TAGS) -> None:
        self.tags = tags

    def __call__(self, raw: Optional[object]) -> str:
        text = _prepare(raw)
        if not text:
            return ""
        return bleach.clean(
            text,
            tags=self.tags,
            attributes={},
            strip=True,
            strip_comments=True,
        )


class EscapingSanitizer:
    """Render everything as text: no markup survives, formatting included."""

    def __call__(self, raw: Optional[object]) -> str:
        text = _prepare(raw)
        if not text:
            return ""
        return html.escape(text, quote=False)


def get_sanitizer(name: str) -> Sanitizer:
    normalized = name.strip().lower()
    if normalized == "bleach":
        return BleachSanitizer()
    if normalized == "escape":
        return EscapingSanitizer()
    raise ValueError(f"Unknown sanitizer {name!r}")


_DEFAULT = BleachSanitizer()


def sanitize(raw: Optional[object]) -> str:
    """Clean ``raw`` with the default (bleach) strategy."""

    return _DEFAULT(raw)
