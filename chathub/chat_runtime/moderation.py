"""Banned-word filter for outgoing chat messages."""

from __future__ import annotations

import re
from collections.abc import Iterable


class BannedWordChecker:
    """Case-insensitive substring matcher over a fixed word list.

    The list is compiled once into a single alternation of escaped literals.
    An empty list is a configuration error and fails construction.
    """

    def __init__(self, banned_words: Iterable[str]) -> None:
        normalized = sorted({word.lower() for word in banned_words if word and not word.isspace()})
        if not normalized:
            msg = "Banned words set must not be empty"
            raise ValueError(msg)
        self._pattern = re.compile("|".join(re.escape(word) for word in normalized), re.IGNORECASE)

    def contains_banned_word(self, text: str | None) -> bool:
        if text is None or not text.strip():
            return False
        return self._pattern.search(text) is not None
