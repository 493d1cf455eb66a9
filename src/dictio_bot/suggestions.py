"""
Spelling suggestions for words the dictionary API does not know.

Candidates come from a plain-text word list (one word per line) and are
ranked by Levenshtein distance to the query.
"""

import asyncio
import logging
import re
from pathlib import Path
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_WORDLIST = Path(__file__).parent / "data" / "words.txt"

_WORD_RE = re.compile(r"^[a-z][a-z'-]*$")


def levenshtein(a: str, b: str) -> int:
    """Edit distance with unit cost insert/delete/substitute."""
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        current = [i]
        for j, cb in enumerate(b, 1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (ca != cb),
                )
            )
        previous = current
    return previous[-1]


def _common_prefix(a: str, b: str) -> int:
    n = 0
    for ca, cb in zip(a, b):
        if ca != cb:
            break
        n += 1
    return n


class SpellChecker:
    def __init__(
        self,
        *,
        word_list_path: Optional[str] = None,
        words: Optional[Sequence[str]] = None,
        max_distance: int = 2,
        limit: int = 5,
    ):
        self.word_list_path = Path(word_list_path) if word_list_path else DEFAULT_WORDLIST
        self.max_distance = max_distance
        self.limit = limit
        self._words: Optional[List[str]] = None
        self._known: frozenset = frozenset()
        if words is not None:
            self._set_words(words)

    def _set_words(self, words) -> None:
        cleaned = dict.fromkeys(
            w.strip().lower() for w in words if _WORD_RE.match(w.strip().lower())
        )
        self._words = list(cleaned)
        self._known = frozenset(self._words)

    async def load(self) -> List[str]:
        """Read the word list off the event loop, once."""
        if self._words is None:
            text = await asyncio.to_thread(self.word_list_path.read_text, encoding="utf-8")
            self._set_words(text.splitlines())
            logger.info(
                "Loaded %d words for suggestions from %s",
                len(self._words),
                self.word_list_path,
            )
        return self._words

    async def get_suggestions(self, word: str) -> List[str]:
        """Return up to ``limit`` likely corrections for ``word``, best first."""
        query = word.strip().lower()
        words = await self.load()
        if not _WORD_RE.match(query) or query in self._known:
            return []

        scored = []
        for candidate in words:
            length_gap = abs(len(candidate) - len(query))
            if length_gap > self.max_distance:
                continue
            distance = levenshtein(query, candidate)
            if distance > self.max_distance:
                continue
            scored.append(
                (distance, -_common_prefix(query, candidate), length_gap, candidate)
            )

        scored.sort()
        return [candidate for *_, candidate in scored[: self.limit]]
