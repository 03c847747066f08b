# services/word_queue.py
import logging
from typing import List, Sequence

from PySide6.QtCore import QObject, Signal

from wordsprint.app.config import FALLBACK_WORDS
from wordsprint.services.word_source import WordSource, fallback_words

log = logging.getLogger(__name__)


class WordQueue(QObject):
    """
    Target tokens for the session. ``cursor`` counts completed tokens; the
    visible window is everything after it. Refills are asynchronous and
    tagged with a generation so a late result from an abandoned session
    is ignored.
    """

    changed = Signal()

    def __init__(self, source: WordSource, word_count: int,
                 fallback: Sequence[str] = FALLBACK_WORDS, parent=None):
        super().__init__(parent)
        if word_count <= 0:
            raise ValueError("word_count must be positive")
        self.source = source
        self.word_count = word_count
        self.fallback = tuple(fallback)
        self.tokens: List[str] = []
        self.cursor = 0
        self.generation = 0
        self._pending = False
        self._closed = False
        source.fetched.connect(self._on_fetched)
        source.failed.connect(self._on_failed)

    @property
    def is_loading(self) -> bool:
        return self._pending

    @property
    def remaining(self) -> int:
        return len(self.tokens) - self.cursor

    def is_empty(self) -> bool:
        return self.remaining <= 0

    def visible(self) -> List[str]:
        return self.tokens[self.cursor:]

    def current_token(self) -> str:
        if self.is_empty():
            return ""
        return self.tokens[self.cursor]

    def repopulate(self, word_count: int = None):
        if word_count is not None:
            if word_count <= 0:
                raise ValueError("word_count must be positive")
            self.word_count = word_count
        self.generation += 1
        self.tokens = []
        self.cursor = 0
        self._pending = False
        self._request(self.word_count)
        self.changed.emit()

    def advance(self) -> str:
        """Mark the current token completed and top the window back up."""
        done = self.current_token()
        if not self.is_empty():
            self.cursor += 1
        self._replenish()
        if self.is_empty():
            # the fetch is still out; keep a token to type meanwhile
            extra = self.fallback[len(self.tokens) % len(self.fallback)]
            log.debug("Queue ran dry while fetching, using %r", extra)
            self.tokens.append(extra)
        self.changed.emit()
        return done

    def close(self):
        self._closed = True
        self.generation += 1
        self._pending = False
        try:
            self.source.fetched.disconnect(self._on_fetched)
            self.source.failed.disconnect(self._on_failed)
        except (RuntimeError, TypeError):
            pass

    def _replenish(self):
        deficit = self.word_count - self.remaining
        if deficit > 0 and not self._pending:
            self._request(deficit)

    def _request(self, count: int):
        if self._closed:
            return
        self._pending = True
        # sources may answer synchronously, so state is final before this call
        self.source.fetch(count, self.generation)

    def _on_fetched(self, generation: int, words: list):
        if generation != self.generation or self._closed:
            log.debug("Dropping stale word batch (generation %s, current %s)",
                      generation, self.generation)
            return
        self._pending = False
        if not words:
            self._on_failed(generation, "empty batch")
            return
        self.tokens.extend(str(w) for w in words)
        self._replenish()
        self.changed.emit()

    def _on_failed(self, generation: int, reason: str):
        if generation != self.generation or self._closed:
            return
        self._pending = False
        deficit = max(1, self.word_count - self.remaining)
        log.warning("Word source failed (%s); using %d fallback words", reason, deficit)
        self.tokens.extend(fallback_words(deficit, self.fallback))
        self.changed.emit()
