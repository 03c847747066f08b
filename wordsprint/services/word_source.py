# services/word_source.py
from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import List, Optional, Sequence

from PySide6.QtCore import QObject, QUrl, Signal
from PySide6.QtNetwork import QNetworkAccessManager, QNetworkReply, QNetworkRequest

from wordsprint.app.config import FALLBACK_WORDS, WORD_API_URL
from wordsprint.app.errors import WordSourceError
from wordsprint.utils.file_handler import load_word_list

log = logging.getLogger(__name__)


def fallback_words(count: int, fallback: Sequence[str] = FALLBACK_WORDS) -> List[str]:
    """The fixed local list, cycled to exactly ``count`` tokens."""
    if not fallback:
        raise ValueError("fallback list must not be empty")
    return [fallback[i % len(fallback)] for i in range(max(0, count))]


def parse_word_payload(data: bytes, count: int) -> List[str]:
    try:
        payload = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise WordSourceError(f"Invalid word payload: {e}") from e
    if not isinstance(payload, list):
        raise WordSourceError("Word payload is not a list")
    words = [str(w).strip() for w in payload if isinstance(w, (str, int)) and str(w).strip()]
    if not words:
        raise WordSourceError("Word payload is empty")
    return words[:count]


class WordSource(QObject):
    """
    Supplies tokens for a word queue. Results are tagged with the
    generation they were requested for; callers drop stale ones.
    """

    fetched = Signal(int, list)
    failed = Signal(int, str)

    def fetch(self, count: int, generation: int):
        raise NotImplementedError


class StaticWordSource(WordSource):
    """Offline source: cycles through (or samples from) a fixed list."""

    def __init__(self, words: Sequence[str] = FALLBACK_WORDS, rng: Optional[random.Random] = None,
                 parent=None):
        super().__init__(parent)
        self._words = list(words)
        self._rng = rng
        self._pos = 0

    def fetch(self, count: int, generation: int):
        if not self._words:
            self.failed.emit(generation, "no words configured")
            return
        if self._rng is not None:
            out = [self._rng.choice(self._words) for _ in range(count)]
        else:
            out = []
            for _ in range(count):
                out.append(self._words[self._pos % len(self._words)])
                self._pos += 1
        self.fetched.emit(generation, out)


class FileWordSource(WordSource):
    """Word pack read from a one-word-per-line file."""

    def __init__(self, path, rng: Optional[random.Random] = None, parent=None):
        super().__init__(parent)
        self.path = Path(path)
        self._rng = rng or random.Random()
        self._words: Optional[List[str]] = None

    def fetch(self, count: int, generation: int):
        if self._words is None:
            try:
                self._words = load_word_list(self.path)
            except (OSError, ValueError) as e:
                self.failed.emit(generation, str(e))
                return
        self.fetched.emit(generation, [self._rng.choice(self._words) for _ in range(count)])


class NumberSource(WordSource):
    """Numeric tokens for number drills."""

    def __init__(self, min_digits: int = 1, max_digits: int = 4,
                 rng: Optional[random.Random] = None, parent=None):
        super().__init__(parent)
        if min_digits < 1 or max_digits < min_digits:
            raise ValueError("invalid digit range")
        self.min_digits = min_digits
        self.max_digits = max_digits
        self._rng = rng or random.Random()

    def _number(self) -> str:
        digits = self._rng.randint(self.min_digits, self.max_digits)
        low = 0 if digits == 1 else 10 ** (digits - 1)
        return str(self._rng.randint(low, 10 ** digits - 1))

    def fetch(self, count: int, generation: int):
        self.fetched.emit(generation, [self._number() for _ in range(count)])


class HttpWordSource(WordSource):
    """Random words from the public word API, one GET per fetch."""

    def __init__(self, url_template: str = WORD_API_URL, timeout_ms: int = 5000, parent=None):
        super().__init__(parent)
        self.url_template = url_template
        self.timeout_ms = timeout_ms
        self._nam = QNetworkAccessManager(self)

    def fetch(self, count: int, generation: int):
        url = QUrl(self.url_template.format(count=count))
        req = QNetworkRequest(url)
        req.setTransferTimeout(self.timeout_ms)
        reply = self._nam.get(req)
        reply.finished.connect(lambda: self._on_reply(reply, count, generation))

    def _on_reply(self, reply: QNetworkReply, count: int, generation: int):
        try:
            if reply.error() != QNetworkReply.NetworkError.NoError:
                self.failed.emit(generation, reply.errorString())
                return
            try:
                words = parse_word_payload(bytes(reply.readAll().data()), count)
            except WordSourceError as e:
                self.failed.emit(generation, str(e))
                return
            self.fetched.emit(generation, words)
        finally:
            reply.deleteLater()
