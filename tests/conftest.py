import pytest
from PySide6.QtCore import QCoreApplication

from wordsprint.services.word_source import WordSource


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


class FakeClock:
    def __init__(self, start: float = 100.0):
        self.t = start

    def __call__(self) -> float:
        return self.t

    def advance(self, seconds: float):
        self.t += seconds


class DeferredSource(WordSource):
    """Holds fetches until the test resolves them, like a slow network."""

    def __init__(self):
        super().__init__()
        self.requests = []

    def fetch(self, count, generation):
        self.requests.append((count, generation))

    def resolve(self, index, words):
        self.fetched.emit(self.requests[index][1], list(words))

    def fail(self, index, reason="offline"):
        self.failed.emit(self.requests[index][1], reason)


class FailingSource(WordSource):
    def __init__(self):
        super().__init__()
        self.calls = 0

    def fetch(self, count, generation):
        self.calls += 1
        self.failed.emit(generation, "HTTP 503")


class RecordingAudio:
    def __init__(self):
        self.enabled = True
        self.played = []

    def play(self, kind):
        self.played.append(kind)


@pytest.fixture
def clock():
    return FakeClock()
