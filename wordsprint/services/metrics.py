# services/metrics.py
from dataclasses import dataclass, replace

from wordsprint.app.calculation import compute_accuracy, compute_wpm


@dataclass
class Metrics:
    total_chars: int = 0
    correct_chars: int = 0
    mistakes: int = 0
    streak: int = 0
    max_streak: int = 0
    wpm: int = 0
    accuracy: int = 100


class MetricsAggregator:
    def __init__(self):
        self.metrics = Metrics()
        self.frozen = False

    def record(self, correct: bool) -> Metrics:
        if self.frozen:
            return self.metrics
        m = self.metrics
        m.total_chars += 1
        if correct:
            m.correct_chars += 1
            m.streak += 1
            m.max_streak = max(m.max_streak, m.streak)
        else:
            m.mistakes += 1
            m.streak = 0
        return m

    def recompute(self, elapsed_seconds: float) -> bool:
        # WPM = (total_chars / 5) / (elapsed minutes), mistakes included
        if self.frozen or self.metrics.total_chars <= 0 or elapsed_seconds <= 0:
            return False
        m = self.metrics
        m.wpm = compute_wpm(m.total_chars, elapsed_seconds)
        m.accuracy = compute_accuracy(m.correct_chars, m.total_chars)
        return True

    def freeze(self):
        self.frozen = True

    def snapshot(self) -> Metrics:
        return replace(self.metrics)
