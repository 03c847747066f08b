from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from wordsprint.app.config import EngineConfig
from wordsprint.services.metrics import Metrics


class SessionState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    FINISHED = "finished"


@dataclass
class Session:
    state: SessionState = SessionState.IDLE
    start_timestamp: Optional[float] = None
    timer_config_seconds: int = 30
    timer_remaining_seconds: int = 30

    @classmethod
    def armed(cls, seconds: int) -> "Session":
        return cls(timer_config_seconds=seconds, timer_remaining_seconds=seconds)

    def start(self, now: float):
        if self.start_timestamp is None:
            self.start_timestamp = now

    def elapsed(self, now: float) -> float:
        if self.start_timestamp is None:
            return 0.0
        return max(0.0, now - self.start_timestamp)


@dataclass(frozen=True)
class Snapshot:
    """
    Read-only view handed to the presentation layer. ``words`` starts at
    the absolute index ``first_index``; ``cursor`` and the ``typed_record``
    keys are absolute too.
    """
    words: Tuple[str, ...]
    first_index: int
    cursor: int
    input_buffer: str
    typed_record: Dict[int, Tuple[bool, ...]]
    timer_remaining: int
    metrics: Metrics
    state: SessionState
    config: EngineConfig
    loading: bool = False
    sound_enabled: bool = True


@dataclass(frozen=True)
class SessionResult:
    wpm: int
    accuracy: int
    mistakes: int
    max_streak: int
    total_chars: int
    duration_seconds: int
    high_score: int
    new_high_score: bool
    times: Tuple[float, ...] = field(default_factory=tuple)
    wpms: Tuple[float, ...] = field(default_factory=tuple)
