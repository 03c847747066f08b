# core/chrono.py
import logging
import time
from enum import Enum

from PySide6.QtCore import QObject, QTimer, Signal

log = logging.getLogger(__name__)


class TimerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    EXPIRED = "expired"


class CountdownTimer(QObject):
    """
    Whole-second countdown polled every ``poll_ms``.

    Each poll charges the wall-clock seconds elapsed since the last charged
    second, so a late or skipped poll never loses or gains time. With an
    inactivity window set, the countdown pauses once no input has been seen
    for that long and resumes on the next ``note_input()``. Time past the
    end of that window is never charged, however late the poll or the
    input that notices it.
    """

    ticked = Signal(int)  # remaining seconds
    started = Signal()
    paused = Signal()
    resumed = Signal()
    expired = Signal()

    def __init__(self, seconds: int, poll_ms: int = 100, inactivity_seconds=2.0,
                 clock=time.monotonic, parent=None):
        super().__init__(parent)
        if seconds <= 0:
            raise ValueError("countdown needs a positive duration")
        self._clock = clock
        self._configured = int(seconds)
        self._remaining = int(seconds)
        self._inactivity = inactivity_seconds
        self._state = TimerState.IDLE
        self._last_tick = 0.0
        self._last_input = 0.0

        self._poll = QTimer(self)
        self._poll.setInterval(poll_ms)
        self._poll.timeout.connect(self.poll)

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def configured(self) -> int:
        return self._configured

    @property
    def is_polling(self) -> bool:
        return self._poll.isActive()

    def configure(self, seconds) -> bool:
        if self._state in (TimerState.RUNNING, TimerState.PAUSED):
            return False
        if isinstance(seconds, bool) or not isinstance(seconds, int) or seconds <= 0:
            return False
        self._configured = seconds
        self._remaining = seconds
        self._state = TimerState.IDLE
        self.ticked.emit(self._remaining)
        return True

    def start(self):
        if self._state is not TimerState.IDLE:
            return
        now = self._clock()
        self._last_tick = now
        self._last_input = now
        self._state = TimerState.RUNNING
        self._poll.start()
        self.started.emit()

    def note_input(self):
        now = self._clock()
        if self._state is TimerState.RUNNING:
            # a window that lapsed before any poll noticed still pauses here
            self._settle(now)
        self._last_input = now
        if self._state is TimerState.PAUSED:
            # paused wall-clock time is never charged
            self._last_tick = now
            self._state = TimerState.RUNNING
            self.resumed.emit()

    def poll(self):
        if self._state is not TimerState.RUNNING:
            return
        self._settle(self._clock())

    def _settle(self, now: float):
        """Charge the whole seconds due by ``now``, then pause if the input window has lapsed."""
        horizon = now
        lapsed = False
        if self._inactivity is not None and now - self._last_input >= self._inactivity:
            # nothing past the end of the window is charged
            horizon = self._last_input + self._inactivity
            lapsed = True
        whole = int(horizon - self._last_tick)
        if whole >= 1:
            self._last_tick += whole
            self._remaining = max(0, self._remaining - whole)
            self.ticked.emit(self._remaining)
            if self._remaining == 0:
                self._expire()
                return
        if lapsed:
            self._state = TimerState.PAUSED
            log.debug("Countdown paused at %ss after %.1fs without input",
                      self._remaining, now - self._last_input)
            self.paused.emit()

    def _expire(self):
        self._poll.stop()
        self._state = TimerState.EXPIRED
        self.expired.emit()

    def reset(self):
        self._poll.stop()
        self._remaining = self._configured
        self._state = TimerState.IDLE

    def teardown(self):
        self._poll.stop()
        self._state = TimerState.IDLE
