# services/session.py
from __future__ import annotations

import logging
import time
from collections import deque
from typing import Optional

from PySide6.QtCore import QObject, Signal

from wordsprint.app.audio import SilentAudio
from wordsprint.app.config import EngineConfig
from wordsprint.app.highscore import MemoryHighScore
from wordsprint.app.state import Session, SessionResult, SessionState, Snapshot
from wordsprint.app.validation import parse_custom_duration, parse_word_count
from wordsprint.core.chrono import CountdownTimer
from wordsprint.services.input_differ import InputDiffer, TypedRecord
from wordsprint.services.metrics import Metrics, MetricsAggregator
from wordsprint.services.word_queue import WordQueue
from wordsprint.services.word_source import WordSource

log = logging.getLogger(__name__)

# completed words kept in a snapshot, enough for the view to show a few
COMPLETED_IN_VIEW = 3


class SessionController(QObject):
    """
    Idle -> Active -> Finished state machine for one typing test.

    The controller is the only writer of session, queue and metrics state.
    Collaborators feed it input (keystrokes, words, timer ticks) and read
    ``snapshot()`` back.
    """

    changed = Signal()
    finished = Signal(object)  # SessionResult

    def __init__(self, source: WordSource, config: Optional[EngineConfig] = None,
                 audio=None, high_scores=None, clock=time.monotonic, parent=None):
        super().__init__(parent)
        self.config = config.copy() if config else EngineConfig()
        self.audio = audio if audio is not None else SilentAudio()
        self.audio.enabled = self.config.sound_enabled
        self.high_scores = high_scores if high_scores is not None else MemoryHighScore()
        self._clock = clock

        self.timer = CountdownTimer(
            self.config.timer_seconds,
            poll_ms=self.config.poll_interval_ms,
            inactivity_seconds=self.config.inactivity_seconds,
            clock=clock,
            parent=self,
        )
        self.timer.ticked.connect(self._on_tick)
        self.timer.expired.connect(self._on_expired)

        self.queue = WordQueue(source, self.config.word_count, parent=self)
        self.queue.changed.connect(self._on_queue_changed)
        self._handling = False

        self._history_t = deque(maxlen=self.config.history_size)
        self._history_wpm = deque(maxlen=self.config.history_size)
        self._reinitialize(refill=True)

    # ---------------- read side ----------------
    @property
    def state(self) -> SessionState:
        return self.session.state

    @property
    def metrics(self) -> Metrics:
        return self._metrics.snapshot()

    def snapshot(self) -> Snapshot:
        first = max(0, self.queue.cursor - COMPLETED_IN_VIEW)
        return Snapshot(
            words=tuple(self.queue.tokens[first:]),
            first_index=first,
            cursor=self.queue.cursor,
            input_buffer=self.differ.buffer,
            typed_record=self.record.as_dict(start=first),
            timer_remaining=self.session.timer_remaining_seconds,
            metrics=self._metrics.snapshot(),
            state=self.session.state,
            config=self.config.copy(),
            loading=self.queue.is_empty(),
            sound_enabled=self.audio.enabled,
        )

    # ---------------- control events ----------------
    def keystroke(self, raw_value: str):
        self._handling = True
        try:
            cues = self._apply_keystroke(raw_value)
        finally:
            self._handling = False
        if cues is None:
            return
        self._play(cues)
        self.changed.emit()

    def _apply_keystroke(self, raw_value: str):
        """Apply one input value; returns the audio cues due, or None when ignored."""
        if self.session.state is SessionState.FINISHED:
            return None
        if self.queue.is_empty():
            log.debug("Ignoring input while the first words load")
            return None

        if self.session.state is SessionState.ACTIVE:
            # settles a lapsed inactivity window first, which can end the session
            self.timer.note_input()
            if self.session.state is SessionState.FINISHED:
                return []

        word_index = self.queue.cursor
        result = self.differ.diff(raw_value, self.queue.current_token(), word_index)

        if result.events and self.session.state is SessionState.IDLE:
            self._activate()

        cues = []
        for ev in result.events:
            self.record.mark(ev)
            m = self._metrics.record(ev.correct)
            if not ev.correct:
                cues.append("error")
            elif m.streak % self.config.streak_milestone == 0:
                cues.append("streak")
            else:
                cues.append("correct")
        if result.deleted:
            cues.append("normal")

        if result.completed is not None:
            self.record.seal(word_index)
            self.queue.advance()

        self._refresh_metrics()
        return cues

    def _play(self, cues):
        for kind in cues:
            try:
                self.audio.play(kind)
            except Exception:
                log.exception("Audio cue %r failed", kind)

    def reset(self):
        self._reinitialize(refill=True)
        self.changed.emit()

    def set_word_count(self, count) -> bool:
        if self.session.state is SessionState.ACTIVE:
            log.debug("Word count change ignored during an active session")
            return False
        count = parse_word_count(count)
        if count is None:
            return False
        self.config.word_count = count
        self.reset()
        return True

    def set_timer_duration(self, seconds) -> bool:
        if self.session.state is SessionState.ACTIVE:
            log.debug("Timer change ignored during an active session")
            return False
        seconds = parse_custom_duration(seconds)
        if seconds is None:
            return False
        self.config.timer_seconds = seconds
        # an untouched idle session keeps its words
        self._reinitialize(refill=self.session.state is SessionState.FINISHED)
        self.changed.emit()
        return True

    def submit_custom_duration(self, raw) -> bool:
        if parse_custom_duration(raw) is None:
            return False
        return self.set_timer_duration(raw)

    def toggle_sound(self) -> bool:
        self.audio.enabled = not self.audio.enabled
        self.config.sound_enabled = self.audio.enabled
        self.changed.emit()
        return self.audio.enabled

    def teardown(self):
        self.timer.teardown()
        self.queue.close()

    # ---------------- transitions ----------------
    def _reinitialize(self, refill: bool):
        self.session = Session.armed(self.config.timer_seconds)
        self.timer.reset()
        self.timer.configure(self.config.timer_seconds)
        self._metrics = MetricsAggregator()
        self.record = TypedRecord()
        self.differ = InputDiffer(self.config.completion, self.config.separator)
        self._history_t.clear()
        self._history_wpm.clear()
        if refill:
            self._handling = True
            try:
                self.queue.repopulate(self.config.word_count)
            finally:
                self._handling = False

    def _activate(self):
        if self.session.timer_remaining_seconds <= 0:
            return
        self.session.state = SessionState.ACTIVE
        self.session.start(self._clock())
        self.timer.start()
        log.info("Session started (%ss, %d words)", self.session.timer_config_seconds,
                 self.config.word_count)

    def _finish(self):
        self.session.timer_remaining_seconds = 0
        self._refresh_metrics()
        self._metrics.freeze()
        self.session.state = SessionState.FINISHED

        m = self._metrics.metrics
        best = self.high_scores.get()
        new_best = m.wpm > best
        if new_best:
            self.high_scores.set(m.wpm)
            best = m.wpm
        log.info("Session finished: %d WPM, %d%% accuracy, %d mistakes",
                 m.wpm, m.accuracy, m.mistakes)

        result = SessionResult(
            wpm=m.wpm,
            accuracy=m.accuracy,
            mistakes=m.mistakes,
            max_streak=m.max_streak,
            total_chars=m.total_chars,
            duration_seconds=self.session.timer_config_seconds,
            high_score=best,
            new_high_score=new_best,
            times=tuple(self._history_t),
            wpms=tuple(self._history_wpm),
        )
        self._publish()
        self.finished.emit(result)

    def _refresh_metrics(self):
        if self.session.state is not SessionState.ACTIVE:
            return
        self._metrics.recompute(self.session.elapsed(self._clock()))

    # ---------------- collaborator slots ----------------
    def _publish(self):
        # changes made inside a handler are published once, by the handler
        if not self._handling:
            self.changed.emit()

    def _on_queue_changed(self):
        self._publish()

    def _on_tick(self, remaining: int):
        if self.session.state is not SessionState.ACTIVE:
            return
        self.session.timer_remaining_seconds = remaining
        if remaining > 0:
            self._refresh_metrics()
            self._history_t.append(self.session.elapsed(self._clock()))
            self._history_wpm.append(float(self._metrics.metrics.wpm))
            self._publish()

    def _on_expired(self):
        if self.session.state is not SessionState.ACTIVE:
            return
        self._finish()
