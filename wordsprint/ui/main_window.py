# ui/main_window.py
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QLineEdit, QPushButton
)
from PySide6.QtCore import Qt, Slot

from wordsprint.app.config import TIMER_CHOICES, WORD_COUNT_CHOICES
from wordsprint.app.state import SessionResult, SessionState
from wordsprint.services.session import SessionController
from wordsprint.ui.session_summary import SessionSummary
from wordsprint.ui.widgets import WordStrip


class MainWindow(QMainWindow):
    def __init__(self, controller: SessionController):
        super().__init__()
        self.setWindowTitle("Typing Practice")
        self.resize(1000, 560)
        self.controller = controller

        root = QWidget(self)
        root_v = QVBoxLayout(root)
        root_v.setContentsMargins(16, 24, 16, 16)
        root_v.setSpacing(18)
        self._build_top_bar(root_v)

        stats = QHBoxLayout()
        stats.setSpacing(40)
        self.lblTimer = QLabel("", self)
        self.lblWPM = QLabel("", self)
        self.lblAcc = QLabel("", self)
        self.lblMistakes = QLabel("", self)
        self.lblStreak = QLabel("", self)
        for lab in (self.lblTimer, self.lblWPM, self.lblAcc, self.lblMistakes, self.lblStreak):
            lab.setAlignment(Qt.AlignCenter)
            stats.addWidget(lab)
        root_v.addLayout(stats)

        self.words = WordStrip(self)
        root_v.addWidget(self.words, 1)

        self.input = QLineEdit(self)
        self.input.setPlaceholderText("Type here...")
        self.input.setAlignment(Qt.AlignCenter)
        self.input.setStyleSheet("font-size: 26px; padding: 10px;")
        self.input.textEdited.connect(self.controller.keystroke)
        root_v.addWidget(self.input)

        row = QHBoxLayout()
        self.btnReset = QPushButton("Reset", self)
        self.btnReset.clicked.connect(self._on_reset)
        self.btnSound = QPushButton("", self)
        self.btnSound.clicked.connect(self.controller.toggle_sound)
        row.addStretch(1)
        row.addWidget(self.btnReset)
        row.addWidget(self.btnSound)
        row.addStretch(1)
        root_v.addLayout(row)

        self.setCentralWidget(root)

        self.controller.changed.connect(self.refresh)
        self.controller.finished.connect(self._on_finished)
        self.refresh()
        self.input.setFocus()

    # ---------------- Top Bar ----------------
    def _build_top_bar(self, parent_layout):
        bar = QWidget(self)
        bar.setObjectName("TopBar")
        h = QHBoxLayout(bar)
        h.setContentsMargins(14, 10, 14, 10)
        h.setSpacing(8)

        self._config_widgets = []
        h.addWidget(QLabel("Words:", bar))
        for count in WORD_COUNT_CHOICES:
            btn = QPushButton(str(count), bar)
            btn.setFocusPolicy(Qt.NoFocus)
            btn.clicked.connect(lambda _, n=count: self.controller.set_word_count(n))
            h.addWidget(btn)
            self._config_widgets.append(btn)

        h.addSpacing(16)
        h.addWidget(QLabel("Time:", bar))
        for secs in TIMER_CHOICES:
            btn = QPushButton(f"{secs}s", bar)
            btn.setFocusPolicy(Qt.NoFocus)
            btn.clicked.connect(lambda _, s=secs: self._set_time(s))
            h.addWidget(btn)
            self._config_widgets.append(btn)

        self.customTime = QLineEdit(bar)
        self.customTime.setPlaceholderText("Custom")
        self.customTime.setFixedWidth(70)
        self.customTime.returnPressed.connect(self._on_custom_time)
        btn_set = QPushButton("Set", bar)
        btn_set.setFocusPolicy(Qt.NoFocus)
        btn_set.clicked.connect(self._on_custom_time)
        h.addWidget(self.customTime)
        h.addWidget(btn_set)
        self._config_widgets.extend([self.customTime, btn_set])

        h.addStretch(1)
        parent_layout.addWidget(bar)

    # ---------------- Controls ----------------
    def _set_time(self, seconds):
        if self.controller.set_timer_duration(seconds):
            self.input.setFocus()

    def _on_custom_time(self):
        if self.controller.submit_custom_duration(self.customTime.text()):
            self.customTime.clear()
            self.input.setFocus()

    def _on_reset(self):
        self.controller.reset()
        self.input.setFocus()

    # ---------------- Rendering ----------------
    @Slot()
    def refresh(self):
        snap = self.controller.snapshot()
        m = snap.metrics
        finished = snap.state is SessionState.FINISHED

        self.lblTimer.setText("Time Up!" if finished else f"Time: {snap.timer_remaining}s")
        self.lblWPM.setText(f"{m.wpm} WPM")
        self.lblAcc.setText(f"{m.accuracy}%")
        self.lblMistakes.setText(f"{m.mistakes} mistakes")
        self.lblStreak.setText(f"streak {m.streak} / {m.max_streak}")
        self.btnSound.setText(f"Sound: {'ON' if snap.sound_enabled else 'OFF'}")
        self.words.show_snapshot(snap)

        if self.input.text() != snap.input_buffer:
            self.input.setText(snap.input_buffer)
        self.input.setEnabled(not finished and not snap.loading)
        for w in self._config_widgets:
            w.setEnabled(snap.state is not SessionState.ACTIVE)

    @Slot(object)
    def _on_finished(self, result: SessionResult):
        self.setWindowTitle(f"Typing Practice - {result.wpm} WPM")
        dlg = SessionSummary(result, self)
        dlg.open()

    def closeEvent(self, ev):
        self.controller.teardown()
        super().closeEvent(ev)
