# ui/session_summary.py
from __future__ import annotations
from PySide6.QtWidgets import QDialog, QVBoxLayout, QLabel, QPushButton
import pyqtgraph as pg

from wordsprint.app.state import SessionResult
from wordsprint.utils.graph_helper import setup_wpm_plot, update_curve


class SessionSummary(QDialog):
    """
    Time's-up view: final numbers plus WPM sampled once per countdown second.
    """

    def __init__(self, result: SessionResult, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Time's up!")
        self.resize(640, 400)

        root = QVBoxLayout(self)
        root.addWidget(QLabel(f"Typing speed: {result.wpm} WPM"))
        root.addWidget(QLabel(f"Accuracy: {result.accuracy}%"))
        root.addWidget(QLabel(f"Mistakes: {result.mistakes}"))
        root.addWidget(QLabel(f"Best streak: {result.max_streak}"))
        best = f"High score: {result.high_score} WPM"
        if result.new_high_score:
            best += "  (new!)"
        root.addWidget(QLabel(best))

        if result.times:
            plot = pg.PlotWidget()
            curve = setup_wpm_plot(plot, "#10b981")
            update_curve(curve, result.times, result.wpms)
            root.addWidget(plot, stretch=1)

        btn = QPushButton("OK", self)
        btn.clicked.connect(self.accept)
        root.addWidget(btn)
