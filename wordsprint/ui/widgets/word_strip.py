# ui/widgets/word_strip.py
from __future__ import annotations
from html import escape

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QSizePolicy

from wordsprint.app.state import Snapshot

COLORS = {
    "ok": "#059669",
    "err": "#ef4444",
    "active": "#2563eb",
    "mut": "#9ca3af",
    "caret": "#1e40af",
}


def _span(txt: str, color: str, underline: bool = False, bg: str | None = None) -> str:
    style_bits = [f"color:{color}"]
    if underline:
        style_bits.append("text-decoration:underline")
    if bg:
        style_bits.append(f"background:{bg}")
    return f'<span style="{";".join(style_bits)}">{escape(txt)}</span>'


def render_words(snap: Snapshot, max_words: int | None = None) -> str:
    """Rich-text line for the visible words, coloured from the typed record."""
    parts: list[str] = []
    end = snap.first_index + len(snap.words)
    last = end if max_words is None else min(end, snap.cursor + max_words)
    caret = len(snap.input_buffer)
    for idx in range(snap.first_index, last):
        word = snap.words[idx - snap.first_index]
        flags = snap.typed_record.get(idx, ())
        letters = []
        for pos, ch in enumerate(word):
            if idx < snap.cursor:
                ok = pos < len(flags) and flags[pos]
                letters.append(_span(ch, COLORS["ok"] if ok else COLORS["err"]))
            elif idx == snap.cursor and pos < caret:
                bad = pos < len(flags) and flags[pos] is False
                letters.append(_span(ch, COLORS["err"] if bad else COLORS["active"]))
            elif idx == snap.cursor and pos == caret:
                letters.append(_span(ch, COLORS["caret"], underline=True))
            else:
                letters.append(_span(ch, COLORS["mut"]))
        parts.append("".join(letters))
    return "&nbsp; ".join(parts)


class WordStrip(QLabel):
    def __init__(self, parent=None, max_words: int = 40):
        super().__init__(parent)
        self.max_words = max_words
        self.setObjectName("lblWords")
        self.setTextFormat(Qt.RichText)
        self.setWordWrap(True)
        self.setAlignment(Qt.AlignCenter)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setMinimumHeight(120)
        self.setStyleSheet("font-family: monospace; font-size: 28px;")

    def show_snapshot(self, snap: Snapshot):
        if snap.loading:
            self.setText(_span("Loading words…", COLORS["mut"]))
            return
        self.setText(render_words(snap, self.max_words))
