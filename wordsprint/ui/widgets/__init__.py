"""
Reusable widgets for wordsprint UI.
"""

from .word_strip import WordStrip

__all__ = [
    "WordStrip",
]
