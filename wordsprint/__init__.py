"""wordsprint: timed typing practice with a drift-corrected countdown."""

__version__ = "0.3.0"
