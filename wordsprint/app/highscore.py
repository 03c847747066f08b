import logging

from wordsprint.app.errors import DatabaseError
from wordsprint.utils.db_helper import DB_PATH, read_high_score, write_high_score

log = logging.getLogger(__name__)


class MemoryHighScore:
    def __init__(self, value: int = 0):
        self.value = value

    def get(self) -> int:
        return self.value

    def set(self, value: int):
        self.value = int(value)


class HighScoreStore:
    """Best WPM in sqlite. Storage problems are logged, never raised."""

    def __init__(self, path: str = DB_PATH):
        self.path = path

    def get(self) -> int:
        try:
            return read_high_score(self.path)
        except DatabaseError as e:
            log.warning("Could not read high score: %s", e)
            return 0

    def set(self, value: int):
        try:
            write_high_score(value, self.path)
        except DatabaseError as e:
            log.warning("Could not save high score %s: %s", value, e)
