import os
from pathlib import Path
from typing import List, Union

SFX_DIR = Path("assets/sfx")
DATA_DIR = Path("data")


def ensure_app_files():
    # Data dir for the high score db, sfx dir for the synthesised clicks
    os.makedirs(DATA_DIR, exist_ok=True)
    os.makedirs(SFX_DIR, exist_ok=True)


def load_word_list(path: Union[str, Path]) -> List[str]:
    """One token per line; blank lines and surrounding whitespace are dropped."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Missing word list {p}")
    words: List[str] = []
    for line in p.read_text(encoding="utf-8").splitlines():
        cleaned = line.strip()
        if cleaned and not cleaned.startswith("#"):
            words.append(cleaned)
    if not words:
        raise ValueError(f"Word list {p} is empty")
    return words
