# app/config.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

from wordsprint.services.input_differ import CompletionMode

log = logging.getLogger(__name__)

WORD_COUNT_CHOICES = (5, 10, 15, 20, 25)
TIMER_CHOICES = (15, 30, 60, 120)

FALLBACK_WORDS = (
    "hello",
    "world",
    "react",
    "typing",
    "practice",
    "speed",
    "test",
    "keyboard",
    "developer",
    "javascript",
)

WORD_API_URL = "https://random-word-api.vercel.app/api?words={count}"
DEFAULT_CONFIG_FILE = Path("settings.json")


@dataclass
class EngineConfig:
    word_count: int = 10
    timer_seconds: int = 30
    completion: CompletionMode = CompletionMode.DELIMITER
    separator: str = " "
    inactivity_seconds: Optional[float] = 2.0
    poll_interval_ms: int = 100
    sound_enabled: bool = True
    streak_milestone: int = 10
    word_api_url: str = WORD_API_URL
    request_timeout_ms: int = 5000
    high_score_db: str = "data/highscore.db"
    history_size: int = 3600

    def copy(self, **changes) -> "EngineConfig":
        return replace(self, **changes)


def _coerce(name: str, value: Any, default: Any) -> Any:
    if name == "completion":
        return CompletionMode(value)
    if name == "inactivity_seconds":
        if value is None:
            return None
        value = float(value)
        if value <= 0:
            raise ValueError("inactivity window must be positive")
        return value
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise ValueError("expected true/false")
        return value
    if isinstance(default, int):
        if isinstance(value, bool) or int(value) != value or int(value) <= 0:
            raise ValueError("expected a positive integer")
        return int(value)
    if isinstance(default, str):
        if not isinstance(value, str) or not value:
            raise ValueError("expected a non-empty string")
        return value
    return value


def config_from_dict(data: Dict[str, Any], base: Optional[EngineConfig] = None) -> EngineConfig:
    """Build a config from a settings mapping. Bad entries keep their defaults."""
    cfg = base.copy() if base else EngineConfig()
    known = {f.name for f in fields(EngineConfig)}
    for key, value in data.items():
        if key not in known:
            log.debug("Ignoring unknown setting %r", key)
            continue
        try:
            setattr(cfg, key, _coerce(key, value, getattr(cfg, key)))
        except (TypeError, ValueError) as e:
            log.warning("Invalid value for %s (%r): %s", key, value, e)
    return cfg


def load_config(path: Union[str, Path, None] = None) -> EngineConfig:
    """Load settings.json (if present) on top of the defaults."""
    p = Path(path) if path else DEFAULT_CONFIG_FILE
    if not p.exists():
        return EngineConfig()
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log.warning("Failed to read settings from %s: %s", p, e)
        return EngineConfig()
    if not isinstance(data, dict):
        log.warning("Settings file %s must contain a JSON object", p)
        return EngineConfig()
    return config_from_dict(data)
