import json
import random
import wave

import pytest

from wordsprint.app.audio import SilentAudio, synthesize_click
from wordsprint.app.config import (
    EngineConfig, FALLBACK_WORDS, config_from_dict, load_config,
)
from wordsprint.app.errors import WordSourceError
from wordsprint.app.highscore import HighScoreStore, MemoryHighScore
from wordsprint.app.validation import parse_custom_duration
from wordsprint.services.input_differ import CompletionMode
from wordsprint.services.word_source import (
    FileWordSource, NumberSource, StaticWordSource, fallback_words, parse_word_payload,
)


def _collect(source, count=4, generation=7):
    got, failed = [], []
    source.fetched.connect(lambda g, words: got.append((g, words)))
    source.failed.connect(lambda g, reason: failed.append((g, reason)))
    source.fetch(count, generation)
    return got, failed


def test_fallback_words_cycle_to_requested_size():
    words = fallback_words(12)
    assert len(words) == 12
    assert words[:10] == list(FALLBACK_WORDS)
    assert words[10:] == ["hello", "world"]
    assert fallback_words(0) == []


def test_parse_word_payload():
    assert parse_word_payload(b'["cat", "dog", "owl"]', 2) == ["cat", "dog"]
    for bad in (b"not json", b'{"words": []}', b"[]", b"\xff"):
        with pytest.raises(WordSourceError):
            parse_word_payload(bad, 3)


def test_static_source_with_rng_samples_from_list():
    got, _ = _collect(StaticWordSource(["x", "y"], rng=random.Random(1)), count=6)
    generation, words = got[0]
    assert generation == 7
    assert len(words) == 6
    assert set(words) <= {"x", "y"}


def test_number_source_emits_digit_tokens():
    got, _ = _collect(NumberSource(2, 3, rng=random.Random(3)), count=20)
    words = got[0][1]
    assert all(w.isdigit() and 2 <= len(w) <= 3 for w in words)


def test_file_source_reads_word_pack(tmp_path):
    pack = tmp_path / "pack.txt"
    pack.write_text("# comment\nlambda\n\n  yield \n", encoding="utf-8")
    got, failed = _collect(FileWordSource(pack, rng=random.Random(0)), count=5)
    assert failed == []
    assert set(got[0][1]) <= {"lambda", "yield"}


def test_file_source_reports_missing_file(tmp_path):
    got, failed = _collect(FileWordSource(tmp_path / "missing.txt"))
    assert got == []
    assert failed and failed[0][0] == 7


def test_config_from_dict_keeps_defaults_for_bad_values():
    cfg = config_from_dict({
        "word_count": 15,
        "timer_seconds": -3,
        "completion": "exact",
        "sound_enabled": "yes",
        "inactivity_seconds": None,
        "mystery": 1,
    })
    assert cfg.word_count == 15
    assert cfg.timer_seconds == EngineConfig().timer_seconds
    assert cfg.completion is CompletionMode.EXACT
    assert cfg.sound_enabled is True
    assert cfg.inactivity_seconds is None


def test_load_config(tmp_path):
    assert load_config(tmp_path / "none.json") == EngineConfig()

    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"timer_seconds": 60, "word_count": 25}), encoding="utf-8")
    cfg = load_config(path)
    assert (cfg.timer_seconds, cfg.word_count) == (60, 25)

    path.write_text("[1, 2]", encoding="utf-8")
    assert load_config(path) == EngineConfig()


@pytest.mark.parametrize("raw,expected", [
    ("45", 45), (" 90 ", 90), (15, 15), (30.0, 30),
    ("0", None), ("-1", None), ("1.5", None), ("abc", None), (None, None), (True, None),
])
def test_parse_custom_duration(raw, expected):
    assert parse_custom_duration(raw) == expected


def test_high_score_store_round_trip(tmp_path):
    store = HighScoreStore(str(tmp_path / "data" / "scores.db"))
    assert store.get() == 0
    store.set(42)
    store.set(57)
    assert store.get() == 57


def test_high_score_store_swallows_storage_errors(tmp_path):
    # a directory cannot be opened as a database
    store = HighScoreStore(str(tmp_path))
    assert store.get() == 0
    store.set(10)


def test_memory_high_score():
    scores = MemoryHighScore(3)
    scores.set(9)
    assert scores.get() == 9


def test_synthesized_click_is_valid_wav(tmp_path):
    path = synthesize_click(tmp_path / "sfx" / "correct.wav", 900.0, 0.05)
    with wave.open(str(path), "rb") as w:
        assert w.getnchannels() == 1
        assert w.getsampwidth() == 2
        assert w.getnframes() == int(22050 * 0.05)


def test_silent_audio_is_a_noop():
    audio = SilentAudio()
    audio.play("streak")
    assert audio.enabled
