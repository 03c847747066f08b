import pytest

from wordsprint.main import build_parser, config_from_args
from wordsprint.services.input_differ import CompletionMode


def _config(tmp_path, *argv):
    parser = build_parser()
    args = parser.parse_args(["--config", str(tmp_path / "none.json"), *argv])
    return config_from_args(parser, args)


def test_cli_overrides_settings(tmp_path):
    config = _config(tmp_path, "--words", "25", "--time", "45", "--mode", "exact", "--no-sound")
    assert config.word_count == 25
    assert config.timer_seconds == 45
    assert config.completion is CompletionMode.EXACT
    assert not config.sound_enabled


def test_cli_defaults_when_flags_absent(tmp_path):
    config = _config(tmp_path)
    assert config.word_count == 10
    assert config.timer_seconds == 30


@pytest.mark.parametrize("flag,value", [
    ("--words", "-3"),
    ("--words", "0"),
    ("--time", "-5"),
    ("--time", "0"),
])
def test_cli_rejects_non_positive_values(tmp_path, capsys, flag, value):
    with pytest.raises(SystemExit) as exc:
        _config(tmp_path, flag, value)
    assert exc.value.code == 2
    assert "must be a positive integer" in capsys.readouterr().err
