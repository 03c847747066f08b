# main.py
from __future__ import annotations
import argparse
import logging
import random
import sys

from PySide6.QtWidgets import QApplication, QMessageBox

from wordsprint.app.audio import SoundEffectAudio
from wordsprint.app.config import load_config
from wordsprint.app.highscore import HighScoreStore
from wordsprint.app.validation import parse_custom_duration, parse_word_count
from wordsprint.services.input_differ import CompletionMode
from wordsprint.services.session import SessionController
from wordsprint.services.word_source import (
    FileWordSource, HttpWordSource, NumberSource, StaticWordSource,
)
from wordsprint.ui.main_window import MainWindow
from wordsprint.utils.file_handler import ensure_app_files


def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler("app.log", encoding="utf-8"),
        ],
    )

    # Log any uncaught exceptions rather than silently dying
    def excepthook(exctype, value, tb):
        logging.critical("Unhandled exception", exc_info=(exctype, value, tb))
        try:
            QMessageBox.critical(
                None, "Application Error", f"{exctype.__name__}: {value}"
            )
        except RuntimeError:
            pass
        sys.exit(1)

    sys.excepthook = excepthook


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wordsprint",
        description="Timed typing practice.",
    )
    parser.add_argument("--config", default=None, help="Path to a JSON settings file.")
    parser.add_argument("--words", type=int, default=None, help="Visible word count.")
    parser.add_argument("--time", type=int, default=None, help="Countdown length in seconds.")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in CompletionMode],
        default=None,
        help="delimiter: space commits a word; exact: a word commits once typed exactly.",
    )
    parser.add_argument(
        "--source",
        choices=["web", "fallback", "numbers", "file"],
        default="web",
        help="Where target tokens come from.",
    )
    parser.add_argument("--words-file", default=None, help="Word list for --source file.")
    parser.add_argument("--no-sound", action="store_true", help="Start with sound off.")
    parser.add_argument("--seed", type=int, default=None, help="Optional RNG seed.")
    parser.add_argument("--debug", action="store_true", help="Verbose logging.")
    return parser


def make_source(args, config):
    rng = random.Random(args.seed)
    if args.source == "fallback":
        return StaticWordSource(rng=rng)
    if args.source == "numbers":
        return NumberSource(rng=rng)
    if args.source == "file":
        if not args.words_file:
            raise SystemExit("--source file needs --words-file")
        return FileWordSource(args.words_file, rng=rng)
    return HttpWordSource(config.word_api_url, timeout_ms=config.request_timeout_ms)


def config_from_args(parser, args):
    config = load_config(args.config)
    if args.words is not None:
        config.word_count = parse_word_count(args.words)
        if config.word_count is None:
            parser.error(f"--words must be a positive integer, got {args.words}")
    if args.time is not None:
        config.timer_seconds = parse_custom_duration(args.time)
        if config.timer_seconds is None:
            parser.error(f"--time must be a positive integer, got {args.time}")
    if args.mode:
        config.completion = CompletionMode(args.mode)
    if args.no_sound:
        config.sound_enabled = False
    return config


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.debug else logging.INFO)
    config = config_from_args(parser, args)

    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setApplicationName("wordsprint")

    ensure_app_files()
    controller = SessionController(
        make_source(args, config),
        config=config,
        audio=SoundEffectAudio(),
        high_scores=HighScoreStore(config.high_score_db),
    )
    win = MainWindow(controller)
    win.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
