from conftest import DeferredSource, FailingSource

from wordsprint.app.config import FALLBACK_WORDS
from wordsprint.services.word_queue import WordQueue
from wordsprint.services.word_source import StaticWordSource


def test_repopulate_fills_to_word_count():
    queue = WordQueue(StaticWordSource(["a", "b", "c"]), 5)
    queue.repopulate()
    assert queue.tokens == ["a", "b", "c", "a", "b"]
    assert queue.current_token() == "a"
    assert not queue.is_loading


def test_advance_tops_up_the_window():
    queue = WordQueue(StaticWordSource(["a", "b", "c"]), 3)
    queue.repopulate()
    assert queue.advance() == "a"
    assert queue.cursor == 1
    assert queue.remaining == 3
    assert queue.visible() == ["b", "c", "a"]


def test_failed_source_uses_fallback_words():
    source = FailingSource()
    queue = WordQueue(source, 5)
    queue.repopulate()
    assert len(queue.tokens) == 5
    assert all(w in FALLBACK_WORDS for w in queue.tokens)
    assert queue.tokens == list(FALLBACK_WORDS[:5])


def test_empty_queue_returns_sentinel():
    queue = WordQueue(DeferredSource(), 3)
    queue.repopulate()
    assert queue.is_loading
    assert queue.is_empty()
    assert queue.current_token() == ""


def test_stale_batch_is_ignored():
    source = DeferredSource()
    queue = WordQueue(source, 2)
    queue.repopulate()
    queue.repopulate()
    source.resolve(0, ["old", "batch"])
    assert queue.tokens == []
    source.resolve(1, ["new", "batch"])
    assert queue.tokens == ["new", "batch"]


def test_stale_failure_is_ignored():
    source = DeferredSource()
    queue = WordQueue(source, 2)
    queue.repopulate()
    queue.repopulate()
    source.fail(0)
    assert queue.tokens == []
    assert queue.is_loading


def test_only_one_fetch_in_flight():
    source = DeferredSource()
    queue = WordQueue(source, 3)
    queue.repopulate()
    source.resolve(0, ["a", "b", "c"])
    queue.advance()
    queue.advance()
    assert len(source.requests) == 2
    assert source.requests[1] == (1, queue.generation)


def test_dry_window_keeps_a_token_while_fetching():
    source = DeferredSource()
    queue = WordQueue(source, 1)
    queue.repopulate()
    source.resolve(0, ["first"])
    queue.advance()
    assert queue.is_loading
    assert queue.current_token() in FALLBACK_WORDS
    source.resolve(1, ["second"])
    assert queue.visible()[-1] == "second"


def test_close_drops_late_results():
    source = DeferredSource()
    queue = WordQueue(source, 2)
    queue.repopulate()
    queue.close()
    source.resolve(0, ["late", "words"])
    assert queue.tokens == []
