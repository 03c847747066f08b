import pytest

from wordsprint.services.input_differ import (
    CharEvent, CompletionMode, InputDiffer, TypedRecord,
)


def _type(differ, values, target, word_index=0):
    results = [differ.diff(v, target, word_index) for v in values]
    events = [ev for r in results for ev in r.events]
    return results, events


def test_mistyped_letter_then_space_commits_word():
    differ = InputDiffer(CompletionMode.DELIMITER)
    results, events = _type(differ, ["h", "hx", "hxl", "hxll", "hxllo", "hxllo "], "hello")

    assert [e.correct for e in events] == [True, False, True, True, True]
    assert [e.char_index for e in events] == [0, 1, 2, 3, 4]
    assert results[-1].completed == "hxllo"
    assert results[-1].buffer == ""
    assert differ.buffer == ""
    # the separator itself is never judged
    assert results[-1].events == []


def test_overflow_characters_are_incorrect():
    differ = InputDiffer()
    _, events = _type(differ, ["h", "hi", "hix"], "hi")
    assert [e.correct for e in events] == [True, True, False]


def test_backspace_emits_no_events():
    differ = InputDiffer()
    differ.diff("h", "hello", 0)
    differ.diff("he", "hello", 0)
    result = differ.diff("h", "hello", 0)

    assert result.events == []
    assert result.deleted
    assert result.buffer == "h"
    assert result.caret == 1


def test_retype_after_backspace_is_judged_at_same_index():
    differ = InputDiffer()
    _, events = _type(differ, ["h", "hx", "h", "he"], "hello")
    assert [(e.char_index, e.correct) for e in events] == [(0, True), (1, False), (1, True)]


def test_separator_on_empty_slot_is_dropped():
    differ = InputDiffer()
    result = differ.diff(" ", "hello", 0)
    assert result.events == []
    assert result.completed is None
    assert result.buffer == ""


def test_pasted_text_is_judged_per_character():
    differ = InputDiffer()
    result = differ.diff("hel", "help", 2)
    assert result.events == [
        CharEvent(2, 0, "h", True),
        CharEvent(2, 1, "e", True),
        CharEvent(2, 2, "l", True),
    ]


def test_exact_mode_commits_without_separator():
    differ = InputDiffer(CompletionMode.EXACT)
    results, events = _type(differ, ["4", "42"], "42")
    assert results[0].completed is None
    assert results[1].completed == "42"
    assert results[1].buffer == ""
    assert all(e.correct for e in events)


def test_exact_mode_treats_space_as_a_character():
    differ = InputDiffer(CompletionMode.EXACT)
    result = differ.diff("4 ", "42", 0)
    assert result.completed is None
    assert [e.correct for e in result.events] == [True, False]


def test_empty_separator_rejected():
    with pytest.raises(ValueError):
        InputDiffer(separator="")


def test_typed_record_overwrites_and_seals():
    record = TypedRecord()
    record.mark(CharEvent(0, 0, "h", True))
    record.mark(CharEvent(0, 1, "x", False))
    record.mark(CharEvent(0, 1, "e", True))
    assert record.row(0) == (True, True)

    record.seal(0)
    assert record.is_sealed(0)
    with pytest.raises(ValueError):
        record.mark(CharEvent(0, 2, "l", True))

    snapshot = record.as_dict()
    assert snapshot == {0: (True, True)}
