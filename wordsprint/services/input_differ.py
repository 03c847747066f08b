# services/input_differ.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class CompletionMode(str, Enum):
    DELIMITER = "delimiter"  # trailing separator commits the word
    EXACT = "exact"          # typing the token exactly commits it


@dataclass(frozen=True)
class CharEvent:
    word_index: int
    char_index: int
    char: str
    correct: bool


@dataclass
class DiffResult:
    events: List[CharEvent] = field(default_factory=list)
    completed: Optional[str] = None
    buffer: str = ""
    deleted: bool = False

    @property
    def caret(self) -> int:
        return len(self.buffer)


class InputDiffer:
    """
    Turns successive raw input-field values for the current token into
    correctness events. Only appended characters are judged; deletions
    move the caret and nothing else.
    """

    def __init__(self, mode: CompletionMode = CompletionMode.DELIMITER, separator: str = " "):
        if not separator:
            raise ValueError("separator must be a non-empty string")
        self.mode = CompletionMode(mode)
        self.separator = separator
        self._previous = ""

    @property
    def buffer(self) -> str:
        return self._previous

    def reset(self):
        self._previous = ""

    def diff(self, value: str, target: str, word_index: int) -> DiffResult:
        value = value or ""
        target = target or ""
        previous = self._previous
        grew = len(value) > len(previous)

        body = value
        commit = False
        if self.mode is CompletionMode.DELIMITER and grew and value.endswith(self.separator):
            body = value[: -len(self.separator)]
            commit = True

        events = []
        for i in range(len(previous), len(body)):
            ch = body[i]
            events.append(CharEvent(word_index, i, ch, i < len(target) and ch == target[i]))

        result = DiffResult(events=events, deleted=len(value) < len(previous))
        if commit:
            # a separator on an empty slot is swallowed
            if body:
                result.completed = body
            result.buffer = ""
        elif self.mode is CompletionMode.EXACT and target and body == target:
            result.completed = body
            result.buffer = ""
        else:
            result.buffer = body

        self._previous = result.buffer
        return result


class TypedRecord:
    """Per-word correctness flags, in typing order. Completed words are sealed."""

    def __init__(self):
        self._rows: Dict[int, List[bool]] = {}
        self._sealed = set()

    def mark(self, event: CharEvent):
        if event.word_index in self._sealed:
            raise ValueError(f"word {event.word_index} is already completed")
        row = self._rows.setdefault(event.word_index, [])
        if event.char_index < len(row):
            # retyped after a backspace
            row[event.char_index] = event.correct
            return
        while len(row) < event.char_index:
            row.append(False)
        row.append(event.correct)

    def seal(self, word_index: int):
        self._sealed.add(word_index)
        self._rows.setdefault(word_index, [])

    def is_sealed(self, word_index: int) -> bool:
        return word_index in self._sealed

    def row(self, word_index: int) -> Tuple[bool, ...]:
        return tuple(self._rows.get(word_index, ()))

    def as_dict(self, start: int = 0) -> Dict[int, Tuple[bool, ...]]:
        """Copy of the rows for words at index ``start`` and later."""
        return {k: tuple(v) for k, v in self._rows.items() if k >= start}
