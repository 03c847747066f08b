import math

CHARS_PER_WORD = 5.0


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; scores round .5 upwards.
    return int(math.floor(value + 0.5))


def compute_wpm(total_chars: int, elapsed_seconds: float) -> int:
    """
    Gross WPM: (typed chars / 5) / elapsed minutes.
    Mistakes are not subtracted. Returns 0 when no time has elapsed.
    """
    minutes = elapsed_seconds / 60.0
    if minutes <= 0 or total_chars <= 0:
        return 0
    return round_half_up((total_chars / CHARS_PER_WORD) / minutes)


def compute_accuracy(correct_chars: int, total_chars: int) -> int:
    if total_chars <= 0:
        return 100
    return round_half_up(100.0 * correct_chars / total_chars)
