"""Line wrapping for node labels.

Both wrappers share the ``(label, budget) -> list[str]`` signature and never
return an empty list: an empty label wraps to a single empty line.
"""

import math
from typing import Callable, Dict, List

Wrapper = Callable[[str, int], List[str]]


def wrap_balanced(label: str, budget: int) -> List[str]:
    """Split ``label`` into the fewest lines of at most ``budget`` characters.

    Line lengths differ by at most one character, so a label one character
    over budget becomes two half lines instead of a full line and a stub.
    Splits may fall inside a word.
    """
    if budget < 1:
        raise ValueError("budget must be at least 1.")

    length = len(label)
    if length <= budget:
        return [label]

    count = math.ceil(length / budget)
    base, longer = divmod(length, count)

    lines: List[str] = []
    start = 0
    for index in range(count):
        end = start + base + (1 if index < longer else 0)
        lines.append(label[start:end])
        start = end
    return lines


def wrap_words(label: str, budget: int) -> List[str]:
    """Greedy word wrap for space-delimited scripts.

    Words longer than ``budget`` are broken with :func:`wrap_balanced`.
    """
    if budget < 1:
        raise ValueError("budget must be at least 1.")

    words = label.split()
    if not words:
        return [""]

    lines: List[str] = []
    current = ""
    for word in words:
        if len(word) > budget:
            if current:
                lines.append(current)
                current = ""
            pieces = wrap_balanced(word, budget)
            lines.extend(pieces[:-1])
            current = pieces[-1]
            continue
        candidate = f"{current} {word}" if current else word
        if len(candidate) <= budget:
            current = candidate
        else:
            lines.append(current)
            current = word
    lines.append(current)
    return lines


_WRAPPERS: Dict[str, Wrapper] = {
    "balanced": wrap_balanced,
    "words": wrap_words,
}


def get_wrapper(mode: str) -> Wrapper:
    try:
        return _WRAPPERS[mode]
    except KeyError:
        raise ValueError(f"Unknown wrap mode: {mode}") from None
