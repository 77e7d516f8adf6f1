"""Find inline code spans in a line of prose."""

import re
from dataclasses import dataclass

_BACKTICK_RUN_RE = re.compile(r"`+")


@dataclass(frozen=True)
class InlineSpan:
    """Code between two matching backtick runs, with its column offsets."""

    code: str
    start: int
    end: int


def find_inline_spans(line: str) -> list[InlineSpan]:
    """Extract inline code spans from a single line.

    A run of N backticks is closed by the next run of exactly N backticks;
    shorter or longer runs in between are part of the code. A run with no
    closer on the line is plain text and scanning resumes after it.

    Args:
        line: Prose line without trailing newline

    Returns:
        List of InlineSpan objects, left to right, non-overlapping
    """
    spans = []
    runs = list(_BACKTICK_RUN_RE.finditer(line))
    i = 0

    while i < len(runs):
        opener = runs[i]
        width = len(opener.group(0))

        closer_idx = next(
            (j for j in range(i + 1, len(runs)) if len(runs[j].group(0)) == width),
            None,
        )
        if closer_idx is None:
            # Unmatched run is literal text
            i += 1
            continue

        closer = runs[closer_idx]
        spans.append(InlineSpan(
            code=line[opener.end():closer.start()],
            start=opener.end(),
            end=closer.start(),
        ))
        i = closer_idx + 1

    return spans
