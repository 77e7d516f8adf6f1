"""Recognize fenced code block delimiters."""

import re
from dataclasses import dataclass

MIN_FENCE_LENGTH = 3
DEFAULT_MAX_INDENT = 3

# Opening fence: indentation, a run of 3+ backticks or tildes, optional info string
_FENCE_OPEN_RE = re.compile(r"^(?P<indent> *)(?P<fence>`{3,}|~{3,})(?P<info>.*)$")


@dataclass(frozen=True)
class FenceMarker:
    """The delimiter of a fenced block."""

    char: str
    run_length: int

    def render(self) -> str:
        """Return the delimiter as it appears in markdown."""
        return self.char * self.run_length


@dataclass(frozen=True)
class FenceOpening:
    """An opening fence line."""

    marker: FenceMarker
    info: str
    language: str | None


def _indent_allowed(indent: str, max_indent: int | None) -> bool:
    return max_indent is None or len(indent) <= max_indent


def parse_fence_open(
    line: str, max_indent: int | None = DEFAULT_MAX_INDENT
) -> FenceOpening | None:
    """Check whether a line opens a fenced block.

    The language is the first whitespace-delimited token of the info
    string. A backtick fence whose info string contains a backtick is not
    a fence, since that line is inline code in prose.

    Args:
        line: Line text without trailing newline
        max_indent: Maximum leading spaces allowed before the fence, None for no limit

    Returns:
        FenceOpening, or None if the line is not an opening fence
    """
    match = _FENCE_OPEN_RE.match(line if max_indent is not None else line.lstrip(" \t"))
    if not match or not _indent_allowed(match.group("indent"), max_indent):
        return None

    fence = match.group("fence")
    info = match.group("info").strip()
    if fence[0] == "`" and "`" in info:
        return None

    tokens = info.split()
    return FenceOpening(
        marker=FenceMarker(char=fence[0], run_length=len(fence)),
        info=info,
        language=tokens[0] if tokens else None,
    )


def is_fence_close(
    line: str, marker: FenceMarker, max_indent: int | None = DEFAULT_MAX_INDENT
) -> bool:
    """Check whether a line closes a fence opened with ``marker``.

    The line must hold only a run of the same character at least as long
    as the opening run; trailing whitespace is allowed.
    """
    stripped = line.lstrip(" ")
    if not _indent_allowed(line[:len(line) - len(stripped)], max_indent):
        return False
    if max_indent is None:
        stripped = stripped.lstrip(" \t")

    body = stripped.rstrip()
    run_length = len(body) - len(body.lstrip(marker.char))
    return run_length == len(body) and run_length >= max(marker.run_length, MIN_FENCE_LENGTH)
