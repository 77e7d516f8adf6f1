"""Split markdown documents into numbered source lines."""

from dataclasses import dataclass

from mdcode.inputs import InputSource


@dataclass(frozen=True)
class SourceLine:
    """A physical line of a document with its original 1-based number."""

    source_id: str
    line_number: int
    text: str


def scan_lines(content: str, source_id: str) -> list[SourceLine]:
    """Split content into lines without their trailing newline.

    A final newline does not produce an extra empty line, and a trailing
    carriage return is dropped so CRLF documents scan like LF ones.

    Args:
        content: Full document text
        source_id: Identifier of the document (path or "stdin")

    Returns:
        List of SourceLine objects numbered from 1
    """
    if not content:
        return []

    raw_lines = content.split("\n")
    if raw_lines[-1] == "":
        raw_lines.pop()

    return [
        SourceLine(source_id=source_id, line_number=number, text=text.removesuffix("\r"))
        for number, text in enumerate(raw_lines, start=1)
    ]


def scan_sources(sources: list[InputSource]) -> list[SourceLine]:
    """Concatenate the lines of every source in the order given."""
    lines = []
    for source in sources:
        lines.extend(scan_lines(source.content, source.name))
    return lines
