"""Extract code blocks from markdown files."""

import logging
from dataclasses import dataclass, field
from enum import Enum

from mdcode.inputs import InputSource
from mdcode.parser.fences import DEFAULT_MAX_INDENT, FenceMarker, is_fence_close, parse_fence_open
from mdcode.parser.inline import find_inline_spans
from mdcode.parser.lines import SourceLine, scan_sources

logger = logging.getLogger(__name__)


class BlockKind(str, Enum):
    """How a code block was written."""

    FENCED = "fenced"
    INLINE = "inline"


@dataclass(frozen=True)
class CodeBlock:
    """Represents a fenced block or inline span in markdown.

    For fenced blocks the line span covers the content lines; an empty
    block reports its opening fence line for both ends.
    """

    index: int
    kind: BlockKind
    language: str | None
    content: str
    start_line: int
    end_line: int
    source_id: str
    fence_marker: FenceMarker | None = None

    @property
    def line_count(self) -> int:
        return len(self.content.split("\n")) if self.content else 0


@dataclass
class ExtractionResult:
    """Every block found in the input, in index order."""

    blocks: list[CodeBlock] = field(default_factory=list)

    @property
    def languages(self) -> list[str]:
        """Distinct declared languages in first-occurrence order."""
        return distinct_languages(self.blocks)


def distinct_languages(blocks: list[CodeBlock]) -> list[str]:
    """Languages of fenced blocks, deduplicated ignoring case, keeping the first spelling."""
    seen = {}
    for block in blocks:
        if block.kind is BlockKind.FENCED and block.language:
            seen.setdefault(block.language.casefold(), block.language)
    return list(seen.values())


@dataclass
class _InFence:
    """Extractor state while inside a fenced block."""

    source_id: str
    marker: FenceMarker
    language: str | None
    opener_line: int
    lines: list[SourceLine] = field(default_factory=list)


class _Extractor:
    """Single pass over scanned lines, alternating prose and fence states."""

    def __init__(self, include_inline: bool, max_fence_indent: int | None):
        self.include_inline = include_inline
        self.max_fence_indent = max_fence_indent
        self.blocks: list[CodeBlock] = []
        self.fence: _InFence | None = None

    def feed(self, line: SourceLine) -> None:
        if self.fence is not None and line.line_number == 1:
            # A fence never spans documents
            self.close_fence(implicit=True)

        if self.fence is None:
            self._feed_prose(line)
        elif is_fence_close(line.text, self.fence.marker, self.max_fence_indent):
            self.close_fence()
        else:
            self.fence.lines.append(line)

    def _feed_prose(self, line: SourceLine) -> None:
        opening = parse_fence_open(line.text, self.max_fence_indent)
        if opening is not None:
            self.fence = _InFence(
                source_id=line.source_id,
                marker=opening.marker,
                language=opening.language,
                opener_line=line.line_number,
            )
            return

        if not self.include_inline:
            return

        for span in find_inline_spans(line.text):
            self._emit(
                kind=BlockKind.INLINE,
                language=None,
                content=span.code,
                start_line=line.line_number,
                end_line=line.line_number,
                source_id=line.source_id,
            )

    def close_fence(self, implicit: bool = False) -> None:
        fence = self.fence
        self.fence = None
        if fence.lines:
            start_line, end_line = fence.lines[0].line_number, fence.lines[-1].line_number
        else:
            start_line = end_line = fence.opener_line

        if implicit:
            logger.debug(
                "Unterminated %s fence opened at %s:%d closed at end of input",
                fence.marker.render(), fence.source_id, fence.opener_line,
            )

        self._emit(
            kind=BlockKind.FENCED,
            language=fence.language,
            content="\n".join(line.text for line in fence.lines),
            start_line=start_line,
            end_line=end_line,
            source_id=fence.source_id,
            fence_marker=fence.marker,
        )

    def _emit(self, **fields) -> None:
        self.blocks.append(CodeBlock(index=len(self.blocks), **fields))


def extract_from_lines(
    lines: list[SourceLine],
    include_inline: bool = False,
    max_fence_indent: int | None = DEFAULT_MAX_INDENT,
) -> ExtractionResult:
    """Extract code blocks from scanned lines.

    Args:
        lines: SourceLine objects in input order
        include_inline: Also extract inline code spans from prose lines
        max_fence_indent: Maximum leading spaces before a fence, None for no limit

    Returns:
        ExtractionResult with blocks indexed from 0 in document order
    """
    extractor = _Extractor(include_inline, max_fence_indent)
    for line in lines:
        extractor.feed(line)
    if extractor.fence is not None:
        extractor.close_fence(implicit=True)
    return ExtractionResult(blocks=extractor.blocks)


def extract_blocks(
    sources: list[InputSource],
    include_inline: bool = False,
    max_fence_indent: int | None = DEFAULT_MAX_INDENT,
) -> ExtractionResult:
    """Extract all code blocks from the given documents, in source order."""
    result = extract_from_lines(scan_sources(sources), include_inline, max_fence_indent)
    logger.debug("Extracted %d block(s) from %d source(s)", len(result.blocks), len(sources))
    return result


def extract_code_blocks(content: str, include_inline: bool = False) -> list[CodeBlock]:
    """Extract code blocks from a single markdown string.

    Args:
        content: Markdown file content
        include_inline: Also extract inline code spans

    Returns:
        List of CodeBlock objects
    """
    return extract_blocks([InputSource(name="<string>", content=content)], include_inline).blocks
