"""Select code blocks by language and index."""

import logging
from dataclasses import dataclass

from mdcode.parser.markdown import CodeBlock, ExtractionResult, distinct_languages

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoFilter:
    """Keep blocks of every language."""


@dataclass(frozen=True)
class FilterBy:
    """Keep blocks whose language matches, ignoring case."""

    language: str


@dataclass(frozen=True)
class ListLanguages:
    """Report the languages present instead of block content."""


LanguageSelector = NoFilter | FilterBy | ListLanguages


@dataclass(frozen=True)
class IndexFilter:
    """Inclusive range of block indices; a single index has start == end."""

    start: int
    end: int

    def __contains__(self, index: int) -> bool:
        return self.start <= index <= self.end


@dataclass
class Selection:
    """Blocks chosen for rendering, or the language listing."""

    blocks: list[CodeBlock]
    languages: list[str] | None = None

    @property
    def is_listing(self) -> bool:
        return self.languages is not None


def parse_language_selector(value: str | None) -> LanguageSelector:
    """Map the --lang option value to a selector.

    None means the option was omitted; an empty string means it was given
    without a value.
    """
    if value is None:
        return NoFilter()
    if not value.strip():
        return ListLanguages()
    return FilterBy(value.strip())


def parse_index_filter(raw: str) -> IndexFilter:
    """Parse an index ("3") or inclusive range ("1-4").

    Raises:
        ValueError: If the text is not a non-negative index or range, or
            the range start exceeds its end
    """
    start_text, sep, end_text = raw.partition("-")
    try:
        start = int(start_text.strip())
        end = int(end_text.strip()) if sep else start
    except ValueError:
        raise ValueError(f"expected INDEX or START-END, got {raw!r}") from None

    if start < 0 or end < 0:
        raise ValueError(f"indices must be non-negative, got {raw!r}")
    if start > end:
        raise ValueError("range start must be <= end")
    return IndexFilter(start=start, end=end)


def matches_language(block: CodeBlock, language: str) -> bool:
    return block.language is not None and block.language.casefold() == language.casefold()


def select(
    result: ExtractionResult,
    language: LanguageSelector = NoFilter(),
    indices: IndexFilter | None = None,
) -> Selection:
    """Apply the language filter, then the index filter by original index.

    Selections that match nothing are empty, never an error.
    """
    blocks = result.blocks
    if isinstance(language, FilterBy):
        blocks = [b for b in blocks if matches_language(b, language.language)]
    if indices is not None:
        blocks = [b for b in blocks if b.index in indices]

    if not blocks:
        logger.info("No matching code blocks found")

    if isinstance(language, ListLanguages):
        return Selection(blocks=blocks, languages=distinct_languages(blocks))
    return Selection(blocks=blocks)
