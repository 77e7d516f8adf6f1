"""Render selected code blocks as text."""

import json
from dataclasses import dataclass
from enum import Enum

from mdcode.parser.markdown import BlockKind, CodeBlock
from mdcode.selector.selection import Selection


class OutputMode(str, Enum):
    RAW = "raw"
    LIST = "list"
    JSON = "json"


@dataclass
class RenderOptions:
    """Presentation options chosen on the command line."""

    mode: OutputMode = OutputMode.RAW
    fenced: bool = False
    line_numbers: bool = False
    separator: str = "\n"


def add_line_numbers(content: str, start_line: int) -> str:
    """Prefix each line with its line number in the source document."""
    return "\n".join(
        f"{start_line + offset:>6}: {line}"
        for offset, line in enumerate(content.split("\n"))
    )


def render_block(block: CodeBlock, options: RenderOptions) -> str:
    content = block.content
    if options.line_numbers and content:
        content = add_line_numbers(content, block.start_line)

    if options.fenced and block.kind is BlockKind.FENCED:
        fence = block.fence_marker.render()
        opener = f"{fence}{block.language or ''}"
        content = f"{opener}\n{content}\n{fence}" if content else f"{opener}\n{fence}"
    return content


def describe_block(block: CodeBlock) -> str:
    """One-line summary: index, language, size and location."""
    if block.start_line == block.end_line:
        location = f"{block.source_id}:{block.start_line}"
    else:
        location = f"{block.source_id}:{block.start_line}-{block.end_line}"
    return f"{block.index}: {block.language or 'plain'} ({block.line_count} lines) [{location}]"


def block_to_dict(block: CodeBlock) -> dict:
    return {
        "index": block.index,
        "kind": block.kind.value,
        "language": block.language,
        "content": block.content,
        "start_line": block.start_line,
        "end_line": block.end_line,
        "source_id": block.source_id,
    }


def render(selection: Selection, options: RenderOptions) -> str:
    """Render a selection.

    An empty selection renders as an empty string, or "[]" in JSON mode.

    The language listing takes precedence over the output mode.
    """
    if selection.is_listing:
        return "\n".join(selection.languages)

    if options.mode is OutputMode.JSON:
        return json.dumps([block_to_dict(b) for b in selection.blocks], indent=2)

    if options.mode is OutputMode.LIST:
        return "\n".join(describe_block(b) for b in selection.blocks)

    return options.separator.join(render_block(b, options) for b in selection.blocks)
