"""Gather markdown input from standard input and files."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

logger = logging.getLogger(__name__)

STDIN_SOURCE = "stdin"


@dataclass
class InputSource:
    """Full text of one input document."""

    name: str
    content: str


class InputError(Exception):
    """Raised when an input document cannot be read or decoded."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"cannot read {source}: {reason}")
        self.source = source
        self.reason = reason


def read_file(path: Path) -> InputSource:
    """Read a markdown file as UTF-8.

    Raises:
        InputError: If the file is missing, unreadable or not valid UTF-8
    """
    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InputError(str(path), f"invalid UTF-8 ({e.reason})") from e
    except OSError as e:
        raise InputError(str(path), e.strerror or str(e)) from e

    logger.debug("Read %d characters from %s", len(content), path)
    return InputSource(name=str(path), content=content)


def collect_inputs(files: list[Path], stdin: TextIO | None) -> list[InputSource]:
    """Collect every input source, standard input first.

    Standard input is consulted when no files are given or when it is not
    an interactive terminal. It is kept when it has content, or when it is
    the only possible input.

    Args:
        files: File paths in command-line order
        stdin: Text stream for standard input, or None to ignore it

    Returns:
        List of InputSource objects; stdin (if kept) precedes all files

    Raises:
        InputError: On the first file that cannot be read
    """
    sources = []

    if stdin is not None and (not files or not stdin.isatty()):
        try:
            buffer = stdin.read()
        except UnicodeDecodeError as e:
            raise InputError(STDIN_SOURCE, f"invalid UTF-8 ({e.reason})") from e
        if buffer or not files:
            logger.debug("Read %d characters from standard input", len(buffer))
            sources.append(InputSource(name=STDIN_SOURCE, content=buffer))

    for path in files:
        sources.append(read_file(path))

    return sources
