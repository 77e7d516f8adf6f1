"""CLI for mdcode."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from mdcode.inputs import InputError, collect_inputs
from mdcode.parser.fences import DEFAULT_MAX_INDENT
from mdcode.parser.markdown import extract_blocks
from mdcode.render import OutputMode, RenderOptions, render
from mdcode.selector.selection import (
    IndexFilter,
    parse_index_filter,
    parse_language_selector,
    select,
)

err_console = Console(stderr=True)


class IndexRangeType(click.ParamType):
    """Click parameter type for an index or inclusive range."""

    name = "INDEX|RANGE"

    def convert(self, value, param, ctx) -> IndexFilter:
        if isinstance(value, IndexFilter):
            return value
        try:
            return parse_index_filter(value)
        except ValueError as e:
            self.fail(str(e), param, ctx)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=False, show_path=False)],
        force=True,
    )


@click.command()
@click.argument("files", nargs=-1, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--number", "-n", type=IndexRangeType(), default=None,
              help="Target code block by index or range (e.g. 0, 1-3)")
@click.option("--lang", is_flag=False, flag_value="", default=None, metavar="[LANG]",
              help="Filter by language; omit value to list languages found")
@click.option("--sep", "separator", default="\n", show_default=False,
              help="Separator between blocks when printing multiple")
@click.option("--fenced", is_flag=True, help="Preserve fences around output blocks")
@click.option("--json", "json_output", is_flag=True, help="Emit JSON instead of raw code")
@click.option("--list", "list_output", is_flag=True, help="List blocks with metadata")
@click.option("--inline", "include_inline", is_flag=True,
              help="Include inline code spans (backticks)")
@click.option("--line-numbers", is_flag=True, help="Include source line numbers in output")
@click.option("--fence-indent", type=click.IntRange(min=0), default=DEFAULT_MAX_INDENT,
              show_default=True,
              help="Maximum leading spaces before a fence marker")
@click.option("--verbose", "-v", is_flag=True, help="Log progress to stderr")
@click.version_option(package_name="mdcode")
def cli(files: tuple[Path, ...], number: IndexFilter | None, lang: str | None, separator: str,
        fenced: bool, json_output: bool, list_output: bool, include_inline: bool,
        line_numbers: bool, fence_indent: int, verbose: bool):
    """Extract fenced and inline code blocks from Markdown.

    Reads FILE arguments, or standard input when no files are given. When
    both are provided, standard input is processed first.

    Exit codes:
        0 - Success, including selections that match nothing
        2 - Input or usage error
    """
    configure_logging(verbose)

    if not files and sys.stdin.isatty():
        err_console.print(
            "[yellow]No input provided. Pass files or pipe markdown into stdin.[/yellow]"
        )
        sys.exit(2)

    try:
        sources = collect_inputs(list(files), sys.stdin)
    except InputError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(2)

    result = extract_blocks(sources, include_inline=include_inline, max_fence_indent=fence_indent)
    selection = select(result, parse_language_selector(lang), number)

    if json_output:
        mode = OutputMode.JSON
    elif list_output:
        mode = OutputMode.LIST
    else:
        mode = OutputMode.RAW

    output = render(selection, RenderOptions(
        mode=mode,
        fenced=fenced,
        line_numbers=line_numbers,
        separator=separator,
    ))
    if output:
        click.echo(output)


def main():
    """Entry point for the CLI."""
    cli(auto_envvar_prefix="MDCODE")


if __name__ == "__main__":
    main()
