"""End-to-end tests for mdcode."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from mdcode.cli import cli


class TestE2E:
    """End-to-end integration tests."""

    @pytest.fixture
    def runner(self):
        """Create CLI runner."""
        return CliRunner()

    @pytest.fixture
    def sample(self):
        """Get the sample markdown fixture."""
        return Path(__file__).parent / "fixtures" / "sample.md"

    def test_raw_output(self, runner, sample):
        """Test every fenced block is printed, separated by newlines."""
        result = runner.invoke(cli, [str(sample)])

        assert result.exit_code == 0
        assert result.output == (
            'fn main() {}\nprint("hello")\n```\nstill python\nplain text\nlet x = 1;\n'
        )

    def test_language_filter(self, runner, sample):
        """Test filtering by language."""
        result = runner.invoke(cli, ["--lang", "PYTHON", str(sample)])

        assert result.exit_code == 0
        assert result.output == 'print("hello")\n```\nstill python\n'

    def test_language_listing(self, runner, sample):
        """Test --lang without a value lists languages."""
        result = runner.invoke(cli, [str(sample), "--lang"])

        assert result.exit_code == 0
        assert result.output == "rust\npython\n"

    def test_list_with_range(self, runner, sample):
        """Test list mode over an index range."""
        result = runner.invoke(cli, ["-n", "1-2", "--list", str(sample)])

        assert result.exit_code == 0
        assert result.output.splitlines() == [
            f"1: python (3 lines) [{sample}:10-12]",
            f"2: plain (1 lines) [{sample}:16]",
        ]

    def test_json_output(self, runner, sample):
        """Test JSON output."""
        result = runner.invoke(cli, ["--json", str(sample)])

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert [b["index"] for b in payload] == [0, 1, 2, 3]
        assert payload[2]["language"] is None
        assert all(b["source_id"] == str(sample) for b in payload)

    def test_fenced_with_line_numbers(self, runner, sample):
        """Test fences and line numbers on a single block."""
        result = runner.invoke(cli, ["-n", "0", "--fenced", "--line-numbers", str(sample)])

        assert result.exit_code == 0
        assert result.output == "```rust\n     6: fn main() {}\n```\n"

    def test_inline_spans(self, runner, sample):
        """Test --inline adds inline spans in document order."""
        result = runner.invoke(cli, ["--inline", "-n", "0", str(sample)])

        assert result.exit_code == 0
        assert result.output == "pip install mdcode\n"

    def test_stdin_precedes_files(self, runner, tmp_path):
        """Test blocks from stdin come first whatever the argument order."""
        doc = tmp_path / "doc.md"
        doc.write_text("```go\nfmt.X()\n```\n", encoding="utf-8")

        result = runner.invoke(cli, [str(doc), "--inline", "--json"], input="`a`\n")

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert [(b["index"], b["source_id"], b["content"]) for b in payload] == [
            (0, "stdin", "a"),
            (1, str(doc), "fmt.X()"),
        ]

    def test_stdin_only(self, runner):
        """Test markdown piped on stdin, including an unterminated fence."""
        result = runner.invoke(cli, ["--list"], input="# T\n```sh\necho hi\necho bye\n")

        assert result.exit_code == 0
        assert result.output == "0: sh (2 lines) [stdin:3-4]\n"

    def test_separator(self, runner, sample):
        """Test a custom separator between blocks."""
        result = runner.invoke(cli, ["--lang", "rust", "--sep", "\n--\n", str(sample)])

        assert result.output == "fn main() {}\n--\nlet x = 1;\n"

    def test_fence_indent(self, runner):
        """Test --fence-indent limits fence indentation."""
        markdown = " ```sh\nls\n ```\n"

        assert runner.invoke(cli, [], input=markdown).output == "ls\n"
        assert runner.invoke(cli, ["--fence-indent", "0"], input=markdown).output == ""

    def test_out_of_range_selection(self, runner, sample):
        """Test a selection past the end is empty, not an error."""
        result = runner.invoke(cli, ["-n", "10-12", str(sample)])

        assert result.exit_code == 0
        assert result.output == ""

    def test_no_match_json(self, runner, sample):
        """Test an empty JSON selection is still valid JSON."""
        result = runner.invoke(cli, ["--json", "--lang", "cobol", str(sample)])

        assert result.exit_code == 0
        assert json.loads(result.output) == []

    def test_reversed_range(self, runner, sample):
        """Test a reversed range is a usage error."""
        result = runner.invoke(cli, ["-n", "4-2", str(sample)])

        assert result.exit_code == 2
        assert "range start must be <= end" in result.output

    def test_nonexistent_file(self, runner):
        """Test error handling for nonexistent file."""
        result = runner.invoke(cli, ["nonexistent.md"])

        assert result.exit_code != 0

    def test_undecodable_file(self, runner, tmp_path):
        """Test a file that is not UTF-8 aborts the run without output."""
        good = tmp_path / "good.md"
        good.write_text("```\nok\n```\n", encoding="utf-8")
        bad = tmp_path / "bad.md"
        bad.write_bytes(b"```\n\xff\xfe\n```\n")

        result = runner.invoke(cli, [str(good), str(bad)])

        assert result.exit_code == 2
        assert "cannot read" in result.output
        assert not result.output.startswith("ok")

    def test_undecodable_stdin(self, runner, tmp_path):
        """Test stdin that is not UTF-8 aborts the run before any file is printed."""
        good = tmp_path / "good.md"
        good.write_text("```\nok\n```\n", encoding="utf-8")

        result = runner.invoke(cli, [str(good)], input=b"\xff\n")

        assert result.exit_code == 2
        assert "cannot read stdin" in result.output
        assert "ok" not in result.output
