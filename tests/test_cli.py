from __future__ import annotations

import textwrap
from pathlib import Path

import tinymd.cli as cli_module
from tinymd.cli import cli


def _write(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_cli_reads_stdin_and_writes_stdout(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, [], input="# Hello\r\n**there**\r\n")

    assert result.exit_code == 0
    assert result.output == "<h1>Hello</h1>\n<p><b>there</b></p>\n"


def test_cli_empty_stdin(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, [], input="")

    assert result.exit_code == 0
    assert result.output == ""


def test_cli_reads_file_and_writes_stdout(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(
        tmp_path,
        "doc.md",
        """
        ## Introduction
        1. first
        2. second
        ---
        """,
    )

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output == "<h2>Introduction</h2>\n<ol>\n<li>first</li>\n<li>second</li>\n</ol>\n"


def test_cli_writes_output_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    source = _write(tmp_path, "doc.md", "[home](/index.html)\n")
    destination = tmp_path / "doc.html"

    result = cli_runner.invoke(cli, [str(source), str(destination)])

    assert result.exit_code == 0
    assert result.output == ""
    assert destination.read_text(encoding="utf-8") == '<p><a href="/index.html">home</a></p>\n'


def test_cli_malformed_input_fails(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    source = _write(tmp_path, "bad.md", "[text(no-close-bracket\n")

    result = cli_runner.invoke(cli, [str(source)])

    assert result.exit_code != 0
    assert "missing ']'" in result.output
    assert "<p>" not in result.output


def test_cli_keeps_output_flushed_before_failure(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, [], input="# ok\n7 without dot\n")

    assert result.exit_code != 0
    assert result.output.startswith("<h1>ok</h1>\n")
    assert "Line 2" in result.output


def test_cli_does_not_write_output_file_on_failure(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    source = _write(tmp_path, "bad.md", "# fine\n![img](broken\n")
    destination = tmp_path / "bad.html"

    result = cli_runner.invoke(cli, [str(source), str(destination)])

    assert result.exit_code != 0
    assert not destination.exists()


def test_cli_close_blocks_flag(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, ["--close-blocks"], input="* a\n")

    assert result.exit_code == 0
    assert result.output == "<ul>\n<li>a</li>\n</ul>\n"


def test_cli_leaves_trailing_blocks_open_by_default(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, [], input="> a\n")

    assert result.exit_code == 0
    assert result.output == "<blockquote><p>\na\n"


def test_cli_reads_config_from_pyproject(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.tinymd]
        close_trailing_blocks = true
        """,
    )
    target = _write(tmp_path, "doc.md", "```\ncode\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output == "<pre><code>code\n</code></pre>\n"


def test_cli_flags_override_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.tinymd]
        close_trailing_blocks = true
        """,
    )
    target = _write(tmp_path, "doc.md", "1. one\n")

    result = cli_runner.invoke(cli, ["--no-close-blocks", str(target)])

    assert result.exit_code == 0
    assert result.output == "<ol>\n<li>one</li>\n"


def test_cli_rejects_invalid_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.tinymd]
        unknown = true
        """,
    )
    target = _write(tmp_path, "doc.md", "text\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 2
    assert "Invalid `[tool.tinymd]` settings" in result.output


def test_cli_max_line_length(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, ["--max-line-length", "3"], input="abcd\n")

    assert result.exit_code != 0
    assert "exceeds maximum allowed length of 3 characters" in result.output


def test_cli_rejects_non_positive_max_line_length(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, ["--max-line-length", "0"], input="abc\n")

    assert result.exit_code == 2
    assert "max_line_length" in result.output


def test_cli_line_length_from_environment(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TINYMD_MAX_LINE_LENGTH", "2")

    result = cli_runner.invoke(cli, [], input="abc\n")

    assert result.exit_code != 0
    assert "exceeds maximum allowed length of 2 characters" in result.output


def test_cli_flag_beats_environment(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TINYMD_MAX_LINE_LENGTH", "2")

    result = cli_runner.invoke(cli, ["--max-line-length", "10"], input="abc\n")

    assert result.exit_code == 0
    assert result.output == "<p>abc</p>\n"


def test_cli_file_size_limit(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TINYMD_MAX_FILE_SIZE", "4")
    target = _write(tmp_path, "big.md", "more than four bytes\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "exceeds the maximum allowed size of 4 bytes" in result.output


def test_cli_invalid_environment_value(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TINYMD_MAX_FILE_SIZE", "lots")

    result = cli_runner.invoke(cli, [], input="text\n")

    assert result.exit_code != 0
    assert "Invalid value for TINYMD_MAX_FILE_SIZE" in result.output


def test_cli_invalid_utf8(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "binary.md"
    target.write_bytes(b"\xff\xfe\xfa")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "Invalid UTF-8" in result.output


def test_cli_missing_input_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, [str(tmp_path / "missing.md")])

    assert result.exit_code == 2


def test_cli_rejects_extra_arguments(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    source = _write(tmp_path, "doc.md", "text\n")

    result = cli_runner.invoke(cli, [str(source), "out.html", "extra"])

    assert result.exit_code == 2


def test_cli_verbose_flag(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, ["--verbose"], input="---\n")

    assert result.exit_code == 0
    assert "<hr>\n" in result.output


def test_cli_public_api():
    assert cli_module.__all__ == ["cli"]


def test_cli_environment_beats_config_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TINYMD_MAX_LINE_LENGTH", "10")
    _write_pyproject(
        tmp_path,
        """
        [tool.tinymd]
        max_line_length = 2
        """,
    )
    target = _write(tmp_path, "doc.md", "abc\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output == "<p>abc</p>\n"


def test_cli_flag_beats_config_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.tinymd]
        max_line_length = 100
        """,
    )
    target = _write(tmp_path, "doc.md", "abcd\n")

    result = cli_runner.invoke(cli, ["--max-line-length", "3", str(target)])

    assert result.exit_code != 0
    assert "exceeds maximum allowed length of 3 characters" in result.output
