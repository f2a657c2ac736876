from __future__ import annotations

import textwrap
from pathlib import Path

import tinymark.cli as cli_module
from tinymark.cli import cli
from tinymark.filesystem import MAX_FILE_SIZE_ENV_VAR


def _write(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_cli_converts_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(
        tmp_path,
        "doc.md",
        """
        # Introduction
        - first
        - second
        """,
    )

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert f"Success: {target} => {tmp_path / 'doc.html'}" in result.output
    html = (tmp_path / "doc.html").read_text(encoding="utf-8")
    assert "<h1>Introduction</h1>" in html
    assert "<li>second</li>" in html


def test_cli_without_files_prints_help(cli_runner):
    result = cli_runner.invoke(cli, [])

    assert result.exit_code == 0
    assert "Usage:" in result.output


def test_cli_reports_failure_and_continues(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    broken = _write(tmp_path, "broken.md", "[text](http://x\n")
    fine = _write(tmp_path, "fine.md", "fine\n")

    result = cli_runner.invoke(cli, [str(broken), str(fine)])

    assert result.exit_code == 1
    assert "Failure:" in result.output
    assert "line 1, column 16" in result.output
    assert f"Success: {fine}" in result.output
    assert (tmp_path / "fine.html").exists()
    assert not (tmp_path / "broken.html").exists()


def test_cli_skips_non_markdown_files(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    notes = _write(tmp_path, "notes.txt", "text\n")

    result = cli_runner.invoke(cli, [str(notes)])

    assert result.exit_code == 0
    assert "Skipping" in result.output
    assert "not a Markdown file" in result.output


def test_cli_missing_file_is_a_failure(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, [str(tmp_path / "missing.md")])

    assert result.exit_code == 1
    assert "Failure:" in result.output


def test_cli_stdout_prints_html(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", "*bold*\n")

    result = cli_runner.invoke(cli, ["--stdout", str(target)])

    assert result.exit_code == 0
    assert result.output.startswith("<!DOCTYPE html>\n")
    assert "<strong>bold</strong>" in result.output
    assert not (tmp_path / "doc.html").exists()


def test_cli_output_extension_option(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", "text\n")

    result = cli_runner.invoke(cli, ["--output-extension", ".htm", str(target)])

    assert result.exit_code == 0
    assert (tmp_path / "doc.htm").exists()


def test_cli_reads_config_from_pyproject(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.tinymark]
        output_extension = ".xhtml"
        """,
    )
    target = _write(tmp_path, "doc.md", "text\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert (tmp_path / "doc.xhtml").exists()


def test_cli_reads_config_beside_each_file(cli_runner, tmp_path, monkeypatch):
    docs = tmp_path / "docs"
    docs.mkdir()
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    monkeypatch.chdir(elsewhere)
    _write_pyproject(
        docs,
        """
        [tool.tinymark]
        output_extension = ".xhtml"
        """,
    )
    target = _write(docs, "a.md", "text\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert (docs / "a.xhtml").exists()
    assert not (docs / "a.html").exists()


def test_cli_reports_broken_config_per_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    docs = tmp_path / "docs"
    docs.mkdir()
    _write_pyproject(
        docs,
        """
        [tool.tinymark]
        colour = "red"
        """,
    )
    broken = _write(docs, "a.md", "text\n")
    fine = _write(tmp_path, "b.md", "text\n")

    result = cli_runner.invoke(cli, [str(broken), str(fine)])

    assert result.exit_code == 1
    assert f"Failure: {broken}: " in result.output
    assert "colour" in result.output
    assert (tmp_path / "b.html").exists()


def test_cli_rejects_invalid_config_override(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", "text\n")

    result = cli_runner.invoke(cli, ["--output-extension", ".md", str(target)])

    assert result.exit_code != 0
    assert "must differ" in result.output


def test_cli_no_overwrite(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", "text\n")
    existing = _write(tmp_path, "doc.html", "keep\n")

    result = cli_runner.invoke(cli, ["--no-overwrite", str(target)])

    assert result.exit_code == 1
    assert existing.read_text(encoding="utf-8") == "keep\n"


def test_cli_max_file_size_from_environment(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "4")
    target = _write(tmp_path, "doc.md", "longer than four bytes\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 1
    assert "maximum allowed size of 4 bytes" in result.output


def test_cli_flag_overrides_environment_size(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "4")
    target = _write(tmp_path, "doc.md", "longer than four bytes\n")

    result = cli_runner.invoke(cli, ["--max-file-size", "1000", str(target)])

    assert result.exit_code == 0


def test_cli_rejects_invalid_environment_size(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "lots")
    target = _write(tmp_path, "doc.md", "text\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert MAX_FILE_SIZE_ENV_VAR in result.output


def test_cli_public_api():
    assert cli_module.__all__ == ["cli"]
