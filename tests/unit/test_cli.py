"""Tests for the command line interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from verdict import __version__
from verdict.cli import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert f"Verdict v{__version__}" in result.output


def test_render_exits_1_on_failures(runner: CliRunner, sample_log: Path) -> None:
    result = runner.invoke(app, ["render", str(sample_log), "--no-colors"])

    assert result.exit_code == 1
    assert "2 passing (250ms)" in result.output
    assert "1 failing" in result.output
    assert "\x1b[" not in result.output


def test_render_exits_0_when_everything_passes(runner: CliRunner, tmp_path: Path) -> None:
    path = tmp_path / "green.yaml"
    path.write_text(
        "version: 1\nsuites:\n  - title: s\n    tests:\n      - {title: t, state: passed, duration: 3}\n",
        encoding="utf-8",
    )

    result = runner.invoke(app, ["render", str(path), "-f", "list", "--no-colors"])

    assert result.exit_code == 0
    assert "✔ s t: 3ms" in result.output


def test_render_forces_colors(runner: CliRunner, sample_log: Path) -> None:
    result = runner.invoke(app, ["render", str(sample_log), "--colors"])

    assert "\x1b[32m 2 passing\x1b[0m" in result.output


def test_render_json_to_file(runner: CliRunner, sample_log: Path, tmp_path: Path) -> None:
    destination = tmp_path / "out" / "run.json"

    result = runner.invoke(app, ["render", str(sample_log), "-f", "json", "-o", str(destination)])

    assert result.exit_code == 1
    report = json.loads(destination.read_text(encoding="utf-8"))
    assert report["stats"]["passes"] == 2


def test_render_inline_diffs(runner: CliRunner, sample_log: Path) -> None:
    result = runner.invoke(app, ["render", str(sample_log), "--inline-diffs", "--no-colors"])

    assert "      actual expected\n" in result.output


def test_render_rejects_unknown_format(runner: CliRunner, sample_log: Path) -> None:
    result = runner.invoke(app, ["render", str(sample_log), "-f", "tap"])

    assert result.exit_code == 2
    assert "Unknown format 'tap'" in result.output


def test_render_rejects_output_for_console_format(
    runner: CliRunner, sample_log: Path, tmp_path: Path
) -> None:
    result = runner.invoke(app, ["render", str(sample_log), "-o", str(tmp_path / "x.txt")])

    assert result.exit_code == 2
    assert "file output not supported" in result.output


def test_render_rejects_invalid_log(runner: CliRunner, tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("version: 3\nsuites: []\n", encoding="utf-8")

    result = runner.invoke(app, ["render", str(path)])

    assert result.exit_code == 2
    assert "Unsupported version" in result.output


def test_validate(runner: CliRunner, sample_log: Path) -> None:
    result = runner.invoke(app, ["validate", str(sample_log)])

    assert result.exit_code == 0
    assert "Valid event log: sample run" in result.output
    assert "Tests: 4" in result.output


def test_validate_failure(runner: CliRunner, tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("suites: []\n", encoding="utf-8")

    result = runner.invoke(app, ["validate", str(path)])

    assert result.exit_code == 1
    assert "Required field 'version' is missing" in result.output


def test_formats(runner: CliRunner) -> None:
    result = runner.invoke(app, ["formats"])

    assert result.exit_code == 0
    for tag in ("dot", "list", "min", "landing", "json", "xunit"):
        assert tag in result.output
