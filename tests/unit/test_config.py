"""Tests for reporter options."""

from pathlib import Path

import pytest

from verdict.config import DEFAULT_MAX_DIFF_SIZE, DEFAULT_SLOW_MS, ReporterOptions
from verdict.errors import ConfigError


def test_defaults() -> None:
    options = ReporterOptions()

    assert options.use_colors is None
    assert options.max_diff_size == DEFAULT_MAX_DIFF_SIZE == 8192
    assert options.slow == DEFAULT_SLOW_MS == 75
    assert not options.inline_diffs
    assert options.output is None


def test_from_mapping_accepts_camel_case() -> None:
    """Runner-style option names map onto the snake_case fields."""
    options = ReporterOptions.from_mapping({
        "useColors": True,
        "inlineDiffs": True,
        "maxDiffSize": 100,
        "suiteName": "API",
        "showRelativePaths": True,
    })

    assert options.use_colors is True
    assert options.inline_diffs is True
    assert options.max_diff_size == 100
    assert options.suite_name == "API"
    assert options.show_relative_paths is True


def test_from_mapping_accepts_numeric_strings() -> None:
    options = ReporterOptions.from_mapping({"maxDiffSize": "100", "slow": "20"})

    assert options.max_diff_size == 100
    assert options.slow == 20


def test_non_numeric_max_diff_size_keeps_default() -> None:
    """A max diff size that is not a number is ignored."""
    assert ReporterOptions.from_mapping({"maxDiffSize": "lots"}).max_diff_size == 8192
    assert ReporterOptions.from_mapping({"maxDiffSize": None}).max_diff_size == 8192
    assert ReporterOptions.from_mapping({"maxDiffSize": float("nan")}).max_diff_size == 8192


def test_from_mapping_empty() -> None:
    assert ReporterOptions.from_mapping(None) == ReporterOptions()
    assert ReporterOptions.from_mapping({}) == ReporterOptions()


def test_unknown_option_rejected() -> None:
    with pytest.raises(ConfigError, match="Unknown reporter option 'colour'"):
        ReporterOptions.from_mapping({"colour": True})


@pytest.mark.parametrize("size", [-1, 1.5, True, "10"])
def test_invalid_max_diff_size_rejected(size: object) -> None:
    with pytest.raises(ConfigError, match="max_diff_size"):
        ReporterOptions(max_diff_size=size)  # type: ignore[arg-type]


def test_negative_slow_rejected() -> None:
    with pytest.raises(ConfigError, match="slow"):
        ReporterOptions(slow=-5)


def test_output_coerced_to_path() -> None:
    options = ReporterOptions(output="reports/junit.xml")  # type: ignore[arg-type]

    assert options.output == Path("reports/junit.xml")


def test_with_overrides_returns_copy() -> None:
    options = ReporterOptions()

    changed = options.with_overrides(inline_diffs=True)

    assert changed.inline_diffs
    assert not options.inline_diffs


@pytest.mark.parametrize("size", ["Infinity", float("inf")])
def test_infinite_max_diff_size_is_unbounded(size: object) -> None:
    assert ReporterOptions.from_mapping({"maxDiffSize": size}).max_diff_size == 0


def test_negative_infinite_max_diff_size_rejected() -> None:
    with pytest.raises(ConfigError, match="max_diff_size"):
        ReporterOptions.from_mapping({"maxDiffSize": "-Infinity"})


@pytest.mark.parametrize("size, expected", [("0.5", 1), (100.2, 101), ("12.0", 12)])
def test_fractional_max_diff_size_rounds_up(size: object, expected: int) -> None:
    """A small positive bound never turns into 'unbounded'."""
    assert ReporterOptions.from_mapping({"maxDiffSize": size}).max_diff_size == expected


def test_color_overrides() -> None:
    options = ReporterOptions.from_mapping({"colorOverrides": {"fail": "35"}})

    assert options.color_overrides == {"fail": "35"}


def test_unknown_color_tag_rejected() -> None:
    with pytest.raises(ConfigError, match="Unknown color tag"):
        ReporterOptions(color_overrides={"failure": "35"})
