from __future__ import annotations

from datetime import datetime

import pydantic
import pytest

from notesmith.core.config import DEFAULT_AUTHOR, NoterConfig, SemesterFormat


@pytest.mark.parametrize(
    ("semester_format", "is_spring", "expected"),
    [
        (SemesterFormat.YEAR_SEASON, True, "2024 Spring"),
        (SemesterFormat.YEAR_SEASON, False, "2024 Fall"),
        (SemesterFormat.SEASON_YEAR, True, "Spring 2024"),
        (SemesterFormat.SHORT, True, "S24"),
        (SemesterFormat.SHORT, False, "F24"),
    ],
)
def test_format_semester(semester_format: SemesterFormat, is_spring: bool, expected: str) -> None:
    config = NoterConfig(semester_format=semester_format)
    assert config.format_semester(2024, is_spring) == expected


def test_short_format_pads_year() -> None:
    config = NoterConfig(semester_format=SemesterFormat.SHORT)
    assert config.format_semester(2005, True) == "S05"


@pytest.mark.parametrize(
    ("pattern", "expected"),
    [
        ("{season} '{yy}", "Fall '24"),
        ("{s}{year}", "F2024"),
        ("Semester {}", "Semester 2024"),
    ],
)
def test_custom_pattern(pattern: str, expected: str) -> None:
    config = NoterConfig(semester_format="custom", semester_pattern=pattern)
    assert config.format_semester(2024, False) == expected


def test_custom_format_requires_pattern() -> None:
    with pytest.raises(pydantic.ValidationError):
        NoterConfig(semester_format="custom")


@pytest.mark.parametrize(
    ("month", "expected"),
    [(1, "2024 Spring"), (6, "2024 Spring"), (7, "2024 Fall"), (12, "2024 Fall")],
)
def test_current_semester_boundaries(month: int, expected: str) -> None:
    assert NoterConfig().current_semester(datetime(2024, month, 1)) == expected


def test_defaults() -> None:
    config = NoterConfig()

    assert config.author == DEFAULT_AUTHOR
    assert config.get_course_name("01005") == "Advanced Engineering Mathematics 1"
    assert config.get_course_name("99999") == ""
    assert config.note_preferences.include_date_in_title is True


def test_unrelated_sections_are_ignored() -> None:
    config = NoterConfig.model_validate({"author": "Ada", "editor": {"command": "vim"}})
    assert config.author == "Ada"
