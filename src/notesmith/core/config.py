"""Configuration snapshot consumed by the template engine.

NoterConfig

`author` (`str`)
: Name written into every generated document. The placeholder `Your Name`
  is reported during comprehensive validation.

`template_version` (`str`)
: Version string recorded on generated contexts.

`semester_format` (`SemesterFormat`)
: Style used to render the current semester: `year_season` (`2024 Spring`),
  `season_year` (`Spring 2024`), `short` (`S24`) or `custom`.

`semester_pattern` (`str | None`)
: Pattern used by the `custom` style. Supports the `{year}`, `{season}`, `{s}`
  and `{yy}` tokens.

`note_preferences` (`NotePreferences`)
: Default titles and section lists per document kind.

`paths` (`PathConfig`)
: Directories used by the surrounding tooling. The engine only checks that
  they exist during comprehensive validation.

`courses` (`dict[str, str]`)
: Registry mapping course identifiers to course names.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from notesmith.version import get_version


DEFAULT_AUTHOR = "Your Name"

DEFAULT_COURSES: dict[str, str] = {
    "01005": "Advanced Engineering Mathematics 1",
    "01006": "Advanced Engineering Mathematics 2",
    "01017": "Discrete Mathematics",
    "02101": "Introduction to Programming",
    "02102": "Algorithms and Data Structures",
    "25200": "Classical Physics 1",
    "22100": "Electronics 1",
}

DEFAULT_LECTURE_SECTIONS = [
    "Key Concepts",
    "Mathematical Framework",
    "Examples",
    "Important Points",
    "Questions & Follow-up",
    "Connections to Previous Material",
    "Next Class Preview",
]

DEFAULT_ASSIGNMENT_SECTIONS = ["Problem 1", "Problem 2", "Problem 3"]


class SemesterFormat(str, Enum):
    """Supported semester rendering styles."""

    YEAR_SEASON = "year_season"
    SEASON_YEAR = "season_year"
    SHORT = "short"
    CUSTOM = "custom"


class NotePreferences(BaseModel):
    """Per-document-kind defaults."""

    model_config = ConfigDict(extra="ignore")

    include_date_in_title: bool = True
    lecture_sections: list[str] = Field(
        default_factory=lambda: list(DEFAULT_LECTURE_SECTIONS)
    )
    assignment_sections: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ASSIGNMENT_SECTIONS)
    )


class PathConfig(BaseModel):
    """Filesystem locations owned by the surrounding tooling."""

    model_config = ConfigDict(extra="ignore")

    notes_dir: Path = Path("notes")
    obsidian_dir: Path = Path("obsidian-vault")
    templates_dir: Path = Path("templates")
    typst_packages_dir: Path = Path("~/.local/share/typst/packages/local")

    def checked_paths(self) -> dict[str, Path]:
        """Return the directories that must exist, keyed by setting name."""
        return {
            "templates_dir": self.templates_dir.expanduser(),
            "notes_dir": self.notes_dir.expanduser(),
            "typst_packages_dir": self.typst_packages_dir.expanduser(),
        }


class NoterConfig(BaseModel):
    """User configuration snapshot handed to the template engine."""

    model_config = ConfigDict(extra="ignore")

    author: str = DEFAULT_AUTHOR
    template_version: str = Field(default_factory=get_version)
    semester_format: SemesterFormat = SemesterFormat.YEAR_SEASON
    semester_pattern: str | None = None
    note_preferences: NotePreferences = Field(default_factory=NotePreferences)
    paths: PathConfig = Field(default_factory=PathConfig)
    courses: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_COURSES))

    @model_validator(mode="after")
    def _require_pattern(self) -> NoterConfig:
        if self.semester_format is SemesterFormat.CUSTOM and not self.semester_pattern:
            raise ValueError("The 'custom' semester format requires 'semester_pattern'.")
        return self

    def get_course_name(self, course_id: str) -> str:
        """Return the registered course name, or an empty string."""
        return self.courses.get(course_id, "")

    def format_semester(self, year: int, is_spring: bool) -> str:
        """Render a semester label using the configured style."""
        season = "Spring" if is_spring else "Fall"
        short_season = "S" if is_spring else "F"
        two_digit = f"{year % 100:02d}"

        if self.semester_format is SemesterFormat.YEAR_SEASON:
            return f"{year} {season}"
        if self.semester_format is SemesterFormat.SEASON_YEAR:
            return f"{season} {year}"
        if self.semester_format is SemesterFormat.SHORT:
            return f"{short_season}{two_digit}"

        pattern = self.semester_pattern or ""
        return (
            pattern.replace("{year}", str(year))
            .replace("{}", str(year))
            .replace("{season}", season)
            .replace("{s}", short_season)
            .replace("{yy}", two_digit)
        )

    def current_semester(self, now: datetime) -> str:
        """Return the semester label for ``now`` (January-June is spring)."""
        return self.format_semester(now.year, now.month <= 6)


__all__ = [
    "DEFAULT_ASSIGNMENT_SECTIONS",
    "DEFAULT_AUTHOR",
    "DEFAULT_COURSES",
    "DEFAULT_LECTURE_SECTIONS",
    "NotePreferences",
    "NoterConfig",
    "PathConfig",
    "SemesterFormat",
]
