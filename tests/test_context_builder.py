from __future__ import annotations

from datetime import datetime

import pytest

from notesmith.core.clock import fixed_clock
from notesmith.core.config import DEFAULT_LECTURE_SECTIONS, NotePreferences, NoterConfig
from notesmith.core.exceptions import MissingRequiredFieldError
from notesmith.core.templates import (
    ContextBuilder,
    DocumentKind,
    TemplateConfig,
    classify_assignment,
    classify_course,
)


def _builder(config: NoterConfig, template_config: TemplateConfig, clock) -> ContextBuilder:
    return ContextBuilder(
        course_id="01005",
        config=config,
        template_config=template_config,
        clock=clock,
    )


def test_build_populates_builtin_fields(config, template_config, clock) -> None:
    context = _builder(config, template_config, clock).with_title("Limits").build()

    assert context.course_id == "01005"
    assert context.course_name == "Advanced Engineering Mathematics 1"
    assert context.title == "Limits"
    assert context.author == "Ada Lovelace"
    assert context.date == "2024-03-15"
    assert context.semester == "2024 Spring"
    assert context.template_version == "1.2.3"
    assert context.sections == []
    assert context.variables == {
        "course_id": "01005",
        "title": "Limits",
        "author": "Ada Lovelace",
        "semester": "2024 Spring",
        "date": "2024-03-15",
        "year": "2024",
    }
    assert context.metadata.course_type == "math"
    assert context.metadata.creation_date == datetime(2024, 3, 15, 9, 30)
    assert context.metadata.template_source == "dtu-template"
    assert context.metadata.processing_flags == []


def test_missing_course_id_is_reported(config) -> None:
    with pytest.raises(MissingRequiredFieldError) as excinfo:
        ContextBuilder(config=config).build()
    assert excinfo.value.field == "course_id"


def test_missing_config_is_reported() -> None:
    with pytest.raises(MissingRequiredFieldError) as excinfo:
        ContextBuilder(course_id="01005").build()
    assert excinfo.value.field == "config"


def test_with_methods_return_new_builders(config, template_config, clock) -> None:
    base = _builder(config, template_config, clock)
    titled = base.with_title("Series")

    assert base is not titled
    assert base.title is None
    assert titled.title == "Series"


def test_caller_variables_override_custom_fields_and_builtins(
    config, template_config, clock
) -> None:
    context = (
        _builder(config, template_config, clock)
        .with_custom_field("room", "B306")
        .with_custom_field("title", "from field")
        .with_variable("title", "from variable")
        .with_variables({"week": "7"})
        .build()
    )

    assert context.custom_fields == {"room": "B306", "title": "from field"}
    assert context.variables["room"] == "B306"
    assert context.variables["title"] == "from variable"
    assert context.variables["week"] == "7"
    assert context.title == ""


def test_build_copies_configuration_snapshots(config, template_config, clock) -> None:
    builder = _builder(config, template_config, clock)
    context = builder.build()

    config.author = "Changed"
    template_config.templates.clear()

    assert context.author == "Ada Lovelace"
    assert context.template_config is not None
    assert [definition.name for definition in context.template_config.templates] == [
        "note",
        "assignment",
    ]


def test_absent_template_config_yields_empty_configuration(config, clock) -> None:
    context = ContextBuilder(course_id="01005", config=config, clock=clock).build()

    assert context.template_config == TemplateConfig()
    assert context.metadata.template_source == "default"


def test_unknown_course_has_empty_name(config, template_config, clock) -> None:
    context = _builder(config, template_config, clock).with_course_id("99999").build()

    assert context.course_name == ""
    assert context.metadata.course_type == "general"


def test_lecture_kind_defaults(config, template_config, clock) -> None:
    context = _builder(config, template_config, clock).with_kind(DocumentKind.LECTURE).build()

    assert context.title == "Lecture - March 15, 2024"
    assert context.sections == DEFAULT_LECTURE_SECTIONS


def test_lecture_title_without_date(template_config, clock) -> None:
    config = NoterConfig(note_preferences=NotePreferences(include_date_in_title=False))
    context = _builder(config, template_config, clock).with_kind(DocumentKind.LECTURE).build()

    assert context.title == "Lecture Notes"


def test_explicit_title_and_sections_win_over_kind_defaults(
    config, template_config, clock
) -> None:
    context = (
        _builder(config, template_config, clock)
        .with_kind(DocumentKind.LECTURE)
        .with_title("Taylor series")
        .with_sections(["Definitions"])
        .build()
    )

    assert context.title == "Taylor series"
    assert context.sections == ["Definitions"]


def test_assignment_kind_classifies_title(config, template_config, clock) -> None:
    context = (
        _builder(config, template_config, clock)
        .with_kind(DocumentKind.ASSIGNMENT)
        .with_title("Programming Exercise 3")
        .build()
    )

    assert context.sections == ["Problem 1", "Problem 2", "Problem 3"]
    assert context.metadata.assignment_type == "programming"


def test_fall_semester_from_clock(config, template_config) -> None:
    clock = fixed_clock(datetime(2023, 9, 1))
    context = _builder(config, template_config, clock).build()

    assert context.semester == "2023 Fall"
    assert context.variables["year"] == "2023"


@pytest.mark.parametrize(
    ("course_id", "expected"),
    [
        ("01005", "math"),
        ("02101", "programming"),
        ("25200", "physics"),
        ("22100", "electronics"),
        ("28000", "environment"),
        ("31000", "mechanics"),
        ("42000", "general"),
    ],
)
def test_classify_course(course_id: str, expected: str) -> None:
    assert classify_course(course_id) == expected


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("Code review", "programming"),
        ("Research analysis", "research"),
        ("Problem set 2", "theoretical"),
        ("Lab 4", "practical"),
        ("Reflection", "general"),
    ],
)
def test_classify_assignment(title: str, expected: str) -> None:
    assert classify_assignment(title) == expected


def test_variable_accessors(config, template_config, clock) -> None:
    context = _builder(config, template_config, clock).build()

    context.set_variable("week", "7")

    assert context.get_variable("week") == "7"
    assert context.get_variable("missing") is None
