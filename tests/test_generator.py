from __future__ import annotations

from dataclasses import replace

import pytest

from notesmith.core.exceptions import ConfigurationAbsentError
from notesmith.core.templates import (
    ContextBuilder,
    DocumentGenerator,
    TemplateDefinition,
    TemplateVariant,
    document_sections,
    render_document,
    resolve_sections,
    typst_heading,
    typst_string,
)


@pytest.fixture
def note() -> TemplateDefinition:
    return TemplateDefinition(
        name="note",
        function="dtu-note",
        default_sections=["Introduction", "Summary"],
    )


@pytest.fixture
def context(config, template_config, clock):
    return ContextBuilder(
        course_id="01005",
        config=config,
        template_config=template_config,
        clock=clock,
    ).with_title("Limits").build()


def test_render_base_template(context, note) -> None:
    output = DocumentGenerator().render(context, note)

    assert output == (
        '#import "@local/dtu-template:0.5.0":*\n'
        "\n"
        "#show: dtu-note.with(\n"
        '  course: "01005",\n'
        '  course-name: "Advanced Engineering Mathematics 1",\n'
        '  title: "Limits",\n'
        "  date: datetime(year: 2024, month: 3, day: 15),\n"
        '  author: "Ada Lovelace",\n'
        '  semester: "2024 Spring"\n'
        ")\n"
        "\n"
        "= Introduction\n"
        "\n"
        "= Summary\n"
        "\n"
    )


def test_render_without_sections_ends_after_invocation(context) -> None:
    bare = TemplateDefinition(name="note", function="dtu-note")

    output = render_document(context, bare)

    assert output.endswith(")\n\n")
    assert "\n= " not in output


def test_context_sections_take_precedence(context, note) -> None:
    context.sections = ["A", "B"]

    output = DocumentGenerator().render(context, note)

    assert output.endswith(")\n\n= A\n\n= B\n\n")


def test_variant_function_and_additional_sections(context, note) -> None:
    variant = TemplateVariant(
        name="math-note",
        template="note",
        course_types=["math"],
        function="dtu-math-note",
        additional_sections=["Theorems"],
    )

    output = DocumentGenerator()(context, note, variant)

    assert "#show: dtu-math-note.with(\n" in output
    assert output.endswith("= Introduction\n\n= Summary\n\n= Theorems\n\n")


def test_variant_without_function_keeps_definition_function(context, note) -> None:
    variant = TemplateVariant(name="plain", template="note", override_sections=["Only"])

    output = DocumentGenerator().render(context, note, variant)

    assert "#show: dtu-note.with(\n" in output
    assert output.endswith(")\n\n= Only\n\n")


def test_render_is_deterministic(context, note) -> None:
    generator = DocumentGenerator()
    assert generator.render(context, note) == generator.render(context, note)


def test_date_comes_from_context_metadata(context, note) -> None:
    context.metadata = replace(
        context.metadata, creation_date=context.metadata.creation_date.replace(month=11, day=2)
    )

    output = DocumentGenerator().render(context, note)

    assert "date: datetime(year: 2024, month: 11, day: 2)," in output


def test_string_parameters_are_escaped(context, note) -> None:
    context.title = 'Say "hi" \\ bye'

    output = DocumentGenerator().render(context, note)

    assert '  title: "Say \\"hi\\" \\\\ bye",\n' in output


def test_render_requires_template_config(context, note) -> None:
    context.template_config = None

    with pytest.raises(ConfigurationAbsentError):
        DocumentGenerator().render(context, note)


def test_resolve_sections_rules(note) -> None:
    override = TemplateVariant(
        name="o", template="note", override_sections=[], additional_sections=["X"]
    )
    additional = TemplateVariant(name="a", template="note", additional_sections=["X"])

    assert resolve_sections(note) == ["Introduction", "Summary"]
    assert resolve_sections(note, override) == ["Introduction", "Summary", "X"]
    assert resolve_sections(note, additional) == ["Introduction", "Summary", "X"]


def test_typst_string() -> None:
    assert typst_string("plain") == '"plain"'
    assert typst_string("line\nbreak") == '"line\\nbreak"'
    assert typst_string(None) == '""'


def test_empty_override_falls_back_to_default_sections(context) -> None:
    definition = TemplateDefinition(name="note", function="dtu-note", default_sections=["Intro"])
    variant = TemplateVariant(
        name="everything", template="note", course_types=["all"], override_sections=[]
    )

    output = DocumentGenerator().render(context, definition, variant)

    assert output.endswith(')\n\n= Intro\n\n')
    assert document_sections(context, definition, variant) == ["Intro"]


def test_headings_are_kept_on_one_line(context, note) -> None:
    context.sections = ["Intro\n#set page(flipped: true)", "  Spaced   out  "]

    output = DocumentGenerator().render(context, note)

    assert output.endswith(")\n\n= Intro #set page(flipped: true)\n\n= Spaced out\n\n")
    assert "\n#set" not in output
    assert typst_heading("a\r\nb\tc") == "a b c"
