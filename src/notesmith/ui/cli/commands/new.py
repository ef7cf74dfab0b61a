"""Implementation of the ``notesmith new`` command."""

from __future__ import annotations

from pathlib import Path

import typer

from notesmith.core.exceptions import NotesmithError
from notesmith.core.templates import DocumentKind, ValidationLevel

from .._options import (
    ConfigOption,
    CourseIdArgument,
    FieldOption,
    ForceOption,
    KindOption,
    LevelOption,
    NoTransformOption,
    NoValidateOption,
    OutputOption,
    SectionOption,
    StrictOption,
    TemplateOption,
    TemplatesOption,
    TitleOption,
    VariableOption,
    VariantOption,
)
from ..presenter import present_build_summary
from ..state import get_cli_state
from ..utils import fail, load_configuration, make_builder, make_options, parse_assignments


def new(
    course_id: CourseIdArgument,
    template: TemplateOption = "note",
    variant: VariantOption = None,
    kind: KindOption = DocumentKind.CUSTOM,
    title: TitleOption = None,
    sections: SectionOption = None,
    variables: VariableOption = None,
    fields: FieldOption = None,
    config_path: ConfigOption = None,
    templates_path: TemplatesOption = None,
    level: LevelOption = ValidationLevel.STANDARD,
    strict: StrictOption = False,
    no_validate: NoValidateOption = False,
    no_transform: NoTransformOption = False,
    output: OutputOption = None,
    force: ForceOption = False,
) -> None:
    """Generate a Typst document for COURSE_ID."""
    state = get_cli_state()
    if output is not None and output.exists() and not force:
        fail(f"Refusing to overwrite '{output}' (use --force).")

    config, template_config = load_configuration(config_path, templates_path)
    builder = make_builder(
        course_id=course_id,
        config=config,
        template_config=template_config,
        template=template,
        kind=kind,
        title=title,
        variant=variant,
        sections=sections,
        variables=parse_assignments(variables, option="--var"),
        fields=parse_assignments(fields, option="--field"),
        options=make_options(
            level=level,
            strict=strict,
            validate=not no_validate,
            transform=not no_transform,
        ),
    )

    try:
        result = builder.build_with_metadata()
    except NotesmithError as exc:
        fail(str(exc), exc)

    if output is None:
        typer.echo(result.content, nl=False)
        return

    _write_document(output, result.content)
    present_build_summary(state, result.context_summary, output)


def _write_document(path: Path, content: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        fail(f"Failed to write '{path}': {exc}", exc)


__all__ = ["new"]
