"""Implementation of the ``notesmith validate`` command."""

from __future__ import annotations

import typer

from notesmith.core.exceptions import NotesmithError
from notesmith.core.templates import DocumentKind, ValidationLevel

from .._options import (
    ConfigOption,
    CourseIdArgument,
    FieldOption,
    KindOption,
    LevelOption,
    SectionOption,
    TemplateOption,
    TemplatesOption,
    TitleOption,
    VariableOption,
    VariantOption,
)
from ..presenter import present_validation_report
from ..state import get_cli_state
from ..utils import fail, load_configuration, make_builder, make_options, parse_assignments


def validate(
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
) -> None:
    """Validate the context for COURSE_ID without rendering it."""
    state = get_cli_state()
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
        options=make_options(level=level, strict=False, validate=True, transform=True),
    )

    try:
        report = builder.validate()
    except NotesmithError as exc:
        fail(str(exc), exc)

    present_validation_report(state, report)
    if report.has_errors:
        raise typer.Exit(code=1)


__all__ = ["validate"]
