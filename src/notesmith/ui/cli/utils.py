"""Helpers shared by the CLI commands."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import NoReturn

import typer

from notesmith.adapters.loader import discover_template_config, load_user_config
from notesmith.core.config import NoterConfig
from notesmith.core.exceptions import NotesmithError
from notesmith.core.templates import (
    DocumentKind,
    ProcessingOptions,
    TemplateBuilder,
    TemplateConfig,
    TemplateReference,
    ValidationLevel,
)

from .diagnostics import CliEmitter
from .state import emit_error, get_cli_state


def parse_assignments(values: Iterable[str] | None, *, option: str) -> dict[str, str]:
    """Parse repeated ``KEY=VALUE`` options into a mapping."""
    parsed: dict[str, str] = {}
    for raw in values or []:
        key, separator, value = raw.partition("=")
        key = key.strip()
        if not separator or not key:
            raise typer.BadParameter(f"Expected KEY=VALUE, got '{raw}'.", param_hint=option)
        parsed[key] = value
    return parsed


def load_configuration(
    config_path: Path | None, templates_path: Path | None
) -> tuple[NoterConfig, TemplateConfig]:
    """Load both configuration documents, exiting with a message on failure."""
    try:
        config = load_user_config(config_path)
        template_config = discover_template_config(config, templates_path)
    except NotesmithError as exc:
        fail(str(exc), exc)
    return config, template_config


def make_builder(
    *,
    course_id: str,
    config: NoterConfig,
    template_config: TemplateConfig,
    template: str,
    kind: DocumentKind,
    title: str | None,
    variant: str | None,
    sections: list[str] | None,
    variables: dict[str, str],
    fields: dict[str, str],
    options: ProcessingOptions,
) -> TemplateBuilder:
    """Translate CLI inputs into a configured :class:`TemplateBuilder`."""
    state = get_cli_state()
    builder = (
        TemplateBuilder.create(
            course_id,
            config,
            template_config,
            reference=TemplateReference(template),
            kind=kind,
        )
        .with_variant(variant)
        .with_variables(variables)
        .with_processing_options(options)
        .with_emitter(CliEmitter(state))
    )
    if title is not None:
        builder = builder.with_title(title)
    if sections:
        builder = builder.with_sections(sections)
    for key, value in fields.items():
        builder = builder.with_custom_field(key, value)
    return builder


def make_options(
    *,
    level: ValidationLevel,
    strict: bool,
    validate: bool,
    transform: bool,
) -> ProcessingOptions:
    state = get_cli_state()
    return ProcessingOptions(
        validate_before_build=validate,
        apply_transformations=transform,
        include_debug_info=state.verbosity >= 1 or state.show_tracebacks,
        validation_level=level,
        fail_on_validation_errors=strict,
    )


def fail(message: str, exc: BaseException | None = None) -> NoReturn:
    """Report ``message`` and exit with status 1."""
    emit_error(message, exception=exc)
    raise typer.Exit(code=1) from exc


__all__ = [
    "fail",
    "load_configuration",
    "make_builder",
    "make_options",
    "parse_assignments",
]
