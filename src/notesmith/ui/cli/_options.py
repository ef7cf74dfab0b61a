"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from notesmith.core.templates.context import DocumentKind
from notesmith.core.templates.validation import ValidationLevel


TEMPLATE_PANEL = "Template"
CONTENT_PANEL = "Content"
CONFIG_PANEL = "Configuration"
VALIDATION_PANEL = "Validation"
OUTPUT_PANEL = "Output"


CourseIdArgument = Annotated[
    str,
    typer.Argument(help="Course identifier, e.g. 01005.", show_default=False),
]

TemplateOption = Annotated[
    str,
    typer.Option(
        "--template",
        "-t",
        help="Template definition to render.",
        rich_help_panel=TEMPLATE_PANEL,
    ),
]

VariantOption = Annotated[
    str | None,
    typer.Option(
        "--variant",
        help="Render this variant instead of selecting one from the course type.",
        rich_help_panel=TEMPLATE_PANEL,
    ),
]

KindOption = Annotated[
    DocumentKind,
    typer.Option(
        "--kind",
        help="Document kind used for default titles and sections.",
        case_sensitive=False,
        rich_help_panel=TEMPLATE_PANEL,
    ),
]

TitleOption = Annotated[
    str | None,
    typer.Option("--title", help="Document title.", rich_help_panel=CONTENT_PANEL),
]

SectionOption = Annotated[
    list[str] | None,
    typer.Option(
        "--section",
        "-s",
        help="Section heading to emit (repeatable). Replaces template sections.",
        rich_help_panel=CONTENT_PANEL,
    ),
]

VariableOption = Annotated[
    list[str] | None,
    typer.Option(
        "--var",
        help="Template variable as KEY=VALUE (repeatable).",
        rich_help_panel=CONTENT_PANEL,
    ),
]

FieldOption = Annotated[
    list[str] | None,
    typer.Option(
        "--field",
        help="Custom field as KEY=VALUE (repeatable).",
        rich_help_panel=CONTENT_PANEL,
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        help="User configuration file (defaults to $NOTESMITH_CONFIG or ~/.config/notesmith).",
        dir_okay=False,
        rich_help_panel=CONFIG_PANEL,
    ),
]

TemplatesOption = Annotated[
    Path | None,
    typer.Option(
        "--templates",
        help="Template configuration file or directory holding .noter-config.toml.",
        rich_help_panel=CONFIG_PANEL,
    ),
]

LevelOption = Annotated[
    ValidationLevel,
    typer.Option(
        "--validation-level",
        help="How thorough validation is.",
        case_sensitive=False,
        rich_help_panel=VALIDATION_PANEL,
    ),
]

StrictOption = Annotated[
    bool,
    typer.Option(
        "--strict",
        help="Abort when validation reports errors.",
        rich_help_panel=VALIDATION_PANEL,
    ),
]

NoValidateOption = Annotated[
    bool,
    typer.Option(
        "--no-validate",
        help="Skip validation before rendering.",
        rich_help_panel=VALIDATION_PANEL,
    ),
]

NoTransformOption = Annotated[
    bool,
    typer.Option(
        "--no-transform",
        help="Skip the variable transformations declared by the template package.",
        rich_help_panel=VALIDATION_PANEL,
    ),
]

OutputOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Write the document to this file instead of stdout.",
        dir_okay=False,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

ForceOption = Annotated[
    bool,
    typer.Option(
        "--force",
        "-f",
        help="Overwrite the output file when it already exists.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]
