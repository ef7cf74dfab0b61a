"""Rich presenters for validation reports and template configuration."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from rich import box
from rich.table import Table
from rich.text import Text

from notesmith.core.templates import (
    ContextSummary,
    TemplateConfig,
    ValidationReport,
    ValidationSeverity,
)

from .state import CLIState


_SEVERITY_STYLES = {
    ValidationSeverity.ERROR: "bold red",
    ValidationSeverity.WARNING: "yellow",
    ValidationSeverity.INFO: "cyan",
}


def _format_list(values: Iterable[str]) -> str:
    sequence = list(values)
    return ", ".join(sequence) if sequence else "-"


def _build_table(title: str | None, columns: Sequence[str]) -> Table:
    """Create a table with the house style."""
    table = Table(
        title=title or None,
        box=box.SQUARE,
        show_edge=True,
        header_style="bold cyan",
    )
    for column in columns:
        table.add_column(column)
    return table


def present_validation_report(state: CLIState, report: ValidationReport) -> None:
    """Print every validation issue followed by the severity counts."""
    console = state.console
    if report.is_clean:
        console.print(Text("No validation issues found.", style="green"))
        return

    table = _build_table("Validation Issues", ["Severity", "Category", "Message", "Suggestion"])
    for issue in report.issues:
        message = issue.message
        if issue.location:
            message = f"{message} (at {issue.location})"
        table.add_row(
            Text(issue.severity.value, style=_SEVERITY_STYLES[issue.severity]),
            issue.category,
            message,
            issue.suggestion or "-",
        )
    console.print(table)
    console.print(
        f"{report.error_count} error(s), {report.warning_count} warning(s), "
        f"{report.info_count} info message(s)"
    )


def present_template_config(state: CLIState, template_config: TemplateConfig) -> None:
    """Print the package metadata, template definitions, variants and mapping."""
    console = state.console
    info = template_config.metadata
    console.print(
        Text.assemble(
            (info.name, "bold magenta"),
            (f" {info.version}", "green"),
            (f"  {info.description}" if info.description else "", "dim"),
        )
    )

    templates = _build_table("Templates", ["Name", "Function", "Default sections", "Course types"])
    if not template_config.templates:
        templates.add_row("-", "-", "-", "No templates declared")
    for definition in template_config.templates:
        templates.add_row(
            definition.name,
            definition.function,
            _format_list(definition.default_sections),
            _format_list(definition.course_types or []),
        )
    console.print(templates)

    if template_config.variants:
        variants = _build_table("Variants", ["Name", "Template", "Course types", "Function", "Sections"])
        for variant in template_config.variants:
            if variant.override_sections:
                sections = f"override: {_format_list(variant.override_sections)}"
            else:
                sections = f"additional: {_format_list(variant.additional_sections or [])}"
            variants.add_row(
                variant.name,
                variant.template,
                _format_list(variant.course_types),
                variant.function or "-",
                sections,
            )
        console.print(variants)

    if template_config.course_mapping:
        mapping = _build_table("Course Mapping", ["Pattern", "Course type"])
        for pattern, course_type in template_config.course_mapping.items():
            mapping.add_row(pattern, course_type)
        console.print(mapping)


def present_build_summary(state: CLIState, summary: ContextSummary, output: Path) -> None:
    """Print where the document went and which variant produced it."""
    table = _build_table(None, ["Artifact", "Location"])
    table.add_row("Document", str(output))
    table.add_row("Course", f"{summary.course_id} {summary.course_name}".strip())
    table.add_row("Course type", summary.course_type)
    table.add_row("Variant", summary.variant_used or "-")
    table.add_row("Sections", str(summary.sections_count))
    state.err_console.print(table)


__all__ = [
    "present_build_summary",
    "present_template_config",
    "present_validation_report",
]
