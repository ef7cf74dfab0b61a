"""Assemble Typst source text from a resolved context."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from notesmith.core.exceptions import ConfigurationAbsentError

from .context import TemplateContext
from .manifest import TemplateDefinition, TemplateVariant


SKELETON_ROOT = Path(__file__).resolve().parent / "skeleton"
DOCUMENT_SKELETON = "document.typ"

_TYPST_STRING_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}


def typst_string(value: object) -> str:
    """Return ``value`` as a quoted Typst string literal."""
    text = "" if value is None else str(value)
    escaped = "".join(_TYPST_STRING_ESCAPES.get(char, char) for char in text)
    return f'"{escaped}"'


def resolve_sections(
    definition: TemplateDefinition,
    variant: TemplateVariant | None = None,
) -> list[str]:
    """Return the sections a template (and optional variant) contributes."""
    if variant is not None and variant.override_sections:
        return list(variant.override_sections)
    sections = list(definition.default_sections)
    if variant is not None and variant.additional_sections:
        sections.extend(variant.additional_sections)
    return sections


def document_sections(
    context: TemplateContext,
    definition: TemplateDefinition,
    variant: TemplateVariant | None = None,
) -> list[str]:
    """Return the headings a document for ``context`` is rendered with."""
    if context.sections:
        return list(context.sections)
    return resolve_sections(definition, variant)


def typst_heading(value: object) -> str:
    """Return ``value`` as a single-line heading text."""
    return " ".join(str(value).split())


def _build_environment(root: Path) -> Environment:
    environment = Environment(
        loader=FileSystemLoader(str(root)),
        autoescape=False,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    environment.filters["typst_string"] = typst_string
    environment.filters["typst_heading"] = typst_heading
    return environment


class DocumentGenerator:
    """Render a document from ``(context, definition, variant)``.

    The output depends on nothing but its inputs: the date triple comes from
    the context creation date, never from the clock.
    """

    def __init__(self, skeleton_root: Path | None = None) -> None:
        self.environment = _build_environment(skeleton_root or SKELETON_ROOT)

    def __call__(
        self,
        context: TemplateContext,
        definition: TemplateDefinition,
        variant: TemplateVariant | None = None,
    ) -> str:
        return self.render(context, definition, variant)

    def render(
        self,
        context: TemplateContext,
        definition: TemplateDefinition,
        variant: TemplateVariant | None = None,
    ) -> str:
        if context.template_config is None:
            raise ConfigurationAbsentError(f"Cannot render '{definition.name}'.")

        package = context.template_config.metadata
        function = (
            variant.function if variant is not None and variant.function else definition.function
        )
        sections = document_sections(context, definition, variant)

        template = self.environment.get_template(DOCUMENT_SKELETON)
        return template.render(
            package=package.name,
            version=package.version,
            function=function,
            course_id=context.course_id,
            course_name=context.course_name,
            title=context.title,
            date=context.metadata.creation_date,
            author=context.author,
            semester=context.semester,
            sections=sections,
        )


def render_document(
    context: TemplateContext,
    definition: TemplateDefinition,
    variant: TemplateVariant | None = None,
) -> str:
    """Render with the packaged skeleton."""
    return DocumentGenerator().render(context, definition, variant)


__all__ = [
    "DOCUMENT_SKELETON",
    "DocumentGenerator",
    "document_sections",
    "render_document",
    "resolve_sections",
    "typst_heading",
    "typst_string",
]
