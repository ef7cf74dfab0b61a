"""Template resolution and document generation engine."""

from __future__ import annotations

from .builder import (
    ContextSummary,
    ProcessingOptions,
    TemplateBuilder,
    TemplateOutput,
    TemplateOutputWithValidation,
)
from .context import (
    ContextBuilder,
    DocumentKind,
    TemplateContext,
    TemplateMetadata,
    classify_assignment,
    classify_course,
)
from .generator import (
    DocumentGenerator,
    document_sections,
    render_document,
    resolve_sections,
    typst_heading,
    typst_string,
)
from .manifest import (
    BUILTIN_VARIABLES,
    EngineConfig,
    TemplateConfig,
    TemplateDefinition,
    TemplatePackageInfo,
    TemplateReference,
    TemplateVariant,
    VariableTransformation,
)
from .resolver import (
    VariantResolution,
    VariantResolver,
    matches_course_pattern,
    resolve_course_type,
)
from .transforms import apply_transformations
from .validation import (
    TemplateValidator,
    ValidationIssue,
    ValidationLevel,
    ValidationReport,
    ValidationSeverity,
)


__all__ = [
    "BUILTIN_VARIABLES",
    "ContextBuilder",
    "ContextSummary",
    "DocumentGenerator",
    "DocumentKind",
    "EngineConfig",
    "ProcessingOptions",
    "TemplateBuilder",
    "TemplateConfig",
    "TemplateContext",
    "TemplateDefinition",
    "TemplateMetadata",
    "TemplateOutput",
    "TemplateOutputWithValidation",
    "TemplatePackageInfo",
    "TemplateReference",
    "TemplateValidator",
    "TemplateVariant",
    "ValidationIssue",
    "ValidationLevel",
    "ValidationReport",
    "ValidationSeverity",
    "VariableTransformation",
    "VariantResolution",
    "VariantResolver",
    "apply_transformations",
    "classify_assignment",
    "classify_course",
    "document_sections",
    "matches_course_pattern",
    "render_document",
    "resolve_course_type",
    "resolve_sections",
    "typst_heading",
    "typst_string",
]
