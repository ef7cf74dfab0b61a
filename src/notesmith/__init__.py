"""Primary public API for Notesmith."""

from __future__ import annotations

from notesmith.adapters.loader import (
    discover_template_config,
    load_template_config,
    load_user_config,
)
from notesmith.core.clock import Clock, fixed_clock, system_clock
from notesmith.core.config import NoterConfig, SemesterFormat
from notesmith.core.diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from notesmith.core.exceptions import (
    ConfigLoadError,
    ConfigurationAbsentError,
    MissingRequiredFieldError,
    NotesmithError,
    TemplateError,
    TemplateNotFoundError,
    TransformationError,
    ValidationFailedError,
    VariantNotFoundError,
)
from notesmith.core.templates import (
    ContextBuilder,
    ContextSummary,
    DocumentGenerator,
    DocumentKind,
    ProcessingOptions,
    TemplateBuilder,
    TemplateConfig,
    TemplateContext,
    TemplateDefinition,
    TemplateMetadata,
    TemplateOutput,
    TemplateOutputWithValidation,
    TemplateReference,
    TemplateValidator,
    TemplateVariant,
    ValidationIssue,
    ValidationLevel,
    ValidationReport,
    ValidationSeverity,
    VariantResolver,
)
from notesmith.version import get_version


__version__ = get_version()


__all__ = [
    "Clock",
    "ConfigLoadError",
    "ConfigurationAbsentError",
    "ContextBuilder",
    "ContextSummary",
    "DiagnosticEmitter",
    "DocumentGenerator",
    "DocumentKind",
    "LoggingEmitter",
    "MissingRequiredFieldError",
    "NoterConfig",
    "NotesmithError",
    "NullEmitter",
    "ProcessingOptions",
    "SemesterFormat",
    "TemplateBuilder",
    "TemplateConfig",
    "TemplateContext",
    "TemplateDefinition",
    "TemplateError",
    "TemplateMetadata",
    "TemplateNotFoundError",
    "TemplateOutput",
    "TemplateOutputWithValidation",
    "TemplateReference",
    "TemplateValidator",
    "TemplateVariant",
    "TransformationError",
    "ValidationFailedError",
    "ValidationIssue",
    "ValidationLevel",
    "ValidationReport",
    "ValidationSeverity",
    "VariantNotFoundError",
    "VariantResolver",
    "__version__",
    "discover_template_config",
    "fixed_clock",
    "get_version",
    "load_template_config",
    "load_user_config",
    "system_clock",
]
