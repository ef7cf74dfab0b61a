"""Multi-level validation of template contexts and configurations.

Three inclusive levels are supported:

- ``minimal`` runs the context checks and keeps only errors.
- ``standard`` keeps every issue raised by the context checks.
- ``comprehensive`` adds environment checks (configured directories exist,
  placeholder author) and template configuration checks (variants reference
  known templates, definition names are unique, overlapping course patterns).

Issues are never deduplicated: every rule that fires reports its own issue.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
import logging

from notesmith.core.config import DEFAULT_AUTHOR, NoterConfig

from .context import TemplateContext
from .manifest import TemplateConfig, TemplateDefinition, TemplateVariant
from .resolver import overlapping_patterns


logger = logging.getLogger(__name__)


class ValidationSeverity(Enum):
    """Severity attached to a validation issue."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ValidationLevel(Enum):
    """How thorough a validation pass is."""

    MINIMAL = "minimal"
    STANDARD = "standard"
    COMPREHENSIVE = "comprehensive"


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """Single finding reported by the validator."""

    severity: ValidationSeverity
    category: str
    message: str
    suggestion: str | None = None
    location: str | None = None

    def format(self) -> str:
        text = f"{self.severity.value.capitalize()} [{self.category}]: {self.message}"
        if self.location:
            text = f"{text} (at {self.location})"
        return text


@dataclass(slots=True)
class ValidationReport:
    """Ordered collection of issues produced by one validation pass."""

    issues: list[ValidationIssue] = field(default_factory=list)

    def _count(self, severity: ValidationSeverity) -> int:
        return sum(1 for issue in self.issues if issue.severity is severity)

    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity is ValidationSeverity.ERROR]

    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity is ValidationSeverity.WARNING]

    @property
    def error_count(self) -> int:
        return self._count(ValidationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return self._count(ValidationSeverity.WARNING)

    @property
    def info_count(self) -> int:
        return self._count(ValidationSeverity.INFO)

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0

    @property
    def has_warnings(self) -> bool:
        return self.warning_count > 0

    @property
    def is_clean(self) -> bool:
        return not self.issues

    def format_report(self) -> str:
        """Render the issues as a human-readable report."""
        if self.is_clean:
            return "No validation issues found."
        lines = [
            f"Validation found {self.error_count} error(s), "
            f"{self.warning_count} warning(s), {self.info_count} info message(s):"
        ]
        for issue in self.issues:
            lines.append(f"  {issue.format()}")
            if issue.suggestion:
                lines.append(f"    Suggestion: {issue.suggestion}")
        return "\n".join(lines)


def check_context(context: TemplateContext) -> list[ValidationIssue]:
    """Structural checks run at every level."""
    issues: list[ValidationIssue] = []

    if not context.author:
        issues.append(
            ValidationIssue(
                severity=ValidationSeverity.WARNING,
                category="context",
                message="Author name is empty",
                suggestion="Set 'author' in the configuration file.",
                location="context.author",
            )
        )

    if not context.course_name:
        issues.append(
            ValidationIssue(
                severity=ValidationSeverity.WARNING,
                category="context",
                message=f"Course name not found for {context.course_id}",
                suggestion=f"Register '{context.course_id}' under [courses].",
                location="context.course_name",
            )
        )

    engine = context.engine_config
    if engine.validation.validate_variables:
        for name in engine.variables.builtin_variables:
            if name not in context.variables:
                issues.append(
                    ValidationIssue(
                        severity=ValidationSeverity.ERROR,
                        category="variables",
                        message=f"Required variable '{name}' is missing",
                        suggestion=f"Provide '{name}' as a template variable.",
                        location=f"variables.{name}",
                    )
                )

    return issues


def check_environment(config: NoterConfig) -> list[ValidationIssue]:
    """Check the configured directories and placeholder values."""
    issues: list[ValidationIssue] = []

    if config.author == DEFAULT_AUTHOR:
        issues.append(
            ValidationIssue(
                severity=ValidationSeverity.INFO,
                category="environment",
                message="Author name is set to the default value",
                suggestion="Set 'author' in the configuration file.",
                location="config.author",
            )
        )

    for key, path in config.paths.checked_paths().items():
        if not path.exists():
            issues.append(
                ValidationIssue(
                    severity=ValidationSeverity.WARNING,
                    category="environment",
                    message=f"Directory '{path}' does not exist",
                    suggestion=f"Create it or update paths.{key}.",
                    location=f"paths.{key}",
                )
            )

    return issues


def check_template_config(template_config: TemplateConfig) -> list[ValidationIssue]:
    """Check that a template configuration is self-consistent."""
    issues: list[ValidationIssue] = []

    counts = Counter(definition.name for definition in template_config.templates)
    for name, count in counts.items():
        if count > 1:
            issues.append(
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    category="configuration",
                    message=f"Template '{name}' is defined {count} times",
                    suggestion="Template names must be unique.",
                    location="templates",
                )
            )

    known = set(counts)
    for index, variant in enumerate(template_config.variants):
        if variant.template not in known:
            issues.append(
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    category="configuration",
                    message=(
                        f"Variant '{variant.name}' references unknown template "
                        f"'{variant.template}'"
                    ),
                    suggestion=f"Use one of: {', '.join(sorted(known)) or '-'}.",
                    location=f"variants[{index}].template",
                )
            )

    for winner, shadowed in overlapping_patterns(template_config.course_mapping):
        issues.append(
            ValidationIssue(
                severity=ValidationSeverity.INFO,
                category="configuration",
                message=(
                    f"Course patterns '{winner}' and '{shadowed}' overlap; "
                    f"'{winner}' wins because it is declared first"
                ),
                location="course_mapping",
            )
        )

    return issues


class TemplateValidator:
    """Run the checks that belong to a validation level."""

    def __init__(self, level: ValidationLevel = ValidationLevel.STANDARD) -> None:
        self.level = level

    def validate(
        self,
        context: TemplateContext,
        definition: TemplateDefinition | None = None,
        variant: TemplateVariant | None = None,
        *,
        config: NoterConfig | None = None,
    ) -> ValidationReport:
        issues = check_context(context)

        if self.level is ValidationLevel.MINIMAL:
            issues = [issue for issue in issues if issue.severity is ValidationSeverity.ERROR]
        elif self.level is ValidationLevel.COMPREHENSIVE:
            if config is not None:
                issues.extend(check_environment(config))
            if context.template_config is not None:
                issues.extend(check_template_config(context.template_config))

        report = ValidationReport(issues=issues)
        logger.debug(
            "Validated '%s' (%s, template=%s, variant=%s): %d issue(s)",
            context.course_id,
            self.level.value,
            definition.name if definition else None,
            variant.name if variant else None,
            len(report.issues),
        )
        return report


__all__ = [
    "TemplateValidator",
    "ValidationIssue",
    "ValidationLevel",
    "ValidationReport",
    "ValidationSeverity",
    "check_context",
    "check_environment",
    "check_template_config",
]
