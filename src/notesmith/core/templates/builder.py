"""Fluent orchestration of context construction, validation and rendering."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field, replace
import logging

from notesmith.core.clock import Clock, system_clock
from notesmith.core.config import NoterConfig
from notesmith.core.diagnostics import DiagnosticEmitter, LoggingEmitter
from notesmith.core.exceptions import ConfigurationAbsentError, ValidationFailedError

from .context import ContextBuilder, DocumentKind, TemplateContext, TemplateMetadata
from .generator import DocumentGenerator, document_sections
from .manifest import TemplateConfig, TemplateDefinition, TemplateReference, TemplateVariant
from .resolver import VariantResolution, VariantResolver
from .transforms import apply_transformations
from .validation import (
    TemplateValidator,
    ValidationIssue,
    ValidationLevel,
    ValidationReport,
    ValidationSeverity,
)


logger = logging.getLogger(__name__)

VALIDATED_FLAG = "validated"

RenderFunction = Callable[[TemplateContext, TemplateDefinition, TemplateVariant | None], str]


@dataclass(frozen=True, slots=True)
class ProcessingOptions:
    """Flags gating the optional pipeline steps."""

    validate_before_build: bool = True
    apply_transformations: bool = True
    include_debug_info: bool = False
    validation_level: ValidationLevel = ValidationLevel.STANDARD
    fail_on_validation_errors: bool = False


@dataclass(frozen=True, slots=True)
class ContextSummary:
    """Compact description of a context for logging and reports."""

    course_id: str
    course_name: str
    title: str
    course_type: str
    sections_count: int
    variables_count: int
    variant_used: str | None

    @classmethod
    def from_context(
        cls,
        context: TemplateContext,
        metadata: TemplateMetadata | None = None,
        sections: Sequence[str] | None = None,
    ) -> ContextSummary:
        meta = metadata or context.metadata
        rendered = context.sections if sections is None else sections
        return cls(
            course_id=context.course_id,
            course_name=context.course_name,
            title=context.title,
            course_type=meta.course_type,
            sections_count=len(rendered),
            variables_count=len(context.variables),
            variant_used=meta.variant_used,
        )


@dataclass(frozen=True, slots=True)
class TemplateOutput:
    """Generated content together with the resolution metadata."""

    content: str
    metadata: TemplateMetadata
    context_summary: ContextSummary


@dataclass(frozen=True, slots=True)
class TemplateOutputWithValidation:
    """Generated content together with the full validation report."""

    content: str
    validation: ValidationReport
    context_summary: ContextSummary


@dataclass(frozen=True, slots=True)
class _Generation:
    content: str
    metadata: TemplateMetadata
    sections: list[str]


@dataclass(frozen=True, slots=True)
class TemplateBuilder:
    """Immutable, chainable description of one document generation.

    Every ``with_*`` call returns a new builder. Nothing is resolved until one
    of the ``build*`` methods or :meth:`validate` runs, and each of those
    builds a fresh context from the accumulated inputs.
    """

    context_builder: ContextBuilder
    reference: TemplateReference = field(default_factory=TemplateReference.lecture)
    variant_override: str | None = None
    options: ProcessingOptions = field(default_factory=ProcessingOptions)
    generator: RenderFunction = field(default_factory=DocumentGenerator)
    resolver: VariantResolver = field(default_factory=VariantResolver)
    emitter: DiagnosticEmitter = field(default_factory=LoggingEmitter)

    @classmethod
    def create(
        cls,
        course_id: str,
        config: NoterConfig,
        template_config: TemplateConfig | None,
        *,
        reference: TemplateReference | None = None,
        kind: DocumentKind = DocumentKind.CUSTOM,
        clock: Clock = system_clock,
    ) -> TemplateBuilder:
        context_builder = ContextBuilder(
            course_id=course_id,
            config=config,
            template_config=template_config,
            kind=kind,
            clock=clock,
        )
        return cls(
            context_builder=context_builder,
            reference=reference or TemplateReference.lecture(),
        )

    @property
    def config(self) -> NoterConfig | None:
        return self.context_builder.config

    def with_reference(self, reference: TemplateReference) -> TemplateBuilder:
        return replace(self, reference=reference)

    def with_template_config(self, template_config: TemplateConfig) -> TemplateBuilder:
        return replace(
            self, context_builder=self.context_builder.with_template_config(template_config)
        )

    def with_title(self, title: str) -> TemplateBuilder:
        return replace(self, context_builder=self.context_builder.with_title(title))

    def with_sections(self, sections: Sequence[str]) -> TemplateBuilder:
        return replace(self, context_builder=self.context_builder.with_sections(sections))

    def with_variable(self, key: str, value: str) -> TemplateBuilder:
        return replace(self, context_builder=self.context_builder.with_variable(key, value))

    def with_variables(self, values: Mapping[str, str]) -> TemplateBuilder:
        return replace(self, context_builder=self.context_builder.with_variables(values))

    def with_custom_field(self, key: str, value: str) -> TemplateBuilder:
        return replace(
            self, context_builder=self.context_builder.with_custom_field(key, value)
        )

    def with_variant(self, variant_name: str | None) -> TemplateBuilder:
        return replace(self, variant_override=variant_name)

    def with_clock(self, clock: Clock) -> TemplateBuilder:
        return replace(self, context_builder=self.context_builder.with_clock(clock))

    def with_generator(self, generator: RenderFunction) -> TemplateBuilder:
        return replace(self, generator=generator)

    def with_emitter(self, emitter: DiagnosticEmitter) -> TemplateBuilder:
        return replace(self, emitter=emitter)

    def with_processing_options(self, options: ProcessingOptions) -> TemplateBuilder:
        return replace(self, options=options)

    def with_validation(self, enabled: bool) -> TemplateBuilder:
        return self._with_options(validate_before_build=enabled)

    def with_validation_level(self, level: ValidationLevel) -> TemplateBuilder:
        return self._with_options(validation_level=level)

    def with_fail_on_errors(self, fail: bool) -> TemplateBuilder:
        return self._with_options(fail_on_validation_errors=fail)

    def with_transformations(self, enabled: bool) -> TemplateBuilder:
        return self._with_options(apply_transformations=enabled)

    def with_debug_info(self, enabled: bool) -> TemplateBuilder:
        return self._with_options(include_debug_info=enabled)

    def _with_options(self, **changes: object) -> TemplateBuilder:
        return replace(self, options=replace(self.options, **changes))

    # Entry points -------------------------------------------------------

    def build(self) -> str:
        """Return the generated Typst source."""
        context = self._build_context()
        if self.options.validate_before_build:
            self._handle_issues(self._validate(context))
        return self._generate(context).content

    def build_with_validation(self) -> TemplateOutputWithValidation:
        """Always validate, then generate unless errors must abort."""
        context = self._build_context()
        report = self._validate(context)
        self._handle_issues(report)
        generation = self._generate(context)
        return TemplateOutputWithValidation(
            content=generation.content,
            validation=report,
            context_summary=ContextSummary.from_context(
                context, generation.metadata, generation.sections
            ),
        )

    def build_with_metadata(self) -> TemplateOutput:
        """Generate like :meth:`build` and return the resolution metadata."""
        context = self._build_context()
        if self.options.validate_before_build:
            self._handle_issues(self._validate(context))
        generation = self._generate(context)
        return TemplateOutput(
            content=generation.content,
            metadata=generation.metadata,
            context_summary=ContextSummary.from_context(
                context, generation.metadata, generation.sections
            ),
        )

    def validate(self) -> ValidationReport:
        """Build the context and validate it without rendering."""
        return self._validate(self._build_context())

    # Pipeline steps -----------------------------------------------------

    def _build_context(self) -> TemplateContext:
        if self.context_builder.template_config is None:
            raise ConfigurationAbsentError(
                f"Supply a template configuration for '{self.reference.name}'."
            )
        return self.context_builder.build()

    def _validate(self, context: TemplateContext) -> ValidationReport:
        template_config = context.template_config
        if template_config is None:
            raise ConfigurationAbsentError(
                f"Context for course '{context.course_id}' carries no template configuration."
            )
        definition = self.resolver.find_definition(template_config, self.reference.name)
        variant = None
        if self._requested_variant is not None:
            variant = self.resolver.find_variant(
                template_config, definition, self._requested_variant
            )
        validator = TemplateValidator(self.options.validation_level)
        report = validator.validate(context, definition, variant, config=self.config)
        context.metadata.processing_flags.append(VALIDATED_FLAG)
        return report

    def _handle_issues(self, report: ValidationReport) -> None:
        if report.has_errors and self.options.fail_on_validation_errors:
            logger.debug("Aborting generation: %d validation error(s)", report.error_count)
            raise ValidationFailedError(report.error_count, report.issues)

        if not self.options.include_debug_info:
            return
        for issue in report.issues:
            self._emit_issue(issue)

    def _emit_issue(self, issue: ValidationIssue) -> None:
        if issue.severity is ValidationSeverity.ERROR:
            self.emitter.error(issue.format())
        elif issue.severity is ValidationSeverity.WARNING:
            self.emitter.warning(issue.format())
        else:
            self.emitter.event(
                "validation_issue",
                {
                    "severity": issue.severity.value,
                    "category": issue.category,
                    "message": issue.message,
                    "suggestion": issue.suggestion,
                },
            )

    def _generate(self, context: TemplateContext) -> _Generation:
        if self.options.apply_transformations:
            apply_transformations(context, emitter=self._debug_emitter())

        resolution = self.resolver.resolve(
            context, self.reference.name, self._requested_variant
        )
        if self.options.include_debug_info:
            self.emitter.event(
                "variant_selected",
                {
                    "template": resolution.definition.name,
                    "variant": resolution.variant_name,
                    "course_type": resolution.course_type,
                },
            )
        content = self.generator(context, resolution.definition, resolution.variant)
        return _Generation(
            content=content,
            metadata=_resolved_metadata(context, resolution),
            sections=document_sections(context, resolution.definition, resolution.variant),
        )

    def _debug_emitter(self) -> DiagnosticEmitter | None:
        return self.emitter if self.options.include_debug_info else None

    @property
    def _requested_variant(self) -> str | None:
        if self.variant_override is not None:
            return self.variant_override
        return self.reference.variant


def _resolved_metadata(context: TemplateContext, resolution: VariantResolution) -> TemplateMetadata:
    return replace(
        context.metadata,
        course_type=resolution.course_type,
        variant_used=resolution.variant_name,
        processing_flags=list(context.metadata.processing_flags),
    )


__all__ = [
    "ContextSummary",
    "ProcessingOptions",
    "TemplateBuilder",
    "TemplateOutput",
    "TemplateOutputWithValidation",
]
