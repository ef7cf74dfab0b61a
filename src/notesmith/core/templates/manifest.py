"""Pydantic models describing template package configurations."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


BUILTIN_VARIABLES: tuple[str, ...] = (
    "course_id",
    "title",
    "author",
    "semester",
    "date",
    "year",
)

ALL_COURSE_TYPES = "all"

TransformationOperation = Literal[
    "uppercase",
    "lowercase",
    "title",
    "capitalize",
    "strip",
    "slugify",
    "replace",
    "prefix",
    "suffix",
    "truncate",
]


class TemplatePackageInfo(BaseModel):
    """Identity of the template package referenced by generated documents."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    version: str = ""
    description: str | None = None
    repository: str | None = None
    author: str | None = None
    license: str | None = None


class TemplateDefinition(BaseModel):
    """Named document skeleton exposed by a template package."""

    model_config = ConfigDict(extra="ignore")

    name: str
    function: str
    default_sections: list[str] = Field(default_factory=list)
    course_types: list[str] | None = None
    description: str | None = None


class TemplateVariant(BaseModel):
    """Course-specific specialisation of a template definition."""

    model_config = ConfigDict(extra="ignore")

    name: str
    template: str
    course_types: list[str] = Field(default_factory=list)
    function: str | None = None
    override_sections: list[str] | None = None
    additional_sections: list[str] | None = None
    description: str | None = None

    def applies_to(self, course_type: str) -> bool:
        """Return whether the variant targets ``course_type``."""
        return course_type in self.course_types or ALL_COURSE_TYPES in self.course_types


class VariableTransformation(BaseModel):
    """Single transformation applied to a context variable."""

    model_config = ConfigDict(extra="forbid")

    variable: str
    operation: TransformationOperation
    value: str | None = None
    find: str | None = None
    length: int | None = Field(default=None, ge=0)
    target: str | None = None

    @model_validator(mode="after")
    def _check_arguments(self) -> VariableTransformation:
        if self.operation == "replace" and not self.find:
            raise ValueError("The 'replace' transformation requires 'find'.")
        if self.operation in {"prefix", "suffix"} and self.value is None:
            raise ValueError(f"The '{self.operation}' transformation requires 'value'.")
        if self.operation == "truncate" and self.length is None:
            raise ValueError("The 'truncate' transformation requires 'length'.")
        return self


class VariableRules(BaseModel):
    """Variable declarations understood by the engine."""

    model_config = ConfigDict(extra="ignore")

    builtin_variables: list[str] = Field(default_factory=lambda: list(BUILTIN_VARIABLES))
    transformations: list[VariableTransformation] = Field(default_factory=list)


class ValidationRules(BaseModel):
    """Validation toggles declared by the template package."""

    model_config = ConfigDict(extra="ignore")

    validate_variables: bool = True


class EngineConfig(BaseModel):
    """Engine capabilities and processing rules."""

    model_config = ConfigDict(extra="ignore")

    variables: VariableRules = Field(default_factory=VariableRules)
    validation: ValidationRules = Field(default_factory=ValidationRules)


class TemplateConfig(BaseModel):
    """Structured template configuration produced by the loaders.

    ``course_mapping`` keeps the declaration order of the source document so
    that wildcard patterns are consulted first-declared first.
    """

    model_config = ConfigDict(extra="ignore")

    metadata: TemplatePackageInfo = Field(default_factory=TemplatePackageInfo)
    templates: list[TemplateDefinition] = Field(default_factory=list)
    variants: list[TemplateVariant] = Field(default_factory=list)
    course_mapping: dict[str, str] = Field(default_factory=dict)
    engine: EngineConfig | None = None

    def find_template(self, name: str) -> TemplateDefinition | None:
        """Return the first definition named ``name``."""
        for definition in self.templates:
            if definition.name == name:
                return definition
        return None

    def variants_for(self, template: str) -> list[TemplateVariant]:
        """Return the variants bound to ``template`` in declaration order."""
        return [variant for variant in self.variants if variant.template == template]

    def engine_config(self) -> EngineConfig:
        """Return the declared engine configuration or the defaults."""
        return self.engine.model_copy(deep=True) if self.engine else EngineConfig()


@dataclass(frozen=True, slots=True)
class TemplateReference:
    """Template name plus an optional explicit variant."""

    name: str
    variant: str | None = None

    def with_variant(self, variant: str | None) -> TemplateReference:
        return replace(self, variant=variant)

    @classmethod
    def lecture(cls) -> TemplateReference:
        return cls("note")

    @classmethod
    def assignment(cls) -> TemplateReference:
        return cls("assignment")

    @classmethod
    def lab_report(cls) -> TemplateReference:
        return cls("lab-report")

    @classmethod
    def thesis(cls) -> TemplateReference:
        return cls("thesis")


__all__ = [
    "ALL_COURSE_TYPES",
    "BUILTIN_VARIABLES",
    "EngineConfig",
    "TemplateConfig",
    "TemplateDefinition",
    "TemplatePackageInfo",
    "TemplateReference",
    "TemplateVariant",
    "TransformationOperation",
    "ValidationRules",
    "VariableRules",
    "VariableTransformation",
]
