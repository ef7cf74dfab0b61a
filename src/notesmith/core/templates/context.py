"""Template context primitives and their builder."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from types import MappingProxyType

from notesmith.core.clock import Clock, system_clock
from notesmith.core.config import NoterConfig
from notesmith.core.exceptions import MissingRequiredFieldError

from .manifest import EngineConfig, TemplateConfig


GENERAL_COURSE_TYPE = "general"

# Leading digits of a course id mapped to a baseline course type.
_COURSE_TYPE_PREFIXES: tuple[tuple[str, str], ...] = (
    ("01", "math"),
    ("02", "programming"),
    ("25", "physics"),
    ("22", "electronics"),
    ("28", "environment"),
    ("31", "mechanics"),
)

_ASSIGNMENT_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("programming", "code"), "programming"),
    (("analysis", "research"), "research"),
    (("problem", "exercise"), "theoretical"),
    (("lab", "experiment"), "practical"),
)


class DocumentKind(str, Enum):
    """Kind of document a context is prepared for."""

    CUSTOM = "custom"
    LECTURE = "lecture"
    ASSIGNMENT = "assignment"


def classify_course(course_id: str) -> str:
    """Return the baseline course type derived from the course id prefix."""
    for prefix, course_type in _COURSE_TYPE_PREFIXES:
        if course_id.startswith(prefix):
            return course_type
    return GENERAL_COURSE_TYPE


def classify_assignment(title: str) -> str:
    """Guess the assignment type from keywords in its title."""
    lowered = title.lower()
    for keywords, assignment_type in _ASSIGNMENT_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return assignment_type
    return GENERAL_COURSE_TYPE


def builtin_variables(
    *, course_id: str, title: str, author: str, semester: str, now: datetime
) -> dict[str, str]:
    """Return the substitution variables every context carries."""
    return {
        "course_id": course_id,
        "title": title,
        "author": author,
        "semester": semester,
        "date": now.strftime("%Y-%m-%d"),
        "year": now.strftime("%Y"),
    }


@dataclass(slots=True)
class TemplateMetadata:
    """Processing metadata attached to a context."""

    course_type: str = GENERAL_COURSE_TYPE
    assignment_type: str | None = None
    creation_date: datetime = field(default_factory=system_clock)
    template_source: str = "unknown"
    variant_used: str | None = None
    processing_flags: list[str] = field(default_factory=list)


@dataclass(slots=True)
class TemplateContext:
    """Everything needed to generate one document."""

    course_id: str
    course_name: str
    title: str
    author: str
    date: str
    semester: str
    template_version: str
    sections: list[str] = field(default_factory=list)
    custom_fields: dict[str, str] = field(default_factory=dict)
    variables: dict[str, str] = field(default_factory=dict)
    metadata: TemplateMetadata = field(default_factory=TemplateMetadata)
    template_config: TemplateConfig | None = None
    engine_config: EngineConfig = field(default_factory=EngineConfig)

    def set_variable(self, key: str, value: str) -> None:
        self.variables[key] = value

    def get_variable(self, key: str) -> str | None:
        return self.variables.get(key)


def _lecture_title(config: NoterConfig, now: datetime) -> str:
    if config.note_preferences.include_date_in_title:
        return f"Lecture - {now.strftime('%B %d, %Y')}"
    return "Lecture Notes"


@dataclass(frozen=True, slots=True)
class ContextBuilder:
    """Immutable accumulator producing a :class:`TemplateContext` in one pass.

    Each ``with_*`` method returns a new builder; :meth:`build` copies every
    configuration snapshot so later changes to the caller's objects cannot
    leak into an in-flight generation.
    """

    course_id: str | None = None
    config: NoterConfig | None = None
    template_config: TemplateConfig | None = None
    kind: DocumentKind = DocumentKind.CUSTOM
    title: str | None = None
    sections: tuple[str, ...] | None = None
    variables: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    custom_fields: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    clock: Clock = system_clock

    def with_course_id(self, course_id: str) -> ContextBuilder:
        return replace(self, course_id=course_id)

    def with_config(self, config: NoterConfig) -> ContextBuilder:
        return replace(self, config=config)

    def with_template_config(self, template_config: TemplateConfig | None) -> ContextBuilder:
        return replace(self, template_config=template_config)

    def with_kind(self, kind: DocumentKind) -> ContextBuilder:
        return replace(self, kind=kind)

    def with_title(self, title: str) -> ContextBuilder:
        return replace(self, title=title)

    def with_sections(self, sections: Sequence[str]) -> ContextBuilder:
        return replace(self, sections=tuple(sections))

    def with_variable(self, key: str, value: str) -> ContextBuilder:
        return replace(self, variables=MappingProxyType({**self.variables, key: value}))

    def with_variables(self, values: Mapping[str, str]) -> ContextBuilder:
        return replace(self, variables=MappingProxyType({**self.variables, **values}))

    def with_custom_field(self, key: str, value: str) -> ContextBuilder:
        return replace(
            self, custom_fields=MappingProxyType({**self.custom_fields, key: value})
        )

    def with_clock(self, clock: Clock) -> ContextBuilder:
        return replace(self, clock=clock)

    def build(self) -> TemplateContext:
        """Assemble the context, failing when mandatory inputs are missing."""
        if not self.course_id:
            raise MissingRequiredFieldError("course_id")
        if self.config is None:
            raise MissingRequiredFieldError("config")

        course_id = self.course_id
        config = self.config.model_copy(deep=True)
        template_config = (
            self.template_config.model_copy(deep=True)
            if self.template_config is not None
            else TemplateConfig()
        )
        now = self.clock()
        semester = config.current_semester(now)

        title, sections = self._kind_defaults(config, now)
        assignment_type: str | None = None
        if self.title is not None:
            title = self.title
        if self.sections is not None:
            sections = list(self.sections)
        if self.kind is DocumentKind.ASSIGNMENT:
            assignment_type = classify_assignment(title)

        variables = builtin_variables(
            course_id=course_id,
            title=title,
            author=config.author,
            semester=semester,
            now=now,
        )
        variables.update(self.custom_fields)
        variables.update(self.variables)

        return TemplateContext(
            course_id=course_id,
            course_name=config.get_course_name(course_id),
            title=title,
            author=config.author,
            date=now.strftime("%Y-%m-%d"),
            semester=semester,
            template_version=config.template_version,
            sections=sections,
            custom_fields=dict(self.custom_fields),
            variables=variables,
            metadata=TemplateMetadata(
                course_type=classify_course(course_id),
                assignment_type=assignment_type,
                creation_date=now,
                template_source=_template_source(self.template_config),
            ),
            template_config=template_config,
            engine_config=template_config.engine_config(),
        )

    def _kind_defaults(
        self, config: NoterConfig, now: datetime
    ) -> tuple[str, list[str]]:
        preferences = config.note_preferences
        if self.kind is DocumentKind.LECTURE:
            return _lecture_title(config, now), list(preferences.lecture_sections)
        if self.kind is DocumentKind.ASSIGNMENT:
            return "", list(preferences.assignment_sections)
        return "", []


def _template_source(template_config: TemplateConfig | None) -> str:
    if template_config is None:
        return "default"
    return template_config.metadata.name or "custom"


__all__ = [
    "GENERAL_COURSE_TYPE",
    "ContextBuilder",
    "DocumentKind",
    "TemplateContext",
    "TemplateMetadata",
    "builtin_variables",
    "classify_assignment",
    "classify_course",
]
