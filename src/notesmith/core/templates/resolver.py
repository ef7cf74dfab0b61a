"""Template definition and variant resolution."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import logging

from notesmith.core.exceptions import (
    ConfigurationAbsentError,
    TemplateNotFoundError,
    VariantNotFoundError,
)

from .context import TemplateContext
from .manifest import TemplateConfig, TemplateDefinition, TemplateVariant


logger = logging.getLogger(__name__)

WILDCARDS = frozenset("xX")


def matches_course_pattern(course_id: str, pattern: str) -> bool:
    """Return whether ``pattern`` (``x``/``X`` wildcards) matches ``course_id``.

    Patterns only match identifiers of the same length.
    """
    if len(course_id) != len(pattern):
        return False
    return all(
        expected in WILDCARDS or expected == actual
        for actual, expected in zip(course_id, pattern)
    )


def resolve_course_type(
    course_id: str,
    course_mapping: Mapping[str, str] | None,
    fallback: str,
) -> str:
    """Map ``course_id`` to a course type through ``course_mapping``.

    An exact key wins over patterns; among patterns the first one in
    declaration order wins. ``fallback`` is returned when nothing matches.
    """
    if not course_mapping:
        return fallback
    exact = course_mapping.get(course_id)
    if exact is not None:
        return exact
    for pattern, course_type in course_mapping.items():
        if matches_course_pattern(course_id, pattern):
            return course_type
    return fallback


def overlapping_patterns(
    course_mapping: Mapping[str, str],
) -> list[tuple[str, str]]:
    """Return wildcard pattern pairs that can both match a single course id.

    Each pair is ordered by declaration, so the first element is the one that
    wins when both match. Keys without wildcards are exact course ids, which
    win over every pattern, so they never form a pair.
    """
    patterns = [key for key in course_mapping if any(char in WILDCARDS for char in key)]
    overlaps: list[tuple[str, str]] = []
    for index, first in enumerate(patterns):
        for second in patterns[index + 1 :]:
            if len(first) != len(second):
                continue
            if all(
                a in WILDCARDS or b in WILDCARDS or a == b for a, b in zip(first, second)
            ):
                overlaps.append((first, second))
    return overlaps


@dataclass(frozen=True, slots=True)
class VariantResolution:
    """Outcome of resolving a template reference for a context."""

    definition: TemplateDefinition
    variant: TemplateVariant | None
    course_type: str

    @property
    def variant_name(self) -> str | None:
        return self.variant.name if self.variant is not None else None


class VariantResolver:
    """Pick the template definition and variant that apply to a context."""

    def resolve(
        self,
        context: TemplateContext,
        template_name: str,
        variant_name: str | None = None,
    ) -> VariantResolution:
        template_config = self._template_config(context)
        definition = self.find_definition(template_config, template_name)
        course_type = resolve_course_type(
            context.course_id,
            template_config.course_mapping,
            context.metadata.course_type,
        )

        if variant_name is not None:
            variant = self.find_variant(template_config, definition, variant_name)
        else:
            variant = self.select_variant(template_config, definition, course_type)

        if variant is None:
            logger.debug(
                "No variant of '%s' applies to course type '%s'", definition.name, course_type
            )
        else:
            logger.debug("Selected variant '%s' of '%s'", variant.name, definition.name)
        return VariantResolution(definition=definition, variant=variant, course_type=course_type)

    @staticmethod
    def find_definition(template_config: TemplateConfig, template_name: str) -> TemplateDefinition:
        definition = template_config.find_template(template_name)
        if definition is None:
            raise TemplateNotFoundError(template_name)
        return definition

    @staticmethod
    def find_variant(
        template_config: TemplateConfig,
        definition: TemplateDefinition,
        variant_name: str,
    ) -> TemplateVariant:
        """Return the explicitly requested variant; never falls back to the base."""
        for variant in template_config.variants_for(definition.name):
            if variant.name == variant_name:
                return variant
        raise VariantNotFoundError(variant_name, definition.name)

    @staticmethod
    def select_variant(
        template_config: TemplateConfig,
        definition: TemplateDefinition,
        course_type: str,
    ) -> TemplateVariant | None:
        for variant in template_config.variants_for(definition.name):
            if variant.applies_to(course_type):
                return variant
        return None

    @staticmethod
    def _template_config(context: TemplateContext) -> TemplateConfig:
        if context.template_config is None:
            raise ConfigurationAbsentError(f"Context for '{context.course_id}' has none.")
        return context.template_config


__all__ = [
    "VariantResolution",
    "VariantResolver",
    "matches_course_pattern",
    "overlapping_patterns",
    "resolve_course_type",
]
