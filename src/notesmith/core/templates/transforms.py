"""Variable transformations declared by a template package engine section."""

from __future__ import annotations

from collections.abc import Callable
import logging

from slugify import slugify

from notesmith.core.diagnostics import DiagnosticEmitter, NullEmitter
from notesmith.core.exceptions import TransformationError

from .context import TemplateContext
from .manifest import VariableTransformation


logger = logging.getLogger(__name__)

TRANSFORMATIONS_FLAG = "transformations_applied"

_Transform = Callable[[str, VariableTransformation], str]

_TRANSFORMS: dict[str, _Transform] = {}


def _register_transform(name: str) -> Callable[[_Transform], _Transform]:
    """Decorator used to register transformation callables."""

    def decorator(func: _Transform) -> _Transform:
        _TRANSFORMS[name] = func
        return func

    return decorator


def _resolve_transform(rule: VariableTransformation) -> _Transform:
    try:
        return _TRANSFORMS[rule.operation]
    except KeyError as exc:  # pragma: no cover - guarded by the manifest schema
        raise TransformationError(rule.variable, rule.operation, "unknown operation") from exc


@_register_transform("uppercase")
def _uppercase(value: str, rule: VariableTransformation) -> str:
    return value.upper()


@_register_transform("lowercase")
def _lowercase(value: str, rule: VariableTransformation) -> str:
    return value.lower()


@_register_transform("title")
def _title(value: str, rule: VariableTransformation) -> str:
    return value.title()


@_register_transform("capitalize")
def _capitalize(value: str, rule: VariableTransformation) -> str:
    return value[:1].upper() + value[1:]


@_register_transform("strip")
def _strip(value: str, rule: VariableTransformation) -> str:
    return value.strip()


@_register_transform("slugify")
def _slugify(value: str, rule: VariableTransformation) -> str:
    return slugify(value, separator=rule.value or "-")


@_register_transform("replace")
def _replace(value: str, rule: VariableTransformation) -> str:
    if not rule.find:
        raise TransformationError(rule.variable, rule.operation, "missing 'find'")
    return value.replace(rule.find, rule.value or "")


@_register_transform("prefix")
def _prefix(value: str, rule: VariableTransformation) -> str:
    return f"{rule.value or ''}{value}"


@_register_transform("suffix")
def _suffix(value: str, rule: VariableTransformation) -> str:
    return f"{value}{rule.value or ''}"


@_register_transform("truncate")
def _truncate(value: str, rule: VariableTransformation) -> str:
    if rule.length is None:
        raise TransformationError(rule.variable, rule.operation, "missing 'length'")
    return value[: rule.length]


def transform_value(value: str, rule: VariableTransformation) -> str:
    """Apply a single transformation rule to ``value``."""
    return _resolve_transform(rule)(value, rule)


def apply_transformations(
    context: TemplateContext,
    *,
    emitter: DiagnosticEmitter | None = None,
) -> list[str]:
    """Apply the engine transformations to ``context.variables`` in place.

    Rules run in declaration order, so a rule may consume the output of an
    earlier one. Rules naming an absent variable are skipped. Returns the
    names of the variables that were written.
    """
    sink = emitter or NullEmitter()
    written: list[str] = []
    for rule in context.engine_config.variables.transformations:
        current = context.get_variable(rule.variable)
        if current is None:
            logger.debug(
                "Skipping %s transformation: variable '%s' is not defined",
                rule.operation,
                rule.variable,
            )
            continue
        target = rule.target or rule.variable
        context.set_variable(target, transform_value(current, rule))
        written.append(target)
        sink.event(
            "transformation_applied",
            {"variable": rule.variable, "operation": rule.operation, "target": target},
        )

    if TRANSFORMATIONS_FLAG not in context.metadata.processing_flags:
        context.metadata.processing_flags.append(TRANSFORMATIONS_FLAG)
    return written


__all__ = ["TRANSFORMATIONS_FLAG", "apply_transformations", "transform_value"]
