"""Custom exception hierarchy for the document generation pipeline."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .templates.validation import ValidationIssue


class NotesmithError(RuntimeError):
    """Base exception for notesmith failures."""


class ConfigLoadError(NotesmithError):
    """Raised when a configuration file cannot be read or validated."""

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class TemplateError(NotesmithError):
    """Raised when a document cannot be resolved or generated."""


class MissingRequiredFieldError(TemplateError):
    """Raised when a mandatory builder input was not supplied."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Missing required field '{field}'.")
        self.field = field


class TemplateNotFoundError(TemplateError):
    """Raised when no template definition matches the requested name."""

    def __init__(self, template: str) -> None:
        super().__init__(f"Template '{template}' not found in configuration.")
        self.template = template


class VariantNotFoundError(TemplateError):
    """Raised when an explicitly requested variant does not exist."""

    def __init__(self, variant: str, template: str) -> None:
        super().__init__(f"Variant '{variant}' not found for template '{template}'.")
        self.variant = variant
        self.template = template


class ConfigurationAbsentError(TemplateError):
    """Raised when no template configuration was supplied at all."""

    def __init__(self, detail: str | None = None) -> None:
        message = "No template configuration available."
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)


class ValidationFailedError(TemplateError):
    """Raised when validation reports errors and the caller asked to abort."""

    def __init__(self, error_count: int, issues: Sequence[ValidationIssue] = ()) -> None:
        super().__init__(f"Template validation failed with {error_count} error(s).")
        self.error_count = error_count
        self.issues = list(issues)


class TransformationError(TemplateError):
    """Raised when a variable transformation cannot be applied."""

    def __init__(self, variable: str, operation: str, reason: str) -> None:
        super().__init__(
            f"Cannot apply '{operation}' to variable '{variable}': {reason}"
        )
        self.variable = variable
        self.operation = operation


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "ConfigLoadError",
    "ConfigurationAbsentError",
    "MissingRequiredFieldError",
    "NotesmithError",
    "TemplateError",
    "TemplateNotFoundError",
    "TransformationError",
    "ValidationFailedError",
    "VariantNotFoundError",
    "exception_hint",
    "exception_messages",
]
