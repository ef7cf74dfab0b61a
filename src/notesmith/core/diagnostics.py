"""Diagnostic abstractions shared across the generation pipeline."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Interface used to surface warnings, errors, and structured events."""

    debug_enabled: bool

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NullEmitter:
    """Emitter that ignores every diagnostic."""

    debug_enabled: bool = False

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        return

    def error(self, message: str, exc: BaseException | None = None) -> None:
        return

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        return


class LoggingEmitter:
    """Emitter that forwards diagnostics to the standard logging module."""

    def __init__(
        self, *, logger_obj: logging.Logger | None = None, debug_enabled: bool = False
    ) -> None:
        self._logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None:
            self._logger.warning(message, exc_info=exc)
        else:
            self._logger.warning(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None:
            self._logger.error(message, exc_info=exc)
        else:
            self._logger.error(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message:
            self._logger.info(message)
            return
        self._logger.debug("diagnostic event %s: %s", name, dict(payload))


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a human-friendly summary for selected diagnostic events."""
    data = dict(payload)

    if name == "validation_issue":
        severity = data.get("severity") or "info"
        category = data.get("category") or "general"
        message = data.get("message") or ""
        suggestion = data.get("suggestion")
        text = f"{str(severity).capitalize()} [{category}]: {message}"
        if suggestion:
            text = f"{text} (suggestion: {suggestion})"
        return text

    if name == "variant_selected":
        template = data.get("template") or "<unknown>"
        variant = data.get("variant")
        course_type = data.get("course_type")
        if not variant:
            return f"Using base template '{template}' (course type: {course_type})"
        return f"Using variant '{variant}' of template '{template}' (course type: {course_type})"

    if name == "transformation_applied":
        variable = data.get("variable") or "<unknown>"
        operation = data.get("operation") or "<unknown>"
        target = data.get("target")
        suffix = f" -> {target}" if target and target != variable else ""
        return f"Applied {operation} to '{variable}'{suffix}"

    return None


__all__ = [
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "format_event_message",
]
