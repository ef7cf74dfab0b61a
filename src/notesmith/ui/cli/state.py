"""Shared CLI state management utilities."""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
import sys
from typing import TYPE_CHECKING

import click
import typer

from notesmith.core.exceptions import exception_messages


if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "CLIState",
    "debug_enabled",
    "emit_error",
    "emit_info",
    "emit_warning",
    "get_cli_state",
    "render_message",
    "set_cli_state",
]


@dataclass(slots=True)
class CLIState:
    """Shared state controlling CLI diagnostics."""

    verbosity: int = 0
    show_tracebacks: bool = False
    _console: Console | None = field(default=None, init=False, repr=False)
    _err_console: Console | None = field(default=None, init=False, repr=False)

    @property
    def console(self) -> Console:
        """Return a stdout console bound to the current ``sys.stdout``."""
        from rich.console import Console

        if self._console is None or getattr(self._console, "file", None) is not sys.stdout:
            self._console = Console(file=sys.stdout)
        return self._console

    @property
    def err_console(self) -> Console:
        """Return a stderr console bound to the current ``sys.stderr``."""
        from rich.console import Console

        if self._err_console is None or getattr(self._err_console, "file", None) is not sys.stderr:
            self._err_console = Console(file=sys.stderr, highlight=False)
        return self._err_console


_STATE_VAR: ContextVar[CLIState | None] = ContextVar("notesmith_cli_state", default=None)


def get_cli_state(
    ctx: typer.Context | click.Context | None = None,
    *,
    create: bool = True,
) -> CLIState:
    """Return the CLI state attached to the active Click context."""
    if ctx is None:
        ctx = click.get_current_context(silent=True)

    current = ctx
    while current is not None:
        if isinstance(current.obj, CLIState):
            _STATE_VAR.set(current.obj)
            return current.obj
        current = current.parent

    state = _STATE_VAR.get(None)
    if state is None:
        if not create:
            raise RuntimeError("CLI state is not initialised for this context.")
        state = CLIState()
        _STATE_VAR.set(state)
    if ctx is not None and ctx.obj is None:
        ctx.obj = state
    return state


def set_cli_state(
    *,
    ctx: typer.Context | None = None,
    verbosity: int | None = None,
    debug: bool | None = None,
) -> CLIState:
    """Update the CLI state, returning the current instance."""
    state = get_cli_state(ctx)
    if verbosity is not None:
        state.verbosity = max(0, verbosity)
    if debug is not None:
        state.show_tracebacks = debug
    return state


def render_message(
    level: str,
    message: str,
    *,
    exception: BaseException | None = None,
) -> None:
    """Print a labelled message, adding exception details when verbose."""
    from rich.text import Text

    state = get_cli_state()
    if level == "info":
        state.err_console.print(Text(message, style="dim"))
        return

    style = "red" if level == "error" else "yellow"
    text = Text.assemble((f"{level}: ", f"bold {style}"), (message, style))
    if exception is not None and state.verbosity >= 1:
        details = [f"type: {type(exception).__name__}"]
        details.extend(f"caused by: {cause}" for cause in exception_messages(exception)[1:])
        text.append("\n" + "\n".join(details), style=style)
    state.err_console.print(text)


def emit_info(message: str) -> None:
    """Print an informational message to stderr."""
    render_message("info", message)


def emit_warning(message: str, *, exception: BaseException | None = None) -> None:
    """Print a warning to stderr."""
    render_message("warning", message, exception=exception)


def emit_error(message: str, *, exception: BaseException | None = None) -> None:
    """Print an error to stderr."""
    render_message("error", message, exception=exception)


def debug_enabled() -> bool:
    """Return whether full tracebacks should be displayed."""
    try:
        return get_cli_state(create=False).show_tracebacks
    except RuntimeError:
        return False
