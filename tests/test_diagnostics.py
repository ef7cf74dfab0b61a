from __future__ import annotations

import logging

import pytest

from notesmith.core.diagnostics import (
    DiagnosticEmitter,
    LoggingEmitter,
    NullEmitter,
    format_event_message,
)
from notesmith.ui.cli.diagnostics import CliEmitter
from notesmith.ui.cli.state import set_cli_state


def test_null_emitter_is_noop(caplog: pytest.LogCaptureFixture) -> None:
    emitter = NullEmitter()
    with caplog.at_level(logging.WARNING):
        emitter.warning("nothing to see")
        emitter.error("still quiet")
    assert not caplog.records
    emitter.event("ignored", {"value": 1})
    assert emitter.debug_enabled is False
    assert isinstance(emitter, DiagnosticEmitter)


def test_logging_emitter_logs_messages(caplog: pytest.LogCaptureFixture) -> None:
    emitter = LoggingEmitter(debug_enabled=True)
    with caplog.at_level(logging.ERROR):
        emitter.error("boom")
    assert any(record.message == "boom" for record in caplog.records)
    assert emitter.debug_enabled is True


def test_logging_emitter_formats_known_events(caplog: pytest.LogCaptureFixture) -> None:
    emitter = LoggingEmitter()
    with caplog.at_level(logging.INFO):
        emitter.event(
            "variant_selected",
            {"template": "note", "variant": "math-note", "course_type": "math"},
        )
    assert any(
        record.message == "Using variant 'math-note' of template 'note' (course type: math)"
        for record in caplog.records
    )


def test_cli_emitter_bridges_state(capsys: pytest.CaptureFixture[str]) -> None:
    state = set_cli_state(verbosity=1, debug=False)
    emitter = CliEmitter(state=state)

    emitter.warning("Heads up", exc=None)
    emitter.error("Boom", exc=None)
    emitter.event("transformation_applied", {"variable": "title", "operation": "uppercase"})
    emitter.event("custom", {"flag": True})

    captured = capsys.readouterr()
    combined_output = f"{captured.out}\n{captured.err}"
    assert "Heads up" in combined_output
    assert "Boom" in combined_output
    assert "Applied uppercase to 'title'" in combined_output
    assert "flag" not in combined_output


def test_format_event_message_variants() -> None:
    assert format_event_message(
        "variant_selected", {"template": "note", "variant": None, "course_type": "general"}
    ) == "Using base template 'note' (course type: general)"
    assert format_event_message(
        "transformation_applied",
        {"variable": "title", "operation": "slugify", "target": "slug"},
    ) == "Applied slugify to 'title' -> slug"
    assert format_event_message(
        "validation_issue",
        {
            "severity": "info",
            "category": "environment",
            "message": "Author name is set to the default value",
            "suggestion": "Set 'author'.",
        },
    ) == (
        "Info [environment]: Author name is set to the default value "
        "(suggestion: Set 'author'.)"
    )
    assert format_event_message("unknown", {}) is None
