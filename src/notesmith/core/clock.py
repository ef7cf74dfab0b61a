"""Wall-clock access injected into context construction."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime


Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """Return the current local time."""
    return datetime.now().astimezone()


def fixed_clock(moment: datetime) -> Clock:
    """Return a clock that always reports ``moment``."""

    def _clock() -> datetime:
        return moment

    return _clock


__all__ = ["Clock", "fixed_clock", "system_clock"]
