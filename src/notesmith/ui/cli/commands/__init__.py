"""CLI command implementations exposed via ``notesmith.ui.cli``."""

from __future__ import annotations

from .new import new
from .templates import templates
from .validate import validate


__all__ = ["new", "templates", "validate"]
