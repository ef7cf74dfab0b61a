"""CLI helpers for inspecting template configurations."""

from __future__ import annotations

from .._options import ConfigOption, TemplatesOption
from ..presenter import present_template_config
from ..state import get_cli_state
from ..utils import load_configuration


def templates(
    config_path: ConfigOption = None,
    templates_path: TemplatesOption = None,
) -> None:
    """List template definitions, variants and course mappings."""
    _, template_config = load_configuration(config_path, templates_path)
    present_template_config(get_cli_state(), template_config)


__all__ = ["templates"]
