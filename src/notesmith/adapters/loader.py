"""Load user and template configuration files from disk."""

from __future__ import annotations

from collections.abc import Mapping
import logging
import os
from pathlib import Path
import tomllib
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from notesmith.core.config import NoterConfig
from notesmith.core.exceptions import ConfigLoadError, ConfigurationAbsentError
from notesmith.core.templates.manifest import TemplateConfig


logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "NOTESMITH_CONFIG"
TEMPLATE_CONFIG_FILENAME = ".noter-config.toml"

_ModelT = TypeVar("_ModelT", bound=BaseModel)


def default_config_path() -> Path:
    """Return the per-user configuration file location."""
    return Path.home() / ".config" / "notesmith" / "config.toml"


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigLoadError(f"Configuration file is missing: {path}", path=path) from exc
    except OSError as exc:
        raise ConfigLoadError(f"Failed to read configuration file: {exc}", path=path) from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigLoadError(f"Invalid TOML in {path}: {exc}", path=path) from exc


def _validate(model: type[_ModelT], payload: Mapping[str, Any], path: Path) -> _ModelT:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise ConfigLoadError(f"Configuration validation failed for {path}: {exc}", path=path) from exc


def load_user_config(path: Path | None = None) -> NoterConfig:
    """Load the user configuration.

    Resolution order: ``path``, the ``NOTESMITH_CONFIG`` environment variable,
    then :func:`default_config_path`. Defaults are returned when no file exists
    and no location was requested explicitly.
    """
    explicit = path
    if explicit is None:
        env_value = os.environ.get(CONFIG_ENV_VAR)
        if env_value:
            explicit = Path(env_value).expanduser()

    if explicit is not None:
        logger.debug("Loading configuration from %s", explicit)
        return _validate(NoterConfig, _read_toml(explicit), explicit)

    candidate = default_config_path()
    if candidate.is_file():
        logger.debug("Loading configuration from %s", candidate)
        return _validate(NoterConfig, _read_toml(candidate), candidate)

    logger.debug("No configuration file found, using defaults")
    return NoterConfig()


def load_template_config(path: Path) -> TemplateConfig:
    """Load a template configuration document.

    ``path`` may be the TOML file itself or a directory holding
    ``.noter-config.toml``. Table order in the file is preserved, which keeps
    ``course_mapping`` patterns in declaration order.
    """
    target = path / TEMPLATE_CONFIG_FILENAME if path.is_dir() else path
    logger.debug("Loading template configuration from %s", target)
    return _validate(TemplateConfig, _read_toml(target), target)


def discover_template_config(config: NoterConfig, path: Path | None = None) -> TemplateConfig:
    """Return the explicit template configuration or the one in ``templates_dir``."""
    if path is not None:
        return load_template_config(path)

    candidate = config.paths.templates_dir.expanduser() / TEMPLATE_CONFIG_FILENAME
    if candidate.is_file():
        return load_template_config(candidate)

    raise ConfigurationAbsentError(
        f"Expected '{TEMPLATE_CONFIG_FILENAME}' in '{candidate.parent}' or an explicit path."
    )


__all__ = [
    "CONFIG_ENV_VAR",
    "TEMPLATE_CONFIG_FILENAME",
    "default_config_path",
    "discover_template_config",
    "load_template_config",
    "load_user_config",
]
