from __future__ import annotations

from pathlib import Path

import pytest

from notesmith.adapters.loader import (
    CONFIG_ENV_VAR,
    TEMPLATE_CONFIG_FILENAME,
    discover_template_config,
    load_template_config,
    load_user_config,
)
from notesmith.core.config import DEFAULT_AUTHOR, NoterConfig, PathConfig, SemesterFormat
from notesmith.core.exceptions import ConfigLoadError, ConfigurationAbsentError


TEMPLATE_TOML = """\
[metadata]
name = "dtu-template"
version = "0.5.0"

[[templates]]
name = "note"
function = "dtu-note"
default_sections = ["Introduction"]

[[variants]]
name = "math-note"
template = "note"
course_types = ["math"]

[course_mapping]
"0xxxx" = "science"
"01xxx" = "math"

[engine.variables]
builtin_variables = ["course_id", "title"]

[[engine.variables.transformations]]
variable = "title"
operation = "uppercase"
"""


@pytest.fixture(autouse=True)
def _isolate_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


def test_load_user_config_from_path(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        'author = "Ada"\nsemester_format = "short"\n\n[courses]\n"01005" = "Maths"\n',
        encoding="utf-8",
    )

    config = load_user_config(path)

    assert config.author == "Ada"
    assert config.semester_format is SemesterFormat.SHORT
    assert config.courses == {"01005": "Maths"}


def test_load_user_config_from_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / "env.toml"
    path.write_text('author = "From Env"\n', encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert load_user_config().author == "From Env"


def test_load_user_config_defaults_without_files() -> None:
    config = load_user_config()

    assert config.author == DEFAULT_AUTHOR
    assert config.semester_format is SemesterFormat.YEAR_SEASON


def test_missing_explicit_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigLoadError) as excinfo:
        load_user_config(tmp_path / "absent.toml")
    assert excinfo.value.path == tmp_path / "absent.toml"


def test_invalid_toml_is_wrapped(tmp_path: Path) -> None:
    path = tmp_path / "broken.toml"
    path.write_text("author = \n", encoding="utf-8")

    with pytest.raises(ConfigLoadError, match="Invalid TOML"):
        load_user_config(path)


def test_invalid_values_are_wrapped(tmp_path: Path) -> None:
    path = tmp_path / "bad.toml"
    path.write_text('semester_format = "weekly"\n', encoding="utf-8")

    with pytest.raises(ConfigLoadError, match="validation failed") as excinfo:
        load_user_config(path)
    assert excinfo.value.__cause__ is not None


def test_load_template_config_preserves_mapping_order(tmp_path: Path) -> None:
    path = tmp_path / TEMPLATE_CONFIG_FILENAME
    path.write_text(TEMPLATE_TOML, encoding="utf-8")

    template_config = load_template_config(path)

    assert template_config.metadata.name == "dtu-template"
    assert list(template_config.course_mapping) == ["0xxxx", "01xxx"]
    engine = template_config.engine_config()
    assert engine.variables.builtin_variables == ["course_id", "title"]
    assert engine.variables.transformations[0].operation == "uppercase"


def test_load_template_config_from_directory(tmp_path: Path) -> None:
    (tmp_path / TEMPLATE_CONFIG_FILENAME).write_text(TEMPLATE_TOML, encoding="utf-8")

    assert load_template_config(tmp_path).find_template("note") is not None


def test_discover_uses_templates_dir(tmp_path: Path) -> None:
    (tmp_path / TEMPLATE_CONFIG_FILENAME).write_text(TEMPLATE_TOML, encoding="utf-8")
    config = NoterConfig(paths=PathConfig(templates_dir=tmp_path))

    assert discover_template_config(config).metadata.version == "0.5.0"


def test_discover_without_configuration_fails(tmp_path: Path) -> None:
    config = NoterConfig(paths=PathConfig(templates_dir=tmp_path / "nowhere"))

    with pytest.raises(ConfigurationAbsentError):
        discover_template_config(config)
