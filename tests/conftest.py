from __future__ import annotations

from datetime import datetime

import pytest

from notesmith.core.clock import Clock, fixed_clock
from notesmith.core.config import NoterConfig
from notesmith.core.templates import TemplateConfig


FIXED_NOW = datetime(2024, 3, 15, 9, 30)

TEMPLATE_CONFIG_DATA = {
    "metadata": {
        "name": "dtu-template",
        "version": "0.5.0",
        "description": "Course notes for DTU",
    },
    "templates": [
        {
            "name": "note",
            "function": "dtu-note",
            "default_sections": ["Introduction", "Summary"],
        },
        {
            "name": "assignment",
            "function": "dtu-assignment",
            "default_sections": ["Problem 1"],
        },
    ],
    "variants": [
        {
            "name": "math-note",
            "template": "note",
            "course_types": ["math"],
            "function": "dtu-math-note",
            "additional_sections": ["Theorems", "Proofs"],
        },
        {
            "name": "programming-note",
            "template": "note",
            "course_types": ["programming"],
            "override_sections": ["Code", "Exercises"],
        },
    ],
    "course_mapping": {
        "01xxx": "math",
        "02xxx": "programming",
    },
}


@pytest.fixture
def clock() -> Clock:
    return fixed_clock(FIXED_NOW)


@pytest.fixture
def config() -> NoterConfig:
    return NoterConfig(
        author="Ada Lovelace",
        template_version="1.2.3",
        courses={
            "01005": "Advanced Engineering Mathematics 1",
            "02101": "Introduction to Programming",
            "25200": "Classical Physics 1",
        },
    )


@pytest.fixture
def template_config() -> TemplateConfig:
    return TemplateConfig.model_validate(TEMPLATE_CONFIG_DATA)
