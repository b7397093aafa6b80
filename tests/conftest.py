# tests/conftest.py
"""Shared test fixtures and helpers.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest
from hypothesis import Verbosity, settings

from flowkit.contracts import NodeTemplate
from flowkit.core.identifiers import SequentialIdGenerator

settings.register_profile("ci", max_examples=100)
settings.register_profile("nightly", max_examples=1000)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


@pytest.fixture
def ids() -> SequentialIdGenerator:
    """Predictable id source: node1, node2, ..."""
    return SequentialIdGenerator(prefix="node")


@pytest.fixture
def simple_template() -> NodeTemplate:
    """Small template with one required text input and one output."""
    return NodeTemplate.model_validate(
        {
            "id": "answerNode",
            "flowNodeType": "answerNode",
            "name": "workflow:answer",
            "intro": "workflow:answer_intro",
            "avatar": "core/workflow/template/reply",
            "version": "481",
            "inputs": [
                {
                    "key": "text",
                    "renderTypeList": ["textarea", "reference"],
                    "valueType": "any",
                    "required": True,
                    "defaultValue": "",
                },
            ],
            "outputs": [{"id": "answerText", "key": "answerText", "valueType": "string", "type": "static"}],
        }
    )


@pytest.fixture(autouse=True)
def _reset_template_manager() -> Iterator[None]:
    """Give each test a freshly built template registry singleton."""
    import flowkit.plugins.manager as manager_module

    manager_module._template_manager_cache = None
    yield
    manager_module._template_manager_cache = None
