"""Shared answer-set fixtures."""

import pytest

from configkit.answers import normalize_answers


@pytest.fixture
def make_answers():
    """Build a normalized answer set; security flags default to "no"."""
    def _make(**overrides):
        base = {
            "llmTarget": "claude-code",
            "projectType": "api-backend",
            "stackApproach": "choose",
            "stackTech": [],
            "deployment": "local-only",
        }
        base.update(overrides)
        return normalize_answers(base)
    return _make


@pytest.fixture
def api_backend_answers(make_answers):
    return make_answers(
        stackTech=["nodejs", "postgres"],
        hasAuth="yes",
        deployment="aws",
    )
