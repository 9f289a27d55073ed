"""Test helpers for prompt optimization tests."""

from prompt_refinery.tests.helpers.assertions import (
    assert_request_counts,
    assert_score_progression,
)
from prompt_refinery.tests.helpers.fake_responses import (
    create_fake_assessment,
    create_fake_assessment_response,
    create_fake_improvement_response,
    fenced,
)
from prompt_refinery.tests.helpers.scripted_connector import ScriptedConnector

__all__ = [
    "ScriptedConnector",
    "create_fake_assessment",
    "create_fake_assessment_response",
    "create_fake_improvement_response",
    "fenced",
    "assert_request_counts",
    "assert_score_progression",
]
