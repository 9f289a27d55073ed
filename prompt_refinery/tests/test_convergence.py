"""Test the numerical and letter-grade convergence policies."""

import pytest
from pydantic import ValidationError

from prompt_refinery.errors import RatingSystemError
from prompt_refinery.optimizer.convergence import (
    LetterRating,
    NumericalRating,
    is_goal_met,
    rating_policy,
)
from prompt_refinery.tests.helpers import create_fake_assessment
from prompt_refinery.types import PromptAssessment


def make_assessment(score, grade=None) -> PromptAssessment:
    return PromptAssessment.model_validate(create_fake_assessment(score, grade))


@pytest.mark.parametrize(
    ("score", "threshold", "met"),
    [
        (16, 0.8, True),
        (15.99, 0.8, False),
        (20, 1.0, True),
        (19.5, 1.0, False),
        (10, 0.5, True),
    ],
)
def test_numerical_threshold_boundary(score, threshold, met):
    """Goal met exactly when score >= threshold x 20."""
    assert is_goal_met(make_assessment(score), NumericalRating(threshold=threshold)) is met


def test_letter_rating_requires_a_minus_or_better():
    policy = LetterRating()
    assert is_goal_met(make_assessment(5, "A-"), policy)
    assert is_goal_met(make_assessment(5, "A+"), policy)
    assert not is_goal_met(make_assessment(19, "B+"), policy)


def test_letter_rating_accepts_numeric_grade():
    """A numeric grade is normalized through the score table first."""
    assert is_goal_met(make_assessment(5, 16), LetterRating())
    assert not is_goal_met(make_assessment(5, 14), LetterRating())


def test_rating_policy_resolves_known_systems():
    assert rating_policy("numerical", 0.7) == NumericalRating(threshold=0.7)
    assert rating_policy("letter", 0.7) == LetterRating()


def test_rating_policy_rejects_unknown_system():
    with pytest.raises(RatingSystemError, match="stars"):
        rating_policy("stars", 0.8)


@pytest.mark.parametrize("threshold", [0.0, -0.1, 1.01])
def test_numerical_threshold_must_be_in_range(threshold):
    with pytest.raises(ValidationError):
        NumericalRating(threshold=threshold)
