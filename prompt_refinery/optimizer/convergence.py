"""Convergence policies deciding when an optimization goal is met."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from prompt_refinery.errors import RatingSystemError
from prompt_refinery.grading import MAX_RATING_SCALE, MINIMUM_GOAL_GRADE_VALUE, grade_value
from prompt_refinery.types import PromptAssessment


class NumericalRating(BaseModel):
    """Goal met when the overall score reaches threshold x 20."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["numerical"] = "numerical"
    threshold: float = Field(gt=0.0, le=1.0)


class LetterRating(BaseModel):
    """Goal met when the overall grade is A- or better."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["letter"] = "letter"


RatingPolicy = NumericalRating | LetterRating

RATING_SYSTEMS = ("numerical", "letter")


def rating_policy(rating_system: str, threshold: float) -> RatingPolicy:
    """
    Resolve a configured rating system name into a policy.

    Args:
        rating_system: "numerical" or "letter"
        threshold: Fraction of the 0-20 scale (ignored for letter grades)

    Raises:
        RatingSystemError: If the name is not a known rating system
    """
    if rating_system == "numerical":
        return NumericalRating(threshold=threshold)
    if rating_system == "letter":
        return LetterRating()
    raise RatingSystemError(f"unknown rating system: {rating_system!r}")


def is_goal_met(assessment: PromptAssessment, policy: RatingPolicy) -> bool:
    """Decide whether an assessment satisfies the policy."""
    if isinstance(policy, NumericalRating):
        return assessment.overall_score >= policy.threshold * MAX_RATING_SCALE
    if isinstance(policy, LetterRating):
        return grade_value(assessment.overall_grade) >= MINIMUM_GOAL_GRADE_VALUE
    raise RatingSystemError(f"unsupported rating policy: {policy!r}")
