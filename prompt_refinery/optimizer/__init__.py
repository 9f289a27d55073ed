"""Optimization loop, its building blocks and the batch executor."""

from prompt_refinery.optimizer.assessment import AssessmentEngine
from prompt_refinery.optimizer.batch import BatchPromptOptimizer
from prompt_refinery.optimizer.context import OptimizationRun
from prompt_refinery.optimizer.convergence import (
    LetterRating,
    NumericalRating,
    RatingPolicy,
    is_goal_met,
    rating_policy,
)
from prompt_refinery.optimizer.improvement import ImprovementGenerator
from prompt_refinery.optimizer.orchestrator import IterationCallback, PromptOptimizer
from prompt_refinery.optimizer.rate_limiter import TokenBucket
from prompt_refinery.optimizer.sanitizer import clean_json_response, parse_json_object

__all__ = [
    "AssessmentEngine",
    "BatchPromptOptimizer",
    "ImprovementGenerator",
    "IterationCallback",
    "LetterRating",
    "NumericalRating",
    "OptimizationRun",
    "PromptOptimizer",
    "RatingPolicy",
    "TokenBucket",
    "clean_json_response",
    "is_goal_met",
    "parse_json_object",
    "rating_policy",
]
