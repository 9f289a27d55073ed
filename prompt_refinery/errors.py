"""Exception hierarchy for prompt optimization."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prompt_refinery.types import Prompt


class OptimizerError(Exception):
    """Base class for every error raised by prompt_refinery."""


# === Generation collaborator failures ===


class GenerationError(OptimizerError):
    """The generation service could not produce a response."""


class GenerationTimeoutError(GenerationError):
    """The generation call exceeded its timeout."""


class RateLimitedError(GenerationError):
    """The provider rejected the call because of rate limits."""


class TransportError(GenerationError):
    """Network-level failure while talking to the provider."""


class ProviderError(GenerationError):
    """The provider answered with an error."""


# === Malformed responses ===


class ResponseParseError(OptimizerError):
    """The sanitized response is not valid JSON."""

    def __init__(self, message: str, raw_response: str = ""):
        super().__init__(message)
        self.raw_response = raw_response


class AssessmentValidationError(OptimizerError):
    """The assessment JSON parsed but does not match the expected schema."""


class ImprovementParseError(OptimizerError):
    """The improvement response could not be decoded into two candidates."""


# === Policy configuration ===


class InvalidGradeError(OptimizerError, ValueError):
    """A grade is neither a canonical letter nor a numeric score."""


class RatingSystemError(OptimizerError):
    """The configured rating system is not recognized."""


# === Run level ===


class OptimizationFailedError(OptimizerError):
    """Assessment kept failing until the retry budget ran out."""

    def __init__(self, iteration: int, attempts: int, best_prompt: Prompt | None = None):
        super().__init__(
            f"optimization failed at iteration {iteration} after {attempts} attempts"
        )
        self.iteration = iteration
        self.attempts = attempts
        self.best_prompt = best_prompt


class BatchCancelledError(OptimizerError):
    """The batch deadline passed before this item finished."""
