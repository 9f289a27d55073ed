"""Request builders for the assessment and improvement steps."""

from prompt_refinery.requests.assessment_request import build_assessment_request
from prompt_refinery.requests.improvement_request import build_improvement_request

__all__ = [
    "build_assessment_request",
    "build_improvement_request",
]
