"""Assessment step: score a prompt against the rubric."""

import logging

from pydantic import ValidationError

from prompt_refinery.connectors import BaseConnector
from prompt_refinery.debug import DebugManager
from prompt_refinery.errors import AssessmentValidationError
from prompt_refinery.optimizer.sanitizer import parse_json_object
from prompt_refinery.requests import build_assessment_request
from prompt_refinery.types import Metric, OptimizationEntry, Prompt, PromptAssessment

logger = logging.getLogger(__name__)


class AssessmentEngine:
    """Ask the generation service for a structured critique of a prompt."""

    def __init__(
        self,
        connector: BaseConnector,
        task_description: str,
        optimization_goal: str,
        custom_metrics: list[Metric] | None = None,
        debug: DebugManager | None = None,
    ):
        """
        Initialize the engine.

        Args:
            connector: Generation service connector
            task_description: What the optimized prompt is for
            optimization_goal: Goal echoed into every request
            custom_metrics: Rubric dimensions echoed into every request
            debug: Optional debug sink for raw requests and responses
        """
        self.connector = connector
        self.task_description = task_description
        self.optimization_goal = optimization_goal
        self.custom_metrics = custom_metrics or []
        self.debug = debug or DebugManager()

    async def assess(
        self, prompt: Prompt, recent_history: list[OptimizationEntry]
    ) -> OptimizationEntry:
        """
        Assess a prompt.

        Args:
            prompt: Prompt to evaluate
            recent_history: Latest history entries replayed into the request

        Returns:
            The prompt paired with its assessment

        Raises:
            GenerationError: If the generation call fails
            ResponseParseError: If the response holds no valid JSON object
            AssessmentValidationError: If the JSON does not match the assessment schema
        """
        request = build_assessment_request(
            self.task_description,
            prompt,
            recent_history,
            self.custom_metrics,
            self.optimization_goal,
        )
        await self.debug.log_prompt("assessment", request.render())

        response = await self.connector.generate(request)
        await self.debug.log_response("assessment", response)

        data = parse_json_object(response)
        try:
            assessment = PromptAssessment.model_validate(data)
        except ValidationError as e:
            raise AssessmentValidationError(f"invalid assessment structure: {e}") from e

        logger.debug(
            f"Assessment: score={assessment.overall_score:g} grade={assessment.overall_grade}"
        )
        return OptimizationEntry(prompt=prompt, assessment=assessment)
