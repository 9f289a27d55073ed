"""Improvement step: propose two rewrites and keep the higher-impact one."""

import logging

from pydantic import ValidationError

from prompt_refinery.connectors import BaseConnector
from prompt_refinery.debug import DebugManager
from prompt_refinery.errors import ImprovementParseError, ResponseParseError
from prompt_refinery.optimizer.sanitizer import parse_json_object
from prompt_refinery.requests import build_improvement_request
from prompt_refinery.types import ImprovementCandidates, OptimizationEntry, Prompt

logger = logging.getLogger(__name__)


class ImprovementGenerator:
    """Generate an incremental and a bold rewrite of a prompt."""

    def __init__(
        self,
        connector: BaseConnector,
        task_description: str,
        optimization_goal: str,
        debug: DebugManager | None = None,
    ):
        self.connector = connector
        self.task_description = task_description
        self.optimization_goal = optimization_goal
        self.debug = debug or DebugManager()

    async def improve(
        self, previous: OptimizationEntry, recent_history: list[OptimizationEntry]
    ) -> Prompt:
        """
        Produce the next working prompt.

        The bold redesign wins only when its expected impact is strictly
        higher; ties go to the incremental improvement.

        Args:
            previous: Latest prompt and its assessment
            recent_history: Latest history entries replayed into the request

        Returns:
            The selected candidate prompt

        Raises:
            GenerationError: If the generation call fails
            ImprovementParseError: If the response cannot be decoded into two candidates
        """
        request = build_improvement_request(
            previous, recent_history, self.task_description, self.optimization_goal
        )
        await self.debug.log_prompt("improvement", request.render())

        response = await self.connector.generate(request)
        await self.debug.log_response("improvement", response)

        try:
            candidates = ImprovementCandidates.model_validate(parse_json_object(response))
        except ResponseParseError as e:
            raise ImprovementParseError(f"failed to parse improved prompts: {e}") from e
        except ValidationError as e:
            raise ImprovementParseError(f"invalid improved prompts: {e}") from e

        impact = candidates.expected_impact
        selected = candidates.select()
        logger.debug(
            f"Improvement impact: incremental={impact.incremental:g} bold={impact.bold:g}, "
            f"selected {'bold' if selected is candidates.bold_redesign else 'incremental'}"
        )
        return inherit_unset_fields(selected, previous.prompt)


def inherit_unset_fields(candidate: Prompt, previous: Prompt) -> Prompt:
    """Carry system text, context and output hint over when the candidate omits them."""
    updates = {
        field: getattr(previous, field)
        for field in ("system", "context", "output")
        if getattr(candidate, field) is None and getattr(previous, field) is not None
    }
    if not updates:
        return candidate
    return candidate.model_copy(update=updates)
