"""Main prompt optimizer: the assess / decide / improve loop."""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable

from prompt_refinery.config import OptimizerConfig
from prompt_refinery.connectors import BaseConnector
from prompt_refinery.debug import DebugManager
from prompt_refinery.errors import (
    InvalidGradeError,
    OptimizationFailedError,
    RatingSystemError,
)
from prompt_refinery.optimizer.assessment import AssessmentEngine
from prompt_refinery.optimizer.context import OptimizationRun
from prompt_refinery.optimizer.convergence import is_goal_met, rating_policy
from prompt_refinery.optimizer.improvement import ImprovementGenerator
from prompt_refinery.types import OptimizationEntry, Prompt, PromptAssessment

logger = logging.getLogger(__name__)

IterationCallback = Callable[[int, OptimizationEntry], None]


class PromptOptimizer:
    """Iteratively assess and rewrite one prompt until its goal is met.

    Each instance owns the state of exactly one run (history, working
    prompt, best prompt). Create a separate optimizer for every prompt;
    batch tasks never share one.
    """

    def __init__(
        self,
        connector: BaseConnector,
        initial_prompt: Prompt | str,
        task_description: str,
        config: OptimizerConfig | None = None,
        iteration_callback: IterationCallback | None = None,
        debug: DebugManager | None = None,
        progress_callback: Callable[[str], None] | None = None,
    ):
        """
        Initialize the optimizer.

        Args:
            connector: Generation service connector
            initial_prompt: Prompt to start from (plain text is wrapped)
            task_description: What the prompt is for
            config: Optimizer configuration (defaults if None)
            iteration_callback: Called synchronously with (iteration, entry) after each assessment
            debug: Optional debug sink for raw requests and responses
            progress_callback: Optional callback for progress messages
        """
        if isinstance(initial_prompt, str):
            initial_prompt = Prompt.from_text(initial_prompt)

        self.connector = connector
        self.initial_prompt = initial_prompt
        self.task_description = task_description
        self.config = config or OptimizerConfig()
        self.iteration_callback = iteration_callback
        self.debug = debug or DebugManager()
        self._progress_callback = progress_callback

        goal = self.config.goal_for(task_description)
        self.assessor = AssessmentEngine(
            connector, task_description, goal, self.config.custom_metrics, self.debug
        )
        self.improver = ImprovementGenerator(connector, task_description, goal, self.debug)

        self.run_state = OptimizationRun(current_prompt=initial_prompt)
        self.result: Prompt | None = None
        self.converged = False
        self._started = False

    @property
    def history(self) -> list[OptimizationEntry]:
        """Full optimization history, oldest first."""
        return list(self.run_state.history)

    def get_optimization_history(self) -> list[OptimizationEntry]:
        """Return the full optimization history."""
        return self.history

    def recent_history(self) -> list[OptimizationEntry]:
        """Entries replayed into the next request (at most memory_size)."""
        return self.run_state.recent_history(self.config.memory_size)

    async def optimize(self) -> Prompt:
        """
        Run the optimization loop to completion.

        Returns:
            The converged prompt, or the best-scoring prompt seen when the
            iteration budget runs out

        Raises:
            OptimizationFailedError: If an assessment fails max_retries times in a row
        """
        async for _ in self.iterate():
            pass
        if self.result is None:
            raise RuntimeError("optimization loop finished without a result")
        return self.result

    async def iterate(self) -> AsyncIterator[OptimizationEntry]:
        """
        Run the loop one iteration at a time.

        Yields the OptimizationEntry of each completed iteration. When the
        generator finishes, ``result`` holds the final prompt.

        Raises:
            OptimizationFailedError: If an assessment fails max_retries times in a row
        """
        if self._started:
            raise RuntimeError("PromptOptimizer instances run once; create a new one per run")
        self._started = True

        state = self.run_state
        self._print_progress(f"Optimizing prompt for: {self.task_description}")

        for iteration in range(1, self.config.iterations + 1):
            entry = await self._assess_with_retry(iteration)

            is_best = state.record(entry)
            if self.iteration_callback is not None:
                self.iteration_callback(iteration, entry)
            await self.debug.save_iteration(iteration, entry)

            assessment = entry.assessment
            self._print_progress(
                f"  Iteration {iteration}: score={assessment.overall_score:g} "
                f"grade={assessment.overall_grade}" + (" (best)" if is_best else "")
            )

            if self._goal_met(assessment):
                await self.debug.log_response(
                    "optimizer",
                    f"Optimization complete after {iteration} iterations. Goal achieved.",
                )
                logger.info(f"Optimization goal met at iteration {iteration}")
                self.converged = True
                self.result = state.current_prompt
                yield entry
                return

            try:
                improved = await self.improver.improve(entry, self.recent_history())
            except Exception as e:
                # The same prompt is re-assessed next iteration
                logger.warning(f"Failed to generate improved prompt at iteration {iteration}: {e}")
                await self.debug.log_response(
                    "optimizer", f"Failed to generate improved prompt at iteration {iteration}: {e}"
                )
            else:
                state.current_prompt = improved
                await self.debug.log_response(
                    "optimizer", f"Iteration {iteration} complete. New prompt: {improved.input}"
                )

            yield entry

        logger.info(
            f"Iteration budget of {self.config.iterations} exhausted; best score {state.best_score:g}"
        )
        self.result = state.best_prompt or self.initial_prompt

    async def _assess_with_retry(self, iteration: int) -> OptimizationEntry:
        """Assess the working prompt, retrying with a fixed delay."""
        state = self.run_state
        max_retries = self.config.max_retries
        last_error: Exception | None = None

        for attempt in range(1, max_retries + 1):
            try:
                return await self.assessor.assess(state.current_prompt, self.recent_history())
            except Exception as e:
                last_error = e
                logger.warning(f"Error in iteration {iteration}, attempt {attempt}: {e}")
                await self.debug.log_response(
                    "optimizer", f"Error in iteration {iteration}, attempt {attempt}: {e}"
                )
                if attempt < max_retries:
                    await asyncio.sleep(self.config.retry_delay)

        raise OptimizationFailedError(iteration, max_retries, state.best_prompt) from last_error

    def _goal_met(self, assessment: PromptAssessment) -> bool:
        """Evaluate the convergence policy; configuration errors count as not met."""
        try:
            policy = rating_policy(self.config.rating_system, self.config.threshold)
            return is_goal_met(assessment, policy)
        except (RatingSystemError, InvalidGradeError) as e:
            logger.warning(f"Error checking optimization goal: {e}")
            return False

    def _print_progress(self, message: str) -> None:
        """Print progress if verbose mode is enabled."""
        if self._progress_callback is not None:
            self._progress_callback(message)
        elif self.config.verbose:
            print(message, flush=True)
