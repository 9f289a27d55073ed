"""Runners for single prompt optimization.

``optimize_prompt`` is the single-shot entry point: optimize a prompt and
generate content with the result. ``OptimizationRunner`` wraps a run with a
console header, a results summary and saved reports.
"""

import logging
import time
from datetime import datetime
from pathlib import Path

from prompt_refinery.config import OptimizerConfig
from prompt_refinery.connectors import BaseConnector
from prompt_refinery.optimizer import PromptOptimizer
from prompt_refinery.reports import (
    display_results,
    save_optimization_history,
    save_optimized_prompt,
)
from prompt_refinery.types import OptimizationResult, Prompt

logger = logging.getLogger(__name__)


async def optimize_prompt(
    connector: BaseConnector,
    prompt_text: str,
    description: str,
    config: OptimizerConfig | None = None,
) -> tuple[str, str]:
    """
    Optimize a prompt, then generate content with the optimized prompt.

    Args:
        connector: Generation service connector
        prompt_text: Initial prompt text
        description: What the prompt is for
        config: Optimizer configuration (defaults if None)

    Returns:
        Tuple of (optimized prompt text, generated content)

    Raises:
        OptimizationFailedError: If an assessment fails max_retries times in a row
        GenerationError: If generating content with the optimized prompt fails
    """
    optimizer = PromptOptimizer(connector, Prompt.from_text(prompt_text), description, config)
    optimized = await optimizer.optimize()
    content = await connector.generate(optimized)
    return optimized.render(), content


class OptimizationRunner:
    """Runner for executing prompt optimization with reporting."""

    def __init__(
        self,
        connector: BaseConnector,
        prompt: Prompt | str,
        task_description: str,
        config: OptimizerConfig | None = None,
        verbose: bool = True,
        output_dir: str | Path = "results",
    ):
        """Initialize the optimization runner.

        Args:
            connector: Generation service connector
            prompt: Prompt to optimize
            task_description: What the prompt is for
            config: Optimizer configuration (defaults if None)
            verbose: Whether to print progress messages
            output_dir: Root directory for run folders
        """
        self.connector = connector
        self.prompt = Prompt.from_text(prompt) if isinstance(prompt, str) else prompt
        self.task_description = task_description
        self.config = config or OptimizerConfig()
        self.verbose = verbose
        self.results_root = Path(output_dir)
        self.last_run_dir: Path | None = None

    async def run(self) -> OptimizationResult:
        """Run the optimization with reporting.

        Returns:
            OptimizationResult with the final prompt and full history
        """
        if self.verbose:
            self._print_header()

        optimizer = PromptOptimizer(
            connector=self.connector,
            initial_prompt=self.prompt,
            task_description=self.task_description,
            config=self.config.model_copy(update={"verbose": self.verbose}),
        )

        start = time.perf_counter()
        final_prompt = await optimizer.optimize()
        elapsed = time.perf_counter() - start

        result = OptimizationResult(
            task_description=self.task_description,
            initial_prompt=self.prompt,
            final_prompt=final_prompt,
            history=optimizer.history,
            converged=optimizer.converged,
            total_time_seconds=elapsed,
        )
        logger.info(
            f"Optimization finished in {elapsed:.1f}s after {len(result.history)} iterations"
        )

        run_dir = self._prepare_run_directory()
        self.last_run_dir = run_dir

        if self.verbose:
            display_results(result)

        await save_optimized_prompt(result, run_dir)
        await save_optimization_history(result, run_dir)

        return result

    def _print_header(self) -> None:
        """Print optimization header."""
        print("=" * 70)
        print("PROMPT OPTIMIZATION")
        print("=" * 70)
        print()
        print(f"Task: {self.task_description}")
        print()
        print("Configuration:")
        print(f"  Rating system: {self.config.rating_system}")
        if self.config.rating_system == "numerical":
            print(f"  Threshold: {self.config.threshold:g}")
        print(f"  Iterations: {self.config.iterations}")
        print(f"  Max retries: {self.config.max_retries}")
        print(f"  Memory size: {self.config.memory_size}")
        print(f"  Metrics: {', '.join(m.name for m in self.config.custom_metrics)}")
        print()
        print("Starting optimization...")
        print()

    def _prepare_run_directory(self) -> Path:
        """Create and return run-specific output directory."""
        folder_name = datetime.now().strftime("run-%Y%m%d-%H%M%S")
        run_path = self.results_root / folder_name
        run_path.mkdir(parents=True, exist_ok=True)
        return run_path
