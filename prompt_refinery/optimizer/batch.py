"""Concurrent optimization of many prompts under a shared rate limit."""

import asyncio
import logging

from prompt_refinery.config import OptimizerConfig, RateLimitConfig
from prompt_refinery.connectors import BaseConnector
from prompt_refinery.debug import DebugManager
from prompt_refinery.errors import BatchCancelledError, OptimizationFailedError
from prompt_refinery.optimizer.orchestrator import PromptOptimizer
from prompt_refinery.optimizer.rate_limiter import TokenBucket
from prompt_refinery.types import BatchItem, BatchResult, Prompt

logger = logging.getLogger(__name__)


class BatchPromptOptimizer:
    """Optimize independent prompts concurrently.

    Every item gets its own PromptOptimizer; the token bucket is the only
    state shared between tasks.
    """

    def __init__(
        self,
        connector: BaseConnector,
        rate_limit: RateLimitConfig | None = None,
        config: OptimizerConfig | None = None,
        verbose: bool = False,
        debug: DebugManager | None = None,
    ):
        """
        Initialize the batch optimizer.

        Args:
            connector: Generation service connector shared by all tasks
            rate_limit: Token bucket settings (default: 1 request per 3 seconds, burst 1)
            config: Base optimizer configuration; each item overrides rating
                system, threshold and metrics
            verbose: Print each optimized prompt as it completes
            debug: Optional debug sink shared by all runs
        """
        self.connector = connector
        self.config = config or OptimizerConfig()
        self.verbose = verbose
        self.debug = debug or DebugManager()
        self.rate_limiter = TokenBucket.from_config(rate_limit or RateLimitConfig())

    def set_rate_limit(self, rate_limit: RateLimitConfig) -> None:
        """Replace the token bucket (affects batches started afterwards)."""
        self.rate_limiter = TokenBucket.from_config(rate_limit)

    def config_for(self, item: BatchItem) -> OptimizerConfig:
        """Per-item configuration derived from the base configuration."""
        return self.config.model_copy(
            update={
                "rating_system": "numerical",
                "threshold": item.threshold,
                "custom_metrics": list(item.metrics) or list(self.config.custom_metrics),
                "optimization_goal": None,
            }
        )

    async def optimize_prompts(
        self, items: list[BatchItem], timeout: float | None = None
    ) -> list[BatchResult]:
        """
        Optimize all items concurrently.

        Args:
            items: Prompts to optimize
            timeout: Optional deadline in seconds for the whole batch; items
                still running when it passes fail with BatchCancelledError

        Returns:
            One result per item, in input order
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout if timeout is not None else None
        results: list[BatchResult | None] = [None] * len(items)

        logger.info(f"Optimizing {len(items)} prompts concurrently")
        await asyncio.gather(
            *[
                self._optimize_item(index, item, results, deadline)
                for index, item in enumerate(items)
            ]
        )

        failures = sum(1 for r in results if r is not None and r.error is not None)
        logger.info(f"Batch complete: {len(items) - failures} succeeded, {failures} failed")
        return [r for r in results if r is not None]

    async def _optimize_item(
        self,
        index: int,
        item: BatchItem,
        results: list[BatchResult | None],
        deadline: float | None,
    ) -> None:
        """Optimize one item and store its result at its own index."""
        result = BatchResult(
            name=item.name, original_prompt=item.prompt, optimized_prompt=item.prompt
        )
        phase = "waiting for the rate limiter"
        scope = asyncio.timeout_at(deadline)

        try:
            async with scope:
                await self.rate_limiter.acquire()

                phase = "optimizing"
                optimizer = PromptOptimizer(
                    connector=self.connector,
                    initial_prompt=Prompt.from_text(item.prompt),
                    task_description=item.description,
                    config=self.config_for(item),
                    debug=self.debug,
                )
                try:
                    optimized = await optimizer.optimize()
                except OptimizationFailedError as e:
                    if e.best_prompt is not None:
                        result.optimized_prompt = e.best_prompt.render()
                    raise
                result.optimized_prompt = optimized.render()

                phase = "waiting for the rate limiter"
                await self.rate_limiter.acquire()

                phase = "generating content"
                result.generated_content = await self.connector.generate(optimized)
        except TimeoutError as e:
            if scope.expired():
                result.error = BatchCancelledError(f"batch deadline passed while {phase}")
            else:
                result.error = e
        except Exception as e:
            result.error = e

        if result.error is not None:
            logger.warning(f"Batch item {item.name!r} failed while {phase}: {result.error}")
        elif self.verbose:
            print(f"Optimized prompt for {item.name}: {result.optimized_prompt}", flush=True)

        results[index] = result
