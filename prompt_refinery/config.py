"""Configuration for the prompt optimizer."""

from pydantic import BaseModel, Field

from prompt_refinery.types import Metric

DEFAULT_ITERATIONS = 5
DEFAULT_THRESHOLD = 0.8
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY = 2.0
DEFAULT_MEMORY_SIZE = 2
DEFAULT_RATE_LIMIT_INTERVAL = 3.0


def default_metrics() -> list[Metric]:
    """Rubric used when the caller does not supply custom metrics."""
    return [
        Metric(name="Relevance", description="How relevant the prompt is to the task"),
        Metric(name="Clarity", description="How clear and unambiguous the prompt is"),
        Metric(name="Specificity", description="How specific and detailed the prompt is"),
    ]


class LLMConfig(BaseModel):
    """Configuration for a single LLM used by the bundled connectors."""

    model: str = Field(description="Model name (e.g., 'gpt-4o', 'gpt-4o-mini')")
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature",
    )
    max_tokens: int | None = Field(default=None, description="Maximum tokens to generate")
    timeout: float | None = Field(
        default=None, gt=0, description="Per-request timeout in seconds"
    )


class OptimizerConfig(BaseModel):
    """Configuration for a single optimization run."""

    # Convergence
    rating_system: str = Field(
        default="numerical",
        description="'numerical' or 'letter'; unknown values are reported when the goal is checked",
    )
    threshold: float = Field(
        default=DEFAULT_THRESHOLD,
        gt=0.0,
        le=1.0,
        description="Fraction of the 0-20 scale the overall score must reach (numerical only)",
    )

    # Loop budget
    iterations: int = Field(default=DEFAULT_ITERATIONS, ge=1, description="Maximum iterations")
    max_retries: int = Field(
        default=DEFAULT_MAX_RETRIES, ge=1, description="Assessment attempts per iteration"
    )
    retry_delay: float = Field(
        default=DEFAULT_RETRY_DELAY, ge=0.0, description="Seconds to wait between attempts"
    )

    # Request content
    memory_size: int = Field(
        default=DEFAULT_MEMORY_SIZE,
        ge=0,
        description="Number of recent history entries replayed into each request",
    )
    custom_metrics: list[Metric] = Field(
        default_factory=default_metrics, description="Rubric echoed into every assessment"
    )
    optimization_goal: str | None = Field(
        default=None,
        description="Goal text; defaults to 'Optimize the prompt for <task description>'",
    )

    # Progress reporting
    verbose: bool = Field(default=False, description="Print progress updates")

    def goal_for(self, task_description: str) -> str:
        """Return the optimization goal, deriving it from the task when unset."""
        return self.optimization_goal or f"Optimize the prompt for {task_description}"


class RateLimitConfig(BaseModel):
    """Token bucket settings shared by all batch tasks."""

    events: int = Field(default=1, ge=1, description="Tokens added per interval")
    interval: float = Field(
        default=DEFAULT_RATE_LIMIT_INTERVAL, gt=0.0, description="Interval length in seconds"
    )
    burst: int = Field(default=1, ge=1, description="Maximum tokens available at once")

    @property
    def rate(self) -> float:
        """Tokens added per second."""
        return self.events / self.interval
