"""
Prompt Refinery - iterative LLM prompt optimization.

A prompt is repeatedly assessed against a rubric by a generation service,
checked against a convergence goal, and rewritten (incremental fix or bold
redesign) until the goal is met or the iteration budget runs out. Many
prompts can be optimized concurrently under a shared rate limit.

Public API:
- BaseConnector: Abstract base class for implementing custom connectors
- OpenAIConnector / AgentsConnector / FunctionConnector: Built-in connectors
- OptimizerConfig / RateLimitConfig / LLMConfig: Configuration
- PromptOptimizer: Single-prompt optimization loop
- BatchPromptOptimizer: Concurrent optimization of many prompts
- optimize_prompt / OptimizationRunner: High-level entry points
"""

from prompt_refinery.config import LLMConfig, OptimizerConfig, RateLimitConfig
from prompt_refinery.connectors import (
    AgentsConnector,
    BaseConnector,
    FunctionConnector,
    OpenAIConnector,
)
from prompt_refinery.debug import DebugManager, DebugOptions
from prompt_refinery.errors import (
    BatchCancelledError,
    GenerationError,
    OptimizationFailedError,
    OptimizerError,
)
from prompt_refinery.optimizer import BatchPromptOptimizer, PromptOptimizer
from prompt_refinery.runner import OptimizationRunner, optimize_prompt
from prompt_refinery.types import (
    BatchItem,
    BatchResult,
    Metric,
    OptimizationEntry,
    OptimizationResult,
    Prompt,
    PromptAssessment,
)

__all__ = [
    "AgentsConnector",
    "BaseConnector",
    "BatchCancelledError",
    "BatchItem",
    "BatchPromptOptimizer",
    "BatchResult",
    "DebugManager",
    "DebugOptions",
    "FunctionConnector",
    "GenerationError",
    "LLMConfig",
    "Metric",
    "OpenAIConnector",
    "OptimizationEntry",
    "OptimizationFailedError",
    "OptimizationResult",
    "OptimizationRunner",
    "OptimizerConfig",
    "OptimizerError",
    "Prompt",
    "PromptAssessment",
    "RateLimitConfig",
    "optimize_prompt",
]
