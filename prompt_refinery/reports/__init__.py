"""Report generation utilities for prompt optimization."""

from prompt_refinery.reports.display_results import display_results
from prompt_refinery.reports.save_batch_report import save_batch_report
from prompt_refinery.reports.save_optimization_history import save_optimization_history
from prompt_refinery.reports.save_optimized_prompt import save_optimized_prompt

__all__ = [
    "display_results",
    "save_batch_report",
    "save_optimization_history",
    "save_optimized_prompt",
]
