"""Save the optimization history as JSON."""

import json
from pathlib import Path

import aiofiles

from prompt_refinery.types import OptimizationResult


async def save_optimization_history(result: OptimizationResult, output_dir: str | Path) -> Path:
    """
    Save every iteration's prompt and assessment to a JSON file.

    Args:
        result: Optimization result
        output_dir: Directory to save the file

    Returns:
        Path to saved file
    """
    history_file = Path(output_dir) / "optimization_history.json"
    history_file.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "task_description": result.task_description,
        "converged": result.converged,
        "total_time_seconds": result.total_time_seconds,
        "iterations": [
            {"iteration": i, **entry.model_dump(mode="json", by_alias=True, exclude_none=True)}
            for i, entry in enumerate(result.history, 1)
        ],
    }

    async with aiofiles.open(history_file, "w", encoding="utf-8") as f:
        await f.write(json.dumps(data, indent=2, ensure_ascii=False))

    return history_file
