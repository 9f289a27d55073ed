"""Save the optimized prompt to a markdown file."""

from pathlib import Path

import aiofiles

from prompt_refinery.types import OptimizationResult


async def save_optimized_prompt(result: OptimizationResult, output_dir: str | Path) -> Path:
    """
    Save the optimized prompt alongside the original one.

    Args:
        result: Optimization result
        output_dir: Directory to save the file

    Returns:
        Path to saved file
    """
    prompt_file = Path(output_dir) / "optimized_prompt.md"
    prompt_file.parent.mkdir(parents=True, exist_ok=True)

    lines = []
    lines.append("OPTIMIZED PROMPT\n")
    lines.append("=" * 70 + "\n\n")
    lines.append(f"Task: {result.task_description}\n")
    lines.append(f"Converged: {'yes' if result.converged else 'no'}\n")
    lines.append(f"Best Score: {result.best_score:g}/20\n\n")

    lines.append("=" * 70 + "\n")
    lines.append("FINAL PROMPT\n")
    lines.append("=" * 70 + "\n")
    lines.append(result.final_prompt.render() + "\n\n")

    lines.append("=" * 70 + "\n")
    lines.append("ORIGINAL PROMPT\n")
    lines.append("=" * 70 + "\n")
    lines.append(result.initial_prompt.render() + "\n")

    async with aiofiles.open(prompt_file, "w", encoding="utf-8") as f:
        await f.write("".join(lines))

    return prompt_file
