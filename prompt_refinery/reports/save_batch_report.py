"""Save a markdown summary of a batch run."""

from pathlib import Path

import aiofiles

from prompt_refinery.types import BatchResult


async def save_batch_report(results: list[BatchResult], output_dir: str | Path) -> Path:
    """
    Save one section per batch item: status, prompts and generated content.

    Args:
        results: Batch results in input order
        output_dir: Directory to save the report

    Returns:
        Path to saved report file
    """
    report_file = Path(output_dir) / "batch_report.md"
    report_file.parent.mkdir(parents=True, exist_ok=True)

    succeeded = sum(1 for r in results if r.succeeded)

    lines = []
    lines.append("BATCH OPTIMIZATION REPORT\n")
    lines.append("=" * 70 + "\n\n")
    lines.append(f"Items: {len(results)}\n")
    lines.append(f"Succeeded: {succeeded}\n")
    lines.append(f"Failed: {len(results) - succeeded}\n\n")

    for result in results:
        lines.append("=" * 70 + "\n")
        lines.append(f"{result.name}\n")
        lines.append("=" * 70 + "\n")
        if result.error is not None:
            lines.append(f"Status: FAILED ({type(result.error).__name__}: {result.error})\n\n")
        else:
            lines.append("Status: OK\n\n")

        lines.append("Original Prompt:\n")
        lines.append(result.original_prompt + "\n\n")
        lines.append("Optimized Prompt:\n")
        lines.append((result.optimized_prompt or "(none)") + "\n\n")
        if result.generated_content:
            lines.append("Generated Content:\n")
            lines.append(result.generated_content + "\n\n")

    async with aiofiles.open(report_file, "w", encoding="utf-8") as f:
        await f.write("".join(lines))

    return report_file
