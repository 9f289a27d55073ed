"""Text formatting shared by the request builders."""

from prompt_refinery.types import Metric, OptimizationEntry, Prompt, PromptAssessment


def format_prompt(prompt: Prompt) -> str:
    """Full prompt structure as JSON."""
    return prompt.model_dump_json(indent=2, exclude_none=True)


def format_assessment(assessment: PromptAssessment) -> str:
    """Assessment as JSON using the response field names."""
    return assessment.model_dump_json(indent=2, by_alias=True)


def format_metrics(metrics: list[Metric]) -> str:
    """Bullet list of custom metrics."""
    if not metrics:
        return "None"
    return "\n".join(
        f"- {m.name}: {m.description}" if m.description else f"- {m.name}" for m in metrics
    )


def format_history(history: list[OptimizationEntry]) -> str:
    """Compact summary of recent iterations, oldest first."""
    if not history:
        return "None (this is the first assessment)"

    blocks = []
    for i, entry in enumerate(history, 1):
        assessment = entry.assessment
        weaknesses = "; ".join(w.point for w in assessment.weaknesses) or "none"
        blocks.append(
            f"[{i}] score={assessment.overall_score:g}/20 grade={assessment.overall_grade}\n"
            f"Prompt: {entry.prompt.render()}\n"
            f"Weaknesses: {weaknesses}"
        )
    return "\n\n".join(blocks)
