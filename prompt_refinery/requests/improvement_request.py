"""Improvement request - two alternative rewrites of a prompt."""

from prompt_refinery.requests.formatting import format_assessment, format_history, format_prompt
from prompt_refinery.types import OptimizationEntry, Prompt

IMPROVER_SYSTEM = (
    "You are a prompt optimization specialist who improves prompts based on critiques. "
    "You answer with a single raw JSON object and nothing else."
)

IMPROVEMENT_SHAPE = """{
  "incrementalImprovement": {
    "input": "improved prompt text",
    "directives": ["directive1", "directive2", ...],
    "examples": ["example1", "example2", ...],
    "reasoning": "explanation of changes and their link to the assessment"
  },
  "boldRedesign": {
    "input": "reimagined prompt text",
    "directives": ["directive1", "directive2", ...],
    "examples": ["example1", "example2", ...],
    "reasoning": "explanation of the new approach and its potential benefits"
  },
  "expectedImpact": {
    "incremental": number,
    "bold": number
  }
}"""


def build_improvement_request(
    previous: OptimizationEntry,
    recent_history: list[OptimizationEntry],
    task_description: str,
    optimization_goal: str,
) -> Prompt:
    """
    Build the request asking for an incremental and a bold rewrite.

    Args:
        previous: Latest prompt and its assessment
        recent_history: Latest history entries, oldest first
        task_description: What the optimized prompt is for
        optimization_goal: Goal the prompt is optimized towards

    Returns:
        Request prompt for the generation service
    """
    body = f"""Based on the following assessment and recent history, generate an improved version of the entire prompt structure.

**PREVIOUS PROMPT**:
{format_prompt(previous.prompt)}

**ASSESSMENT**:
{format_assessment(previous.assessment)}

**RECENT HISTORY**:
{format_history(recent_history)}

**TASK DESCRIPTION**: {task_description}
**OPTIMIZATION GOAL**: {optimization_goal}

Consider the recent history when generating improvements.

Provide two versions of the improved prompt:
1. An incremental improvement that keeps the current structure and fixes the weaknesses
2. A bold redesign that restructures the approach

IMPORTANT: Respond ONLY with a raw JSON object. Do not use any markdown formatting, code blocks, or backticks.
The JSON object should have this structure:
{IMPROVEMENT_SHAPE}

For each improvement:
- Directly address weaknesses identified in the assessment.
- Build upon identified strengths.
- Ensure alignment with the task description and optimization goal.
- Strive for efficiency in language use.
- Use clear, jargon-free language.
- Provide a brief reasoning for major changes.
- Rate the expected impact of each version on a scale of 0 to 20.

Double-check that your response is valid JSON before submitting.
"""

    return Prompt(input=body.strip(), system=IMPROVER_SYSTEM)
