"""Assessment request - rubric scoring of a prompt."""

from prompt_refinery.grading import GRADE_VALUES
from prompt_refinery.requests.formatting import format_history, format_metrics, format_prompt
from prompt_refinery.types import Metric, OptimizationEntry, Prompt

ASSESSOR_SYSTEM = (
    "You are an objective prompt engineering reviewer. "
    "You answer with a single raw JSON object and nothing else."
)

ASSESSMENT_SHAPE = """{
  "metrics": [{"name": string, "value": number, "reasoning": string}, ...],
  "strengths": [{"point": string, "example": string}, ...],
  "weaknesses": [{"point": string, "example": string}, ...],
  "suggestions": [{"description": string, "expectedImpact": number, "reasoning": string}, ...],
  "overallScore": number,
  "overallGrade": string,
  "efficiencyScore": number,
  "alignmentWithGoal": number
}"""


def build_assessment_request(
    task_description: str,
    prompt: Prompt,
    recent_history: list[OptimizationEntry],
    custom_metrics: list[Metric],
    optimization_goal: str,
) -> Prompt:
    """
    Build the request asking the model to score a prompt against a rubric.

    Args:
        task_description: What the optimized prompt is for
        prompt: The prompt under assessment
        recent_history: Latest history entries, oldest first
        custom_metrics: Rubric dimensions to score
        optimization_goal: Goal the prompt is optimized towards

    Returns:
        Request prompt for the generation service
    """
    grades = ", ".join(GRADE_VALUES)

    body = f"""Assess the following prompt for the task: {task_description}

**FULL PROMPT STRUCTURE**:
{format_prompt(prompt)}

**RECENT HISTORY**:
{format_history(recent_history)}

**CUSTOM METRICS** (score each one):
{format_metrics(custom_metrics)}

**OPTIMIZATION GOAL**: {optimization_goal}

Consider the recent history when making your assessment.
Provide your assessment as a JSON object with the following structure:
{ASSESSMENT_SHAPE}

IMPORTANT:
- Do not use any markdown formatting, code blocks, or backticks in your response.
- Return only the raw JSON object.
- For numerical ratings, use a scale of 0 to 20 (inclusive).
- overallGrade must be one of: {grades}
- Include at least one item in each array (metrics, strengths, weaknesses, suggestions).
- Provide specific examples and reasoning for each point.
- Rate the prompt's efficiency and alignment with the optimization goal.
- Rank suggestions by their expected impact (20 being highest impact).
- Use clear, jargon-free language in your assessment.
- Double-check that your response is valid JSON before submitting.
"""

    return Prompt(input=body.strip(), system=ASSESSOR_SYSTEM)
