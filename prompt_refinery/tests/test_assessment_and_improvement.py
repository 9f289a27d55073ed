"""Test the assessment engine and the improvement generator in isolation."""

import pytest

from prompt_refinery.errors import (
    AssessmentValidationError,
    ImprovementParseError,
    ProviderError,
    ResponseParseError,
)
from prompt_refinery.optimizer import AssessmentEngine, ImprovementGenerator
from prompt_refinery.tests.helpers import (
    ScriptedConnector,
    create_fake_assessment,
    create_fake_assessment_response,
    create_fake_improvement_response,
    fenced,
)
from prompt_refinery.types import Metric, OptimizationEntry, Prompt, PromptAssessment

GOAL = "Optimize the prompt for newsletter summaries"


def make_engine(connector, metrics=None) -> AssessmentEngine:
    return AssessmentEngine(connector, "newsletter summaries", GOAL, metrics)


def make_entry(prompt: Prompt, score: float) -> OptimizationEntry:
    return OptimizationEntry(
        prompt=prompt, assessment=PromptAssessment.model_validate(create_fake_assessment(score))
    )


@pytest.mark.asyncio
async def test_assessment_decodes_fenced_response(initial_prompt):
    connector = ScriptedConnector(assessments=[fenced(create_fake_assessment_response(13))])

    entry = await make_engine(connector).assess(initial_prompt, [])

    assert entry.prompt == initial_prompt
    assert entry.assessment.overall_score == 13
    assert entry.assessment.overall_grade == "B+"


@pytest.mark.asyncio
async def test_assessment_request_carries_task_metrics_and_history(initial_prompt):
    connector = ScriptedConnector(assessments=[create_fake_assessment_response(13)])
    metrics = [Metric(name="Brevity", description="Stays under 100 words")]
    history = [make_entry(Prompt.from_text("Older prompt"), 9)]

    await make_engine(connector, metrics).assess(initial_prompt, history)

    request = connector.requests_of("assessment")[0].render()
    assert "newsletter summaries" in request
    assert "Summarize the article." in request
    assert "- Brevity: Stays under 100 words" in request
    assert "[1] score=9/20" in request
    assert "Older prompt" in request
    assert GOAL in request


@pytest.mark.asyncio
async def test_assessment_parse_error_for_non_json(initial_prompt):
    connector = ScriptedConnector(assessments=["I think this prompt is fine."])
    with pytest.raises(ResponseParseError):
        await make_engine(connector).assess(initial_prompt, [])


@pytest.mark.asyncio
async def test_assessment_validation_error_for_wrong_shape(initial_prompt):
    """Valid JSON with a missing array is a validation error, not a parse error."""
    connector = ScriptedConnector(assessments=[create_fake_assessment_response(13, strengths=[])])
    with pytest.raises(AssessmentValidationError):
        await make_engine(connector).assess(initial_prompt, [])


@pytest.mark.asyncio
async def test_assessment_propagates_generation_errors(initial_prompt):
    connector = ScriptedConnector(assessments=[ProviderError("server error")])
    with pytest.raises(ProviderError):
        await make_engine(connector).assess(initial_prompt, [])


@pytest.mark.asyncio
async def test_improvement_tie_keeps_incremental(initial_prompt):
    connector = ScriptedConnector(
        improvements=[create_fake_improvement_response("inc", "bold", 12, 12)]
    )
    generator = ImprovementGenerator(connector, "newsletter summaries", GOAL)

    improved = await generator.improve(make_entry(initial_prompt, 10), [])

    assert improved.input == "inc"


@pytest.mark.asyncio
async def test_improvement_selects_bold_when_strictly_higher(initial_prompt):
    connector = ScriptedConnector(
        improvements=[create_fake_improvement_response("inc", "bold", 12, 13)]
    )
    generator = ImprovementGenerator(connector, "newsletter summaries", GOAL)

    improved = await generator.improve(make_entry(initial_prompt, 10), [])

    assert improved.input == "bold"
    assert improved.directives == ["Answer in three bullet points"]


@pytest.mark.asyncio
async def test_improvement_inherits_system_text(initial_prompt):
    """Candidates that omit the system text keep the previous one."""
    connector = ScriptedConnector(improvements=[create_fake_improvement_response()])
    generator = ImprovementGenerator(connector, "newsletter summaries", GOAL)

    improved = await generator.improve(make_entry(initial_prompt, 10), [])

    assert improved.system == initial_prompt.system


@pytest.mark.asyncio
async def test_improvement_request_includes_assessment(initial_prompt):
    connector = ScriptedConnector(improvements=[create_fake_improvement_response()])
    generator = ImprovementGenerator(connector, "newsletter summaries", GOAL)

    await generator.improve(make_entry(initial_prompt, 10), [])

    request = connector.requests_of("improvement")[0].render()
    assert '"overallScore": 10.0' in request
    assert "No output format" in request


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        "not json at all",
        '{"incrementalImprovement": {"input": "x"}}',
        '{"incrementalImprovement": {"input": "x"}, "boldRedesign": {"input": "y"}, '
        '"expectedImpact": {"incremental": "high", "bold": 1}}',
    ],
)
async def test_improvement_parse_errors(initial_prompt, response):
    connector = ScriptedConnector(improvements=[response])
    generator = ImprovementGenerator(connector, "newsletter summaries", GOAL)

    with pytest.raises(ImprovementParseError):
        await generator.improve(make_entry(initial_prompt, 10), [])
