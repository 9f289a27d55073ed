"""Test prompt rendering and response model decoding."""

import pytest
from pydantic import ValidationError

from prompt_refinery.tests.helpers import create_fake_assessment
from prompt_refinery.types import (
    BatchResult,
    ImprovementCandidates,
    OptimizationEntry,
    Prompt,
    PromptAssessment,
)


def test_plain_prompt_renders_as_its_input():
    assert Prompt.from_text("Write a haiku.").render() == "Write a haiku."


def test_structured_prompt_render_order():
    """Directives, context and examples precede the input; the output hint follows it."""
    prompt = Prompt(
        input="Summarize the text.",
        system="You are terse.",
        directives=["Use plain words", "No lists"],
        examples=["Short summary."],
        context="Audience: managers",
        output="One paragraph.",
    )
    assert prompt.render() == (
        "Directives:\n- Use plain words\n- No lists\n\n"
        "Context:\nAudience: managers\n\n"
        "Examples:\n- Short summary.\n\n"
        "Summarize the text.\n\n"
        "One paragraph."
    )
    assert "You are terse." not in str(prompt)


def test_assessment_decodes_camel_case_keys():
    assessment = PromptAssessment.model_validate(create_fake_assessment(14))
    assert assessment.overall_score == 14
    assert assessment.overall_grade == "B+"
    assert assessment.efficiency_score == 14
    assert assessment.alignment_with_goal == 14
    assert assessment.suggestions[0].expected_impact == 12


def test_assessment_serializes_back_to_camel_case():
    assessment = PromptAssessment.model_validate(create_fake_assessment(14))
    dumped = assessment.model_dump(by_alias=True)
    assert {"overallScore", "overallGrade", "efficiencyScore", "alignmentWithGoal"} <= set(dumped)


def test_assessment_normalizes_numeric_grade():
    assessment = PromptAssessment.model_validate(create_fake_assessment(10, grade=16))
    assert assessment.overall_grade == "A-"


@pytest.mark.parametrize(
    "overrides",
    [
        {"metrics": []},
        {"strengths": []},
        {"weaknesses": []},
        {"suggestions": []},
        {"overallScore": 21},
        {"overallScore": -1},
        {"overallGrade": "excellent"},
        {"overallGrade": None},
    ],
)
def test_assessment_rejects_invalid_payloads(overrides):
    with pytest.raises(ValidationError):
        PromptAssessment.model_validate(create_fake_assessment(10, **overrides))


def test_assessment_requires_all_scores():
    payload = create_fake_assessment(10)
    del payload["efficiencyScore"]
    with pytest.raises(ValidationError):
        PromptAssessment.model_validate(payload)


def _candidates(incremental: float, bold: float) -> ImprovementCandidates:
    return ImprovementCandidates.model_validate(
        {
            "incrementalImprovement": {"input": "incremental"},
            "boldRedesign": {"input": "bold"},
            "expectedImpact": {"incremental": incremental, "bold": bold},
        }
    )


def test_tie_selects_incremental_improvement():
    assert _candidates(12, 12).select().input == "incremental"


def test_strictly_higher_bold_impact_selects_redesign():
    assert _candidates(12, 12.5).select().input == "bold"
    assert _candidates(12, 3).select().input == "incremental"


def test_optimization_entry_is_immutable():
    entry = OptimizationEntry(
        prompt=Prompt.from_text("x"),
        assessment=PromptAssessment.model_validate(create_fake_assessment(10)),
    )
    with pytest.raises(ValidationError):
        entry.prompt = Prompt.from_text("y")


def test_batch_result_reports_success():
    ok = BatchResult(name="a", original_prompt="p")
    failed = BatchResult(name="b", original_prompt="p", error=RuntimeError("boom"))
    assert ok.succeeded
    assert not failed.succeeded
