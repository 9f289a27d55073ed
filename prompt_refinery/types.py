"""Data types and models for prompt optimization."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from prompt_refinery.grading import MAX_RATING_SCALE, normalize_grade


class Prompt(BaseModel):
    """A structured prompt: the unit being optimized."""

    model_config = ConfigDict(frozen=True)

    input: str = Field(description="Main prompt text")
    system: str | None = Field(default=None, description="Optional system instructions")
    directives: list[str] = Field(default_factory=list, description="Ordered directives")
    examples: list[str] = Field(default_factory=list, description="Ordered examples")
    context: str | None = Field(default=None, description="Optional context block")
    output: str | None = Field(default=None, description="Output format hint")
    reasoning: str | None = Field(
        default=None, description="Why this version was proposed (improvement candidates only)"
    )

    @classmethod
    def from_text(cls, text: str) -> "Prompt":
        """Wrap plain prompt text."""
        return cls(input=text)

    def render(self) -> str:
        """Render the prompt as the text sent to a model (system text excluded)."""
        sections = []
        if self.directives:
            sections.append("Directives:\n" + "\n".join(f"- {d}" for d in self.directives))
        if self.context:
            sections.append(f"Context:\n{self.context}")
        if self.examples:
            sections.append("Examples:\n" + "\n".join(f"- {e}" for e in self.examples))
        sections.append(self.input)
        if self.output:
            sections.append(self.output)
        return "\n\n".join(sections)

    def __str__(self) -> str:
        return self.render()


class Metric(BaseModel):
    """A named rubric dimension scored on the 0-20 scale."""

    name: str = Field(description="Metric name")
    description: str = Field(default="", description="What the metric measures")
    value: float = Field(default=0.0, ge=0, le=MAX_RATING_SCALE, description="Score (0-20)")
    reasoning: str = Field(default="", description="Why this score was given")


class Strength(BaseModel):
    """Something the prompt does well."""

    point: str
    example: str = ""


class Weakness(BaseModel):
    """Something the prompt does poorly."""

    point: str
    example: str = ""


class Suggestion(BaseModel):
    """A proposed change with its expected impact."""

    model_config = ConfigDict(populate_by_name=True)

    description: str
    expected_impact: float = Field(alias="expectedImpact", ge=0, le=MAX_RATING_SCALE)
    reasoning: str = ""


class PromptAssessment(BaseModel):
    """Rubric-based critique of a prompt produced by the generation service."""

    model_config = ConfigDict(populate_by_name=True)

    metrics: list[Metric] = Field(min_length=1)
    strengths: list[Strength] = Field(min_length=1)
    weaknesses: list[Weakness] = Field(min_length=1)
    suggestions: list[Suggestion] = Field(min_length=1)
    overall_score: float = Field(alias="overallScore", ge=0, le=MAX_RATING_SCALE)
    overall_grade: str = Field(alias="overallGrade", description="Canonical letter grade")
    efficiency_score: float = Field(alias="efficiencyScore", ge=0, le=MAX_RATING_SCALE)
    alignment_with_goal: float = Field(alias="alignmentWithGoal", ge=0, le=MAX_RATING_SCALE)

    @field_validator("overall_grade", mode="before")
    @classmethod
    def _normalize_grade(cls, value: object) -> str:
        # Models sometimes answer with the numeric score instead of a letter
        if not isinstance(value, str | int | float):
            raise ValueError(f"grade must be a string, got {type(value).__name__}")
        return normalize_grade(value)


class OptimizationEntry(BaseModel):
    """One prompt snapshot paired with the assessment computed for it."""

    model_config = ConfigDict(frozen=True)

    prompt: Prompt
    assessment: PromptAssessment


class ExpectedImpact(BaseModel):
    """Self-estimated impact of each improvement candidate."""

    incremental: float = Field(ge=0, le=MAX_RATING_SCALE)
    bold: float = Field(ge=0, le=MAX_RATING_SCALE)


class ImprovementCandidates(BaseModel):
    """Response schema of an improvement request."""

    model_config = ConfigDict(populate_by_name=True)

    incremental_improvement: Prompt = Field(alias="incrementalImprovement")
    bold_redesign: Prompt = Field(alias="boldRedesign")
    expected_impact: ExpectedImpact = Field(alias="expectedImpact")

    def select(self) -> Prompt:
        """Pick the bold redesign only when its impact is strictly higher."""
        if self.expected_impact.bold > self.expected_impact.incremental:
            return self.bold_redesign
        return self.incremental_improvement


class BatchItem(BaseModel):
    """A named prompt to optimize as part of a batch."""

    name: str = Field(description="Identifies this prompt in the batch")
    prompt: str = Field(description="Initial prompt text")
    description: str = Field(description="Intended use of the prompt")
    metrics: list[Metric] = Field(default_factory=list, description="Custom evaluation metrics")
    threshold: float = Field(default=0.8, gt=0, le=1, description="Numerical goal threshold")


class BatchResult(BaseModel):
    """Outcome of optimizing one BatchItem."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    original_prompt: str
    optimized_prompt: str = ""
    generated_content: str = ""
    error: Exception | None = None

    @property
    def succeeded(self) -> bool:
        """Whether the item finished without error."""
        return self.error is None


class OptimizationResult(BaseModel):
    """Outcome of a single optimization run."""

    task_description: str
    initial_prompt: Prompt
    final_prompt: Prompt
    history: list[OptimizationEntry] = Field(default_factory=list)
    converged: bool = Field(default=False, description="Whether the goal was met")
    total_time_seconds: float = Field(default=0.0)

    @property
    def best_score(self) -> float:
        """Highest overall score observed."""
        return max((e.assessment.overall_score for e in self.history), default=0.0)

    @property
    def score_progression(self) -> list[float]:
        """Overall score per iteration."""
        return [e.assessment.overall_score for e in self.history]
