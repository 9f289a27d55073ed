"""Working state of a single optimization run."""

from pydantic import BaseModel, Field

from prompt_refinery.types import OptimizationEntry, Prompt


class OptimizationRun(BaseModel):
    """
    State owned by one optimization run.

    History is append-only and unbounded; only a trailing window of it is
    replayed into requests. The best prompt changes only when a strictly
    higher score is observed, so the first prompt to reach a score keeps it.
    A run must never be shared between concurrent tasks.
    """

    current_prompt: Prompt = Field(description="Prompt to assess next")
    history: list[OptimizationEntry] = Field(default_factory=list)
    best_prompt: Prompt | None = Field(default=None, description="Highest-scoring prompt so far")
    best_score: float = Field(default=0.0, description="Score of best_prompt")
    iteration: int = Field(default=0, description="Completed iterations")

    def record(self, entry: OptimizationEntry) -> bool:
        """
        Append an entry and update the best prompt.

        Returns:
            True if the entry became the new best
        """
        self.history.append(entry)
        self.iteration += 1
        score = entry.assessment.overall_score
        if score > self.best_score:
            self.best_score = score
            self.best_prompt = entry.prompt
            return True
        return False

    def recent_history(self, memory_size: int) -> list[OptimizationEntry]:
        """Return at most memory_size of the latest entries, oldest first."""
        if memory_size <= 0:
            return []
        return list(self.history[-memory_size:])

    @property
    def latest(self) -> OptimizationEntry | None:
        """Most recent entry, if any."""
        return self.history[-1] if self.history else None
