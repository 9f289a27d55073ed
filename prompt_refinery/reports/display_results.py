"""Display optimization results to console."""

from prompt_refinery.types import OptimizationResult


def display_results(result: OptimizationResult) -> None:
    """
    Display optimization results to console.

    Args:
        result: Optimization result containing the final prompt and history
    """
    print("\n" + "=" * 70)
    print("OPTIMIZATION COMPLETE!" if result.converged else "ITERATION BUDGET EXHAUSTED")
    print("=" * 70)
    print(f"\nIterations: {len(result.history)}")
    print(f"Best Score: {result.best_score:g}/20")
    print(f"Total Time: {result.total_time_seconds:.1f} seconds")

    if result.history:
        print("\nScore Progression:")
        for i, entry in enumerate(result.history, 1):
            assessment = entry.assessment
            print(f"  Iteration {i}: {assessment.overall_score:g}/20 ({assessment.overall_grade})")

        first = result.history[0].assessment.overall_score
        print(f"\nImprovement: {first:g} → {result.best_score:g} ({result.best_score - first:+g})")

    print("\nFinal Prompt:")
    print("-" * 70)
    print(result.final_prompt.render())
    print("-" * 70)
