"""Optimize several prompts concurrently under a shared rate limit.

Run with:
    python -m prompt_refinery.examples.batch_usage

Requirements:
    - OpenAI API key set in .env file or OPENAI_API_KEY environment variable
"""

import asyncio
import logging
import os

from dotenv import load_dotenv

from prompt_refinery import (
    BatchItem,
    BatchPromptOptimizer,
    LLMConfig,
    Metric,
    OpenAIConnector,
    OptimizerConfig,
    RateLimitConfig,
)
from prompt_refinery.reports import save_batch_report

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

ITEMS = [
    BatchItem(
        name="support-reply",
        prompt="Reply to a customer whose parcel arrived late.",
        description="Customer support email replies",
        metrics=[Metric(name="Empathy", description="Acknowledges the customer's frustration")],
        threshold=0.85,
    ),
    BatchItem(
        name="release-notes",
        prompt="Summarize these commits as release notes.",
        description="Release notes for a developer audience",
    ),
    BatchItem(
        name="sql-helper",
        prompt="Turn this question into a SQL query.",
        description="Text-to-SQL for a PostgreSQL analytics database",
        threshold=0.9,
    ),
]


async def run_example() -> None:
    """Optimize the sample batch and save a markdown report."""
    if not os.getenv("OPENAI_API_KEY"):
        print("❌ ERROR: OPENAI_API_KEY not found!")
        print("Add OPENAI_API_KEY=your_key_here to a .env file or export it.")
        return

    connector = OpenAIConnector(llm_config=LLMConfig(model="gpt-4o-mini", timeout=60))
    batch = BatchPromptOptimizer(
        connector,
        rate_limit=RateLimitConfig(events=2, interval=1.0, burst=2),
        config=OptimizerConfig(iterations=3),
        verbose=True,
    )

    results = await batch.optimize_prompts(ITEMS, timeout=600)

    print("\n" + "=" * 70)
    for result in results:
        status = "OK" if result.succeeded else f"FAILED: {result.error}"
        print(f"{result.name}: {status}")

    report = await save_batch_report(results, "results")
    print(f"\nReport saved to: {report}")


def main():
    """Main entry point."""
    asyncio.run(run_example())


if __name__ == "__main__":
    main()
