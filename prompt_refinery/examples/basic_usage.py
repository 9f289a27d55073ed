"""Optimize a single prompt with the OpenAI connector.

Run with:
    python -m prompt_refinery.examples.basic_usage

Requirements:
    - OpenAI API key set in .env file or OPENAI_API_KEY environment variable
"""

import asyncio
import logging
import os

from dotenv import load_dotenv

from prompt_refinery import (
    LLMConfig,
    Metric,
    OpenAIConnector,
    OptimizationFailedError,
    OptimizationRunner,
    OptimizerConfig,
)

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

INITIAL_PROMPT = "Write a product description for a pair of running shoes."
TASK_DESCRIPTION = "E-commerce product copy for an athletic footwear store"


async def run_example() -> None:
    """Optimize the sample prompt and save the reports under results/."""
    if not os.getenv("OPENAI_API_KEY"):
        print("❌ ERROR: OPENAI_API_KEY not found!")
        print("Add OPENAI_API_KEY=your_key_here to a .env file or export it.")
        return

    connector = OpenAIConnector(llm_config=LLMConfig(model="gpt-4o-mini", timeout=60))
    config = OptimizerConfig(
        rating_system="letter",
        iterations=4,
        custom_metrics=[
            Metric(name="Persuasiveness", description="Does the copy make readers want to buy?"),
            Metric(name="Accuracy", description="Does it avoid inventing product facts?"),
        ],
    )

    runner = OptimizationRunner(connector, INITIAL_PROMPT, TASK_DESCRIPTION, config)
    try:
        await runner.run()
    except OptimizationFailedError as e:
        logger.error(f"Optimization failed: {e}")
        if e.best_prompt is not None:
            print(f"\nBest prompt before the failure:\n{e.best_prompt.render()}")
        return

    print(f"\nReports saved to: {runner.last_run_dir}")


def main():
    """Main entry point."""
    asyncio.run(run_example())


if __name__ == "__main__":
    main()
