"""Pytest fixtures for prompt optimization tests."""

import pytest
from agents import Runner

from prompt_refinery.config import OptimizerConfig, RateLimitConfig
from prompt_refinery.types import Prompt


class FakeRunnerResult:
    """Mimics the result structure from agents.Runner.run()."""

    def __init__(self, final_output):
        self.final_output = final_output


@pytest.fixture
def initial_prompt():
    """Provide the prompt every optimization test starts from."""
    return Prompt(input="Summarize the article.", system="You are an editor.")


@pytest.fixture
def task_description():
    """Provide a sample task description."""
    return "Summaries of news articles for a daily newsletter"


@pytest.fixture
def fast_config():
    """
    Provide configuration for fast loop tests.

    No delay between retries and a small iteration budget.
    """
    return OptimizerConfig(iterations=3, max_retries=3, retry_delay=0.0)


@pytest.fixture
def fast_rate_limit():
    """Provide a rate limit that never makes batch tests wait noticeably."""
    return RateLimitConfig(events=1000, interval=1.0, burst=100)


@pytest.fixture
def mock_agents(monkeypatch):
    """
    Mock the agents.Runner.run method to echo the agent setup.

    Records every (agent, input) pair so tests can inspect what was sent.
    """
    calls = []

    async def fake_runner_run(agent, input):
        calls.append((agent, input))
        return FakeRunnerResult(final_output=f"agent answer to: {input}")

    monkeypatch.setattr(Runner, "run", fake_runner_run)
    return calls
