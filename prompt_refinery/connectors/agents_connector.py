"""Connector running prompts through the OpenAI Agents SDK."""

import asyncio
import logging

import openai
from agents import Agent, ModelSettings, Runner
from agents.exceptions import AgentsException

from prompt_refinery.config import LLMConfig
from prompt_refinery.connectors.base import BaseConnector
from prompt_refinery.connectors.openai_connector import translate_openai_error
from prompt_refinery.errors import GenerationTimeoutError, ProviderError
from prompt_refinery.types import Prompt

logger = logging.getLogger(__name__)

DEFAULT_INSTRUCTIONS = "You are a precise assistant. Follow the request exactly."


class AgentsConnector(BaseConnector):
    """Connector that answers each prompt with a single-turn Agents SDK run."""

    def __init__(self, llm_config: LLMConfig, name: str = "PromptRefinery"):
        """
        Initialize the connector.

        Args:
            llm_config: Model settings for the agent
            name: Agent name reported to the SDK tracing
        """
        self.llm_config = llm_config
        self.name = name
        logger.info(f"AgentsConnector initialized with model {llm_config.model}")

    def create_agent(self, prompt: Prompt) -> Agent:
        """Build the agent for one prompt; system text becomes its instructions."""
        return Agent(
            name=self.name,
            model=self.llm_config.model,
            instructions=(prompt.system or DEFAULT_INSTRUCTIONS).strip(),
            model_settings=ModelSettings(
                temperature=self.llm_config.temperature,
                max_tokens=self.llm_config.max_tokens,
            ),
        )

    async def generate(self, prompt: Prompt) -> str:
        """Run the agent on the rendered prompt and return its final output."""
        agent = self.create_agent(prompt)
        try:
            result = await asyncio.wait_for(
                Runner.run(agent, prompt.render()), timeout=self.llm_config.timeout
            )
        except TimeoutError as e:
            raise GenerationTimeoutError(
                f"agent run exceeded {self.llm_config.timeout}s"
            ) from e
        except openai.OpenAIError as e:
            logger.error(f"Agent model call failed: {e}")
            raise translate_openai_error(e) from e
        except AgentsException as e:
            logger.error(f"Agent run failed: {e}")
            raise ProviderError(str(e)) from e
        return str(result.final_output or "")
