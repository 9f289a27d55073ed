"""OpenAI connector for prompt optimization."""

import logging

import openai
from openai import AsyncOpenAI

from prompt_refinery.config import LLMConfig
from prompt_refinery.connectors.base import BaseConnector
from prompt_refinery.errors import (
    GenerationError,
    GenerationTimeoutError,
    ProviderError,
    RateLimitedError,
    TransportError,
)
from prompt_refinery.types import Prompt

logger = logging.getLogger(__name__)


def translate_openai_error(error: Exception) -> GenerationError:
    """Map an OpenAI SDK exception onto the generation error taxonomy."""
    # APITimeoutError subclasses APIConnectionError; RateLimitError subclasses APIStatusError
    if isinstance(error, openai.APITimeoutError):
        return GenerationTimeoutError(str(error))
    if isinstance(error, openai.APIConnectionError):
        return TransportError(str(error))
    if isinstance(error, openai.RateLimitError):
        return RateLimitedError(str(error))
    return ProviderError(str(error))


class OpenAIConnector(BaseConnector):
    """Connector for generating text with OpenAI chat models."""

    def __init__(self, api_key: str | None = None, llm_config: LLMConfig | None = None):
        """Initialize OpenAI connector.

        Args:
            api_key: OpenAI API key (if None, uses OPENAI_API_KEY env var)
            llm_config: Model settings (default: gpt-4o-mini)
        """
        self.llm_config = llm_config or LLMConfig(model="gpt-4o-mini")
        client_kwargs = {"api_key": api_key}
        if self.llm_config.timeout is not None:
            client_kwargs["timeout"] = self.llm_config.timeout
        self.client = AsyncOpenAI(**client_kwargs)
        logger.info(f"OpenAIConnector initialized with model {self.llm_config.model}")

    async def generate(self, prompt: Prompt) -> str:
        """Generate via the OpenAI chat completions API (async).

        Args:
            prompt: Prompt to send

        Returns:
            Model response
        """
        messages = []
        if prompt.system:
            messages.append({"role": "system", "content": prompt.system})
        messages.append({"role": "user", "content": prompt.render()})

        kwargs = {
            "model": self.llm_config.model,
            "messages": messages,
            "temperature": self.llm_config.temperature,
        }
        if self.llm_config.max_tokens is not None:
            kwargs["max_tokens"] = self.llm_config.max_tokens

        try:
            completion = await self.client.chat.completions.create(**kwargs)
        except openai.OpenAIError as e:
            logger.error(f"OpenAI API call failed: {e}")
            raise translate_openai_error(e) from e
        return completion.choices[0].message.content or ""
