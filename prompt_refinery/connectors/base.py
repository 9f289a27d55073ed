"""Base connector class for the generation service."""

from abc import ABC, abstractmethod

from prompt_refinery.types import Prompt


class BaseConnector(ABC):
    """Base class for connectors that talk to a text-generation service.

    Users should implement this class to plug their own model or provider
    into the optimizer. Implementations must be safe to call from many
    concurrent tasks.
    """

    @abstractmethod
    async def generate(self, prompt: Prompt) -> str:
        """Generate a response for a prompt.

        Args:
            prompt: The prompt to send; ``prompt.system`` holds system instructions

        Returns:
            The model's response text

        Raises:
            GenerationError: On timeout, rate limiting, transport or provider failure
        """
        ...
