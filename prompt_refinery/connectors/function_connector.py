"""Function-based connector for in-process generation."""

import inspect
import logging
from collections.abc import Awaitable, Callable

from prompt_refinery.connectors.base import BaseConnector
from prompt_refinery.errors import (
    GenerationError,
    GenerationTimeoutError,
    OptimizerError,
    ProviderError,
    TransportError,
)
from prompt_refinery.types import Prompt

logger = logging.getLogger(__name__)


def translate_callable_error(error: Exception) -> GenerationError:
    """Map an exception raised by a user callable onto the generation error taxonomy."""
    if isinstance(error, TimeoutError):
        return GenerationTimeoutError(str(error))
    if isinstance(error, ConnectionError):
        return TransportError(str(error))
    return ProviderError(f"{type(error).__name__}: {error}")


class FunctionConnector(BaseConnector):
    """Connector that delegates generation to a Python callable."""

    def __init__(self, func: Callable[[Prompt], str | Awaitable[str]]):
        """
        Initialize with a callable.

        Args:
            func: Function (sync or async) that takes a Prompt and returns response text
        """
        self.func = func
        logger.info("FunctionConnector initialized")

    async def generate(self, prompt: Prompt) -> str:
        """Generate via function call.

        Raises:
            GenerationError: If the callable raises; library errors pass through unchanged
        """
        try:
            response = self.func(prompt)
            if inspect.isawaitable(response):
                response = await response
        except OptimizerError:
            raise
        except Exception as e:
            logger.error(f"Generation function failed: {e}")
            raise translate_callable_error(e) from e
        return response
