"""Connectors for the generation service."""

from prompt_refinery.connectors.agents_connector import AgentsConnector
from prompt_refinery.connectors.base import BaseConnector
from prompt_refinery.connectors.function_connector import FunctionConnector
from prompt_refinery.connectors.openai_connector import OpenAIConnector

__all__ = ["AgentsConnector", "BaseConnector", "FunctionConnector", "OpenAIConnector"]
