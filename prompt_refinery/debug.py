"""Debug sink for optimization requests, responses and iterations."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import aiofiles
from pydantic import BaseModel, Field

from prompt_refinery.types import OptimizationEntry

logger = logging.getLogger(__name__)


class DebugOptions(BaseModel):
    """What the debug sink records and where."""

    enabled: bool = Field(default=True, description="Master switch")
    log_prompts: bool = Field(default=True, description="Record outgoing requests")
    log_responses: bool = Field(default=True, description="Record raw responses and run events")
    save_to_file: bool = Field(default=False, description="Also append records to files")
    output_dir: Path = Field(default=Path("debug_output"), description="Directory for files")


class DebugManager:
    """Record raw request/response pairs through logging and, optionally, files.

    Nothing in the optimizer depends on what the sink does; file errors are
    logged and swallowed so a full disk never breaks a run.
    """

    def __init__(self, options: DebugOptions | None = None) -> None:
        self.options = options or DebugOptions()
        if self.options.enabled and self.options.save_to_file:
            self.options.output_dir.mkdir(parents=True, exist_ok=True)

    @property
    def is_enabled(self) -> bool:
        """Whether debugging is enabled."""
        return self.options.enabled

    async def log(self, message: str) -> None:
        """Log a debug message."""
        if not self.options.enabled:
            return
        logger.debug(message)
        if self.options.save_to_file:
            await self._append("debug.log", message)

    async def log_prompt(self, name: str, prompt: str) -> None:
        """Record an outgoing request."""
        if not (self.options.enabled and self.options.log_prompts):
            return
        await self.log(f"Prompt [{name}]: {prompt}")

    async def log_response(self, name: str, response: str) -> None:
        """Record a raw response or run event."""
        if not (self.options.enabled and self.options.log_responses):
            return
        await self.log(f"Response [{name}]: {response}")

    async def save_iteration(self, iteration: int, entry: OptimizationEntry) -> None:
        """Persist one iteration's entry as JSON when saving to file."""
        if not (self.options.enabled and self.options.save_to_file):
            return
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        await self._write(
            f"iteration_{iteration}_{stamp}.json", entry.model_dump_json(indent=2, by_alias=True)
        )

    async def _append(self, filename: str, content: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        path = self.options.output_dir / filename
        try:
            async with aiofiles.open(path, "a", encoding="utf-8") as f:
                await f.write(f"[{timestamp}] {content}\n")
        except OSError as exc:
            logger.warning(f"Failed to write debug output to {path}: {exc}")

    async def _write(self, filename: str, content: str) -> None:
        path = self.options.output_dir / filename
        try:
            async with aiofiles.open(path, "w", encoding="utf-8") as f:
                await f.write(content)
        except OSError as exc:
            logger.warning(f"Failed to write debug output to {path}: {exc}")
