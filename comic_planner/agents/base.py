"""
Base agent for the comic planner stages.
Each agent owns one prompt template and sends it through the shared
ModelInvoker on a fixed model tier.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional, Type, TypeVar

from pydantic import BaseModel

from comic_planner.config import ModelTier
from comic_planner.core.invoker import ModelInvoker

logger = logging.getLogger("comic_planner.agents")

T = TypeVar("T", bound=BaseModel)


@dataclass(frozen=True)
class StoryContext:
    """Request-level inputs every stage needs."""
    prompt: str
    visual_style: str
    world_setting: str
    language: str


class BaseAgent:
    """Base class for all planner agents."""

    tier: ModelTier = ModelTier.SMART

    def __init__(self, name: str, invoker: ModelInvoker, tier: Optional[ModelTier] = None):
        self.name = name
        self.invoker = invoker
        if tier is not None:
            self.tier = tier

    async def generate(
        self,
        prompt: str,
        response_model: Type[T],
        label: str,
        max_attempts: Optional[int] = None,
    ) -> T:
        """Invoke the model for this agent's tier and log the stage timing."""
        start_time = time.time()
        result = await self.invoker.invoke(
            prompt,
            response_model,
            label,
            max_attempts=max_attempts,
            tier=self.tier,
        )
        duration_ms = int((time.time() - start_time) * 1000)
        logger.debug(f"[{self.name}] {label} completed in {duration_ms}ms")
        return result
