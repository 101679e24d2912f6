"""
ComicPlanner - Cast -> Outline -> page fan-out -> review/repair.
"""

import logging
import random
import uuid
from typing import TYPE_CHECKING, Dict, Optional

from comic_planner.agents import (
    CastAgent,
    OutlineAgent,
    PageThinkingAgent,
    PanelAgent,
    RepairAgent,
    ReviewAgent,
    StoryContext,
)
from comic_planner.config import ModelTier, PipelineSettings
from comic_planner.core.entities import EntityRegistry
from comic_planner.core.exceptions import ModelInvocationError, PipelineStageError
from comic_planner.core.fanout import PageFanoutEngine
from comic_planner.core.invoker import ModelInvoker
from comic_planner.core.review import ReviewRepairLoop
from comic_planner.models import ComicStyle, Plan, PlanRequest

if TYPE_CHECKING:
    from comic_planner.services.model_client import LLMClient

logger = logging.getLogger("comic_planner.pipeline")


class ComicPlanner:
    """Main orchestrator for comic plan generation."""

    def __init__(
        self,
        clients: Dict[ModelTier, "LLMClient"],
        settings: Optional[PipelineSettings] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or PipelineSettings()
        self.invoker = ModelInvoker(clients, self.settings)
        self.cast_agent = CastAgent(self.invoker, rng=rng)
        self.outline_agent = OutlineAgent(self.invoker)
        self.thinking_agent = PageThinkingAgent(self.invoker)
        self.panel_agent = PanelAgent(self.invoker)
        self.review_agent = ReviewAgent(self.invoker)
        self.repair_agent = RepairAgent(self.invoker)

    async def create_plan(self, request: PlanRequest) -> Plan:
        """
        Generate a complete plan for ``request``.

        Raises:
            PipelineStageError: the cast or outline stage failed; nothing
                downstream can run without them.
        """
        max_pages = self.settings.clamp_pages(request.max_pages)
        language = request.language or self.settings.default_language
        style = ComicStyle(
            visual=request.style.visual,
            setting=request.style.setting or self.settings.default_setting,
        )
        story = StoryContext(
            prompt=request.prompt,
            visual_style=style.visual,
            world_setting=style.setting,
            language=language,
        )

        logger.info(f"[PLANNER] Starting: \"{request.prompt[:80]}\" ({max_pages} pages, {language})")

        logger.info("[PLANNER] Phase 1: Characters")
        try:
            roster = await self.cast_agent.run(story)
        except ModelInvocationError as e:
            raise PipelineStageError("cast", str(e)) from e
        logger.info(f"[PLANNER] Cast: {', '.join(f'{c.name} ({c.id})' for c in roster)}")

        registry = EntityRegistry(roster)

        logger.info("[PLANNER] Phase 2: Structure")
        try:
            outline = await self.outline_agent.run(story, roster, max_pages)
        except ModelInvocationError as e:
            raise PipelineStageError("outline", str(e)) from e

        logger.info("[PLANNER] Phase 3: Pages")
        fanout = PageFanoutEngine(registry, self.thinking_agent, self.panel_agent)
        chapters = await fanout.run(story, outline, max_pages)

        logger.info("[PLANNER] Phase 4: Self-Review")
        review = ReviewRepairLoop(registry, self.review_agent, self.repair_agent, self.settings)
        chapters = await review.run(chapters, language)

        plan = Plan(
            id=uuid.uuid4().hex[:12],
            title=outline.title,
            style=style,
            characters=roster,
            chapters=chapters,
        )
        logger.info(
            f"[PLANNER] Done: \"{plan.title}\" - {plan.total_pages} pages, {plan.total_panels} panels"
        )
        return plan
