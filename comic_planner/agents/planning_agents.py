"""
Planning Agent Implementations
One agent per model call kind: cast, outline, page thinking, panel, review, repair.
"""

import json
import logging
import math
import random
from typing import Dict, List, Optional, Sequence

from comic_planner.config import ModelTier
from comic_planner.core.entities import EntityRegistry, PageScope
from comic_planner.core.invoker import ModelInvoker
from comic_planner.models import (
    CastResponse,
    Character,
    FacialExpression,
    OutlineResponse,
    Page,
    PagePlan,
    PageThinking,
    Panel,
    PanelDraft,
    RepairedPanelDraft,
    ReviewIssue,
    ReviewResult,
)
from comic_planner.prompts import (
    CAST_PROMPT_TEMPLATE,
    OUTLINE_PROMPT_TEMPLATE,
    PAGE_THINKING_PROMPT_TEMPLATE,
    PANEL_PROMPT_TEMPLATE,
    REPAIR_PROMPT_TEMPLATE,
    REVIEW_PROMPT_TEMPLATE,
    few_shot_panel_example,
    language_name,
    setting_keywords,
    visual_style_keywords,
)
from .base import BaseAgent, StoryContext

logger = logging.getLogger("comic_planner.agents")

MAX_CAST_SIZE = 5
SEED_UPPER_BOUND = 1_000_000


def compute_chapter_count(pages: int) -> int:
    """1 chapter up to 3 pages, 2 up to 10, then one per 5 pages capped at 4."""
    if pages <= 3:
        return 1
    if pages <= 10:
        return 2
    return min(4, math.ceil(pages / 5))


class CastAgent(BaseAgent):
    """
    Cast Agent - creates the main character roster.
    Ids are assigned here and nowhere else.
    """

    def __init__(self, invoker: ModelInvoker, rng: Optional[random.Random] = None):
        super().__init__(name="Cast", invoker=invoker, tier=ModelTier.FAST)
        self.rng = rng or random.Random()

    async def run(self, story: StoryContext) -> List[Character]:
        prompt = CAST_PROMPT_TEMPLATE.format(
            prompt=story.prompt,
            visual_style=story.visual_style,
            world_setting=story.world_setting,
            expressions=" | ".join(f'"{e.value}"' for e in FacialExpression),
        )
        result = await self.generate(prompt, CastResponse, "Characters")

        drafts = result.characters
        if len(drafts) > MAX_CAST_SIZE:
            logger.warning(
                f"[Cast] Model returned {len(drafts)} characters, keeping the first {MAX_CAST_SIZE}"
            )
            drafts = drafts[:MAX_CAST_SIZE]

        return [
            Character(
                **draft.model_dump(),
                id=f"char-{i}",
                seed=self.rng.randrange(SEED_UPPER_BOUND),
            )
            for i, draft in enumerate(drafts, start=1)
        ]


class OutlineAgent(BaseAgent):
    """
    Outline Agent - splits the story into chapters and pages.
    Each page picks a layout template, a scene and its characters.
    """

    def __init__(self, invoker: ModelInvoker):
        super().__init__(name="Outline", invoker=invoker, tier=ModelTier.FAST)

    async def run(
        self,
        story: StoryContext,
        roster: Sequence[Character],
        page_count: int,
    ) -> OutlineResponse:
        chapter_count = compute_chapter_count(page_count)
        characters_description = "\n".join(f"- {c.name} ({c.id}): {c.role}" for c in roster)

        prompt = OUTLINE_PROMPT_TEMPLATE.format(
            prompt=story.prompt,
            characters_description=characters_description,
            chapter_count=chapter_count,
            page_count=page_count,
        )
        outline = await self.generate(prompt, OutlineResponse, "Structure")
        logger.info(
            f"[Outline] \"{outline.title}\": {len(outline.chapters)} chapter(s), "
            f"{outline.page_count} page(s) planned"
        )
        return outline


class PageThinkingAgent(BaseAgent):
    """Plans what each panel of one page is for before any panel is written."""

    def __init__(self, invoker: ModelInvoker):
        super().__init__(name="PageThinking", invoker=invoker, tier=ModelTier.SMART)

    async def run(
        self,
        story: StoryContext,
        page_plan: PagePlan,
        page_number: int,
        panel_count: int,
        all_summaries: str,
        scope: PageScope,
        registry: EntityRegistry,
    ) -> PageThinking:
        main = registry.characters_in(scope)
        if main:
            main_characters = "MAIN CHARACTERS IN THIS SCENE: " + ", ".join(
                f"{c.id}: {c.name}" for c in main
            )
        else:
            main_characters = "NO MAIN CHARACTERS in this scene"
        anonymous_characters = ""
        if scope.anonymous:
            anonymous_characters = "ANONYMOUS/EPISODIC CHARACTERS: " + ", ".join(scope.anonymous)

        prompt = PAGE_THINKING_PROMPT_TEMPLATE.format(
            prompt=story.prompt,
            all_summaries=all_summaries,
            page_number=page_number,
            page_summary=page_plan.summary,
            panel_count=panel_count,
            main_characters=main_characters,
            anonymous_characters=anonymous_characters,
            language_name=language_name(story.language),
        )
        return await self.generate(prompt, PageThinking, f"PageThinking P{page_number}")


def _characters_section(main: List[Character], scope: PageScope) -> str:
    section = ""
    if main:
        section += "MAIN CHARACTERS IN THIS SCENE (use these IDs):\n"
        section += "\n".join(
            f"- {c.id}: {c.name} - {c.role}. {c.face.hair}, {c.face.eyes}, {c.skin_tone} skin."
            for c in main
        )
    if scope.anonymous:
        section += "\n\nANONYMOUS CHARACTERS (use these IDs for episodic characters):\n"
        section += "\n".join(f"- {cid}" for cid in scope.anonymous)
    return section or "NO CHARACTERS in this panel (environment/establishing shot)"


def _appearances(main: List[Character]) -> str:
    if not main:
        return "No main characters - use generic descriptions for anonymous characters"
    return "\n".join(
        f"{c.id}: {c.age} year old {c.gender.value}, {c.body_type.value} {c.height}, "
        f"{c.skin_tone} skin, {c.face.hair}, {c.face.eyes}, {c.face.distinctive_features}, "
        f"wearing {c.clothing}"
        for c in main
    )


class PanelAgent(BaseAgent):
    """Writes one panel of a page from the page thinking and its slot."""

    def __init__(self, invoker: ModelInvoker):
        super().__init__(name="Panel", invoker=invoker, tier=ModelTier.SMART)

    async def run(
        self,
        story: StoryContext,
        page_plan: PagePlan,
        page_number: int,
        thinking: PageThinking,
        position: int,
        panel_count: int,
        scope: PageScope,
        registry: EntityRegistry,
    ) -> PanelDraft:
        beat = thinking.beat_for(position)
        main = registry.characters_in(scope)

        style_keywords = visual_style_keywords(story.visual_style)
        setting = setting_keywords(story.world_setting)
        if setting:
            style_keywords = f"{style_keywords}, {setting}"

        prompt = PANEL_PROMPT_TEMPLATE.format(
            position=position,
            panel_count=panel_count,
            page_number=page_number,
            prompt=story.prompt,
            visual_style=story.visual_style,
            world_setting=story.world_setting,
            page_summary=page_plan.summary,
            scene=page_plan.scene.describe(),
            other_panels="\n".join(thinking.other_purposes(position)) or "none",
            purpose=beat.purpose,
            suggested_shot=beat.suggested_shot,
            suggested_angle=beat.suggested_angle,
            emotional_arc=thinking.emotional_arc,
            characters_section=_characters_section(main, scope),
            appearances=_appearances(main),
            language_name=language_name(story.language),
            valid_ids=scope.describe(),
            style_keywords=style_keywords,
            few_shot_example=few_shot_panel_example(story.language),
        )
        return await self.generate(
            prompt, PanelDraft, f"Panel {position}/{panel_count} P{page_number}"
        )


class ReviewAgent(BaseAgent):
    """Reviews the whole plan for repetition, language and reference issues."""

    def __init__(self, invoker: ModelInvoker):
        super().__init__(name="Review", invoker=invoker, tier=ModelTier.SMART)

    async def run(
        self,
        panel_lines: List[str],
        main_ids: List[str],
        language: str,
    ) -> ReviewResult:
        prompt = REVIEW_PROMPT_TEMPLATE.format(
            language_name=language_name(language),
            main_ids=", ".join(main_ids),
            panels_summary="\n".join(panel_lines),
        )
        return await self.generate(prompt, ReviewResult, "SelfReview")


class RepairAgent(BaseAgent):
    """Rewrites one panel so the reported issues are gone."""

    def __init__(self, invoker: ModelInvoker):
        super().__init__(name="Repair", invoker=invoker, tier=ModelTier.SMART)

    async def run(
        self,
        panel: Panel,
        page: Page,
        issues: List[ReviewIssue],
        scope: PageScope,
        registry: EntityRegistry,
        language: str,
    ) -> RepairedPanelDraft:
        issue_lines = "\n".join(
            f"- [{issue.category.value}] {issue.description} -> Fix: {issue.fix}"
            for issue in issues
        )
        roster_lines = [f"- {c.id}: {c.name}" for c in registry.characters_in(scope)]
        roster_lines.extend(f"- {cid}: episodic character" for cid in scope.anonymous)
        panel_json: Dict = panel.model_dump(mode="json", by_alias=True, exclude_none=True)

        prompt = REPAIR_PROMPT_TEMPLATE.format(
            panel_id=panel.id,
            panel_json=json.dumps(panel_json, indent=2, ensure_ascii=False),
            scene=page.scene.describe(),
            issues=issue_lines,
            valid_ids=scope.describe(),
            roster="\n".join(roster_lines) or "none",
            language_name=language_name(language),
            few_shot_example=few_shot_panel_example(language),
        )
        return await self.generate(prompt, RepairedPanelDraft, f"Fix {panel.id}")
