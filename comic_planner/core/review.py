"""
ReviewRepairLoop - bounded review and repair of a generated plan.

    REVIEW --no issues--> DONE
    REVIEW --issues-----> REPAIR
    REPAIR --passes < max--> REVIEW
    REPAIR --otherwise-----> DONE

With the default of two passes, issues found by the second review are
repaired but not reviewed again.
"""

import asyncio
import logging
from enum import Enum
from typing import Dict, List, Optional, Tuple

from comic_planner.agents import RepairAgent, ReviewAgent
from comic_planner.config import PipelineSettings
from comic_planner.core.entities import EntityRegistry, PageScope
from comic_planner.models import (
    Chapter,
    Page,
    Panel,
    RepairedPanelDraft,
    ReviewIssue,
)

logger = logging.getLogger("comic_planner.review")


class LoopState(str, Enum):
    REVIEW = "review"
    REPAIR = "repair"
    DONE = "done"


class ReviewRepairLoop:
    """Runs review passes and repairs flagged panels in place."""

    def __init__(
        self,
        registry: EntityRegistry,
        review_agent: ReviewAgent,
        repair_agent: RepairAgent,
        settings: Optional[PipelineSettings] = None,
    ):
        self.registry = registry
        self.review_agent = review_agent
        self.repair_agent = repair_agent
        self.settings = settings or PipelineSettings()
        self.passes = 0

    async def run(self, chapters: List[Chapter], language: str) -> List[Chapter]:
        """Review and repair ``chapters`` in place; always returns them."""
        total = sum(len(page.panels) for chapter in chapters for page in chapter.pages)
        if total < self.settings.review_min_panels:
            logger.info(f"[REVIEW] Skipping review (only {total} panels)")
            return chapters

        self.passes = 0
        state = LoopState.REVIEW
        issues: List[ReviewIssue] = []

        while state != LoopState.DONE:
            if state == LoopState.REVIEW:
                self.passes += 1
                try:
                    issues = await self._review(chapters, language)
                except Exception as e:
                    logger.error(f"[REVIEW] Review failed, keeping plan as generated: {e}")
                    state = LoopState.DONE
                    continue
                state = LoopState.REPAIR if issues else LoopState.DONE

            elif state == LoopState.REPAIR:
                await self._repair(chapters, issues, language)
                if self.passes < self.settings.max_review_passes:
                    state = LoopState.REVIEW
                else:
                    state = LoopState.DONE

        logger.info(f"[REVIEW] Finished after {self.passes} pass(es)")
        return chapters

    async def _review(self, chapters: List[Chapter], language: str) -> List[ReviewIssue]:
        lines = []
        for chapter in chapters:
            for page in chapter.pages:
                allowed = ",".join(page.characters_in_scene) or "none"
                for panel in page.panels:
                    used = ",".join(c.character_id for c in panel.characters) or "none"
                    spoken = "; ".join(d.text for d in panel.dialogue) or "none"
                    lines.append(
                        f'{panel.id} (allowed: {allowed}): "{panel.action}" | chars: {used} | dialogue: {spoken}'
                    )

        result = await self.review_agent.run(lines, self.registry.main_ids, language)

        pass_label = f" (pass {self.passes})" if self.passes > 1 else ""
        logger.info(
            f"[REVIEW] Review{pass_label}: {result.overall_quality.value}, {len(result.issues)} issue(s) found"
        )
        for issue in result.issues:
            logger.info(f"[REVIEW]   {issue.panel_id}: [{issue.category.value}] {issue.description}")
        return result.issues

    async def _repair(self, chapters: List[Chapter], issues: List[ReviewIssue], language: str) -> None:
        index: Dict[str, Tuple[Page, int]] = {}
        for chapter in chapters:
            for page in chapter.pages:
                for i, panel in enumerate(page.panels):
                    index[panel.id] = (page, i)

        by_panel: Dict[str, List[ReviewIssue]] = {}
        for issue in issues:
            if issue.panel_id not in index:
                logger.warning(f"[REVIEW] Panel not found: {issue.panel_id}, skipping issue")
                continue
            by_panel.setdefault(issue.panel_id, []).append(issue)

        if not by_panel:
            return

        logger.info(f"[REVIEW] Repairing {len(by_panel)} panel(s)")
        panel_ids = list(by_panel)
        repaired = await asyncio.gather(
            *(self._repair_panel(index[pid][0], index[pid][1], by_panel[pid], language) for pid in panel_ids)
        )

        # replace after the join so no unit sees another's edit
        for panel_id, panel in zip(panel_ids, repaired):
            if panel is not None:
                page, i = index[panel_id]
                page.panels[i] = panel

    async def _repair_panel(
        self,
        page: Page,
        slot: int,
        issues: List[ReviewIssue],
        language: str,
    ) -> Optional[Panel]:
        current = page.panels[slot]
        scope = self.registry.scope_for(page.characters_in_scene, page.id)
        try:
            draft = await self.repair_agent.run(current, page, issues, scope, self.registry, language)
        except Exception as e:
            logger.warning(f"[REVIEW] Failed to fix {current.id}, keeping original: {e}")
            return None

        panel = self.apply_repair(current, draft, scope)
        logger.info(f"[REVIEW] Fixed {current.id}")
        return panel

    def apply_repair(self, current: Panel, draft: RepairedPanelDraft, scope: PageScope) -> Panel:
        """Merge a repaired draft over ``current``, keeping its identity and slot."""
        characters, dialogue, _ = self.registry.filter_panel(draft, scope, current.id)
        return Panel(
            id=current.id,
            position=current.position,
            characters=characters,
            action=draft.action,
            mood=draft.mood,
            camera=draft.camera_spec(),
            dialogue=dialogue,
            narrative=draft.narrative,
            narrative_placement=draft.narrative_placement,
            sfx=draft.sfx,
            aspect_ratio=current.aspect_ratio,
            image_prompt=draft.image_prompt or current.image_prompt,
            negative_prompt=draft.negative_prompt or current.negative_prompt,
            character_seeds=current.character_seeds,
        )
