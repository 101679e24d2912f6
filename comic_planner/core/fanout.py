"""
PageFanoutEngine - concurrent page and panel generation.

Every page and panel gets its chapter index, page number and slot position
before any task starts; assembly sorts by those indices, so completion order
never leaks into the artifact.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from comic_planner.agents import PageThinkingAgent, PanelAgent, StoryContext
from comic_planner.core.entities import EntityRegistry, PageScope
from comic_planner.models import (
    Chapter,
    OutlineResponse,
    Page,
    PagePlan,
    PageThinking,
    Panel,
    PanelDraft,
    panel_count,
    slot_for,
)

logger = logging.getLogger("comic_planner.fanout")


@dataclass(frozen=True)
class PageJob:
    """One outline page with its precomputed position in the plan."""
    chapter_index: int       # 0-based
    page_index: int          # 0-based, within the chapter
    page_number: int         # 1-based, global
    chapter_title: str
    plan: PagePlan

    @property
    def page_id(self) -> str:
        return f"ch{self.chapter_index + 1}-p{self.page_index + 1}"

    def panel_id(self, position: int) -> str:
        return f"{self.page_id}-pan{position}"


def flatten_outline(outline: OutlineResponse, max_pages: int) -> List[PageJob]:
    """Walk the outline in order and keep at most ``max_pages`` pages."""
    jobs: List[PageJob] = []
    for chapter_index, chapter in enumerate(outline.chapters):
        for page_index, page_plan in enumerate(chapter.pages):
            if len(jobs) >= max_pages:
                break
            jobs.append(PageJob(
                chapter_index=chapter_index,
                page_index=page_index,
                page_number=len(jobs) + 1,
                chapter_title=chapter.title,
                plan=page_plan,
            ))

    dropped = outline.page_count - len(jobs)
    if dropped > 0:
        logger.warning(f"[FANOUT] Outline has {dropped} page(s) beyond the {max_pages}-page budget, dropping")
    return jobs


class PageFanoutEngine:
    """Generates every page concurrently, and every panel of a page concurrently."""

    def __init__(
        self,
        registry: EntityRegistry,
        thinking_agent: PageThinkingAgent,
        panel_agent: PanelAgent,
    ):
        self.registry = registry
        self.thinking_agent = thinking_agent
        self.panel_agent = panel_agent

    async def run(
        self,
        story: StoryContext,
        outline: OutlineResponse,
        max_pages: int,
    ) -> List[Chapter]:
        jobs = flatten_outline(outline, max_pages)
        all_summaries = "\n".join(f"Page {job.page_number}: {job.plan.summary}" for job in jobs)

        logger.info(f"[FANOUT] Generating {len(jobs)} page(s) in parallel")
        results = await asyncio.gather(
            *(self._generate_page(story, job, all_summaries) for job in jobs)
        )
        return self.assemble(results)

    @staticmethod
    def assemble(results: List[Tuple[PageJob, Page]]) -> List[Chapter]:
        """Group pages by chapter index and order by precomputed page number."""
        grouped: Dict[int, Tuple[str, List[Page]]] = {}
        for job, page in results:
            grouped.setdefault(job.chapter_index, (job.chapter_title, []))[1].append(page)

        chapters = []
        for chapter_index in sorted(grouped):
            title, pages = grouped[chapter_index]
            chapters.append(Chapter(
                id=f"ch{chapter_index + 1}",
                title=title,
                pages=sorted(pages, key=lambda p: p.page_number),
            ))
        return chapters

    async def _generate_page(
        self,
        story: StoryContext,
        job: PageJob,
        all_summaries: str,
    ) -> Tuple[PageJob, Page]:
        layout = job.plan.layout
        count = panel_count(layout)
        scope = self.registry.scope_for(job.plan.characters_in_scene, job.page_id)
        logger.info(
            f"[FANOUT] Page {job.page_number}: {layout.value} ({count} panels) [{scope.describe()}]"
        )

        try:
            thinking = await self.thinking_agent.run(
                story, job.plan, job.page_number, count, all_summaries, scope, self.registry
            )
        except Exception as e:
            logger.warning(f"[FANOUT] Page {job.page_number}: thinking failed ({e}), using default panel beats")
            thinking = PageThinking.fallback(count, job.plan.summary)

        panels = await asyncio.gather(
            *(
                self._generate_panel(story, job, thinking, position, count, scope)
                for position in range(1, count + 1)
            )
        )
        kept = [panel for panel in panels if panel is not None]
        if len(kept) < count:
            logger.warning(f"[FANOUT] Page {job.page_number}: {count - len(kept)} of {count} panel(s) failed")

        page = Page(
            id=job.page_id,
            page_number=job.page_number,
            layout=layout,
            scene=job.plan.scene,
            summary=job.plan.summary,
            characters_in_scene=list(scope.main + scope.anonymous),
            panels=sorted(kept, key=lambda p: p.position),
        )
        return job, page

    async def _generate_panel(
        self,
        story: StoryContext,
        job: PageJob,
        thinking: PageThinking,
        position: int,
        count: int,
        scope: PageScope,
    ) -> Optional[Panel]:
        panel_id = job.panel_id(position)
        try:
            draft = await self.panel_agent.run(
                story, job.plan, job.page_number, thinking, position, count, scope, self.registry
            )
        except Exception as e:
            logger.warning(f"[FANOUT] {panel_id}: generation failed, omitting panel ({e})")
            return None
        return self.build_panel(draft, panel_id, position, job.plan, scope)

    def build_panel(
        self,
        draft: PanelDraft,
        panel_id: str,
        position: int,
        page_plan: PagePlan,
        scope: PageScope,
    ) -> Panel:
        """Turn a raw draft into a Panel: filter references, attach seeds and slot shape."""
        characters, dialogue, _ = self.registry.filter_panel(draft, scope, panel_id)
        seeds = self.registry.seeds_for(c.character_id for c in characters)
        return Panel(
            id=panel_id,
            position=position,
            characters=characters,
            action=draft.action,
            mood=draft.mood,
            camera=draft.camera_spec(),
            dialogue=dialogue,
            narrative=draft.narrative,
            narrative_placement=draft.narrative_placement,
            sfx=draft.sfx,
            aspect_ratio=slot_for(page_plan.layout, position).aspect_ratio,
            image_prompt=draft.image_prompt,
            negative_prompt=draft.negative_prompt or None,
            character_seeds=seeds or None,
        )
