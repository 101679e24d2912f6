"""
Unit tests for PageFanoutEngine.

Tests cover:
- Outline flattening and page budget truncation
- Ordering under random completion order
- Reference safety of every generated panel
- Failed panels and failed page thinking
"""

import random

import pytest

from comic_planner.agents import CastAgent, OutlineAgent, PageThinkingAgent, PanelAgent, StoryContext
from comic_planner.core.entities import EntityRegistry
from comic_planner.core.fanout import PageFanoutEngine, flatten_outline
from comic_planner.core.invoker import ModelInvoker
from comic_planner.models import LAYOUT_SLOTS, OutlineResponse, PageLayout
from comic_planner.tests.fakes import ScriptedLLMClient, tier_clients

STORY = StoryContext(
    prompt="a lighthouse keeper's last night",
    visual_style="noir",
    world_setting="realistic",
    language="en",
)


def make_outline(pages_per_chapter):
    return OutlineResponse.model_validate({
        "title": "Night",
        "chapters": [
            {
                "title": f"Chapter {c}",
                "pages": [
                    {
                        "layout": "single",
                        "summary": f"c{c} p{p}",
                        "charactersInScene": [],
                        "scene": {"location": "tower"},
                    }
                    for p in range(1, count + 1)
                ],
            }
            for c, count in enumerate(pages_per_chapter, start=1)
        ],
    })


async def run_fanout(client, settings, max_pages):
    invoker = ModelInvoker(tier_clients(client), settings)
    roster = await CastAgent(invoker, rng=random.Random(1)).run(STORY)
    registry = EntityRegistry(roster)
    outline = await OutlineAgent(invoker).run(STORY, roster, max_pages)
    engine = PageFanoutEngine(registry, PageThinkingAgent(invoker), PanelAgent(invoker))
    chapters = await engine.run(STORY, outline, max_pages)
    return registry, chapters


class TestFlattenOutline:
    """Tests for flatten_outline."""

    def test_global_page_numbers_and_ids(self):
        jobs = flatten_outline(make_outline([2, 3]), max_pages=10)

        assert [j.page_number for j in jobs] == [1, 2, 3, 4, 5]
        assert [j.page_id for j in jobs] == ["ch1-p1", "ch1-p2", "ch2-p1", "ch2-p2", "ch2-p3"]
        assert jobs[2].panel_id(1) == "ch2-p1-pan1"

    def test_truncates_at_budget_with_warning(self, caplog):
        with caplog.at_level("WARNING", logger="comic_planner.fanout"):
            jobs = flatten_outline(make_outline([2, 3]), max_pages=3)

        assert [j.page_id for j in jobs] == ["ch1-p1", "ch1-p2", "ch2-p1"]
        assert "2 page(s)" in caplog.text

    def test_short_outline_is_not_padded(self):
        assert len(flatten_outline(make_outline([1]), max_pages=5)) == 1


class TestOrdering:
    """Tests for ordering under injected completion-order jitter."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("seed", [0, 1, 2])
    async def test_order_follows_precomputed_indices(self, settings, seed):
        client = ScriptedLLMClient(jitter=0.02, seed=seed)
        _, chapters = await run_fanout(client, settings, max_pages=6)

        assert [ch.id for ch in chapters] == ["ch1", "ch2"]
        numbers = [page.page_number for ch in chapters for page in ch.pages]
        assert numbers == [1, 2, 3, 4, 5, 6]
        for chapter in chapters:
            for page in chapter.pages:
                assert [p.position for p in page.panels] == list(range(1, len(page.panels) + 1))
                assert len(page.panels) == len(LAYOUT_SLOTS[page.layout])
                for panel in page.panels:
                    assert panel.id == f"{page.id}-pan{panel.position}"
                    assert panel.action == f"Page {page.page_number} panel {panel.position}"


class TestReferenceSafety:
    """Tests for panel reference filtering."""

    @pytest.mark.asyncio
    async def test_every_reference_is_in_scope(self, settings):
        client = ScriptedLLMClient(
            scene_ids=["char-1", "char-8", "anon-fisherman"],
            extra_ids=["char-3", "anon-ghost"],
        )
        registry, chapters = await run_fanout(client, settings, max_pages=3)

        for chapter in chapters:
            for page in chapter.pages:
                assert page.characters_in_scene == ["char-1", "anon-fisherman"]
                scope = registry.scope_for(page.characters_in_scene, page.id)
                for panel in page.panels:
                    assert set(panel.referenced_ids()) <= scope.allowed
                    assert panel.character_seeds == {"char-1": registry.get("char-1").seed}

    @pytest.mark.asyncio
    async def test_anonymous_only_panel_has_no_seeds(self, settings):
        client = ScriptedLLMClient(scene_ids=["anon-fisherman"])
        _, chapters = await run_fanout(client, settings, max_pages=1)

        panel = chapters[0].pages[0].panels[0]
        assert [c.character_id for c in panel.characters] == ["anon-fisherman"]
        assert panel.character_seeds is None

    @pytest.mark.asyncio
    async def test_slot_shape_and_focus(self, settings):
        client = ScriptedLLMClient(layouts=["manga-3"])
        _, chapters = await run_fanout(client, settings, max_pages=1)

        page = chapters[0].pages[0]
        assert page.layout == PageLayout.MANGA_3
        assert [p.aspect_ratio.value for p in page.panels] == ["3:2", "3:4", "3:4"]
        # focus lists collapse to their first element
        assert page.panels[0].camera.focus == "char-1"


class TestUnitFailures:
    """Tests for panel and thinking failures."""

    @pytest.mark.asyncio
    async def test_failed_panel_is_omitted(self, settings):
        client = ScriptedLLMClient(layouts=["big-top"], fail_panels=[(1, 2)])
        _, chapters = await run_fanout(client, settings, max_pages=3)

        first = chapters[0].pages[0]
        assert [p.position for p in first.panels] == [1, 3]
        assert [p.id for p in first.panels] == ["ch1-p1-pan1", "ch1-p1-pan3"]
        assert len(chapters[0].pages[1].panels) == 3
        panel_prompts = [p for p in client.calls_of("panel") if "PAGE NUMBER: 1\n" in p and p.startswith("Generate panel 2 ")]
        assert len(panel_prompts) == settings.max_attempts

    @pytest.mark.asyncio
    async def test_failed_thinking_uses_default_beats(self, settings):
        client = ScriptedLLMClient(fail_kinds=["thinking"])
        _, chapters = await run_fanout(client, settings, max_pages=2)

        assert all(len(page.panels) == len(LAYOUT_SLOTS[page.layout]) for page in chapters[0].pages)
        assert all("Purpose: Continue the story" in p for p in client.calls_of("panel"))
