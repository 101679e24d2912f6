"""
Unit tests for the planning agents.

Tests cover:
- Chapter count rule
- Cast id and seed assignment, truncation
- Outline prompt requirements
- Panel prompt whitelist and style keywords
"""

import random

import pytest
from pydantic import ValidationError

from comic_planner.agents import (
    CastAgent,
    OutlineAgent,
    PanelAgent,
    StoryContext,
    compute_chapter_count,
)
from comic_planner.config import ModelTier
from comic_planner.core.entities import EntityRegistry
from comic_planner.core.exceptions import ModelInvocationError
from comic_planner.core.invoker import ModelInvoker
from comic_planner.models import PagePlan, PageThinking
from comic_planner.tests.fakes import DEFAULT_CAST, ScriptedLLMClient, make_character, tier_clients

STORY = StoryContext(
    prompt="a lighthouse keeper's last night",
    visual_style="noir",
    world_setting="realistic",
    language="en",
)


class TestChapterCount:
    """Tests for compute_chapter_count."""

    @pytest.mark.parametrize("pages,expected", [
        (1, 1), (3, 1), (4, 2), (10, 2), (11, 3), (15, 3), (16, 4), (20, 4),
    ])
    def test_rule(self, pages, expected):
        assert compute_chapter_count(pages) == expected


class TestCastAgent:
    """Tests for CastAgent post-processing."""

    @pytest.mark.asyncio
    async def test_assigns_sequential_ids_and_seeds(self, settings):
        client = ScriptedLLMClient()
        agent = CastAgent(ModelInvoker(tier_clients(client), settings), rng=random.Random(3))

        roster = await agent.run(STORY)

        assert [c.id for c in roster] == ["char-1", "char-2", "char-3"]
        assert all(0 <= c.seed < 1_000_000 for c in roster)
        assert roster[0].name == "Elias Rowe"

    @pytest.mark.asyncio
    async def test_truncates_to_five(self, settings):
        cast = [make_character(f"Person {i}", "crew") for i in range(7)]
        client = ScriptedLLMClient(cast=cast)
        agent = CastAgent(ModelInvoker(tier_clients(client), settings))

        roster = await agent.run(STORY)

        assert len(roster) == 5
        assert roster[-1].id == "char-5"

    @pytest.mark.asyncio
    async def test_single_character_fails_validation(self, settings):
        client = ScriptedLLMClient(cast=DEFAULT_CAST[:1])
        agent = CastAgent(ModelInvoker(tier_clients(client), settings))

        with pytest.raises(ModelInvocationError):
            await agent.run(STORY)

        assert len(client.calls_of("cast")) == settings.max_attempts

    @pytest.mark.asyncio
    async def test_uses_fast_tier(self, settings):
        fast = ScriptedLLMClient()
        smart = ScriptedLLMClient()
        invoker = ModelInvoker({ModelTier.FAST: fast, ModelTier.SMART: smart}, settings)

        await CastAgent(invoker).run(STORY)

        assert len(fast.calls_of("cast")) == 1
        assert smart.calls == []

    @pytest.mark.asyncio
    async def test_roster_is_frozen(self, settings):
        agent = CastAgent(ModelInvoker(tier_clients(ScriptedLLMClient()), settings))
        roster = await agent.run(STORY)

        with pytest.raises(ValidationError):
            roster[0].id = "char-42"


class TestOutlineAgent:
    """Tests for OutlineAgent."""

    @pytest.mark.asyncio
    async def test_requests_page_and_chapter_counts(self, settings):
        client = ScriptedLLMClient()
        invoker = ModelInvoker(tier_clients(client), settings)
        roster = await CastAgent(invoker).run(STORY)

        outline = await OutlineAgent(invoker).run(STORY, roster, 7)

        prompt = client.calls_of("outline")[0]
        assert "EXACTLY 7 total pages" in prompt
        assert "Exactly 2 chapter(s)" in prompt
        assert "- Elias Rowe (char-1): lighthouse keeper" in prompt
        assert outline.page_count == 7
        assert len(outline.chapters) == 2


class TestPanelAgent:
    """Tests for PanelAgent prompt assembly."""

    @pytest.mark.asyncio
    async def test_prompt_carries_scope_and_style(self, settings):
        client = ScriptedLLMClient()
        invoker = ModelInvoker(tier_clients(client), settings)
        roster = await CastAgent(invoker).run(STORY)
        registry = EntityRegistry(roster)
        plan = PagePlan.model_validate({
            "layout": "big-top",
            "summary": "The lamp fails",
            "charactersInScene": ["char-2", "anon-fisherman"],
            "scene": {"location": "lamp room", "timeOfDay": "midnight"},
        })
        scope = registry.scope_for(plan.characters_in_scene, "ch1-p1")

        await PanelAgent(invoker).run(
            STORY, plan, 1, PageThinking.fallback(3, plan.summary), 2, 3, scope, registry
        )

        prompt = client.calls_of("panel")[0]
        assert prompt.startswith("Generate panel 2 of 3")
        assert "Use ONLY valid character IDs from this scene: char-2, anon-fisherman" in prompt
        assert "noir comic art" in prompt
        assert "realistic setting" in prompt
        assert "SCENE: lamp room, midnight" in prompt
        assert "EXAMPLE OF QUALITY PANEL" in prompt
