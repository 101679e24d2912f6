"""
Scenario tests for ComicPlanner.create_plan.
"""

import random

import pytest

from comic_planner.core.exceptions import PipelineStageError
from comic_planner.core.pipeline import ComicPlanner
from comic_planner.models import LAYOUT_SLOTS, ComicStyle, PlanRequest
from comic_planner.tests.fakes import ScriptedLLMClient, tier_clients


def make_planner(client, settings):
    return ComicPlanner(tier_clients(client), settings, rng=random.Random(11))


class TestLighthouseScenario:
    """End-to-end run with the scripted model."""

    @pytest.mark.asyncio
    async def test_three_page_plan(self, settings):
        client = ScriptedLLMClient(jitter=0.01)
        planner = make_planner(client, settings)

        plan = await planner.create_plan(PlanRequest(
            prompt="a lighthouse keeper's last night",
            max_pages=3,
            language="en",
        ))

        assert 2 <= len(plan.characters) <= 5
        assert len(plan.chapters) == 1
        assert [p.page_number for p in plan.iter_pages()] == [1, 2, 3]
        for page in plan.iter_pages():
            assert len(page.panels) == len(LAYOUT_SLOTS[page.layout])
        assert plan.title == "The Last Night"
        assert plan.total_panels == 9

    @pytest.mark.asyncio
    async def test_failed_panel_scenario(self, settings):
        client = ScriptedLLMClient(layouts=["big-top"], fail_panels=[(1, 2)])
        plan = await make_planner(client, settings).create_plan(
            PlanRequest(prompt="a lighthouse keeper's last night", max_pages=3)
        )

        first = plan.chapters[0].pages[0]
        assert [p.position for p in first.panels] == [1, 3]
        assert plan.total_panels == 8

    @pytest.mark.asyncio
    async def test_serialises_with_camel_case(self, settings):
        plan = await make_planner(ScriptedLLMClient(), settings).create_plan(
            PlanRequest(prompt="storm", max_pages=1)
        )

        data = plan.model_dump(mode="json", by_alias=True)
        assert "createdAt" in data
        page = data["chapters"][0]["pages"][0]
        assert page["pageNumber"] == 1
        assert "aspectRatio" in page["panels"][0]
        assert "imagePrompt" in page["panels"][0]


class TestRequestDefaults:
    """Tests for request clamping and defaults."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("requested,expected", [(None, 5), (0, 5), (-4, 1), (50, 20), (7, 7)])
    async def test_page_budget_is_clamped(self, settings, requested, expected):
        client = ScriptedLLMClient()
        plan = await make_planner(client, settings).create_plan(
            PlanRequest(prompt="storm", max_pages=requested)
        )

        assert f"EXACTLY {expected} total pages" in client.calls_of("outline")[0]
        assert plan.total_pages == expected

    @pytest.mark.asyncio
    async def test_language_and_setting_defaults(self, settings):
        client = ScriptedLLMClient()
        plan = await make_planner(client, settings).create_plan(
            PlanRequest(prompt="storm", max_pages=1, style=ComicStyle(visual="manga"))
        )

        assert plan.style.setting == "realistic"
        assert plan.style.visual == "manga"
        assert "Think in context of a Ukrainian comic." in client.calls_of("thinking")[0]
        assert "ПРИКЛАД ЯКІСНОЇ ПАНЕЛІ" in client.calls_of("panel")[0]

    @pytest.mark.asyncio
    async def test_outline_pages_beyond_budget_are_dropped(self, settings):
        client = ScriptedLLMClient(extra_pages=2)
        plan = await make_planner(client, settings).create_plan(
            PlanRequest(prompt="storm", max_pages=3)
        )

        assert plan.total_pages == 3


class TestStageFailures:
    """Tests for fatal stage failures."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("kind,stage", [("cast", "cast"), ("outline", "outline")])
    async def test_stage_error(self, settings, kind, stage):
        client = ScriptedLLMClient(fail_kinds=[kind])

        with pytest.raises(PipelineStageError) as exc_info:
            await make_planner(client, settings).create_plan(PlanRequest(prompt="storm"))

        assert exc_info.value.stage_name == stage
        assert client.calls_of("panel") == []

    @pytest.mark.asyncio
    async def test_review_failure_still_returns_plan(self, settings):
        client = ScriptedLLMClient(fail_kinds=["review"])
        plan = await make_planner(client, settings).create_plan(
            PlanRequest(prompt="storm", max_pages=3)
        )

        assert plan.total_panels == 9
