"""
Unit tests for ModelInvoker.

Tests cover:
- Tier routing
- JSON-only instruction
- Retry bound and linear backoff
- Error chaining on exhaustion
- Per-invoker request ids
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from comic_planner.config import ModelTier, PipelineSettings
from comic_planner.core.exceptions import ConfigurationError, ModelInvocationError
from comic_planner.core.invoker import JSON_ONLY_INSTRUCTION, ModelInvoker
from comic_planner.models import ReviewResult

GOOD_REVIEW = '{"issues": [], "overallQuality": "good"}'


def make_client(*responses):
    client = MagicMock()
    client.name = "mock"
    client.generate = AsyncMock(side_effect=list(responses))
    return client


class TestRouting:
    """Tests for tier routing and prompt decoration."""

    @pytest.mark.asyncio
    async def test_routes_by_tier(self, settings):
        fast = make_client(GOOD_REVIEW)
        smart = make_client(GOOD_REVIEW)
        invoker = ModelInvoker({ModelTier.FAST: fast, ModelTier.SMART: smart}, settings)

        await invoker.invoke("Review", ReviewResult, "SelfReview", tier=ModelTier.FAST)

        fast.generate.assert_awaited_once()
        smart.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_appends_json_instruction(self, settings):
        client = make_client(GOOD_REVIEW)
        invoker = ModelInvoker({ModelTier.FAST: client, ModelTier.SMART: client}, settings)

        result = await invoker.invoke("Review these", ReviewResult, "SelfReview")

        assert result.issues == []
        client.generate.assert_awaited_once_with("Review these" + JSON_ONLY_INSTRUCTION)

    def test_missing_tier_is_configuration_error(self, settings):
        with pytest.raises(ConfigurationError):
            ModelInvoker({ModelTier.SMART: make_client()}, settings)


class TestRetry:
    """Tests for the bounded retry loop."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("attempts", [1, 2, 4])
    async def test_always_failing_call_makes_exactly_n_attempts(self, settings, attempts):
        client = make_client(*[RuntimeError("boom")] * attempts)
        invoker = ModelInvoker({ModelTier.FAST: client, ModelTier.SMART: client}, settings)

        with pytest.raises(ModelInvocationError) as exc_info:
            await invoker.invoke("Review", ReviewResult, "SelfReview", max_attempts=attempts)

        assert client.generate.await_count == attempts
        assert exc_info.value.attempts == attempts
        assert exc_info.value.label == "SelfReview"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_default_attempts_from_settings(self):
        settings = PipelineSettings(max_attempts=3, retry_delay_seconds=0.0)
        client = make_client(*["not json"] * 3)
        invoker = ModelInvoker({ModelTier.FAST: client, ModelTier.SMART: client}, settings)

        with pytest.raises(ModelInvocationError):
            await invoker.invoke("Review", ReviewResult, "SelfReview")

        assert client.generate.await_count == 3

    @pytest.mark.asyncio
    async def test_schema_mismatch_counts_as_failure(self, settings):
        client = make_client('{"issues": []}', GOOD_REVIEW)
        invoker = ModelInvoker({ModelTier.FAST: client, ModelTier.SMART: client}, settings)

        result = await invoker.invoke("Review", ReviewResult, "SelfReview")

        assert result.overall_quality.value == "good"
        assert client.generate.await_count == 2

    @pytest.mark.asyncio
    async def test_linear_backoff_between_attempts(self):
        settings = PipelineSettings(max_attempts=3, retry_delay_seconds=1.5)
        client = make_client(RuntimeError("a"), RuntimeError("b"), GOOD_REVIEW)
        invoker = ModelInvoker({ModelTier.FAST: client, ModelTier.SMART: client}, settings)

        with patch("comic_planner.core.invoker.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await invoker.invoke("Review", ReviewResult, "SelfReview")

        assert [call.args[0] for call in sleep.await_args_list] == [1.5, 3.0]

    @pytest.mark.asyncio
    async def test_no_sleep_after_last_attempt(self):
        settings = PipelineSettings(max_attempts=2, retry_delay_seconds=1.0)
        client = make_client(RuntimeError("a"), RuntimeError("b"))
        invoker = ModelInvoker({ModelTier.FAST: client, ModelTier.SMART: client}, settings)

        with patch("comic_planner.core.invoker.asyncio.sleep", new_callable=AsyncMock) as sleep:
            with pytest.raises(ModelInvocationError):
                await invoker.invoke("Review", ReviewResult, "SelfReview")

        assert sleep.await_count == 1


class TestRequestIds:
    """Tests for per-invoker request numbering."""

    @pytest.mark.asyncio
    async def test_ids_are_sequential_per_invoker(self, settings, caplog):
        client = make_client(GOOD_REVIEW, GOOD_REVIEW)
        invoker = ModelInvoker({ModelTier.FAST: client, ModelTier.SMART: client}, settings)

        with caplog.at_level("INFO", logger="comic_planner.invoker"):
            await invoker.invoke("Review", ReviewResult, "first")
            await invoker.invoke("Review", ReviewResult, "second")

        messages = [r.getMessage() for r in caplog.records]
        assert any(m.startswith("[LLM #1]") and "first" in m for m in messages)
        assert any(m.startswith("[LLM #2]") and "second" in m for m in messages)
