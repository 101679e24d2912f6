"""
ModelInvoker - schema-validated model calls with bounded retry.
"""

import asyncio
import itertools
import logging
import time
from typing import TYPE_CHECKING, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from comic_planner.config import ModelTier, PipelineSettings
from comic_planner.core.exceptions import (
    ConfigurationError,
    ModelInvocationError,
    ResponseParseError,
)
from comic_planner.core.json_extraction import extract_json

if TYPE_CHECKING:
    from comic_planner.services.model_client import LLMClient

logger = logging.getLogger("comic_planner.invoker")

JSON_ONLY_INSTRUCTION = "\n\nRespond with ONLY valid JSON, no explanations or markdown."

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class ModelInvoker:
    """
    Sends a prompt to the client of a model tier, parses and validates the
    response, and retries failed attempts with a linear delay.
    """

    def __init__(
        self,
        clients: Dict[ModelTier, "LLMClient"],
        settings: Optional[PipelineSettings] = None,
    ):
        missing = [tier.value for tier in ModelTier if tier not in clients]
        if missing:
            raise ConfigurationError("No client for model tier(s)", {"missing": missing})
        self.clients = clients
        self.settings = settings or PipelineSettings()
        self._request_ids = itertools.count(1)

    async def invoke(
        self,
        prompt: str,
        schema: Type[SchemaT],
        label: str,
        max_attempts: Optional[int] = None,
        tier: ModelTier = ModelTier.SMART,
    ) -> SchemaT:
        """
        Call the model and return a validated instance of ``schema``.

        Raises:
            ModelInvocationError: every attempt failed (transport error,
                non-JSON response or schema mismatch).
        """
        attempts = max_attempts or self.settings.max_attempts
        client = self.clients[tier]
        request_id = next(self._request_ids)
        preview = prompt[:100].replace("\n", " ")
        full_prompt = prompt + JSON_ONLY_INSTRUCTION

        last_error: Optional[Exception] = None
        for attempt in range(1, attempts + 1):
            retry_note = f" (retry {attempt}/{attempts})" if attempt > 1 else ""
            logger.info(f"[LLM #{request_id}] {client.name} | {label}{retry_note} | \"{preview}...\"")
            start = time.monotonic()

            try:
                content = await client.generate(full_prompt)
                elapsed = time.monotonic() - start
                logger.info(f"[LLM #{request_id}] OK {elapsed:.1f}s | ~{len(content)} chars")
                return schema.model_validate(extract_json(content))
            except (ResponseParseError, ValidationError) as e:
                last_error = e
                elapsed = time.monotonic() - start
                logger.warning(f"[LLM #{request_id}] FAILED {elapsed:.1f}s | Invalid response: {e}")
            except Exception as e:
                # transport and provider errors count as a failed attempt
                last_error = e
                elapsed = time.monotonic() - start
                logger.warning(f"[LLM #{request_id}] FAILED {elapsed:.1f}s | Error: {e}")

            if attempt < attempts:
                delay = attempt * self.settings.retry_delay_seconds
                logger.info(f"[LLM #{request_id}] Retrying in {delay:.1f}s...")
                await asyncio.sleep(delay)

        raise ModelInvocationError(label, attempts, last_error) from last_error
