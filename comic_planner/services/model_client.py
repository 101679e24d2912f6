"""
UnifiedModelClient - BYOK model access for the comic planner.
Supports OpenAI, OpenRouter, DeepSeek, Gemini, and Anthropic providers.

The pipeline only sees the text boundary ``LLMClient.generate(prompt) -> str``;
``ProviderLLMClient`` binds one provider/model/temperature to that boundary.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import google.generativeai as genai
from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from comic_planner.config import LLMConfiguration, LLMProvider, ModelTier
from comic_planner.core.exceptions import ConfigurationError

logger = logging.getLogger("comic_planner.model_client")


@dataclass
class ModelResponse:
    """Unified response from any LLM provider."""
    content: str
    model: str
    provider: LLMProvider
    finish_reason: str


class UnifiedModelClient:
    """
    Routes chat completions to the configured provider.
    Provider SDK clients are created lazily on first use.
    """

    _OPENAI_COMPATIBLE = (LLMProvider.OPENAI, LLMProvider.OPENROUTER, LLMProvider.DEEPSEEK)

    def __init__(self, config: LLMConfiguration):
        self.config = config
        self._openai_clients: Dict[LLMProvider, AsyncOpenAI] = {}
        self._anthropic_client: Optional[AsyncAnthropic] = None
        self._gemini_configured = False

    def _require(self, provider: LLMProvider):
        provider_config = self.config.get_provider_config(provider)
        if provider_config is None:
            raise ConfigurationError(
                f"{provider.value} configuration not provided",
                {"provider": provider.value},
            )
        if not provider_config.enabled:
            raise ConfigurationError(
                f"{provider.value} provider is disabled",
                {"provider": provider.value},
            )
        return provider_config

    def _get_openai_compatible_client(self, provider: LLMProvider) -> AsyncOpenAI:
        """Get or create an OpenAI-compatible client (OpenAI, OpenRouter, DeepSeek)."""
        if provider not in self._openai_clients:
            provider_config = self._require(provider)
            kwargs: Dict[str, Any] = {
                "api_key": provider_config.api_key.get_secret_value(),
                "base_url": provider_config.base_url,
            }
            if provider == LLMProvider.OPENROUTER:
                kwargs["default_headers"] = provider_config.default_headers()
            elif provider == LLMProvider.OPENAI and provider_config.organization_id:
                kwargs["organization"] = provider_config.organization_id
            self._openai_clients[provider] = AsyncOpenAI(**kwargs)
        return self._openai_clients[provider]

    def _get_anthropic_client(self) -> AsyncAnthropic:
        """Get or create Anthropic client."""
        if self._anthropic_client is None:
            provider_config = self._require(LLMProvider.CLAUDE)
            self._anthropic_client = AsyncAnthropic(
                api_key=provider_config.api_key.get_secret_value(),
            )
        return self._anthropic_client

    def _configure_gemini(self) -> None:
        """Configure Gemini API."""
        if not self._gemini_configured:
            provider_config = self._require(LLMProvider.GEMINI)
            genai.configure(api_key=provider_config.api_key.get_secret_value())
            self._gemini_configured = True

    async def create_chat_completion(
        self,
        messages: List[Dict[str, str]],
        model: str,
        provider: LLMProvider,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
    ) -> ModelResponse:
        """
        Create a chat completion using the specified provider.

        Args:
            messages: List of message dicts with 'role' and 'content'
            model: Model identifier
            provider: LLM provider to use
            temperature: Sampling temperature
            max_tokens: Maximum tokens in response

        Returns:
            ModelResponse with unified response format
        """
        if provider in self._OPENAI_COMPATIBLE:
            return await self._openai_compatible_completion(
                provider, messages, model, temperature, max_tokens
            )
        elif provider == LLMProvider.CLAUDE:
            return await self._anthropic_completion(messages, model, temperature, max_tokens)
        elif provider == LLMProvider.GEMINI:
            return await self._gemini_completion(messages, model, temperature, max_tokens)
        else:
            raise ConfigurationError(f"Unsupported provider: {provider}")

    async def _openai_compatible_completion(
        self,
        provider: LLMProvider,
        messages: List[Dict[str, str]],
        model: str,
        temperature: float,
        max_tokens: Optional[int],
    ) -> ModelResponse:
        client = self._get_openai_compatible_client(provider)

        kwargs: Dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
        }
        if max_tokens:
            kwargs["max_tokens"] = max_tokens

        response = await client.chat.completions.create(**kwargs)

        return ModelResponse(
            content=response.choices[0].message.content or "",
            model=model,
            provider=provider,
            finish_reason=response.choices[0].finish_reason or "stop",
        )

    async def _anthropic_completion(
        self,
        messages: List[Dict[str, str]],
        model: str,
        temperature: float,
        max_tokens: Optional[int],
    ) -> ModelResponse:
        client = self._get_anthropic_client()
        response = await client.messages.create(
            model=model,
            max_tokens=max_tokens or 8192,
            messages=messages,
            temperature=temperature,
        )

        content = response.content[0].text if response.content else ""

        return ModelResponse(
            content=content,
            model=model,
            provider=LLMProvider.CLAUDE,
            finish_reason="length" if response.stop_reason == "max_tokens" else "stop",
        )

    async def _gemini_completion(
        self,
        messages: List[Dict[str, str]],
        model: str,
        temperature: float,
        max_tokens: Optional[int],
    ) -> ModelResponse:
        self._configure_gemini()

        # Gemini takes a single prompt; join the user turns
        full_prompt = "\n\n".join(msg["content"] for msg in messages)

        generation_config: Dict[str, Any] = {"temperature": temperature}
        if max_tokens:
            generation_config["max_output_tokens"] = max_tokens

        gemini_model = genai.GenerativeModel(model)
        response = await gemini_model.generate_content_async(
            full_prompt,
            generation_config=generation_config,
        )

        return ModelResponse(
            content=response.text or "",
            model=model,
            provider=LLMProvider.GEMINI,
            finish_reason="stop",
        )


# ============================================================================
# Text boundary used by the pipeline
# ============================================================================

class LLMClient(ABC):
    """A model that turns one prompt into one text response."""

    name: str = "llm"

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        pass


class ProviderLLMClient(LLMClient):
    """Binds a UnifiedModelClient to one provider, model and temperature."""

    def __init__(
        self,
        client: UnifiedModelClient,
        provider: LLMProvider,
        model: str,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
    ):
        self.client = client
        self.provider = provider
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.name = model

    async def generate(self, prompt: str) -> str:
        response = await self.client.create_chat_completion(
            messages=[{"role": "user", "content": prompt}],
            model=self.model,
            provider=self.provider,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        if response.finish_reason == "length":
            logger.warning(f"[{self.model}] Response truncated at max_tokens")
        return response.content


def create_tier_clients(config: LLMConfiguration) -> Dict[ModelTier, LLMClient]:
    """
    Build one LLMClient per model tier.

    Raises:
        ConfigurationError: a tier points at a provider that is missing or disabled.
    """
    errors = config.validate_tier_models()
    if errors:
        raise ConfigurationError("Model tiers are misconfigured", {"errors": errors})
    for warning in config.tier_model_warnings():
        logger.warning(f"[CONFIG] {warning}")

    unified = UnifiedModelClient(config)
    clients: Dict[ModelTier, LLMClient] = {}
    for tier in ModelTier:
        provider, model, temperature = config.tier_models.for_tier(tier)
        clients[tier] = ProviderLLMClient(
            unified,
            provider=provider,
            model=model,
            temperature=temperature,
            max_tokens=config.tier_models.max_tokens,
        )
        logger.info(f"[CONFIG] {tier.value} tier -> {provider.value}/{model}")
    return clients
