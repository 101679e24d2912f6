"""
LLM Provider Configuration - BYOK (Bring Your Own Key) Support
Supports OpenAI, OpenRouter, DeepSeek, Google Gemini, and Anthropic Claude.

The planner uses two model tiers: a FAST tier for the cheap structural stages
(cast, outline) and a SMART tier for page thinking, panels, review and repair.
"""

import os
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, SecretStr


class LLMProvider(str, Enum):
    """Supported LLM providers."""
    OPENAI = "openai"
    OPENROUTER = "openrouter"
    GEMINI = "gemini"
    CLAUDE = "claude"
    DEEPSEEK = "deepseek"


class ModelTier(str, Enum):
    """Which model a call is routed to."""
    FAST = "fast"
    SMART = "smart"


# ============================================================================
# Model Definitions by Provider
# ============================================================================

# Catalog entries map a model id to the tiers it is recommended for.
ModelCatalog = Dict[str, List[str]]

OPENAI_MODELS: ModelCatalog = {
    "gpt-4o": ["smart"],
    "gpt-4o-mini": ["fast"],
}

OPENROUTER_MODELS: ModelCatalog = {
    "google/gemini-2.5-flash": ["fast"],
    "deepseek/deepseek-chat-v3-0324": ["smart"],
    "anthropic/claude-3.5-sonnet": ["smart"],
    "openai/gpt-4o-mini": ["fast"],
}

GEMINI_MODELS: ModelCatalog = {
    "gemini-2.5-flash": ["fast"],
    "gemini-2.5-pro": ["smart"],
}

CLAUDE_MODELS: ModelCatalog = {
    "claude-3-5-haiku-20241022": ["fast"],
    "claude-3-5-sonnet-20241022": ["smart"],
}

DEEPSEEK_MODELS: ModelCatalog = {
    "deepseek-chat": ["smart"],
}


# ============================================================================
# Provider Configuration Models
# ============================================================================

class ProviderConfig(BaseModel):
    """Base configuration for an LLM provider."""
    provider: LLMProvider
    api_key: SecretStr
    base_url: Optional[str] = None
    default_model: str
    enabled: bool = True


class OpenAIConfig(ProviderConfig):
    """OpenAI-specific configuration."""
    provider: LLMProvider = LLMProvider.OPENAI
    base_url: str = "https://api.openai.com/v1"
    default_model: str = "gpt-4o"
    organization_id: Optional[str] = None

    @property
    def available_models(self) -> ModelCatalog:
        return OPENAI_MODELS


class OpenRouterConfig(ProviderConfig):
    """OpenRouter-specific configuration."""
    provider: LLMProvider = LLMProvider.OPENROUTER
    base_url: str = "https://openrouter.ai/api/v1"
    default_model: str = "deepseek/deepseek-chat-v3-0324"
    site_url: Optional[str] = "https://kitsumy.com"  # sent as HTTP-Referer
    app_name: Optional[str] = "Kitsumy Comic Planner"

    @property
    def available_models(self) -> ModelCatalog:
        return OPENROUTER_MODELS

    def default_headers(self) -> Dict[str, str]:
        headers = {}
        if self.site_url:
            headers["HTTP-Referer"] = self.site_url
        if self.app_name:
            headers["X-Title"] = self.app_name
        return headers


class GeminiConfig(ProviderConfig):
    """Google Gemini-specific configuration."""
    provider: LLMProvider = LLMProvider.GEMINI
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    default_model: str = "gemini-2.5-flash"

    @property
    def available_models(self) -> ModelCatalog:
        return GEMINI_MODELS


class ClaudeConfig(ProviderConfig):
    """Anthropic Claude-specific configuration."""
    provider: LLMProvider = LLMProvider.CLAUDE
    base_url: str = "https://api.anthropic.com/v1"
    default_model: str = "claude-3-5-sonnet-20241022"

    @property
    def available_models(self) -> ModelCatalog:
        return CLAUDE_MODELS


class DeepSeekConfig(ProviderConfig):
    """DeepSeek-specific configuration (OpenAI-compatible API)."""
    provider: LLMProvider = LLMProvider.DEEPSEEK
    base_url: str = "https://api.deepseek.com"
    default_model: str = "deepseek-chat"

    @property
    def available_models(self) -> ModelCatalog:
        return DEEPSEEK_MODELS


# ============================================================================
# Tier Model Assignment
# ============================================================================

class TierModelConfig(BaseModel):
    """Configuration for which model each tier uses."""
    fast_provider: LLMProvider = LLMProvider.OPENROUTER
    fast_model: str = "google/gemini-2.5-flash"
    fast_temperature: float = Field(default=0.7, ge=0.0, le=2.0)

    smart_provider: LLMProvider = LLMProvider.OPENROUTER
    smart_model: str = "deepseek/deepseek-chat-v3-0324"
    smart_temperature: float = Field(default=0.8, ge=0.0, le=2.0)

    max_tokens: Optional[int] = None

    def for_tier(self, tier: ModelTier) -> tuple[LLMProvider, str, float]:
        """Return (provider, model, temperature) for a tier."""
        if tier == ModelTier.FAST:
            return self.fast_provider, self.fast_model, self.fast_temperature
        return self.smart_provider, self.smart_model, self.smart_temperature


# ============================================================================
# Master Configuration
# ============================================================================

class LLMConfiguration(BaseModel):
    """Master LLM configuration with all providers."""

    openai: Optional[OpenAIConfig] = None
    openrouter: Optional[OpenRouterConfig] = None
    gemini: Optional[GeminiConfig] = None
    claude: Optional[ClaudeConfig] = None
    deepseek: Optional[DeepSeekConfig] = None

    tier_models: TierModelConfig = Field(default_factory=TierModelConfig)

    def get_provider_config(self, provider: LLMProvider) -> Optional[ProviderConfig]:
        """Get configuration for a specific provider."""
        provider_map = {
            LLMProvider.OPENAI: self.openai,
            LLMProvider.OPENROUTER: self.openrouter,
            LLMProvider.GEMINI: self.gemini,
            LLMProvider.CLAUDE: self.claude,
            LLMProvider.DEEPSEEK: self.deepseek,
        }
        return provider_map.get(provider)

    def validate_tier_models(self) -> List[str]:
        """Errors for tiers that point at a missing or disabled provider."""
        errors = []
        for tier in ModelTier:
            provider, model, _ = self.tier_models.for_tier(tier)
            provider_config = self.get_provider_config(provider)
            if not provider_config:
                errors.append(f"{tier.value}: Provider {provider.value} is not configured")
            elif not provider_config.enabled:
                errors.append(f"{tier.value}: Provider {provider.value} is disabled")
        return errors

    def tier_model_warnings(self) -> List[str]:
        """Catalog mismatches for tiers whose provider is configured."""
        warnings = []
        for tier in ModelTier:
            provider, model, _ = self.tier_models.for_tier(tier)
            provider_config = self.get_provider_config(provider)
            if provider_config is None:
                continue
            recommended = provider_config.available_models.get(model)
            if recommended is None:
                warnings.append(f"{tier.value}: Model {model} is not in the {provider.value} catalog")
            elif tier.value not in recommended:
                warnings.append(f"{tier.value}: Model {model} is recommended for {', '.join(recommended)}")
        return warnings


def create_default_config_from_env() -> LLMConfiguration:
    """Create configuration from environment variables."""
    config = LLMConfiguration()

    if os.getenv("OPENAI_API_KEY"):
        config.openai = OpenAIConfig(
            api_key=SecretStr(os.getenv("OPENAI_API_KEY")),
            organization_id=os.getenv("OPENAI_ORG_ID"),
        )

    if os.getenv("OPENROUTER_API_KEY"):
        config.openrouter = OpenRouterConfig(
            api_key=SecretStr(os.getenv("OPENROUTER_API_KEY")),
            site_url=os.getenv("OPENROUTER_SITE_URL", "https://kitsumy.com"),
        )

    if os.getenv("GEMINI_API_KEY"):
        config.gemini = GeminiConfig(
            api_key=SecretStr(os.getenv("GEMINI_API_KEY")),
        )

    if os.getenv("ANTHROPIC_API_KEY"):
        config.claude = ClaudeConfig(
            api_key=SecretStr(os.getenv("ANTHROPIC_API_KEY")),
        )

    if os.getenv("DEEPSEEK_API_KEY"):
        config.deepseek = DeepSeekConfig(
            api_key=SecretStr(os.getenv("DEEPSEEK_API_KEY")),
        )

    tiers = config.tier_models
    if os.getenv("PLANNER_FAST_PROVIDER"):
        tiers.fast_provider = LLMProvider(os.getenv("PLANNER_FAST_PROVIDER"))
    if os.getenv("PLANNER_FAST_MODEL"):
        tiers.fast_model = os.getenv("PLANNER_FAST_MODEL")
    if os.getenv("PLANNER_SMART_PROVIDER"):
        tiers.smart_provider = LLMProvider(os.getenv("PLANNER_SMART_PROVIDER"))
    if os.getenv("PLANNER_SMART_MODEL"):
        tiers.smart_model = os.getenv("PLANNER_SMART_MODEL")

    return config
