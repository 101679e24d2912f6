"""
Comic Planner Configuration Module
LLM provider configuration, model tiers and pipeline settings.
"""

from .llm_providers import (
    CLAUDE_MODELS,
    DEEPSEEK_MODELS,
    GEMINI_MODELS,
    # Model Definitions
    OPENAI_MODELS,
    OPENROUTER_MODELS,
    ClaudeConfig,
    DeepSeekConfig,
    GeminiConfig,
    LLMConfiguration,
    # Enums
    LLMProvider,
    ModelTier,
    OpenAIConfig,
    OpenRouterConfig,
    # Configuration Models
    ProviderConfig,
    TierModelConfig,
    create_default_config_from_env,
)
from .settings import PipelineSettings, create_settings_from_env

__all__ = [
    "LLMProvider",
    "ModelTier",
    "OPENAI_MODELS",
    "OPENROUTER_MODELS",
    "GEMINI_MODELS",
    "CLAUDE_MODELS",
    "DEEPSEEK_MODELS",
    "ProviderConfig",
    "OpenAIConfig",
    "OpenRouterConfig",
    "GeminiConfig",
    "ClaudeConfig",
    "DeepSeekConfig",
    "TierModelConfig",
    "LLMConfiguration",
    "PipelineSettings",
    "create_default_config_from_env",
    "create_settings_from_env",
]
