"""
Comic Planner Services
Model provider access.
"""

from .model_client import (
    LLMClient,
    ModelResponse,
    ProviderLLMClient,
    UnifiedModelClient,
    create_tier_clients,
)

__all__ = [
    "LLMClient",
    "ModelResponse",
    "ProviderLLMClient",
    "UnifiedModelClient",
    "create_tier_clients",
]
