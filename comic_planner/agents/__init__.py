"""
Comic Planner Agents Module
Stage runners for each kind of model call.
"""

from .base import BaseAgent, StoryContext
from .planning_agents import (
    CastAgent,
    OutlineAgent,
    PageThinkingAgent,
    PanelAgent,
    RepairAgent,
    ReviewAgent,
    compute_chapter_count,
)

__all__ = [
    "BaseAgent",
    "StoryContext",
    "CastAgent",
    "OutlineAgent",
    "PageThinkingAgent",
    "PanelAgent",
    "ReviewAgent",
    "RepairAgent",
    "compute_chapter_count",
]
