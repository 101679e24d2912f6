"""
Comic Planner Prompts Module
Prompt templates for every model call in the pipeline.
"""

from .cast import CAST_PROMPT_TEMPLATE
from .outline import OUTLINE_PROMPT_TEMPLATE
from .page import PAGE_THINKING_PROMPT_TEMPLATE, PANEL_PROMPT_TEMPLATE
from .review import REPAIR_PROMPT_TEMPLATE, REVIEW_PROMPT_TEMPLATE
from .styles import (
    SETTING_PROMPTS,
    VISUAL_STYLE_PROMPTS,
    few_shot_panel_example,
    language_name,
    setting_keywords,
    visual_style_keywords,
)

__all__ = [
    "CAST_PROMPT_TEMPLATE",
    "OUTLINE_PROMPT_TEMPLATE",
    "PAGE_THINKING_PROMPT_TEMPLATE",
    "PANEL_PROMPT_TEMPLATE",
    "REVIEW_PROMPT_TEMPLATE",
    "REPAIR_PROMPT_TEMPLATE",
    "VISUAL_STYLE_PROMPTS",
    "SETTING_PROMPTS",
    "few_shot_panel_example",
    "language_name",
    "setting_keywords",
    "visual_style_keywords",
]
