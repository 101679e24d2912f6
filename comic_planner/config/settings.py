"""
Pipeline settings for the comic planner.
Retry, review and page-budget knobs shared by every stage.
"""

import os

from pydantic import BaseModel, Field


class PipelineSettings(BaseModel):
    """Tunable limits for the planning pipeline."""

    # ModelInvoker
    max_attempts: int = Field(default=2, ge=1, le=10)
    retry_delay_seconds: float = Field(default=1.0, ge=0.0)

    # ReviewRepairLoop
    review_min_panels: int = Field(default=5, ge=1)
    max_review_passes: int = Field(default=2, ge=1)

    # Request defaults
    default_max_pages: int = Field(default=5, ge=1)
    max_pages_limit: int = Field(default=20, ge=1)
    default_language: str = "uk"
    default_setting: str = "realistic"

    def clamp_pages(self, requested: int | None) -> int:
        """Clamp a requested page count into [1, max_pages_limit]."""
        pages = requested or self.default_max_pages
        return min(max(1, pages), self.max_pages_limit)


def create_settings_from_env() -> PipelineSettings:
    """
    Create pipeline settings with optional environment overrides.

    Raises:
        pydantic.ValidationError: an override is out of range or malformed.
    """
    overrides = {}

    if os.getenv("PLANNER_MAX_ATTEMPTS"):
        overrides["max_attempts"] = os.getenv("PLANNER_MAX_ATTEMPTS")
    if os.getenv("PLANNER_RETRY_DELAY"):
        overrides["retry_delay_seconds"] = os.getenv("PLANNER_RETRY_DELAY")
    if os.getenv("PLANNER_DEFAULT_LANGUAGE"):
        overrides["default_language"] = os.getenv("PLANNER_DEFAULT_LANGUAGE")

    return PipelineSettings(**overrides)
