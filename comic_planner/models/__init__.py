"""
Comic Planner Models
Pydantic schemas for model output and the final plan artifact.
"""

from .layouts import LAYOUT_SLOTS, LayoutSlot, panel_count, slot_for
from .schemas import (
    AspectRatio,
    BodyType,
    CameraDraft,
    CameraSpec,
    CastResponse,
    Chapter,
    ChapterOutline,
    Character,
    CharacterDraft,
    CharacterInPanel,
    ComicStyle,
    FaceDescription,
    FacialExpression,
    Gender,
    IssueCategory,
    OutlineResponse,
    Page,
    PageLayout,
    PagePlan,
    PageScene,
    PageThinking,
    Panel,
    PanelBeat,
    PanelDialogue,
    PanelDraft,
    Plan,
    PlanRequest,
    RepairedPanelDraft,
    ReviewIssue,
    ReviewResult,
    ReviewVerdict,
)

__all__ = [
    "AspectRatio",
    "BodyType",
    "CameraDraft",
    "CameraSpec",
    "CastResponse",
    "Chapter",
    "ChapterOutline",
    "Character",
    "CharacterDraft",
    "CharacterInPanel",
    "ComicStyle",
    "FaceDescription",
    "FacialExpression",
    "Gender",
    "IssueCategory",
    "LAYOUT_SLOTS",
    "LayoutSlot",
    "OutlineResponse",
    "Page",
    "PageLayout",
    "PagePlan",
    "PageScene",
    "PageThinking",
    "Panel",
    "PanelBeat",
    "PanelDialogue",
    "PanelDraft",
    "Plan",
    "PlanRequest",
    "RepairedPanelDraft",
    "ReviewIssue",
    "ReviewResult",
    "ReviewVerdict",
    "panel_count",
    "slot_for",
]
