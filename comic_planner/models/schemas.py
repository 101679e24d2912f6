"""
Pydantic data models for the comic planner.

Two families live here:
- response schemas the model output is validated against (CastResponse,
  OutlineResponse, PageThinking, PanelDraft, ReviewResult)
- the final Plan artifact handed to the editor/rendering tooling

Every model uses camelCase aliases so raw model JSON validates directly and
``model_dump(by_alias=True)`` produces the outbound wire shape.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Iterator, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model accepting both camelCase and snake_case keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Enums
# ============================================================================

class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class BodyType(str, Enum):
    SLIM = "slim"
    AVERAGE = "average"
    ATHLETIC = "athletic"
    MUSCULAR = "muscular"
    HEAVY = "heavy"
    PETITE = "petite"


class FacialExpression(str, Enum):
    NEUTRAL = "neutral"
    HAPPY = "happy"
    SAD = "sad"
    ANGRY = "angry"
    FEARFUL = "fearful"
    SURPRISED = "surprised"
    DISGUSTED = "disgusted"
    CONTEMPT = "contempt"
    DETERMINED = "determined"
    WORRIED = "worried"
    PENSIVE = "pensive"
    SMIRKING = "smirking"
    CRYING = "crying"
    LAUGHING = "laughing"
    FOCUSED = "focused"
    CONFUSED = "confused"
    SHOCKED = "shocked"
    RELIEVED = "relieved"
    HOPEFUL = "hopeful"


class PageLayout(str, Enum):
    """Fixed set of page templates; each maps to a panel count and slot shapes."""
    SINGLE = "single"
    TWO_HORIZONTAL = "two-horizontal"
    TWO_VERTICAL = "two-vertical"
    THREE_ROWS = "three-rows"
    GRID_2X2 = "grid-2x2"
    BIG_LEFT = "big-left"
    BIG_RIGHT = "big-right"
    BIG_TOP = "big-top"
    BIG_BOTTOM = "big-bottom"
    STRIP_3 = "strip-3"
    MANGA_3 = "manga-3"
    ACTION = "action"


class AspectRatio(str, Enum):
    SQUARE = "1:1"
    WIDE = "16:9"
    TALL = "9:16"
    LANDSCAPE = "4:3"
    PORTRAIT = "3:4"
    PHOTO_LANDSCAPE = "3:2"
    PHOTO_PORTRAIT = "2:3"


class IssueCategory(str, Enum):
    """Fixed taxonomy the reviewer reports against."""
    REPETITION = "repetition"
    LANGUAGE = "language"            # language consistency
    CONTINUITY = "continuity"
    CHARACTER = "character"          # invalid character id
    SCENE_MISMATCH = "scene-mismatch"
    OTHER = "other"

    @classmethod
    def _missing_(cls, value):
        if not isinstance(value, str):
            return None
        aliases = {
            "language-consistency": cls.LANGUAGE,
            "invalid-character": cls.CHARACTER,
            "scene_mismatch": cls.SCENE_MISMATCH,
        }
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        return aliases.get(normalized)


class ReviewVerdict(str, Enum):
    GOOD = "good"
    NEEDS_FIXES = "needs_fixes"
    POOR = "poor"


# ============================================================================
# Request Models
# ============================================================================

class ComicStyle(CamelModel):
    """Visual style and world setting; they only steer prompt text."""
    visual: str = "american-classic"
    setting: Optional[str] = None


class PlanRequest(CamelModel):
    """Inbound request for a comic plan."""
    prompt: str = Field(..., min_length=1, description="Free-text story idea")
    max_pages: Optional[int] = Field(
        default=None,
        description="Page budget; clamped to [1, 20] by the planner",
    )
    language: Optional[str] = Field(default=None, description="Content language tag (uk / en)")
    style: ComicStyle = Field(default_factory=ComicStyle)


# ============================================================================
# Cast Models
# ============================================================================

class FaceDescription(CamelModel):
    shape: str
    eyes: str
    nose: str
    mouth: str
    hair: str
    distinctive_features: str


class CharacterDraft(CamelModel):
    """Character attributes as returned by the cast stage."""
    name: str
    age: int
    gender: Gender
    body_type: BodyType
    height: str
    face: FaceDescription
    skin_tone: str
    default_expression: FacialExpression
    clothing: str
    role: str


class Character(CharacterDraft):
    """Roster character with a stable id and a visual-consistency seed."""
    model_config = ConfigDict(frozen=True)

    id: str
    seed: int = Field(..., ge=0)


class CastResponse(CamelModel):
    characters: List[CharacterDraft] = Field(..., min_length=2)


# ============================================================================
# Outline Models
# ============================================================================

class PageScene(CamelModel):
    location: str
    weather: Optional[str] = None
    time_of_day: Optional[str] = None
    atmosphere: Optional[str] = None

    def describe(self) -> str:
        parts = [self.location, self.weather, self.time_of_day]
        return ", ".join(p for p in parts if p)


class PagePlan(CamelModel):
    layout: PageLayout
    summary: str
    characters_in_scene: List[str] = Field(default_factory=list)
    scene: PageScene

    @field_validator("characters_in_scene", mode="before")
    @classmethod
    def _none_to_list(cls, value):
        return value or []


class ChapterOutline(CamelModel):
    title: str
    pages: List[PagePlan] = Field(default_factory=list)


class OutlineResponse(CamelModel):
    title: str
    chapters: List[ChapterOutline] = Field(..., min_length=1)

    @property
    def page_count(self) -> int:
        return sum(len(chapter.pages) for chapter in self.chapters)


# ============================================================================
# Page Thinking Models
# ============================================================================

class PanelBeat(CamelModel):
    panel_number: int
    purpose: str
    suggested_shot: str
    suggested_angle: str


class PageThinking(CamelModel):
    """Chain-of-thought plan for one page; never part of the final artifact."""
    story_beats: List[str]
    emotional_arc: str
    key_moments: List[str]
    panel_breakdown: List[PanelBeat]

    def beat_for(self, position: int) -> PanelBeat:
        """Beat for a 1-based slot, falling back to a neutral default."""
        if 0 < position <= len(self.panel_breakdown):
            return self.panel_breakdown[position - 1]
        return PanelBeat(
            panel_number=position,
            purpose="Continue the story",
            suggested_shot="medium",
            suggested_angle="eye-level",
        )

    def other_purposes(self, position: int) -> List[str]:
        return [
            f"Panel {beat.panel_number}: {beat.purpose}"
            for i, beat in enumerate(self.panel_breakdown, start=1)
            if i != position
        ]

    @classmethod
    def fallback(cls, panel_count: int, summary: str) -> "PageThinking":
        """Thinking used when the thinking call for a page fails."""
        return cls(
            story_beats=[summary],
            emotional_arc="",
            key_moments=[],
            panel_breakdown=[
                PanelBeat(
                    panel_number=i,
                    purpose="Continue the story",
                    suggested_shot="medium",
                    suggested_angle="eye-level",
                )
                for i in range(1, panel_count + 1)
            ],
        )


# ============================================================================
# Panel Models
# ============================================================================

class CharacterInPanel(CamelModel):
    character_id: str
    expression: str
    pose: str
    gesture: Optional[str] = None
    gaze_direction: Optional[str] = None


class PanelDialogue(CamelModel):
    character_id: str
    text: str
    bubble_position: Optional[str] = None  # placement zone, e.g. "top-right"


class CameraDraft(CamelModel):
    shot: str
    angle: str
    focus: Union[str, List[str], None] = None


class CameraSpec(CamelModel):
    shot: str
    angle: str
    focus: Optional[str] = None


class PanelDraft(CamelModel):
    """One panel as returned by the panel stage, before reference filtering."""
    characters: List[CharacterInPanel] = Field(default_factory=list)
    action: str
    mood: str
    camera: CameraDraft
    dialogue: List[PanelDialogue] = Field(default_factory=list)
    narrative: Optional[str] = None
    narrative_placement: Optional[str] = None
    sfx: Optional[str] = None
    image_prompt: str
    negative_prompt: Optional[str] = None

    @field_validator("characters", "dialogue", mode="before")
    @classmethod
    def _none_to_list(cls, value):
        return value or []

    def camera_spec(self) -> CameraSpec:
        focus = self.camera.focus
        if isinstance(focus, list):
            focus = focus[0] if focus else None
        return CameraSpec(shot=self.camera.shot, angle=self.camera.angle, focus=focus or None)


class RepairedPanelDraft(PanelDraft):
    """Repair output; the rendering prompt may be omitted and is then kept."""
    image_prompt: Optional[str] = None


class Panel(CamelModel):
    id: str
    position: int = Field(..., ge=1)
    characters: List[CharacterInPanel] = Field(default_factory=list)
    action: str
    mood: str
    camera: CameraSpec
    dialogue: List[PanelDialogue] = Field(default_factory=list)
    narrative: Optional[str] = None
    narrative_placement: Optional[str] = None
    sfx: Optional[str] = None
    aspect_ratio: AspectRatio
    image_prompt: str
    negative_prompt: Optional[str] = None
    character_seeds: Optional[Dict[str, int]] = None

    def referenced_ids(self) -> List[str]:
        ids = [c.character_id for c in self.characters]
        ids.extend(d.character_id for d in self.dialogue)
        return ids


# ============================================================================
# Artifact Models
# ============================================================================

class Page(CamelModel):
    id: str
    page_number: int = Field(..., ge=1)
    layout: PageLayout
    scene: PageScene
    summary: str
    characters_in_scene: List[str] = Field(default_factory=list)
    panels: List[Panel] = Field(default_factory=list)


class Chapter(CamelModel):
    id: str
    title: str
    pages: List[Page] = Field(default_factory=list)


class Plan(CamelModel):
    """The complete generated artifact."""
    id: str
    title: str
    style: ComicStyle
    characters: List[Character]
    chapters: List[Chapter]
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def iter_pages(self) -> Iterator[Page]:
        for chapter in self.chapters:
            yield from chapter.pages

    def iter_panels(self) -> Iterator[Panel]:
        for page in self.iter_pages():
            yield from page.panels

    @property
    def total_pages(self) -> int:
        return sum(len(chapter.pages) for chapter in self.chapters)

    @property
    def total_panels(self) -> int:
        return sum(1 for _ in self.iter_panels())


# ============================================================================
# Review Models
# ============================================================================

class ReviewIssue(CamelModel):
    panel_id: str
    category: IssueCategory = Field(..., alias="type")
    description: str
    fix: str


class ReviewResult(CamelModel):
    issues: List[ReviewIssue] = Field(default_factory=list)
    overall_quality: ReviewVerdict

    @field_validator("issues", mode="before")
    @classmethod
    def _none_to_list(cls, value):
        return value or []
