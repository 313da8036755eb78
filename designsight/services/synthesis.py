# designsight/services/synthesis.py
"""
Turns raw vision annotations into feedback drafts.

Four independent rules run in a fixed order (text, objects, colors, general)
and their drafts are concatenated in that order. Every rule is deterministic.

Coordinates of the drafts are in the analyzed image's pixel space. Object
regions arrive in normalized [0, 1] coordinates and are scaled by the known
image size, or by FALLBACK_DIMENSION when the size is unknown. The fallback
only keeps the boxes inside a plausible range; it is not a correct size.
"""
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from designsight.schemas.feedback import (
    Category, Coordinates, FeedbackDraft, Role, Severity,
)

SMALL_TEXT_MAX_WIDTH = 50
SMALL_TEXT_MAX_HEIGHT = 12
BUTTON_MIN_GAP = 0.02
BUTTON_KEYWORDS = ("button", "click")
# Dominant colors use the Cloud Vision channel scale
CHANNEL_MAX = 255.0
DARK_BRIGHTNESS = 0.3
LIGHT_BRIGHTNESS = 0.7
FALLBACK_DIMENSION = 1000
PLACEHOLDER_BOX = Coordinates(x=0, y=0, width=100, height=100)


@dataclass
class Vertex:
    x: float = 0.0
    y: float = 0.0


@dataclass
class TextRegion:
    description: str
    vertices: List[Vertex] = field(default_factory=list)


@dataclass
class ObjectRegion:
    name: str
    normalized_vertices: List[Vertex] = field(default_factory=list)
    score: float = 0.0


@dataclass
class ColorSample:
    red: float
    green: float
    blue: float
    score: float = 0.0
    pixel_fraction: float = 0.0

    @property
    def brightness(self) -> float:
        """Mean channel value scaled to [0, 1]"""
        return (self.red + self.green + self.blue) / 3 / CHANNEL_MAX


@dataclass
class VisionAnnotations:
    text_regions: List[TextRegion] = field(default_factory=list)
    object_regions: List[ObjectRegion] = field(default_factory=list)
    colors: List[ColorSample] = field(default_factory=list)
    # Reserved; not used by any rule
    safe_search: Optional[Dict[str, str]] = None


@dataclass
class DesignAnalysis:
    feedback: List[FeedbackDraft]
    summary: str


def _round_px(value: float) -> int:
    """Round half up, so 0.5 px boundaries behave the same in every direction"""
    return int(math.floor(value + 0.5))


def _vertex(vertices: Sequence[Vertex], index: int) -> Vertex:
    return vertices[index] if index < len(vertices) else Vertex()


def _text_box_size(region: TextRegion):
    v = region.vertices
    width = abs(_vertex(v, 1).x - _vertex(v, 0).x)
    height = abs(_vertex(v, 3).y - _vertex(v, 0).y)
    return width, height


def check_small_text(text_regions: Sequence[TextRegion]) -> List[FeedbackDraft]:
    """
    One draft at most, anchored on the first region that is narrower than
    50 px or shorter than 12 px.
    """
    for region in text_regions:
        if len(region.vertices) < 2:
            continue
        width, height = _text_box_size(region)
        if width < SMALL_TEXT_MAX_WIDTH or height < SMALL_TEXT_MAX_HEIGHT:
            origin = region.vertices[0]
            return [FeedbackDraft(
                title="Small Text Detected",
                description=(
                    "Some text elements appear to be very small and may be difficult to read on "
                    "mobile devices or for users with visual impairments. Consider increasing font "
                    "sizes to at least 16px for body text."
                ),
                category=Category.ACCESSIBILITY,
                severity=Severity.MEDIUM,
                roles=[Role.DESIGNER, Role.DEVELOPER],
                coordinates=Coordinates(
                    x=origin.x,
                    y=origin.y,
                    width=max(1, width),
                    height=max(1, height),
                ),
            )]
    return []


def _is_button(region: ObjectRegion) -> bool:
    name = (region.name or "").lower()
    return any(keyword in name for keyword in BUTTON_KEYWORDS)


def check_button_spacing(
    object_regions: Sequence[ObjectRegion],
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> List[FeedbackDraft]:
    """
    One draft per adjacent pair of button-like objects whose vertical gap is
    under 0.02 of the image height. The draft covers both buttons.
    """
    width_px = width if width and width > 0 else FALLBACK_DIMENSION
    height_px = height if height and height > 0 else FALLBACK_DIMENSION

    buttons = [region for region in object_regions if _is_button(region)]
    drafts = []
    for first, second in zip(buttons, buttons[1:]):
        v1, v2 = first.normalized_vertices, second.normalized_vertices
        if len(v1) < 3 or len(v2) < 3:
            continue

        gap = abs(v2[0].y - v1[2].y)
        if gap >= BUTTON_MIN_GAP:
            continue

        min_x = min(v1[0].x, v2[0].x)
        min_y = min(v1[0].y, v2[0].y)
        max_x = max(v1[1].x, v2[1].x)
        max_y = max(v1[2].y, v2[2].y)
        drafts.append(FeedbackDraft(
            title="Button Spacing Issue",
            description=(
                "Buttons appear to be too close together, which may cause accidental clicks on "
                "mobile devices. Consider increasing spacing between interactive elements."
            ),
            category=Category.UI_UX_PATTERNS,
            severity=Severity.MEDIUM,
            roles=[Role.DESIGNER, Role.DEVELOPER],
            coordinates=Coordinates(
                x=_round_px(min_x * width_px),
                y=_round_px(min_y * height_px),
                width=max(1, _round_px((max_x - min_x) * width_px)),
                height=max(1, _round_px((max_y - min_y) * height_px)),
            ),
        ))
    return drafts


def check_color_contrast(colors: Sequence[ColorSample]) -> List[FeedbackDraft]:
    has_dark = any(color.brightness < DARK_BRIGHTNESS for color in colors)
    has_light = any(color.brightness > LIGHT_BRIGHTNESS for color in colors)
    if not (has_dark and has_light):
        return []
    return [FeedbackDraft(
        title="Color Contrast Review Needed",
        description=(
            "The design contains both very dark and very light colors. Please verify that text "
            "has sufficient contrast ratios (4.5:1 for normal text, 3:1 for large text) to meet "
            "WCAG accessibility guidelines."
        ),
        category=Category.ACCESSIBILITY,
        severity=Severity.HIGH,
        roles=[Role.DESIGNER, Role.DEVELOPER],
        coordinates=PLACEHOLDER_BOX.model_copy(),
    )]


def check_structure(annotations: VisionAnnotations) -> List[FeedbackDraft]:
    if not (annotations.text_regions and annotations.object_regions):
        return []
    return [FeedbackDraft(
        title="Design Structure Analysis",
        description=(
            "The design contains both text and interactive elements. Consider reviewing the "
            "visual hierarchy to ensure important information stands out and the user flow is "
            "intuitive."
        ),
        category=Category.VISUAL_HIERARCHY,
        severity=Severity.LOW,
        roles=[Role.DESIGNER, Role.REVIEWER],
        coordinates=PLACEHOLDER_BOX.model_copy(),
    )]


def summarize(drafts: Sequence[FeedbackDraft]) -> str:
    counts = {severity: 0 for severity in Severity}
    for draft in drafts:
        counts[draft.severity] += 1
    return (
        f"Design analysis completed. Found {counts[Severity.HIGH]} high priority, "
        f"{counts[Severity.MEDIUM]} medium priority, and {counts[Severity.LOW]} low priority "
        f"issues. Focus on accessibility and visual hierarchy improvements."
    )


def synthesize_feedback(
    annotations: VisionAnnotations,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> DesignAnalysis:
    drafts: List[FeedbackDraft] = []
    drafts.extend(check_small_text(annotations.text_regions))
    drafts.extend(check_button_spacing(annotations.object_regions, width, height))
    drafts.extend(check_color_contrast(annotations.colors))
    drafts.extend(check_structure(annotations))
    return DesignAnalysis(feedback=drafts, summary=summarize(drafts))
