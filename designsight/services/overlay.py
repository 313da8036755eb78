# designsight/services/overlay.py
"""
Mapping between stored feedback boxes (image pixel space) and an on-screen
rendering of the image at some display size.

Scaling is per axis: the display box does not have to keep the image's
aspect ratio.
"""
import math
from dataclasses import dataclass
from typing import Optional, Sequence, TypeVar

from designsight.schemas.feedback import Coordinates
from designsight.schemas.overlay import OverlayRect

NEW_REGION_WIDTH = 100
NEW_REGION_HEIGHT = 50
SELECTED_LINE_WIDTH = 3
DEFAULT_LINE_WIDTH = 2
SELECTED_GLOW = 8

SEVERITY_COLORS = {
    "high": "#ef4444",
    "medium": "#f59e0b",
    "low": "#10b981",
}
DEFAULT_COLOR = "#3b82f6"

T = TypeVar("T")


@dataclass(frozen=True)
class OverlayScale:
    scale_x: float
    scale_y: float

    @classmethod
    def between(cls, display_width: float, display_height: float,
                natural_width: float, natural_height: float) -> "OverlayScale":
        if min(display_width, display_height, natural_width, natural_height) <= 0:
            raise ValueError("Display and image sizes must be positive")
        return cls(display_width / natural_width, display_height / natural_height)

    def inverse(self) -> "OverlayScale":
        return OverlayScale(1 / self.scale_x, 1 / self.scale_y)


@dataclass(frozen=True)
class Box:
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def of(cls, coords) -> "Box":
        if isinstance(coords, dict):
            return cls(coords["x"], coords["y"], coords["width"], coords["height"])
        return cls(coords.x, coords.y, coords.width, coords.height)

    def scaled(self, scale: OverlayScale) -> "Box":
        return Box(
            self.x * scale.scale_x,
            self.y * scale.scale_y,
            self.width * scale.scale_x,
            self.height * scale.scale_y,
        )

    def rounded(self) -> "Box":
        return Box(*(math.floor(v + 0.5) for v in (self.x, self.y, self.width, self.height)))

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x <= self.x + self.width and self.y <= y <= self.y + self.height


def _field(item, name):
    return item[name] if isinstance(item, dict) else getattr(item, name)


def to_screen(coords, scale: OverlayScale) -> Box:
    return Box.of(coords).scaled(scale)


def to_image(box, scale: OverlayScale) -> Box:
    return Box.of(box).scaled(scale.inverse())


def region_from_click(x: float, y: float, scale: OverlayScale) -> Coordinates:
    """
    Default box for new manual feedback: 100x50 image pixels centred on the
    clicked point. x and y are screen coordinates relative to the image.
    """
    image_x = x / scale.scale_x
    image_y = y / scale.scale_y
    return Coordinates(
        x=image_x - NEW_REGION_WIDTH / 2,
        y=image_y - NEW_REGION_HEIGHT / 2,
        width=NEW_REGION_WIDTH,
        height=NEW_REGION_HEIGHT,
    )


def hit_test(x: float, y: float, feedback: Sequence[T], scale: OverlayScale) -> Optional[T]:
    """First feedback item, in list order, whose on-screen box contains the point"""
    for item in feedback:
        if to_screen(_field(item, "coordinates"), scale).contains(x, y):
            return item
    return None


def severity_color(severity) -> str:
    return SEVERITY_COLORS.get(str(getattr(severity, "value", severity)), DEFAULT_COLOR)


def build_overlay(feedback: Sequence, scale: OverlayScale, selected_id: Optional[str] = None):
    """
    Rectangles in drawing order: later items are drawn on top. Labels are the
    1-based position in the given sequence.
    """
    rects = []
    for index, item in enumerate(feedback):
        box = to_screen(_field(item, "coordinates"), scale)
        severity = _field(item, "severity")
        is_selected = selected_id is not None and _field(item, "id") == selected_id
        rects.append(OverlayRect(
            feedback_id=_field(item, "id"),
            label=index + 1,
            x=box.x,
            y=box.y,
            width=box.width,
            height=box.height,
            severity=str(getattr(severity, "value", severity)),
            color=severity_color(severity),
            line_width=SELECTED_LINE_WIDTH if is_selected else DEFAULT_LINE_WIDTH,
            glow=SELECTED_GLOW if is_selected else 0,
        ))
    return rects
