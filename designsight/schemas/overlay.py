# designsight/schemas/overlay.py
from typing import List, Optional

from pydantic import Field

from designsight.schemas.base import BaseSchema
from designsight.schemas.feedback import Coordinates, Feedback


class OverlayRect(BaseSchema):
    feedback_id: str
    label: int
    x: float
    y: float
    width: float
    height: float
    severity: str
    color: str
    line_width: int
    glow: int


class Overlay(BaseSchema):
    scale_x: float
    scale_y: float
    rects: List[OverlayRect]


class ClickRequest(BaseSchema):
    x: float
    y: float
    display_width: float = Field(..., gt=0)
    display_height: float = Field(..., gt=0)


class ClickResult(BaseSchema):
    feedback: Optional[Feedback] = None
    region: Coordinates
