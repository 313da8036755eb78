# designsight/schemas/feedback.py
from enum import Enum
from typing import List, Optional

from pydantic import Field, constr

from designsight.schemas.base import BaseSchema, TimestampMixin


class Category(str, Enum):
    ACCESSIBILITY = "accessibility"
    VISUAL_HIERARCHY = "visual_hierarchy"
    CONTENT_COPY = "content_copy"
    UI_UX_PATTERNS = "ui_ux_patterns"


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Role(str, Enum):
    DESIGNER = "designer"
    REVIEWER = "reviewer"
    PRODUCT_MANAGER = "product_manager"
    DEVELOPER = "developer"


class Status(str, Enum):
    OPEN = "open"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class Coordinates(BaseSchema):
    """Box in the stored image's pixel space"""
    x: float
    y: float
    width: float = Field(..., ge=1)
    height: float = Field(..., ge=1)


class FeedbackBase(BaseSchema):
    title: constr(strip_whitespace=True, min_length=1, max_length=200)
    description: constr(strip_whitespace=True, min_length=1, max_length=1000)
    category: Category
    severity: Severity
    roles: List[Role] = []
    coordinates: Coordinates


class FeedbackDraft(FeedbackBase):
    """Unpersisted feedback produced by design analysis"""
    ai_generated: bool = True
    status: Status = Status.OPEN


class FeedbackCreate(FeedbackBase):
    project_id: str
    image_id: str


class FeedbackUpdate(BaseSchema):
    title: Optional[constr(strip_whitespace=True, min_length=1, max_length=200)] = None
    description: Optional[constr(strip_whitespace=True, min_length=1, max_length=1000)] = None
    category: Optional[Category] = None
    severity: Optional[Severity] = None
    roles: Optional[List[Role]] = None
    coordinates: Optional[Coordinates] = None
    status: Optional[Status] = None


class Feedback(FeedbackBase, TimestampMixin):
    id: str
    project_id: str
    image_id: str
    ai_generated: bool = False
    status: Status = Status.OPEN


class AnalysisResult(BaseSchema):
    feedback: List[Feedback]
    summary: str
