# designsight/schemas/export.py
from datetime import datetime
from typing import Dict, List, Optional

from designsight.schemas.base import BaseSchema
from designsight.schemas.feedback import Coordinates, Role


class FeedbackSummary(BaseSchema):
    total_feedback: int
    by_category: Dict[str, int]
    by_severity: Dict[str, int]
    by_status: Dict[str, int]


class ExportRequest(BaseSchema):
    project_id: str
    image_id: Optional[str] = None
    role: Optional[Role] = None


class ExportMetadata(BaseSchema):
    export_date: str
    project_name: str
    image_name: Optional[str] = None
    role: Optional[str] = None
    total_feedback: int


class ExportProject(BaseSchema):
    id: str
    name: str
    description: Optional[str] = None
    created_at: datetime


class ExportImage(BaseSchema):
    id: str
    original_name: str
    url: str
    width: int
    height: int
    uploaded_at: datetime


class ExportFeedback(BaseSchema):
    id: str
    title: str
    description: str
    category: str
    severity: str
    roles: List[str]
    coordinates: Coordinates
    ai_generated: bool
    status: str
    created_at: datetime
    updated_at: datetime


class ExportDocument(BaseSchema):
    metadata: ExportMetadata
    project: ExportProject
    image: Optional[ExportImage] = None
    feedback: List[ExportFeedback]
    summary: FeedbackSummary


class PreviewProject(BaseSchema):
    id: str
    name: str
    description: Optional[str] = None


class PreviewImage(BaseSchema):
    id: str
    original_name: str
    width: int
    height: int


class ExportPreview(BaseSchema):
    project: PreviewProject
    image: Optional[PreviewImage] = None
    feedback_count: int
    summary: FeedbackSummary
    available_roles: List[str]
