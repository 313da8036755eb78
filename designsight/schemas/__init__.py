from designsight.schemas.base import ApiResponse, BaseSchema, TimestampMixin
from designsight.schemas.project import Project, ProjectCreate, ProjectUpdate, ProjectImage, UploadResult, ImageUrl
from designsight.schemas.feedback import (
    Category, Severity, Role, Status, Coordinates,
    Feedback, FeedbackCreate, FeedbackUpdate, FeedbackDraft, AnalysisResult,
)
from designsight.schemas.comment import Comment, CommentCreate, CommentUpdate, CommentNode
from designsight.schemas.export import ExportRequest, ExportDocument, ExportPreview, FeedbackSummary
from designsight.schemas.overlay import Overlay, OverlayRect, ClickRequest, ClickResult
from designsight.schemas.maintenance import ImageVerifyReport, ProjectMissingImages, MissingImage
