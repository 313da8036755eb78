# designsight/api/api.py
from fastapi import APIRouter

api_router = APIRouter()

# Projects and their embedded images
from designsight.api.endpoints.projects import router as projects_router
api_router.include_router(projects_router, prefix="/projects", tags=["projects"])

from designsight.api.endpoints.upload import router as upload_router
api_router.include_router(upload_router, prefix="/upload", tags=["upload"])

# Feedback and discussion
from designsight.api.endpoints.feedback import router as feedback_router
api_router.include_router(feedback_router, prefix="/feedback", tags=["feedback"])

from designsight.api.endpoints.comments import router as comments_router
api_router.include_router(comments_router, prefix="/comments", tags=["comments"])

from designsight.api.endpoints.ai import router as ai_router
api_router.include_router(ai_router, prefix="/ai", tags=["ai"])

from designsight.api.endpoints.overlay import router as overlay_router
api_router.include_router(overlay_router, prefix="/overlay", tags=["overlay"])

# Reports and housekeeping
from designsight.api.endpoints.export import router as export_router
api_router.include_router(export_router, prefix="/export", tags=["export"])

from designsight.api.endpoints.maintenance import router as maintenance_router
api_router.include_router(maintenance_router, prefix="/maintenance", tags=["maintenance"])
