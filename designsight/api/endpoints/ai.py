# designsight/api/endpoints/ai.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from designsight.api.dependencies import get_image_or_404, get_project_or_404, get_storage, get_vision
from designsight.api.endpoints.feedback import query_feedback
from designsight.core.errors import BlobNotFoundError
from designsight.core.logging import logger
from designsight.db.session import get_db
from designsight.models.feedback import Feedback
from designsight.schemas.base import ApiResponse
from designsight.schemas.feedback import AnalysisResult, Feedback as FeedbackSchema
from designsight.services.analysis import analyze_design
from designsight.services.storage import StorageService
from designsight.services.vision import VisionAnalyzer

router = APIRouter()

PREVIOUS_ANALYSIS_SUMMARY = "Previous analysis found"


@router.post("/analyze/{project_id}/{image_id}", response_model=ApiResponse[AnalysisResult])
async def analyze_image(
    project_id: str,
    image_id: str,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    analyzer: VisionAnalyzer = Depends(get_vision),
):
    """
    Run AI design analysis on a stored image and persist the resulting feedback.

    An image is analyzed at most once: when AI feedback already exists for it,
    that feedback is returned and nothing new is generated.
    """
    project = get_project_or_404(db, project_id)
    image = get_image_or_404(project, image_id)
    log = logger.bind(project_id=project_id, image_id=image_id)

    existing = query_feedback(db, project_id=project_id, image_id=image_id, ai_generated=True, newest_first=False)
    if existing:
        log.info(f"Returning {len(existing)} existing AI feedback items")
        return ApiResponse(
            message="AI analysis already exists for this image",
            data={"feedback": existing, "summary": PREVIOUS_ANALYSIS_SUMMARY},
        )

    try:
        content = await run_in_threadpool(storage.read_bytes, image["storage_key"])
    except BlobNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image file not found in storage")

    analysis = await analyze_design(content, analyzer, width=image.get("width"), height=image.get("height"))

    # One commit per draft; a failure midway keeps what was already saved
    saved = []
    for draft in analysis.feedback:
        feedback = Feedback(
            project_id=project_id,
            image_id=image_id,
            **draft.model_dump(mode="json"),
        )
        db.add(feedback)
        db.commit()
        db.refresh(feedback)
        saved.append(feedback)

    log.info(f"AI analysis stored {len(saved)} feedback items")
    return ApiResponse(
        message="AI analysis completed successfully",
        data={"feedback": saved, "summary": analysis.summary},
    )


@router.get("/analysis/{project_id}/{image_id}", response_model=ApiResponse[List[FeedbackSchema]])
def get_analysis(project_id: str, image_id: str, db: Session = Depends(get_db)):
    """
    AI-generated feedback for an image, oldest first
    """
    items = query_feedback(db, project_id=project_id, image_id=image_id, ai_generated=True, newest_first=False)
    return ApiResponse(count=len(items), data=items)
