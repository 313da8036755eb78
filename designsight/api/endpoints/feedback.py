# designsight/api/endpoints/feedback.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from designsight.api.dependencies import get_feedback_or_404
from designsight.core.logging import logger
from designsight.db.session import get_db
from designsight.models.feedback import Feedback
from designsight.schemas.base import ApiResponse
from designsight.schemas.feedback import (
    Category, Feedback as FeedbackSchema, FeedbackCreate, FeedbackUpdate, Role, Severity, Status,
)

router = APIRouter()


def query_feedback(
    db: Session,
    project_id: Optional[str] = None,
    image_id: Optional[str] = None,
    category: Optional[str] = None,
    severity: Optional[str] = None,
    status: Optional[str] = None,
    role: Optional[str] = None,
    ai_generated: Optional[bool] = None,
    newest_first: bool = True,
) -> List[Feedback]:
    """
    Exact-match filters, all of which must hold. role matches when it is one
    of the feedback's roles.
    """
    query = db.query(Feedback)
    if project_id is not None:
        query = query.filter(Feedback.project_id == project_id)
    if image_id is not None:
        query = query.filter(Feedback.image_id == image_id)
    if category is not None:
        query = query.filter(Feedback.category == getattr(category, "value", category))
    if severity is not None:
        query = query.filter(Feedback.severity == getattr(severity, "value", severity))
    if status is not None:
        query = query.filter(Feedback.status == getattr(status, "value", status))
    if ai_generated is not None:
        query = query.filter(Feedback.ai_generated == ai_generated)

    order = Feedback.created_at.desc() if newest_first else Feedback.created_at.asc()
    items = query.order_by(order).all()

    # Roles are a JSON list; membership is checked here to stay portable across databases
    if role is not None:
        role = getattr(role, "value", role)
        items = [item for item in items if role in (item.roles or [])]
    return items


@router.get("/project/{project_id}", response_model=ApiResponse[List[FeedbackSchema]])
def get_project_feedback(
    project_id: str,
    image_id: Optional[str] = Query(None, alias="imageId"),
    category: Optional[Category] = None,
    severity: Optional[Severity] = None,
    status: Optional[Status] = None,
    role: Optional[Role] = None,
    db: Session = Depends(get_db),
):
    """
    Feedback for a project, newest first, with optional filters
    """
    items = query_feedback(
        db, project_id=project_id, image_id=image_id,
        category=category, severity=severity, status=status, role=role,
    )
    return ApiResponse(count=len(items), data=items)


@router.get("/roles/{role}", response_model=ApiResponse[List[FeedbackSchema]])
def get_feedback_by_role(
    role: Role,
    project_id: Optional[str] = Query(None, alias="projectId"),
    image_id: Optional[str] = Query(None, alias="imageId"),
    db: Session = Depends(get_db),
):
    items = query_feedback(db, project_id=project_id, image_id=image_id, role=role)
    return ApiResponse(count=len(items), data=items)


@router.get("/{feedback_id}", response_model=ApiResponse[FeedbackSchema])
def get_feedback(feedback_id: str, db: Session = Depends(get_db)):
    return ApiResponse(data=get_feedback_or_404(db, feedback_id))


@router.post("/", response_model=ApiResponse[FeedbackSchema], status_code=status.HTTP_201_CREATED)
def create_feedback(feedback_in: FeedbackCreate, db: Session = Depends(get_db)):
    """
    Create manual feedback. Project and image references are not checked.
    """
    feedback = Feedback(
        **feedback_in.model_dump(mode="json", exclude={"coordinates"}),
        coordinates=feedback_in.coordinates.model_dump(),
        ai_generated=False,
        status=Status.OPEN.value,
    )
    db.add(feedback)
    db.commit()
    db.refresh(feedback)
    logger.bind(project_id=feedback.project_id, feedback_id=feedback.id).info(f"Created feedback {feedback.title}")
    return ApiResponse(data=feedback)


@router.put("/{feedback_id}", response_model=ApiResponse[FeedbackSchema])
def update_feedback(feedback_id: str, feedback_in: FeedbackUpdate, db: Session = Depends(get_db)):
    """
    Partial update; fields left out or null are unchanged
    """
    feedback = get_feedback_or_404(db, feedback_id)

    update_data = feedback_in.model_dump(mode="json", exclude_none=True)
    for field, value in update_data.items():
        setattr(feedback, field, value)

    db.commit()
    db.refresh(feedback)
    return ApiResponse(data=feedback)


@router.delete("/{feedback_id}", response_model=ApiResponse[None])
def delete_feedback(feedback_id: str, db: Session = Depends(get_db)):
    """
    Delete feedback. Its comments are left in place.
    """
    feedback = get_feedback_or_404(db, feedback_id)
    db.delete(feedback)
    db.commit()
    return ApiResponse(message="Feedback deleted successfully")
