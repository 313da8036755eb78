# designsight/api/endpoints/overlay.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from designsight.api.dependencies import get_image_or_404, get_project_or_404
from designsight.api.endpoints.feedback import query_feedback
from designsight.db.session import get_db
from designsight.schemas.base import ApiResponse
from designsight.schemas.feedback import Category, Role, Severity, Status
from designsight.schemas.overlay import ClickRequest, ClickResult, Overlay
from designsight.services.overlay import OverlayScale, build_overlay, hit_test, region_from_click

router = APIRouter()


def _scale_for(image: dict, display_width: float, display_height: float) -> OverlayScale:
    try:
        return OverlayScale.between(display_width, display_height, image.get("width") or 0, image.get("height") or 0)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{project_id}/{image_id}", response_model=ApiResponse[Overlay])
def get_overlay(
    project_id: str,
    image_id: str,
    display_width: float = Query(..., alias="displayWidth", gt=0),
    display_height: float = Query(..., alias="displayHeight", gt=0),
    selected_id: Optional[str] = Query(None, alias="selectedId"),
    category: Optional[Category] = None,
    severity: Optional[Severity] = None,
    status: Optional[Status] = None,
    role: Optional[Role] = None,
    db: Session = Depends(get_db),
):
    """
    Feedback rectangles for an image drawn at the given display size.
    Rectangles are in drawing order, oldest first.
    """
    project = get_project_or_404(db, project_id)
    image = get_image_or_404(project, image_id)
    scale = _scale_for(image, display_width, display_height)

    feedback = query_feedback(
        db, project_id=project_id, image_id=image_id,
        category=category, severity=severity, status=status, role=role,
        newest_first=False,
    )
    rects = build_overlay(feedback, scale, selected_id)
    return ApiResponse(
        count=len(rects),
        data=Overlay(scale_x=scale.scale_x, scale_y=scale.scale_y, rects=rects),
    )


@router.post("/{project_id}/{image_id}/click", response_model=ApiResponse[ClickResult])
def click_overlay(
    project_id: str,
    image_id: str,
    click: ClickRequest,
    category: Optional[Category] = None,
    severity: Optional[Severity] = None,
    status: Optional[Status] = None,
    role: Optional[Role] = None,
    db: Session = Depends(get_db),
):
    """
    Resolve a click on the displayed image: the feedback under the point, if
    any, and the default region for new feedback centred on it.

    Takes the same filters as the overlay so that only drawn rectangles can
    be hit.
    """
    project = get_project_or_404(db, project_id)
    image = get_image_or_404(project, image_id)
    scale = _scale_for(image, click.display_width, click.display_height)

    feedback = query_feedback(
        db, project_id=project_id, image_id=image_id,
        category=category, severity=severity, status=status, role=role,
        newest_first=False,
    )
    return ApiResponse(data={
        "feedback": hit_test(click.x, click.y, feedback, scale),
        "region": region_from_click(click.x, click.y, scale),
    })
