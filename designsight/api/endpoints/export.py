# designsight/api/endpoints/export.py
from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from designsight.api.dependencies import get_image_or_404, get_project_or_404
from designsight.api.endpoints.feedback import query_feedback
from designsight.core.logging import logger
from designsight.db.session import get_db
from designsight.schemas.base import ApiResponse
from designsight.schemas.export import ExportPreview, ExportRequest
from designsight.schemas.feedback import Role
from designsight.services.export import (
    AVAILABLE_ROLES, ExportData, generate_json, generate_pdf, generate_summary,
)

router = APIRouter()


def _collect(db: Session, project_id: str, image_id: Optional[str], role: Optional[Role]) -> ExportData:
    project = get_project_or_404(db, project_id)
    image = get_image_or_404(project, image_id) if image_id else None
    feedback = query_feedback(db, project_id=project.id, image_id=image_id, role=role)
    return ExportData.collect(project, feedback, image=image, role=role.value if role else None)


def _attachment(filename: str) -> dict:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


@router.post("/json")
def export_json(export_in: ExportRequest, db: Session = Depends(get_db)):
    """
    Download the project's feedback as a JSON document
    """
    data = _collect(db, export_in.project_id, export_in.image_id, export_in.role)
    logger.bind(project_id=export_in.project_id).info(f"Exporting {data.summary.total_feedback} feedback items as JSON")
    return Response(
        content=generate_json(data),
        media_type="application/json",
        headers=_attachment(data.filename("designsight-data", "json")),
    )


@router.post("/pdf")
def export_pdf(export_in: ExportRequest, db: Session = Depends(get_db)):
    """
    Download the project's feedback as a PDF report
    """
    data = _collect(db, export_in.project_id, export_in.image_id, export_in.role)
    logger.bind(project_id=export_in.project_id).info(f"Exporting {data.summary.total_feedback} feedback items as PDF")
    return Response(
        content=generate_pdf(data),
        media_type="application/pdf",
        headers=_attachment(data.filename("designsight-report", "pdf")),
    )


def _preview(db: Session, project_id: str, image_id: Optional[str], role: Optional[Role]) -> ApiResponse:
    data = _collect(db, project_id, image_id, role)
    return ApiResponse(data=ExportPreview(
        project=data.project,
        image=data.image,
        feedback_count=data.summary.total_feedback,
        summary=data.summary,
        available_roles=AVAILABLE_ROLES,
    ))


@router.get("/preview/{project_id}", response_model=ApiResponse[ExportPreview])
def preview_project_export(project_id: str, role: Optional[Role] = None, db: Session = Depends(get_db)):
    return _preview(db, project_id, None, role)


@router.get("/preview/{project_id}/{image_id}", response_model=ApiResponse[ExportPreview])
def preview_image_export(project_id: str, image_id: str, role: Optional[Role] = None, db: Session = Depends(get_db)):
    return _preview(db, project_id, image_id, role)
