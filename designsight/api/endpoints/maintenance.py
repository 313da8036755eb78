# designsight/api/endpoints/maintenance.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from designsight.api.dependencies import get_storage
from designsight.core.logging import logger
from designsight.db.session import get_db
from designsight.schemas.base import ApiResponse
from designsight.schemas.maintenance import ImageVerifyReport
from designsight.services.maintenance import verify_images
from designsight.services.storage import StorageService

router = APIRouter()


@router.get("/images/verify", response_model=ApiResponse[ImageVerifyReport])
def verify_project_images(
    fix: Optional[str] = None,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
):
    """
    Report image references whose stored file is gone. With fix=remove the
    dangling references are dropped from their projects.
    """
    if fix not in (None, "remove"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unsupported fix mode")

    report = verify_images(db, storage, remove_missing=fix == "remove")
    logger.bind(bucket=report.bucket).info(
        f"Image verification: {report.missing_total} missing, {report.removed_total} removed"
    )
    return ApiResponse(data=report)
