# designsight/services/maintenance.py
from sqlalchemy.orm import Session

from designsight.core.errors import UpstreamServiceError
from designsight.core.logging import logger
from designsight.models.project import Project
from designsight.schemas.maintenance import ImageVerifyReport, MissingImage, ProjectMissingImages
from designsight.services.storage import StorageService


def verify_images(db: Session, storage: StorageService, remove_missing: bool = False) -> ImageVerifyReport:
    """
    Check that every image referenced by a project still exists in the blob
    store. With remove_missing, dangling references are dropped from their
    project; feedback pointing at them is left alone.
    """
    details = []
    missing_total = 0
    removed_total = 0

    for project in db.query(Project).order_by(Project.created_at).all():
        missing = []
        for image in project.images or []:
            try:
                exists = storage.file_exists(image["storage_key"])
            except UpstreamServiceError as e:
                # Unverifiable images are skipped, never removed
                logger.bind(project_id=project.id).warning(f"Could not verify image {image['id']}: {e}")
                continue
            if not exists:
                missing.append(MissingImage(id=image["id"], storage_key=image["storage_key"], reason="NotFound"))

        if not missing:
            continue

        missing_total += len(missing)
        if remove_missing:
            keep = project.without_images(m.id for m in missing)
            removed_total += len(project.images) - len(keep)
            project.images = keep
            db.commit()
            logger.bind(project_id=project.id).info(f"Removed {len(missing)} dangling image references")

        details.append(ProjectMissingImages(project_id=project.id, project_name=project.name, missing=missing))

    return ImageVerifyReport(
        bucket=storage.location,
        missing_total=missing_total,
        removed_total=removed_total,
        projects_with_missing=len(details),
        details=details,
    )
