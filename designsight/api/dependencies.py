# designsight/api/dependencies.py
from typing import Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from designsight.models.comment import Comment
from designsight.models.feedback import Feedback
from designsight.models.project import Project
from designsight.services.storage import StorageService, get_storage_service
from designsight.services.vision import VisionAnalyzer, get_vision_analyzer


def get_storage() -> StorageService:
    return get_storage_service()


def get_vision() -> VisionAnalyzer:
    return get_vision_analyzer()


def get_project_or_404(db: Session, project_id: str) -> Project:
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project


def get_image_or_404(project: Project, image_id: str) -> dict:
    image = project.find_image(image_id)
    if not image:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")
    return image


def find_image_or_404(db: Session, image_id: str) -> Tuple[Project, dict]:
    """
    Locate the project that embeds an image. Images are not indexed on their
    own, so this scans the projects.
    """
    for project in db.query(Project).all():
        image = project.find_image(image_id)
        if image:
            return project, image
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")


def get_feedback_or_404(db: Session, feedback_id: str) -> Feedback:
    feedback = db.query(Feedback).filter(Feedback.id == feedback_id).first()
    if not feedback:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Feedback not found")
    return feedback


def get_comment_or_404(db: Session, comment_id: str) -> Comment:
    comment = db.query(Comment).filter(Comment.id == comment_id).first()
    if not comment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
    return comment
