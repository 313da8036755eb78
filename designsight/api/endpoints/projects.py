# designsight/api/endpoints/projects.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from designsight.api.dependencies import get_project_or_404
from designsight.core.logging import logger
from designsight.db.session import get_db
from designsight.models.project import Project
from designsight.schemas.base import ApiResponse
from designsight.schemas.project import Project as ProjectSchema, ProjectCreate, ProjectUpdate

router = APIRouter()


@router.get("/", response_model=ApiResponse[List[ProjectSchema]])
def get_projects(db: Session = Depends(get_db)):
    """
    List all projects, newest first
    """
    projects = db.query(Project).order_by(Project.created_at.desc()).all()
    return ApiResponse(count=len(projects), data=projects)


@router.get("/{project_id}", response_model=ApiResponse[ProjectSchema])
def get_project(project_id: str, db: Session = Depends(get_db)):
    return ApiResponse(data=get_project_or_404(db, project_id))


@router.post("/", response_model=ApiResponse[ProjectSchema], status_code=status.HTTP_201_CREATED)
def create_project(project_in: ProjectCreate, db: Session = Depends(get_db)):
    project = Project(name=project_in.name, description=project_in.description, images=[])
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.bind(project_id=project.id).info(f"Created project {project.name}")
    return ApiResponse(data=project)


@router.put("/{project_id}", response_model=ApiResponse[ProjectSchema])
def update_project(project_id: str, project_in: ProjectUpdate, db: Session = Depends(get_db)):
    """
    Update project name and description
    """
    project = get_project_or_404(db, project_id)

    update_data = project_in.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if field == "name" and value is None:
            continue
        setattr(project, field, value)

    db.commit()
    db.refresh(project)
    return ApiResponse(data=project)


@router.delete("/{project_id}", response_model=ApiResponse[None])
def delete_project(project_id: str, db: Session = Depends(get_db)):
    """
    Delete a project. Its feedback and stored images are left in place.
    """
    project = get_project_or_404(db, project_id)
    db.delete(project)
    db.commit()
    logger.bind(project_id=project_id).info("Deleted project")
    return ApiResponse(message="Project deleted successfully")
