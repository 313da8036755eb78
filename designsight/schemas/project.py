# designsight/schemas/project.py
from datetime import datetime
from typing import List, Optional

from pydantic import constr

from designsight.schemas.base import BaseSchema, TimestampMixin


class ProjectImage(BaseSchema):
    id: str
    storage_key: str
    original_name: str
    url: str
    size: int
    mime_type: str
    width: int
    height: int
    uploaded_at: datetime


class ProjectBase(BaseSchema):
    name: constr(strip_whitespace=True, min_length=1, max_length=100)
    description: Optional[constr(strip_whitespace=True, max_length=500)] = None


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(BaseSchema):
    name: Optional[constr(strip_whitespace=True, min_length=1, max_length=100)] = None
    description: Optional[constr(strip_whitespace=True, max_length=500)] = None


class Project(ProjectBase, TimestampMixin):
    id: str
    images: List[ProjectImage] = []


class UploadResult(BaseSchema):
    image: ProjectImage
    project: Project


class ImageUrl(BaseSchema):
    image_url: str
    image: ProjectImage
