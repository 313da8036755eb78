# designsight/schemas/maintenance.py
from typing import List

from designsight.schemas.base import BaseSchema


class MissingImage(BaseSchema):
    id: str
    storage_key: str
    reason: str


class ProjectMissingImages(BaseSchema):
    project_id: str
    project_name: str
    missing: List[MissingImage]


class ImageVerifyReport(BaseSchema):
    bucket: str
    missing_total: int
    removed_total: int
    projects_with_missing: int
    details: List[ProjectMissingImages]
