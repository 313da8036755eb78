# designsight/models/project.py
from typing import List, Optional

from sqlalchemy import Column, String, DateTime, JSON

from designsight.db.session import Base, generate_id, utcnow


class Project(Base):
    __tablename__ = "projects"

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(String(100), index=True, nullable=False)
    description = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Images are embedded by value, in upload order. The list is always
    # replaced as a whole, never mutated in place.
    images = Column(JSON, nullable=False, default=list)

    def find_image(self, image_id: str) -> Optional[dict]:
        for image in self.images or []:
            if image.get("id") == image_id:
                return image
        return None

    def with_image(self, image: dict) -> List[dict]:
        return [*(self.images or []), image]

    def without_images(self, image_ids) -> List[dict]:
        drop = set(image_ids)
        return [image for image in (self.images or []) if image.get("id") not in drop]
