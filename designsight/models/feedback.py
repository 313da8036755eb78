# designsight/models/feedback.py
from sqlalchemy import Column, String, DateTime, Boolean, JSON

from designsight.db.session import Base, generate_id, utcnow


class Feedback(Base):
    __tablename__ = "feedback"

    id = Column(String(32), primary_key=True, default=generate_id)
    # References are advisory: no foreign keys, no cascades
    project_id = Column(String(32), index=True, nullable=False)
    image_id = Column(String(64), index=True, nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(String(1000), nullable=False)
    category = Column(String(32), index=True, nullable=False)
    severity = Column(String(16), index=True, nullable=False)
    roles = Column(JSON, nullable=False, default=list)
    coordinates = Column(JSON, nullable=False)
    ai_generated = Column(Boolean, default=False, nullable=False)
    status = Column(String(16), index=True, default="open", nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
