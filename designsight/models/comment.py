# designsight/models/comment.py
from sqlalchemy import Column, String, DateTime

from designsight.db.session import Base, generate_id, utcnow


class Comment(Base):
    __tablename__ = "comments"

    id = Column(String(32), primary_key=True, default=generate_id)
    feedback_id = Column(String(32), index=True, nullable=False)
    parent_id = Column(String(32), index=True, nullable=True)
    author = Column(String(100), nullable=False)
    content = Column(String(1000), nullable=False)
    role = Column(String(32), index=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
