# designsight/schemas/comment.py
from typing import List, Optional

from pydantic import constr

from designsight.schemas.base import BaseSchema, TimestampMixin
from designsight.schemas.feedback import Role


class CommentBase(BaseSchema):
    author: constr(strip_whitespace=True, min_length=1, max_length=100)
    content: constr(strip_whitespace=True, min_length=1, max_length=1000)
    role: Role


class CommentCreate(CommentBase):
    feedback_id: str
    parent_id: Optional[str] = None


class CommentUpdate(BaseSchema):
    content: constr(strip_whitespace=True, min_length=1, max_length=1000)


class Comment(CommentBase, TimestampMixin):
    id: str
    feedback_id: str
    parent_id: Optional[str] = None


class CommentNode(Comment):
    replies: List["CommentNode"] = []


CommentNode.model_rebuild()
