# designsight/api/endpoints/comments.py
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from designsight.api.dependencies import get_comment_or_404
from designsight.core.logging import logger
from designsight.db.session import get_db
from designsight.models.comment import Comment
from designsight.schemas.base import ApiResponse
from designsight.schemas.comment import Comment as CommentSchema, CommentCreate, CommentNode, CommentUpdate
from designsight.schemas.feedback import Role
from designsight.services.comment_tree import build_comment_tree

router = APIRouter()


@router.get("/feedback/{feedback_id}", response_model=ApiResponse[List[CommentNode]])
def get_feedback_comments(feedback_id: str, role: Optional[Role] = None, db: Session = Depends(get_db)):
    """
    Comments on a feedback item as reply trees, oldest first.
    count is the number of comments, not the number of roots.
    """
    query = db.query(Comment).filter(Comment.feedback_id == feedback_id)
    if role is not None:
        query = query.filter(Comment.role == role.value)
    comments = query.order_by(Comment.created_at.asc()).all()

    return ApiResponse(count=len(comments), data=build_comment_tree(comments))


@router.post("/", response_model=ApiResponse[CommentSchema], status_code=status.HTTP_201_CREATED)
def create_comment(comment_in: CommentCreate, db: Session = Depends(get_db)):
    comment = Comment(**comment_in.model_dump(mode="json"))
    db.add(comment)
    db.commit()
    db.refresh(comment)
    logger.bind(feedback_id=comment.feedback_id, comment_id=comment.id).info(f"Comment added by {comment.author}")
    return ApiResponse(data=comment)


@router.put("/{comment_id}", response_model=ApiResponse[CommentSchema])
def update_comment(comment_id: str, comment_in: CommentUpdate, db: Session = Depends(get_db)):
    comment = get_comment_or_404(db, comment_id)
    comment.content = comment_in.content
    db.commit()
    db.refresh(comment)
    return ApiResponse(data=comment)


@router.delete("/{comment_id}", response_model=ApiResponse[None])
def delete_comment(comment_id: str, db: Session = Depends(get_db)):
    """
    Delete a single comment. Replies to it stay and are listed as roots.
    """
    comment = get_comment_or_404(db, comment_id)
    db.delete(comment)
    db.commit()
    return ApiResponse(message="Comment deleted successfully")
