# designsight/db/base.py
from designsight.db.session import Base

# Import all models so they are registered on Base.metadata
from designsight.models.project import Project  # noqa: F401
from designsight.models.feedback import Feedback  # noqa: F401
from designsight.models.comment import Comment  # noqa: F401
