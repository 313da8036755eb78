# designsight/models/__init__.py
# Import models here so they can be imported from designsight.models
from designsight.models.project import Project
from designsight.models.feedback import Feedback
from designsight.models.comment import Comment
