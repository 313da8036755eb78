# designsight/services/comment_tree.py
from typing import Dict, Iterable, List

from designsight.schemas.comment import CommentNode


def build_comment_tree(comments: Iterable) -> List[CommentNode]:
    """
    Group a flat list of comments into reply trees.

    First every comment is indexed by id, then each one is attached to its
    parent's replies, or kept as a root when it has no parent or the parent
    is not in the set. Input order is kept at every level, so comments should
    be passed oldest first.
    """
    nodes: Dict[str, CommentNode] = {}
    ordered: List[CommentNode] = []
    for comment in comments:
        node = CommentNode.model_validate(comment)
        node.replies = []
        nodes[node.id] = node
        ordered.append(node)

    roots = []
    for node in ordered:
        parent = nodes.get(node.parent_id) if node.parent_id else None
        if parent is not None and parent is not node:
            parent.replies.append(node)
        else:
            roots.append(node)
    return roots
