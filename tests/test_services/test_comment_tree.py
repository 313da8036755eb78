# tests/test_services/test_comment_tree.py
import unittest
from datetime import datetime, timedelta
from types import SimpleNamespace

from designsight.services.comment_tree import build_comment_tree

START = datetime(2024, 5, 1, 9, 0, 0)


def comment(id, parent_id=None, minutes=0):
    created = START + timedelta(minutes=minutes)
    return SimpleNamespace(
        id=id,
        feedback_id="f1",
        parent_id=parent_id,
        author="Ana",
        content=f"comment {id}",
        role="designer",
        created_at=created,
        updated_at=created,
    )


class CommentTreeTestCase(unittest.TestCase):
    def test_nested_replies(self):
        roots = build_comment_tree([comment("A"), comment("B", "A", 1), comment("C", "B", 2)])

        self.assertEqual([node.id for node in roots], ["A"])
        self.assertEqual([node.id for node in roots[0].replies], ["B"])
        self.assertEqual([node.id for node in roots[0].replies[0].replies], ["C"])
        self.assertEqual(roots[0].replies[0].replies[0].replies, [])

    def test_sibling_order_follows_input(self):
        roots = build_comment_tree([
            comment("A"), comment("B"), comment("A2", "A", 2), comment("A1", "A", 3),
        ])
        self.assertEqual([node.id for node in roots], ["A", "B"])
        self.assertEqual([node.id for node in roots[0].replies], ["A2", "A1"])

    def test_reply_before_parent_still_attaches(self):
        roots = build_comment_tree([comment("B", "A", 1), comment("A")])
        self.assertEqual([node.id for node in roots], ["A"])
        self.assertEqual([node.id for node in roots[0].replies], ["B"])

    def test_missing_parent_becomes_root(self):
        roots = build_comment_tree([comment("A"), comment("orphan", "deleted", 1)])
        self.assertEqual([node.id for node in roots], ["A", "orphan"])

    def test_empty(self):
        self.assertEqual(build_comment_tree([]), [])


if __name__ == "__main__":
    unittest.main()
