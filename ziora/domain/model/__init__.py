"""Domain model entities for Ziora."""

from ziora.domain.model.comment import Comment, CommentNode, FlatComment
from ziora.domain.model.content import (
    ContentBucket,
    ContentDocument,
    LegacyComment,
    Module,
    Topic,
)
from ziora.domain.model.stats import CommentStats, UserStats
from ziora.domain.model.user import User

__all__ = [
    "Comment",
    "CommentNode",
    "CommentStats",
    "ContentBucket",
    "ContentDocument",
    "FlatComment",
    "LegacyComment",
    "Module",
    "Topic",
    "User",
    "UserStats",
]
