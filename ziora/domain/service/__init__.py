"""Domain services."""

from .aggregator import TreeAggregator
from .base import Service
from .comment_service import CommentService
from .content_service import ContentService, StoredBucket
from .jwt_service import JWTService
from .legacy_import import ImportResult, LegacyCommentImporter
from .moderation import ModerationService, ModerationStateMachine
from .user_service import UserService

__all__ = [
    "CommentService",
    "ContentService",
    "ImportResult",
    "JWTService",
    "LegacyCommentImporter",
    "ModerationService",
    "ModerationStateMachine",
    "Service",
    "StoredBucket",
    "TreeAggregator",
    "UserService",
]
