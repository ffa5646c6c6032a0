"""Moderation use cases."""

from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .import_legacy import ImportLegacyCommentsResponse, ImportLegacyCommentsUseCase
from .list_queue import (
    ListModerationQueueRequest,
    ListModerationQueueResponse,
    ListModerationQueueUseCase,
)
from .moderate_comment import (
    ModerateCommentRequest,
    ModerateCommentResponse,
    ModerateCommentUseCase,
)

__all__ = [
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "ImportLegacyCommentsResponse",
    "ImportLegacyCommentsUseCase",
    "ListModerationQueueRequest",
    "ListModerationQueueResponse",
    "ListModerationQueueUseCase",
    "ModerateCommentRequest",
    "ModerateCommentResponse",
    "ModerateCommentUseCase",
]
