"""Builders for domain objects used across tests."""

from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from ziora.config import Settings
from ziora.domain.model import Comment
from ziora.domain.value import CommentId, CommentStatus
from ziora.util.jwt import create_token


def make_comment(
    parent: Comment | None = None,
    status: CommentStatus = CommentStatus.APPROVED,
    created_at: datetime | None = None,
    **overrides: Any,
) -> Comment:
    """Build a stored comment, optionally as a reply to ``parent``.

    Args:
        parent: Parent comment; None for a top-level comment
        status: Moderation status
        created_at: Creation time (defaults to now)
        **overrides: Any other Comment field

    Returns:
        Comment with content context copied from the parent when given
    """
    comment_id = CommentId(uuid4())
    created_at = created_at or datetime.now(UTC)
    fields: dict[str, Any] = {
        "id": comment_id,
        "root_id": parent.root_id if parent else comment_id,
        "parent_id": parent.id if parent else None,
        "depth": parent.depth + 1 if parent else 0,
        "author": "Asha",
        "content": "Great explanation of normal forms",
        "status": status,
        "year": "SE",
        "semester": "3",
        "branch": "computer",
        "subject": parent.subject if parent else "dbms",
        "module": parent.module if parent else "Module 1",
        "content_type": parent.content_type if parent else "video-lecs",
        "content_id": parent.content_id if parent else "topic-1",
        "created_at": created_at,
        "updated_at": created_at,
    }
    fields.update(overrides)
    return Comment(**fields)


def make_token(user_id: str = "admin-1", role: str = "admin") -> str:
    """Sign a token with the configured secret, as the login service would."""
    return create_token(user_id, role, Settings().auth, email=f"{user_id}@ziora.in")
