"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from ziora.domain.model import Comment, ContentDocument, User
from ziora.domain.value import AccountId, CommentId, CommentStatus, DocumentId, UserStatus


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=AccountId(_uuid(row["id"])),
        email=row["email"],
        name=row.get("name"),
        status=UserStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    data = user.model_dump()
    data["status"] = user.status.value
    return data


def row_to_document(row: Dict[str, Any]) -> ContentDocument:
    """Convert database row to ContentDocument domain model.

    Args:
        row: Database row as dict

    Returns:
        ContentDocument domain model
    """
    return ContentDocument(
        id=DocumentId(_uuid(row["id"])),
        year=row["year"],
        semester=row["semester"],
        branch=row["branch"],
        subject=row["subject"],
        buckets=row.get("buckets") or {},
        version=row["version"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    parent_id = row.get("parent_id")
    return Comment(
        id=CommentId(_uuid(row["id"])),
        root_id=CommentId(_uuid(row["root_id"])),
        parent_id=CommentId(_uuid(parent_id)) if parent_id else None,
        depth=row["depth"],
        author=row["author"],
        content=row["content"],
        status=CommentStatus(row["status"]),
        moderation_reason=row.get("moderation_reason"),
        likes=row["likes"],
        dislikes=row["dislikes"],
        liked_by=frozenset(row.get("liked_by") or ()),
        disliked_by=frozenset(row.get("disliked_by") or ()),
        year=row.get("year"),
        semester=row.get("semester"),
        branch=row.get("branch"),
        subject=row["subject"],
        module=row["module"],
        content_type=row["content_type"],
        content_id=row.get("content_id"),
        user_id=row.get("user_id"),
        user_email=row.get("user_email"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = comment.model_dump()
    data["status"] = comment.status.value
    # Sorted so stored arrays are deterministic
    data["liked_by"] = sorted(comment.liked_by)
    data["disliked_by"] = sorted(comment.disliked_by)
    return data
