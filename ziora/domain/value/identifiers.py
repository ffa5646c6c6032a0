"""Strongly typed identifiers for Ziora domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

from ziora.domain.error import MissingFieldError, NotFoundError

CommentId = NewType("CommentId", UUID)
DocumentId = NewType("DocumentId", UUID)
AccountId = NewType("AccountId", UUID)

# Learner identifiers come from the external auth layer as opaque strings
LearnerId = NewType("LearnerId", str)


def parse_comment_id(value: str | None) -> CommentId:
    """Parse a comment ID received over the wire.

    Raises:
        MissingFieldError: If the value is empty
        NotFoundError: If the value is not a UUID, so names no stored comment
    """
    if not value:
        raise MissingFieldError(["commentId"])
    try:
        return CommentId(UUID(value))
    except ValueError:
        raise NotFoundError("Comment", value)
