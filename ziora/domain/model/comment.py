"""Comment entity.

Comments are threaded discussions attached to a content item (a video topic
or a notes module) with unlimited reply depth. They are stored flat: each row
knows its parent and the root of its thread, and the recursive reply tree is
rebuilt on read.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Optional

from pydantic import Field, model_validator

from ziora.domain.model.common import DomainModel
from ziora.domain.value import CommentId, CommentStatus

MAX_AUTHOR_LENGTH = 200


class Comment(DomainModel):
    """Comment entity.

    A top-level comment has ``parent_id=None`` and ``root_id == id``. A reply
    points at its direct parent and shares the root of its thread.

    Vote counters are denormalized from the voter sets and must always match
    them; a learner never appears in both sets.
    """

    id: CommentId
    root_id: CommentId
    parent_id: Optional[CommentId] = None
    depth: int = Field(default=0, ge=0)

    author: str = Field(min_length=1, max_length=MAX_AUTHOR_LENGTH)
    content: str = Field(min_length=1)
    status: CommentStatus = CommentStatus.PENDING
    moderation_reason: Optional[str] = None

    likes: int = Field(default=0, ge=0)
    dislikes: int = Field(default=0, ge=0)
    liked_by: frozenset[str] = frozenset()
    disliked_by: frozenset[str] = frozenset()

    # Content context the comment is attached to
    year: Optional[str] = None
    semester: Optional[str] = None
    branch: Optional[str] = None
    subject: str
    module: str
    content_type: str
    content_id: Optional[str] = None

    user_id: Optional[str] = None
    user_email: Optional[str] = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @model_validator(mode="after")
    def check_votes(self) -> "Comment":
        if self.liked_by & self.disliked_by:
            raise ValueError("A user cannot both like and dislike a comment")
        if self.likes != len(self.liked_by) or self.dislikes != len(self.disliked_by):
            raise ValueError("Vote counters do not match voter sets")
        return self

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None


@dataclass
class CommentNode:
    """A comment with its replies, rebuilt from the flat store."""

    comment: Comment
    replies: list["CommentNode"] = field(default_factory=list)


@dataclass
class FlatComment:
    """One entry of a flattened comment tree, tagged with its content context.

    Produced for both stored comments and legacy comments embedded in content
    buckets, so ``status`` may be None and ``timestamp`` may be any of the
    legacy shapes.
    """

    id: str | None
    parent_id: str | None
    author: str | None
    content: str | None
    status: str | None
    timestamp: Any
    likes: int
    reply_count: int
    content_type: str
    subject: str | None
    module: str | None
    content_id: str | None
    year: str | None = None
    semester: str | None = None
    branch: str | None = None
    topic: str | None = None
    path: str | None = None
    embedded: bool = False
