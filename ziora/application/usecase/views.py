"""Wire representations of comments shared by comment and moderation use cases."""

from datetime import datetime
from typing import Any

from ziora.application.usecase.base import WireModel
from ziora.domain.model import Comment, CommentNode, FlatComment
from ziora.domain.service.traversal import depth_first
from ziora.domain.value import CommentStatus


class CommentView(WireModel):
    """A stored comment with its nested replies."""

    id: str
    parent_id: str | None = None
    author: str
    content: str
    status: str
    timestamp: datetime
    likes: int
    dislikes: int
    liked_by: list[str]
    disliked_by: list[str]
    user_id: str | None = None
    user_email: str | None = None
    type: str
    subject: str
    module: str
    content_id: str | None = None
    year: str | None = None
    semester: str | None = None
    branch: str | None = None
    moderation_reason: str | None = None
    replies: list["CommentView"] = []

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentView":
        return cls(
            id=str(comment.id),
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            author=comment.author,
            content=comment.content,
            status=comment.status.value,
            timestamp=comment.created_at,
            likes=comment.likes,
            dislikes=comment.dislikes,
            liked_by=sorted(comment.liked_by),
            disliked_by=sorted(comment.disliked_by),
            user_id=comment.user_id,
            user_email=comment.user_email,
            type=comment.content_type,
            subject=comment.subject,
            module=comment.module,
            content_id=comment.content_id,
            year=comment.year,
            semester=comment.semester,
            branch=comment.branch,
            moderation_reason=comment.moderation_reason,
            replies=[],
        )

    @classmethod
    def from_tree(cls, root: CommentNode) -> "CommentView":
        """Build the nested view of a thread without recursion."""
        views: dict[int, CommentView] = {}
        for node, parent in depth_first(root, lambda n: n.replies):
            view = cls.from_comment(node.comment)
            views[id(node)] = view
            if parent is not None:
                views[id(parent)].replies.append(view)
        return views[id(root)]


class QueueEntry(WireModel):
    """One row of the admin moderation queue."""

    id: str | None
    parent_id: str | None = None
    author: str
    content: str | None
    status: str
    timestamp: Any
    likes: int
    replies: int
    type: str
    subject: str | None
    module: str | None
    topic: str | None = None
    content_id: str | None
    year: str | None = None
    semester: str | None = None
    branch: str | None = None
    path: str | None = None
    embedded: bool

    @classmethod
    def from_flat(cls, entry: FlatComment) -> "QueueEntry":
        timestamp = entry.timestamp
        if isinstance(timestamp, datetime):
            timestamp = timestamp.isoformat()
        return cls(
            id=entry.id,
            parent_id=entry.parent_id,
            author=entry.author or "Anonymous",
            content=entry.content,
            status=entry.status or CommentStatus.PENDING.value,
            timestamp=timestamp,
            likes=entry.likes,
            replies=entry.reply_count,
            type=entry.content_type,
            subject=entry.subject,
            module=entry.module,
            topic=entry.topic,
            content_id=entry.content_id,
            year=entry.year,
            semester=entry.semester,
            branch=entry.branch,
            path=entry.path,
            embedded=entry.embedded,
        )
