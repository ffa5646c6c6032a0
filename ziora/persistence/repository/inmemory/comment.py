"""In-memory comment repository for testing."""

from datetime import UTC, datetime
from typing import Optional

from ziora.domain.model.comment import Comment
from ziora.domain.repository.comment import CommentRepository
from ziora.domain.value import CommentId, CommentStatus, LearnerId, VoteKind


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Methods that read and then write never await in between, so each one is
    atomic with respect to other coroutines on the event loop.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_roots(
        self,
        content_type: Optional[str] = None,
        subject: Optional[str] = None,
        module: Optional[str] = None,
        content_id: Optional[str] = None,
        status: Optional[CommentStatus] = None,
        limit: int = 50,
    ) -> list[Comment]:
        """Find top-level comments matching the filters, newest first."""
        comments = [c for c in self._comments.values() if c.parent_id is None]

        if content_type:
            comments = [c for c in comments if c.content_type == content_type]
        if subject:
            comments = [c for c in comments if c.subject == subject]
        if module:
            comments = [c for c in comments if c.module == module]
        if content_id:
            comments = [c for c in comments if c.content_id == content_id]
        if status is not None:
            comments = [c for c in comments if c.status == status]

        comments.sort(key=lambda c: c.created_at, reverse=True)
        return comments[:limit]

    async def find_thread(self, root_id: CommentId) -> list[Comment]:
        """Find every comment of a thread, oldest first."""
        thread = [c for c in self._comments.values() if c.root_id == root_id]
        thread.sort(key=lambda c: c.created_at)
        return thread

    async def find_all(self) -> list[Comment]:
        """Find every stored comment, oldest first."""
        return sorted(self._comments.values(), key=lambda c: c.created_at)

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        self._comments[comment.id] = comment
        return comment

    async def save_many(self, comments: list[Comment]) -> None:
        """Insert a batch of new comments."""
        for comment in comments:
            self._comments[comment.id] = comment

    async def apply_vote(
        self, comment_id: CommentId, user_id: LearnerId, kind: VoteKind
    ) -> Optional[Comment]:
        """Toggle a learner's vote."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None

        liked, disliked = set(comment.liked_by), set(comment.disliked_by)
        same, other = (liked, disliked) if kind == VoteKind.LIKE else (disliked, liked)
        if user_id in same:
            same.discard(user_id)
        else:
            same.add(user_id)
            other.discard(user_id)

        updated = comment.model_copy(
            update={
                "liked_by": frozenset(liked),
                "disliked_by": frozenset(disliked),
                "likes": len(liked),
                "dislikes": len(disliked),
                "updated_at": datetime.now(UTC),
            }
        )
        self._comments[comment_id] = updated
        return updated

    async def update_status(
        self,
        comment_id: CommentId,
        status: CommentStatus,
        reason: Optional[str] = None,
    ) -> Optional[Comment]:
        """Set a comment's moderation status."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None

        updated = comment.model_copy(
            update={
                "status": status,
                "moderation_reason": reason,
                "updated_at": datetime.now(UTC),
            }
        )
        self._comments[comment_id] = updated
        return updated

    async def delete_subtree(self, comment_id: CommentId) -> int:
        """Hard delete a comment and every reply beneath it."""
        if comment_id not in self._comments:
            return 0

        doomed = {comment_id}
        frontier = [comment_id]
        while frontier:
            parent = frontier.pop()
            children = [c.id for c in self._comments.values() if c.parent_id == parent]
            doomed.update(children)
            frontier.extend(children)

        for doomed_id in doomed:
            del self._comments[doomed_id]
        return len(doomed)
