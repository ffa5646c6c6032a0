"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ziora.domain.model.comment import Comment
from ziora.domain.value import CommentId, CommentStatus, LearnerId, VoteKind


class CommentRepository(ABC):
    """Repository for Comment entity.

    Comments are stored flat; threads are reassembled from ``root_id`` and
    ``parent_id``. Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_roots(
        self,
        content_type: Optional[str] = None,
        subject: Optional[str] = None,
        module: Optional[str] = None,
        content_id: Optional[str] = None,
        status: Optional[CommentStatus] = None,
        limit: int = 50,
    ) -> List[Comment]:
        """Find top-level comments matching the given filters, newest first.

        Args:
            content_type: Content type filter (e.g. "notes", "videos")
            subject: Subject filter
            module: Module filter
            content_id: Module/topic ID filter
            status: Status filter (None matches every status)
            limit: Maximum number of comments to return

        Returns:
            Matching top-level comments
        """
        pass

    @abstractmethod
    async def find_thread(self, root_id: CommentId) -> List[Comment]:
        """Find every comment of a thread (root included), oldest first.

        Args:
            root_id: ID of the thread's top-level comment

        Returns:
            All comments sharing the root
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[Comment]:
        """Find every stored comment, oldest first."""
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def save_many(self, comments: List[Comment]) -> None:
        """Insert a batch of new comments (parents before children)."""
        pass

    @abstractmethod
    async def apply_vote(
        self, comment_id: CommentId, user_id: LearnerId, kind: VoteKind
    ) -> Optional[Comment]:
        """Toggle a learner's vote as one atomic update.

        If the learner already cast ``kind`` it is removed. Otherwise it is
        added and any opposite vote by the same learner is removed. Counters
        are recomputed from the voter sets in the same update.

        Args:
            comment_id: Comment to vote on
            user_id: Voting learner
            kind: like or dislike

        Returns:
            The updated comment, or None if it does not exist
        """
        pass

    @abstractmethod
    async def update_status(
        self,
        comment_id: CommentId,
        status: CommentStatus,
        reason: Optional[str] = None,
    ) -> Optional[Comment]:
        """Set a comment's moderation status.

        Args:
            comment_id: Comment ID
            status: New status
            reason: Optional moderator note

        Returns:
            The updated comment, or None if it does not exist
        """
        pass

    @abstractmethod
    async def delete_subtree(self, comment_id: CommentId) -> int:
        """Hard delete a comment and every reply beneath it.

        Args:
            comment_id: The comment ID to delete

        Returns:
            Number of comments removed (0 if the comment did not exist)
        """
        pass
