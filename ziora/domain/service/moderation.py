"""Comment moderation."""

import logfire

from ziora.domain.error import InvalidTransitionError, NotFoundError
from ziora.domain.model.comment import Comment
from ziora.domain.repository import CommentRepository
from ziora.domain.value import CommentId, CommentStatus, ModerationAction

from .base import Service


class ModerationStateMachine:
    """Table-driven moderation lifecycle.

    Every comment starts ``pending``. No status is terminal: an admin can
    approve, reject or flag a comment whatever its current status, so a
    rejected comment can later be approved and vice versa.
    """

    INITIAL = CommentStatus.PENDING

    TRANSITIONS: dict[tuple[CommentStatus, ModerationAction], CommentStatus] = {
        (state, action): target
        for state in CommentStatus
        for action, target in (
            (ModerationAction.APPROVE, CommentStatus.APPROVED),
            (ModerationAction.REJECT, CommentStatus.REJECTED),
            (ModerationAction.FLAG, CommentStatus.FLAGGED),
        )
    }

    @classmethod
    def transition(
        cls, current: CommentStatus, action: ModerationAction
    ) -> CommentStatus:
        """Resolve the status an action leads to.

        Raises:
            InvalidTransitionError: If the pair is not in the table
        """
        target = cls.TRANSITIONS.get((current, action))
        if target is None:
            raise InvalidTransitionError(current.value, action.value)
        return target

    @classmethod
    def reachable_from(cls, current: CommentStatus) -> set[CommentStatus]:
        """Statuses reachable in one step from ``current``."""
        return {
            target for (state, _), target in cls.TRANSITIONS.items() if state == current
        }


class ModerationService(Service):
    """Domain service for admin moderation of stored comments."""

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize moderation service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    async def moderate(
        self,
        comment_id: CommentId,
        action: ModerationAction,
        reason: str | None = None,
    ) -> Comment:
        """Apply a moderation action to a comment.

        Args:
            comment_id: Comment to moderate
            action: approve, reject or flag
            reason: Optional moderator note stored with the comment

        Returns:
            The updated comment

        Raises:
            NotFoundError: If the comment does not exist
            InvalidTransitionError: If the action is not legal from its status
        """
        with logfire.span(
            "moderation_service.moderate",
            comment_id=str(comment_id),
            action=action.value,
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                raise NotFoundError("Comment", str(comment_id))

            status = ModerationStateMachine.transition(comment.status, action)
            updated = await self.comment_repository.update_status(
                comment_id, status, reason
            )
            if updated is None:
                # Deleted between the read and the update
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment moderated",
                comment_id=str(comment_id),
                previous=comment.status.value,
                status=status.value,
            )
            return updated
