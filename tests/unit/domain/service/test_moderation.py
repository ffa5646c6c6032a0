"""Unit tests for comment moderation."""

from uuid import uuid4

import pytest

from ziora.domain.error import NotFoundError
from ziora.domain.repository import CommentRepository
from ziora.domain.service import ModerationService, ModerationStateMachine
from ziora.domain.value import CommentId, CommentStatus, ModerationAction
from tests.factory import make_comment
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestModerationStateMachine:
    """Tests for the moderation transition table."""

    def test_initial_status_is_pending(self):
        """New comments start pending."""
        # Act & Assert
        assert ModerationStateMachine.INITIAL == CommentStatus.PENDING

    @pytest.mark.parametrize("current", list(CommentStatus))
    def test_every_status_reaches_every_outcome(self, current):
        """No status is terminal: approve, reject and flag apply from anywhere."""
        # Act
        reachable = ModerationStateMachine.reachable_from(current)

        # Assert
        assert reachable == {
            CommentStatus.APPROVED,
            CommentStatus.REJECTED,
            CommentStatus.FLAGGED,
        }

    def test_rejected_can_be_approved(self):
        """A rejected comment can later be approved."""
        # Act
        status = ModerationStateMachine.transition(
            CommentStatus.REJECTED, ModerationAction.APPROVE
        )

        # Assert
        assert status == CommentStatus.APPROVED


class TestModerationService:
    """Tests for ModerationService.moderate."""

    @pytest.mark.asyncio
    async def test_approve_pending_comment(self, unit_env):
        """Approving sets the status and stores the reason."""
        # Arrange
        moderation_service = await unit_env.get(ModerationService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment(status=CommentStatus.PENDING))

        # Act
        updated = await moderation_service.moderate(
            comment.id, ModerationAction.APPROVE, reason="On topic"
        )

        # Assert
        assert updated.status == CommentStatus.APPROVED
        assert updated.moderation_reason == "On topic"
        stored = await comment_repo.find_by_id(comment.id)
        assert stored.status == CommentStatus.APPROVED

    @pytest.mark.asyncio
    async def test_flag_keeps_votes(self, unit_env):
        """Moderation only touches the status."""
        # Arrange
        moderation_service = await unit_env.get(ModerationService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(
            make_comment(likes=1, liked_by=frozenset({"learner-1"}))
        )

        # Act
        updated = await moderation_service.moderate(comment.id, ModerationAction.FLAG)

        # Assert
        assert updated.status == CommentStatus.FLAGGED
        assert updated.liked_by == {"learner-1"}

    @pytest.mark.asyncio
    async def test_moderate_missing_comment(self, unit_env):
        """Moderating an unknown comment should fail."""
        # Arrange
        moderation_service = await unit_env.get(ModerationService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await moderation_service.moderate(
                CommentId(uuid4()), ModerationAction.REJECT
            )
