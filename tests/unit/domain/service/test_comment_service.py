"""Unit tests for CommentService."""

import asyncio
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from ziora.domain.error import MissingFieldError, NotFoundError, ValidationError
from ziora.domain.repository import CommentRepository
from ziora.domain.service import CommentService
from ziora.domain.value import CommentId, CommentStatus, LearnerId, VoteKind
from tests.factory import make_comment
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateComment:
    """Tests for create_comment and reply."""

    @pytest.mark.asyncio
    async def test_new_comment_is_pending_root(self, unit_env):
        """A new comment starts pending, at depth 0, as its own thread root."""
        # Arrange
        comment_service = await unit_env.get(CommentService)

        # Act
        comment = await comment_service.create_comment(
            author="Asha",
            content="What is BCNF?",
            subject="dbms",
            module="Module 1",
            content_type="video-lecs",
            content_id="topic-1",
        )

        # Assert
        assert comment.status == CommentStatus.PENDING
        assert comment.depth == 0
        assert comment.root_id == comment.id
        assert comment.likes == comment.dislikes == 0

    @pytest.mark.asyncio
    async def test_missing_fields_listed(self, unit_env):
        """Every absent required field should be named in the error."""
        # Arrange
        comment_service = await unit_env.get(CommentService)

        # Act
        with pytest.raises(MissingFieldError) as exc_info:
            await comment_service.create_comment(
                author="  ",
                content="Hi",
                subject="dbms",
                module=None,
                content_type="",
            )

        # Assert
        assert exc_info.value.fields == ["author", "module", "type"]

    @pytest.mark.asyncio
    async def test_overlong_content_rejected(self, unit_env):
        """Content beyond the configured limit should be rejected."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        too_long = "x" * (comment_service.settings.max_content_length + 1)

        # Act & Assert
        with pytest.raises(ValidationError):
            await comment_service.create_comment(
                author="Asha",
                content=too_long,
                subject="dbms",
                module="Module 1",
                content_type="notes",
            )

    @pytest.mark.asyncio
    async def test_overlong_author_rejected(self, unit_env):
        """An author name longer than the stored column is a validation error."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        root = await comment_service.create_comment(
            author="Asha",
            content="Question",
            subject="dbms",
            module="Module 1",
            content_type="notes",
        )

        # Act & Assert
        with pytest.raises(ValidationError):
            await comment_service.create_comment(
                author="A" * 201,
                content="Hi",
                subject="dbms",
                module="Module 1",
                content_type="notes",
            )
        with pytest.raises(ValidationError):
            await comment_service.reply(root.id, author="A" * 201, content="Hi")

    @pytest.mark.asyncio
    async def test_reply_inherits_context_and_root(self, unit_env):
        """A reply to a reply keeps the thread root and increments depth."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        root = await comment_service.create_comment(
            author="Asha",
            content="Question",
            subject="dbms",
            module="Module 1",
            content_type="video-lecs",
            content_id="topic-1",
            year="SE",
        )
        first = await comment_service.reply(root.id, author="Ravi", content="Answer")

        # Act
        second = await comment_service.reply(first.id, author="Asha", content="Thanks")

        # Assert
        assert second.parent_id == first.id
        assert second.root_id == root.id
        assert second.depth == 2
        assert second.status == CommentStatus.PENDING
        assert (second.subject, second.content_id, second.year) == (
            "dbms",
            "topic-1",
            "SE",
        )

    @pytest.mark.asyncio
    async def test_reply_to_missing_comment(self, unit_env):
        """Replying to an unknown comment should fail."""
        # Arrange
        comment_service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await comment_service.reply(
                CommentId(uuid4()), author="Ravi", content="Hello?"
            )


class TestVote:
    """Tests for vote toggling."""

    @pytest.mark.asyncio
    async def test_like_twice_removes_like(self, unit_env):
        """Liking a comment twice should leave it without the like."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment())
        learner = LearnerId("learner-1")

        # Act
        liked = await comment_service.vote(comment.id, learner, VoteKind.LIKE)
        unliked = await comment_service.vote(comment.id, learner, VoteKind.LIKE)

        # Assert
        assert liked.likes == 1
        assert liked.liked_by == {"learner-1"}
        assert unliked.likes == 0
        assert unliked.liked_by == frozenset()

    @pytest.mark.asyncio
    async def test_dislike_moves_existing_like(self, unit_env):
        """Disliking a liked comment should move the learner's vote."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment())
        learner = LearnerId("learner-1")
        await comment_service.vote(comment.id, learner, VoteKind.LIKE)

        # Act
        result = await comment_service.vote(comment.id, learner, VoteKind.DISLIKE)

        # Assert
        assert result.likes == 0
        assert result.dislikes == 1
        assert "learner-1" not in result.liked_by
        assert result.disliked_by == {"learner-1"}

    @pytest.mark.asyncio
    async def test_counters_track_voter_sets(self, unit_env):
        """Counters should equal the number of distinct voters."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment())

        # Act
        for learner in ("a", "b", "c"):
            await comment_service.vote(comment.id, LearnerId(learner), VoteKind.LIKE)
        result = await comment_service.vote(comment.id, LearnerId("d"), VoteKind.DISLIKE)

        # Assert
        assert result.likes == 3
        assert result.dislikes == 1

    @pytest.mark.asyncio
    async def test_vote_without_user_id(self, unit_env):
        """A vote must name the learner."""
        # Arrange
        comment_service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(MissingFieldError):
            await comment_service.vote(CommentId(uuid4()), None, VoteKind.LIKE)

    @pytest.mark.asyncio
    async def test_vote_on_missing_comment(self, unit_env):
        """Voting on an unknown comment should fail."""
        # Arrange
        comment_service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await comment_service.vote(
                CommentId(uuid4()), LearnerId("learner-1"), VoteKind.LIKE
            )

    @pytest.mark.asyncio
    async def test_concurrent_votes_by_one_learner(self, unit_env):
        """Interleaved likes and dislikes leave the learner in at most one set."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment())
        learner = LearnerId("learner-1")
        kinds = [VoteKind.LIKE, VoteKind.DISLIKE] * 4 + [VoteKind.LIKE]

        # Act
        await asyncio.gather(
            *(comment_service.vote(comment.id, learner, kind) for kind in kinds)
        )

        # Assert
        result = await comment_service.get_comment(comment.id)
        assert not result.liked_by & result.disliked_by
        assert result.likes == len(result.liked_by)
        assert result.dislikes == len(result.disliked_by)
        assert result.likes + result.dislikes <= 1

    @pytest.mark.asyncio
    async def test_concurrent_votes_by_many_learners(self, unit_env):
        """No concurrent vote is lost and counters match the voter sets."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment())
        learners = [LearnerId(f"learner-{i}") for i in range(25)]
        votes = [(learner, VoteKind.LIKE) for learner in learners]
        votes += [(learner, VoteKind.DISLIKE) for learner in learners[:10]]

        # Act
        await asyncio.gather(
            *(comment_service.vote(comment.id, who, kind) for who, kind in votes)
        )

        # Assert
        result = await comment_service.get_comment(comment.id)
        assert not result.liked_by & result.disliked_by
        assert result.liked_by | result.disliked_by == set(learners)
        assert result.likes == len(result.liked_by)
        assert result.dislikes == len(result.disliked_by)
        assert result.likes + result.dislikes == 25


class TestThreads:
    """Tests for thread listing, traversal and deletion."""

    @pytest.mark.asyncio
    async def test_list_threads_hides_unapproved(self, unit_env):
        """Only approved roots and replies are listed by default."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        root = await comment_repo.save(make_comment())
        approved = await comment_repo.save(make_comment(parent=root))
        pending = await comment_repo.save(
            make_comment(parent=root, status=CommentStatus.PENDING)
        )
        await comment_repo.save(make_comment(parent=pending))
        await comment_repo.save(make_comment(status=CommentStatus.REJECTED))

        # Act
        threads = await comment_service.list_threads(
            content_type="video-lecs", subject="dbms", content_id="topic-1"
        )

        # Assert
        assert len(threads) == 1
        assert threads[0].comment.id == root.id
        assert [r.comment.id for r in threads[0].replies] == [approved.id]

    @pytest.mark.asyncio
    async def test_list_threads_newest_first(self, unit_env):
        """Threads are ordered by their root's creation time, newest first."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        now = datetime.now(UTC)
        older = await comment_repo.save(make_comment(created_at=now - timedelta(hours=1)))
        newer = await comment_repo.save(make_comment(created_at=now))

        # Act
        threads = await comment_service.list_threads(status=None)

        # Assert
        assert [t.comment.id for t in threads] == [newer.id, older.id]

    @pytest.mark.asyncio
    async def test_flatten_is_preorder_with_reply_counts(self, unit_env):
        """Flattening visits each comment once, parents before children."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        now = datetime.now(UTC)
        root = await comment_repo.save(make_comment(created_at=now))
        a = await comment_repo.save(
            make_comment(parent=root, created_at=now + timedelta(seconds=1))
        )
        b = await comment_repo.save(
            make_comment(parent=root, created_at=now + timedelta(seconds=2))
        )
        a1 = await comment_repo.save(
            make_comment(parent=a, created_at=now + timedelta(seconds=3))
        )

        # Act
        tree = await comment_service.get_thread(root.id)
        flat = CommentService.flatten(tree)

        # Assert
        assert [f.id for f in flat] == [str(c.id) for c in (root, a, a1, b)]
        assert [f.reply_count for f in flat] == [2, 1, 0, 0]
        assert flat[2].parent_id == str(a.id)

    def test_build_forest_promotes_orphans(self):
        """A reply whose parent is gone is treated as a root."""
        # Arrange
        root = make_comment()
        orphan = make_comment(parent=make_comment())

        # Act
        forest = CommentService.build_forest([root, orphan])

        # Assert
        assert {t.comment.id for t in forest} == {root.id, orphan.id}

    @pytest.mark.asyncio
    async def test_delete_removes_subtree(self, unit_env):
        """Deleting a comment removes all its descendants and nothing else."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        root = await comment_repo.save(make_comment())
        child = await comment_repo.save(make_comment(parent=root))
        await comment_repo.save(make_comment(parent=child))
        sibling = await comment_repo.save(make_comment(parent=root))

        # Act
        removed = await comment_service.delete_comment(child.id)

        # Assert
        assert removed == 2
        remaining = {c.id for c in await comment_repo.find_all()}
        assert remaining == {root.id, sibling.id}

    @pytest.mark.asyncio
    async def test_delete_missing_comment(self, unit_env):
        """Deleting an unknown comment should fail."""
        # Arrange
        comment_service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await comment_service.delete_comment(CommentId(uuid4()))
