"""Unit tests for TreeAggregator."""

from datetime import UTC, date, datetime

import pytest

from ziora.domain.repository import CommentRepository, ContentRepository
from ziora.domain.service import TreeAggregator
from ziora.domain.service.aggregator import vote_count
from ziora.domain.value import CommentStatus, SubjectKey
from tests.factory import make_comment
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

DBMS = SubjectKey(year="SE", semester="3", branch="computer", subject="dbms")

LEGACY_BUCKET = {
    "modules": [
        {
            "id": "module-1",
            "name": "Module 1",
            "comments": [
                {
                    "id": "m-c1",
                    "author": "Ravi",
                    "content": "Module-level question",
                    "timestamp": "21/06/2025, 00:46:48",
                    "likes": {"$numberInt": "2"},
                }
            ],
            "topics": [
                {
                    "id": "topic-1",
                    "title": "Normalization",
                    "comments": [
                        {
                            "id": "t-c1",
                            "author": "Asha",
                            "content": "Nice",
                            "status": "approved",
                            "timestamp": "2025-06-22T08:00:00.000",
                            "likes": 3,
                            "replies": [
                                {
                                    "id": "t-c1-r1",
                                    "content": "Agreed",
                                    "status": "flagged",
                                    "timestamp": "garbage",
                                }
                            ],
                        }
                    ],
                }
            ],
        }
    ]
}


class TestVoteCount:
    """Tests for legacy vote counter parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [(3, 3), ("4", 4), ({"$numberInt": "5"}, 5), (None, 0), ("x", 0), (-2, 0)],
    )
    def test_reads_known_shapes(self, value, expected):
        """Numbers, numeric strings and wrapped ints are all counted."""
        # Act & Assert
        assert vote_count(value) == expected


class TestCollectComments:
    """Tests for collect_comments."""

    @pytest.mark.asyncio
    async def test_flattens_embedded_comments_in_tree_order(self, unit_env):
        """Module comments come before topic comments; replies follow parents."""
        # Arrange
        aggregator = await unit_env.get(TreeAggregator)
        content_repo = await unit_env.get(ContentRepository)
        await content_repo.put_bucket(DBMS, "video-lecs", LEGACY_BUCKET)

        # Act
        collected = await aggregator.collect_comments()

        # Assert
        assert [c.id for c in collected] == ["m-c1", "t-c1", "t-c1-r1"]
        assert all(c.embedded for c in collected)
        reply = collected[2]
        assert reply.parent_id == "t-c1"
        assert reply.topic == "Normalization"
        assert reply.semester == "sem-3"
        assert reply.path == "SE/sem-3/computer/dbms/video-lecs/modules"
        assert collected[0].likes == 2
        assert collected[0].topic is None

    @pytest.mark.asyncio
    async def test_stored_threads_attached_to_their_item(self, unit_env):
        """Stored threads follow the embedded comments of the item they target."""
        # Arrange
        aggregator = await unit_env.get(TreeAggregator)
        content_repo = await unit_env.get(ContentRepository)
        comment_repo = await unit_env.get(CommentRepository)
        await content_repo.put_bucket(DBMS, "video-lecs", LEGACY_BUCKET)
        root = await comment_repo.save(make_comment(content_id="topic-1"))
        reply = await comment_repo.save(make_comment(parent=root))

        # Act
        collected = await aggregator.collect_comments()

        # Assert
        ids = [c.id for c in collected]
        assert ids == ["m-c1", "t-c1", "t-c1-r1", str(root.id), str(reply.id)]
        assert collected[3].topic == "Normalization"
        assert collected[3].path == "SE/sem-3/computer/dbms/video-lecs/modules"
        assert not collected[3].embedded

    @pytest.mark.asyncio
    async def test_orphan_threads_appended(self, unit_env):
        """Stored threads with no matching content item are still collected."""
        # Arrange
        aggregator = await unit_env.get(TreeAggregator)
        comment_repo = await unit_env.get(CommentRepository)
        orphan = await comment_repo.save(make_comment(content_id="gone"))

        # Act
        collected = await aggregator.collect_comments()

        # Assert
        assert [c.id for c in collected] == [str(orphan.id)]
        assert collected[0].path is None

    @pytest.mark.asyncio
    async def test_malformed_bucket_skipped(self, unit_env):
        """A bucket that does not parse is skipped, others are still read."""
        # Arrange
        aggregator = await unit_env.get(TreeAggregator)
        content_repo = await unit_env.get(ContentRepository)
        await content_repo.put_bucket(DBMS, "notes", {"modules": "oops"})
        await content_repo.put_bucket(DBMS, "video-lecs", LEGACY_BUCKET)

        # Act
        collected = await aggregator.collect_comments()

        # Assert
        assert len(collected) == 3


class TestCommentStats:
    """Tests for compute_comment_stats."""

    @pytest.mark.asyncio
    async def test_counts_across_both_sources(self, unit_env):
        """Counts include embedded and stored comments exactly once each."""
        # Arrange
        aggregator = await unit_env.get(TreeAggregator)
        content_repo = await unit_env.get(ContentRepository)
        comment_repo = await unit_env.get(CommentRepository)
        await content_repo.put_bucket(DBMS, "video-lecs", LEGACY_BUCKET)
        await comment_repo.save(
            make_comment(
                status=CommentStatus.PENDING,
                created_at=datetime(2025, 6, 22, 9, 0).astimezone(UTC),
            )
        )

        # Act
        stats = await aggregator.compute_comment_stats(today=date(2025, 6, 22))

        # Assert
        assert stats.total == 4
        # No status (m-c1) counts as pending, plus the stored pending comment
        assert stats.pending == 2
        assert stats.flagged == 1
        # Unparseable timestamp (t-c1-r1) is never counted for a day
        assert stats.today == 2

    @pytest.mark.asyncio
    async def test_null_lists_read_as_empty(self, unit_env):
        """Null replies, voter lists and comment arrays count as absent."""
        # Arrange
        aggregator = await unit_env.get(TreeAggregator)
        content_repo = await unit_env.get(ContentRepository)
        bucket = {
            "modules": [
                {
                    "id": "module-1",
                    "comments": None,
                    "topics": [
                        {
                            "id": "topic-1",
                            "comments": [
                                {"id": "a", "content": "One", "replies": None},
                                {
                                    "id": "b",
                                    "content": "Two",
                                    "status": "flagged",
                                    "likedBy": None,
                                    "dislikedBy": None,
                                },
                            ],
                        },
                        {"id": "topic-2", "comments": None},
                    ],
                }
            ]
        }
        await content_repo.put_bucket(DBMS, "notes", bucket)

        # Act
        stats = await aggregator.compute_comment_stats(today=date(2025, 6, 22))

        # Assert
        assert stats.total == 2
        assert stats.pending == 1
        assert stats.flagged == 1


class TestModerationQueue:
    """Tests for moderation_queue."""

    @pytest.mark.asyncio
    async def test_newest_first_with_limit(self, unit_env):
        """Entries are sorted newest first across timestamp formats."""
        # Arrange
        aggregator = await unit_env.get(TreeAggregator)
        content_repo = await unit_env.get(ContentRepository)
        comment_repo = await unit_env.get(CommentRepository)
        await content_repo.put_bucket(DBMS, "video-lecs", LEGACY_BUCKET)
        stored = await comment_repo.save(
            make_comment(created_at=datetime(2025, 7, 1, tzinfo=UTC))
        )

        # Act
        queue = await aggregator.moderation_queue(limit=2)

        # Assert
        assert [e.id for e in queue] == [str(stored.id), "t-c1"]

    @pytest.mark.asyncio
    async def test_status_filter_treats_missing_as_pending(self, unit_env):
        """Filtering on pending includes embedded comments without a status."""
        # Arrange
        aggregator = await unit_env.get(TreeAggregator)
        content_repo = await unit_env.get(ContentRepository)
        await content_repo.put_bucket(DBMS, "video-lecs", LEGACY_BUCKET)

        # Act
        queue = await aggregator.moderation_queue(status=CommentStatus.PENDING)

        # Assert
        assert [e.id for e in queue] == ["m-c1"]
