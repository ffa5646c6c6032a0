"""Platform-wide comment aggregation for the admin dashboard.

Comments live in two places: threads in the comment store, and legacy trees
embedded on modules and topics of older content buckets. The aggregator walks
every content document, bucket, module and topic, flattens the embedded trees
and the stored threads attached to each item, then appends stored threads no
content item claimed, so every comment is counted exactly once.
"""

from collections import defaultdict
from datetime import date, datetime
from typing import Any, Iterator

import logfire
import pydantic

from ziora.domain.model.comment import CommentNode, FlatComment
from ziora.domain.model.content import ContentBucket, LegacyComment
from ziora.domain.model.stats import CommentStats
from ziora.domain.repository import CommentRepository, ContentRepository
from ziora.domain.value import CommentStatus, is_on_day, local_date, parse_timestamp
from ziora.domain.value.path import SEMESTER_PREFIX

from .base import Service
from .comment_service import CommentService
from .traversal import depth_first


def vote_count(value: Any) -> int:
    """Read a legacy vote counter.

    Older records store plain numbers, numeric strings or ``{"$numberInt": "3"}``.
    """
    if isinstance(value, dict):
        value = value.get("$numberInt", 0)
    try:
        return max(int(value or 0), 0)
    except (TypeError, ValueError):
        return 0


def is_pending(status: str | None) -> bool:
    return status is None or status == CommentStatus.PENDING.value


def _sort_key(entry: FlatComment) -> float:
    moment = parse_timestamp(entry.timestamp)
    if moment is None:
        return float("-inf")
    # Naive values are local time; timestamp() reads them as such
    return moment.timestamp()


class TreeAggregator(Service):
    """Read-only walk over the content store and the comment store."""

    def __init__(
        self,
        content_repository: ContentRepository,
        comment_repository: CommentRepository,
    ) -> None:
        """Initialize aggregator.

        Args:
            content_repository: Content repository
            comment_repository: Comment repository
        """
        self.content_repository = content_repository
        self.comment_repository = comment_repository

    async def collect_comments(self) -> list[FlatComment]:
        """Flatten every comment on the platform with its path context.

        Returns:
            Embedded and stored comments in content-tree order, followed by
            stored threads not attached to any stored content item
        """
        with logfire.span("tree_aggregator.collect_comments"):
            documents = await self.content_repository.find_all()
            stored = await self.comment_repository.find_all()

            # Threads are claimed by the first content item they match
            threads: dict[tuple[str, str | None], list[CommentNode]] = defaultdict(list)
            for tree in CommentService.build_forest(stored):
                root = tree.comment
                threads[(root.subject, root.content_id)].append(tree)

            collected: list[FlatComment] = []
            for document in sorted(documents, key=lambda d: d.created_at):
                for content_type, raw in document.buckets.items():
                    try:
                        bucket = ContentBucket.model_validate(raw)
                    except pydantic.ValidationError as e:
                        logfire.warn(
                            "Skipping malformed content bucket",
                            subject=str(document.subject_key),
                            content_type=content_type,
                            error=str(e),
                        )
                        continue

                    context = {
                        "year": document.year,
                        "semester": f"{SEMESTER_PREFIX}{document.semester}",
                        "branch": document.branch,
                        "subject": document.subject,
                        "content_type": content_type,
                        "path": "/".join(
                            [
                                document.year,
                                f"{SEMESTER_PREFIX}{document.semester}",
                                document.branch,
                                document.subject,
                                content_type,
                                "modules",
                            ]
                        ),
                    }
                    for module in bucket.modules:
                        items = [(module.id, None, module.comments)]
                        items += [(t.id, t.title, t.comments) for t in module.topics]
                        for content_id, topic, embedded in items:
                            for comment in embedded:
                                collected.extend(
                                    self._flatten_legacy(
                                        comment,
                                        module=module.name,
                                        topic=topic,
                                        content_id=content_id,
                                        **context,
                                    )
                                )
                            for tree in threads.pop((document.subject, content_id), []):
                                collected.extend(
                                    self._tag(CommentService.flatten(tree), topic, context)
                                )

            for trees in threads.values():
                for tree in trees:
                    collected.extend(CommentService.flatten(tree))

            logfire.info(
                "Comments collected",
                documents=len(documents),
                stored=len(stored),
                total=len(collected),
            )
            return collected

    async def compute_comment_stats(self, today: date | None = None) -> CommentStats:
        """Count comments for the dashboard.

        Args:
            today: Local calendar day for the ``today`` count (defaults to now)

        Returns:
            Totals; comments without a status count as pending, and comments
            with an unparseable timestamp count towards the total only
        """
        day = today or local_date(datetime.now().astimezone())
        with logfire.span("tree_aggregator.compute_comment_stats", day=day.isoformat()):
            comments = await self.collect_comments()

            return CommentStats(
                total=len(comments),
                pending=sum(1 for c in comments if is_pending(c.status)),
                flagged=sum(
                    1 for c in comments if c.status == CommentStatus.FLAGGED.value
                ),
                today=sum(1 for c in comments if is_on_day(c.timestamp, day)),
            )

    async def moderation_queue(
        self, status: CommentStatus | None = None, limit: int = 100
    ) -> list[FlatComment]:
        """Newest comments across the platform for the admin queue.

        Args:
            status: Only return comments in this status (absent counts as pending)
            limit: Maximum number of entries

        Returns:
            Flat comments, newest first
        """
        with logfire.span(
            "tree_aggregator.moderation_queue",
            status=status.value if status else "all",
            limit=limit,
        ):
            comments = await self.collect_comments()
            if status is not None:
                comments = [
                    c
                    for c in comments
                    if (c.status or CommentStatus.PENDING.value) == status.value
                ]
            comments.sort(key=_sort_key, reverse=True)
            return comments[:limit]

    @staticmethod
    def _flatten_legacy(
        root: LegacyComment, content_type: str, **context: Any
    ) -> Iterator[FlatComment]:
        for comment, parent in depth_first(root, lambda c: c.replies):
            yield FlatComment(
                id=comment.id,
                parent_id=parent.id if parent else None,
                author=comment.author,
                content=comment.content,
                status=comment.status,
                timestamp=comment.timestamp,
                likes=vote_count(comment.likes),
                reply_count=len(comment.replies),
                content_type=content_type,
                embedded=True,
                **context,
            )

    @staticmethod
    def _tag(
        entries: list[FlatComment], topic: str | None, context: dict[str, Any]
    ) -> list[FlatComment]:
        for entry in entries:
            entry.topic = topic
            entry.path = context["path"]
        return entries
