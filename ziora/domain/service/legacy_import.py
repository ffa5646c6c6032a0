"""One-time move of embedded comments into the comment store."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import uuid4

import logfire
import pydantic

from ziora.domain.error import ConflictError
from ziora.domain.model.comment import Comment
from ziora.domain.model.content import (
    ContentBucket,
    ContentDocument,
    LegacyComment,
    Module,
)
from ziora.domain.repository import CommentRepository, ContentRepository
from ziora.domain.value import CommentId, CommentStatus, parse_timestamp

from .base import Service
from .traversal import depth_first

ANONYMOUS_AUTHOR = "Anonymous"
DELETED_CONTENT = "[deleted]"


@dataclass(frozen=True)
class ImportResult:
    """Outcome of a legacy import run."""

    imported: int
    documents: int


def normalize_timestamp(value: object, fallback: datetime) -> datetime:
    """Convert a legacy timestamp to an aware UTC datetime.

    Naive values are read as server local time; unparseable values become
    ``fallback``.
    """
    moment = parse_timestamp(value)
    if moment is None:
        return fallback
    return moment.astimezone(UTC)


def normalize_status(value: str | None) -> CommentStatus:
    try:
        return CommentStatus(value)
    except ValueError:
        return CommentStatus.PENDING


class LegacyCommentImporter(Service):
    """Moves comments embedded in content buckets into the comment store.

    Reply structure and vote sets are preserved. Each bucket is written back
    with empty ``comments`` arrays against the document version that was
    read, and its comments are stored only once that write succeeds, so an
    admin editing the same subject concurrently makes the import fail instead
    of losing either write.
    """

    def __init__(
        self,
        content_repository: ContentRepository,
        comment_repository: CommentRepository,
    ) -> None:
        """Initialize importer.

        Args:
            content_repository: Content repository
            comment_repository: Comment repository
        """
        self.content_repository = content_repository
        self.comment_repository = comment_repository

    async def run(self, now: datetime | None = None) -> ImportResult:
        """Import every embedded comment.

        Args:
            now: Timestamp used for comments whose timestamp cannot be parsed

        Returns:
            Number of comments imported and documents rewritten

        Raises:
            ConflictError: If a document changed while it was being imported
        """
        now = now or datetime.now(UTC)
        with logfire.span("legacy_import.run"):
            imported = 0
            rewritten = 0
            for document in await self.content_repository.find_all():
                count = await self._import_document(document, now)
                if count:
                    imported += count
                    rewritten += 1

            logfire.info(
                "Legacy comments imported", imported=imported, documents=rewritten
            )
            return ImportResult(imported=imported, documents=rewritten)

    async def _import_document(self, document: ContentDocument, now: datetime) -> int:
        version = document.version
        total = 0
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

            comments: list[Comment] = []
            modules: list[Module] = []
            for module in bucket.modules:
                context = {
                    "year": document.year,
                    "semester": document.semester,
                    "branch": document.branch,
                    "subject": document.subject,
                    "module": module.name or module.id,
                    "content_type": content_type,
                }
                for root in module.comments:
                    comments.extend(
                        self.convert(root, now, content_id=module.id, **context)
                    )

                topics = []
                for topic in module.topics:
                    for root in topic.comments:
                        comments.extend(
                            self.convert(root, now, content_id=topic.id, **context)
                        )
                    topics.append(
                        topic.model_copy(update={"comments": []})
                        if topic.comments
                        else topic
                    )

                update: dict = {}
                if any(t.comments for t in module.topics):
                    update["topics"] = topics
                if module.comments:
                    update["comments"] = []
                modules.append(module.model_copy(update=update))

            if not comments:
                continue

            emptied = bucket.model_copy(update={"modules": modules})
            updated = await self.content_repository.put_bucket(
                document.subject_key,
                content_type,
                emptied.to_storage(),
                expected_version=version,
            )
            if updated is None:
                raise ConflictError(
                    f"Content for {document.subject_key} changed during import"
                )
            # Written after the bucket so a lost CAS leaves nothing behind
            await self.comment_repository.save_many(comments)
            version = updated.version
            total += len(comments)

        return total

    @staticmethod
    def convert(root: LegacyComment, now: datetime, **context) -> list[Comment]:
        """Convert an embedded comment tree to stored comments, parents first.

        Args:
            root: Embedded top-level comment
            now: Fallback timestamp
            **context: Content context fields for every converted comment

        Returns:
            Stored comments in depth-first order
        """
        converted: dict[int, Comment] = {}
        ordered = []
        for node, parent in depth_first(root, lambda c: c.replies):
            parent_comment = converted[id(parent)] if parent is not None else None
            comment_id = CommentId(uuid4())

            liked = frozenset(node.liked_by)
            disliked = frozenset(node.disliked_by) - liked
            created = normalize_timestamp(node.timestamp, now)
            author = (node.author or "").strip()[:200] or ANONYMOUS_AUTHOR

            comment = Comment(
                id=comment_id,
                root_id=parent_comment.root_id if parent_comment else comment_id,
                parent_id=parent_comment.id if parent_comment else None,
                depth=parent_comment.depth + 1 if parent_comment else 0,
                author=author,
                content=node.content or DELETED_CONTENT,
                status=normalize_status(node.status),
                likes=len(liked),
                dislikes=len(disliked),
                liked_by=liked,
                disliked_by=disliked,
                user_id=node.user_id,
                created_at=created,
                updated_at=created,
                **context,
            )
            converted[id(node)] = comment
            ordered.append(comment)
        return ordered
