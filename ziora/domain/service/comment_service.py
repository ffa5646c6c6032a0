"""Comment domain service."""

from collections import defaultdict
from datetime import UTC, datetime
from uuid import uuid4

import logfire

from ziora.config import CommentSettings
from ziora.domain.error import MissingFieldError, NotFoundError, ValidationError
from ziora.domain.model.comment import (
    MAX_AUTHOR_LENGTH,
    Comment,
    CommentNode,
    FlatComment,
)
from ziora.domain.repository import CommentRepository
from ziora.domain.value import CommentId, CommentStatus, LearnerId, VoteKind

from .base import Service
from .traversal import depth_first


def _missing(**fields: str | None) -> list[str]:
    return [name for name, value in fields.items() if not value or not value.strip()]


class CommentService(Service):
    """Domain service for comment threads: creation, replies, votes, traversal."""

    def __init__(
        self, comment_repository: CommentRepository, settings: CommentSettings
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            settings: Comment settings (limits)
        """
        self.comment_repository = comment_repository
        self.settings = settings

    def _check_length(self, author: str, content: str) -> None:
        if len(author) > MAX_AUTHOR_LENGTH:
            raise ValidationError(
                f"Author name exceeds {MAX_AUTHOR_LENGTH} characters"
            )
        if len(content) > self.settings.max_content_length:
            raise ValidationError(
                f"Comment exceeds {self.settings.max_content_length} characters"
            )

    async def create_comment(
        self,
        author: str | None,
        content: str | None,
        subject: str | None,
        module: str | None,
        content_type: str | None,
        content_id: str | None = None,
        year: str | None = None,
        semester: str | None = None,
        branch: str | None = None,
        user_id: str | None = None,
        user_email: str | None = None,
    ) -> Comment:
        """Create a top-level comment on a content item.

        The comment always starts ``pending`` with no votes and no replies.

        Raises:
            MissingFieldError: If author, content, subject, module or type is absent
            ValidationError: If the author or content is too long
        """
        missing = _missing(
            author=author,
            content=content,
            subject=subject,
            module=module,
            type=content_type,
        )
        if missing:
            logfire.warn("Comment rejected - missing fields", fields=missing)
            raise MissingFieldError(missing)
        self._check_length(author, content)

        with logfire.span(
            "comment_service.create_comment",
            subject=subject,
            module=module,
            content_type=content_type,
            content_id=content_id,
        ):
            comment_id = CommentId(uuid4())
            now = datetime.now(UTC)
            comment = Comment(
                id=comment_id,
                root_id=comment_id,
                parent_id=None,
                depth=0,
                author=author,
                content=content,
                status=CommentStatus.PENDING,
                year=year,
                semester=semester,
                branch=branch,
                subject=subject,
                module=module,
                content_type=content_type,
                content_id=content_id,
                user_id=user_id,
                user_email=user_email,
                created_at=now,
                updated_at=now,
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                subject=subject,
                content_type=content_type,
            )
            return saved

    async def reply(
        self,
        comment_id: CommentId,
        author: str | None,
        content: str | None,
        user_id: str | None = None,
        user_email: str | None = None,
    ) -> Comment:
        """Append a reply to a comment or to another reply.

        The reply starts ``pending`` and inherits the parent's content context.

        Raises:
            MissingFieldError: If author or content is absent
            NotFoundError: If the target comment does not exist
        """
        missing = _missing(author=author, content=content)
        if missing:
            raise MissingFieldError(missing)
        self._check_length(author, content)

        with logfire.span("comment_service.reply", parent_id=str(comment_id)):
            parent = await self.comment_repository.find_by_id(comment_id)
            if not parent:
                logfire.warn("Reply to non-existent comment", parent_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            now = datetime.now(UTC)
            reply = Comment(
                id=CommentId(uuid4()),
                root_id=parent.root_id,
                parent_id=parent.id,
                depth=parent.depth + 1,
                author=author,
                content=content,
                status=CommentStatus.PENDING,
                year=parent.year,
                semester=parent.semester,
                branch=parent.branch,
                subject=parent.subject,
                module=parent.module,
                content_type=parent.content_type,
                content_id=parent.content_id,
                user_id=user_id,
                user_email=user_email,
                created_at=now,
                updated_at=now,
            )

            saved = await self.comment_repository.save(reply)
            logfire.info(
                "Reply created",
                comment_id=str(saved.id),
                parent_id=str(parent.id),
                depth=saved.depth,
            )
            return saved

    async def vote(
        self, comment_id: CommentId, user_id: LearnerId | None, kind: VoteKind
    ) -> Comment:
        """Toggle a learner's like or dislike.

        A repeated vote of the same kind removes it; a vote of the other kind
        replaces the learner's previous vote. The repository applies the whole
        toggle atomically.

        Raises:
            MissingFieldError: If no user ID is given
            NotFoundError: If the comment does not exist
        """
        if not user_id:
            raise MissingFieldError(["userId"])

        with logfire.span(
            "comment_service.vote",
            comment_id=str(comment_id),
            user_id=user_id,
            kind=kind.value,
        ):
            updated = await self.comment_repository.apply_vote(
                comment_id, user_id, kind
            )
            if updated is None:
                logfire.warn("Vote on non-existent comment", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Vote applied",
                comment_id=str(comment_id),
                likes=updated.likes,
                dislikes=updated.dislikes,
            )
            return updated

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Raises:
            NotFoundError: If the comment does not exist
        """
        comment = await self.comment_repository.find_by_id(comment_id)
        if not comment:
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def get_thread(self, comment_id: CommentId) -> CommentNode:
        """Rebuild the reply tree rooted at a comment.

        Args:
            comment_id: Any comment; the returned tree is rooted at it

        Raises:
            NotFoundError: If the comment does not exist
        """
        comment = await self.get_comment(comment_id)
        thread = await self.comment_repository.find_thread(comment.root_id)
        index = self._index_children(thread)
        return self._assemble(comment, index)

    async def list_threads(
        self,
        content_type: str | None = None,
        subject: str | None = None,
        module: str | None = None,
        content_id: str | None = None,
        status: CommentStatus | None = CommentStatus.APPROVED,
    ) -> list[CommentNode]:
        """List top-level comments with their replies, newest first.

        Replies are filtered by the same ``status`` as their roots; a reply
        that does not match hides its whole subtree.

        Args:
            content_type: Content type filter
            subject: Subject filter
            module: Module filter
            content_id: Module/topic ID filter
            status: Status filter, None for every status

        Returns:
            Comment trees
        """
        with logfire.span(
            "comment_service.list_threads",
            content_type=content_type,
            subject=subject,
            content_id=content_id,
            status=status.value if status else "all",
        ):
            roots = await self.comment_repository.find_roots(
                content_type=content_type,
                subject=subject,
                module=module,
                content_id=content_id,
                status=status,
                limit=self.settings.page_size,
            )

            trees = []
            for root in roots:
                thread = await self.comment_repository.find_thread(root.root_id)
                if status is not None:
                    thread = [c for c in thread if c.status == status]
                trees.append(self._assemble(root, self._index_children(thread)))

            logfire.info("Comment threads listed", count=len(trees))
            return trees

    async def delete_comment(self, comment_id: CommentId) -> int:
        """Hard delete a comment and its reply subtree, whatever its status.

        Returns:
            Number of comments removed

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span("comment_service.delete_comment", comment_id=str(comment_id)):
            removed = await self.comment_repository.delete_subtree(comment_id)
            if removed == 0:
                logfire.warn("Delete of non-existent comment", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))
            logfire.info("Comment deleted", comment_id=str(comment_id), removed=removed)
            return removed

    @staticmethod
    def _index_children(comments: list[Comment]) -> dict[CommentId, list[Comment]]:
        children: dict[CommentId, list[Comment]] = defaultdict(list)
        for comment in sorted(comments, key=lambda c: c.created_at):
            if comment.parent_id is not None:
                children[comment.parent_id].append(comment)
        return children

    @staticmethod
    def _assemble(
        root: Comment, children: dict[CommentId, list[Comment]]
    ) -> CommentNode:
        root_node = CommentNode(comment=root)
        nodes = {root.id: root_node}
        # Pre-order guarantees a parent node exists before its children
        for comment, parent in depth_first(root, lambda c: children.get(c.id, [])):
            if parent is None:
                continue
            node = CommentNode(comment=comment)
            nodes[comment.id] = node
            nodes[parent.id].replies.append(node)
        return root_node

    @classmethod
    def build_forest(cls, comments: list[Comment]) -> list[CommentNode]:
        """Rebuild every thread from a flat list of comments.

        Comments whose parent is missing from the list are treated as roots.

        Args:
            comments: Flat comments, any order

        Returns:
            One tree per root, oldest root first
        """
        known = {c.id for c in comments}
        children = cls._index_children(comments)
        roots = sorted(
            (c for c in comments if c.parent_id is None or c.parent_id not in known),
            key=lambda c: c.created_at,
        )
        return [cls._assemble(root, children) for root in roots]

    @staticmethod
    def flatten(root: CommentNode) -> list[FlatComment]:
        """Enumerate a comment tree depth-first, root included.

        Every node appears exactly once, in pre-order, tagged with the content
        context of the comment.

        Args:
            root: Tree to flatten

        Returns:
            Flat entries, root first
        """
        flat = []
        for node, parent in depth_first(root, lambda n: n.replies):
            comment = node.comment
            flat.append(
                FlatComment(
                    id=str(comment.id),
                    parent_id=str(parent.comment.id) if parent else None,
                    author=comment.author,
                    content=comment.content,
                    status=comment.status.value,
                    timestamp=comment.created_at,
                    likes=comment.likes,
                    reply_count=len(node.replies),
                    content_type=comment.content_type,
                    subject=comment.subject,
                    module=comment.module,
                    content_id=comment.content_id,
                    year=comment.year,
                    semester=comment.semester,
                    branch=comment.branch,
                )
            )
        return flat
