"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    Text,
    any_,
    case,
    cast,
    delete,
    desc,
    func,
    literal,
    select,
    update,
)
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.ext.asyncio import AsyncSession

from ziora.domain.model import Comment
from ziora.domain.repository import CommentRepository
from ziora.domain.value import CommentId, CommentStatus, LearnerId, VoteKind
from ziora.persistence.mappers import comment_to_dict, row_to_comment
from ziora.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_roots(
        self,
        content_type: Optional[str] = None,
        subject: Optional[str] = None,
        module: Optional[str] = None,
        content_id: Optional[str] = None,
        status: Optional[CommentStatus] = None,
        limit: int = 50,
    ) -> List[Comment]:
        """Find top-level comments matching the filters, newest first."""
        stmt = select(comments_table).where(comments_table.c.parent_id.is_(None))

        if content_type:
            stmt = stmt.where(comments_table.c.content_type == content_type)
        if subject:
            stmt = stmt.where(comments_table.c.subject == subject)
        if module:
            stmt = stmt.where(comments_table.c.module == module)
        if content_id:
            stmt = stmt.where(comments_table.c.content_id == content_id)
        if status is not None:
            stmt = stmt.where(comments_table.c.status == status.value)

        stmt = stmt.order_by(desc(comments_table.c.created_at)).limit(limit)

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_thread(self, root_id: CommentId) -> List[Comment]:
        """Find every comment of a thread, oldest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.root_id == root_id)
            .order_by(comments_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_all(self) -> List[Comment]:
        """Find every stored comment, oldest first."""
        stmt = select(comments_table).order_by(comments_table.c.created_at)
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        existing = await self.find_by_id(comment.id)
        comment_dict = comment_to_dict(comment)

        if existing:
            stmt = (
                comments_table.update()
                .where(comments_table.c.id == comment.id)
                .values(**comment_dict)
            )
        else:
            stmt = comments_table.insert().values(**comment_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def save_many(self, comments: List[Comment]) -> None:
        """Insert a batch of new comments (parents before children)."""
        if not comments:
            return
        # Insert row by row so each parent exists before its replies reference it
        for comment in comments:
            await self.session.execute(
                comments_table.insert().values(**comment_to_dict(comment))
            )
        await self.session.flush()

    async def apply_vote(
        self, comment_id: CommentId, user_id: LearnerId, kind: VoteKind
    ) -> Optional[Comment]:
        """Toggle a vote in a single UPDATE ... RETURNING.

        Every SET expression reads the pre-update row, so the toggle, the
        removal of the opposite vote and both counters are computed from one
        consistent snapshot under the row lock.
        """
        voter = literal(user_id, Text)
        if kind == VoteKind.LIKE:
            same, other = comments_table.c.liked_by, comments_table.c.disliked_by
        else:
            same, other = comments_table.c.disliked_by, comments_table.c.liked_by

        toggled = cast(
            case(
                (voter == any_(same), func.array_remove(same, voter)),
                else_=func.array_append(same, voter),
            ),
            ARRAY(Text),
        )
        cleared = func.array_remove(other, voter, type_=ARRAY(Text))

        if kind == VoteKind.LIKE:
            liked_by, disliked_by = toggled, cleared
        else:
            liked_by, disliked_by = cleared, toggled

        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(
                liked_by=liked_by,
                disliked_by=disliked_by,
                # cardinality() of an empty array is 0, unlike array_length()
                likes=func.cardinality(liked_by),
                dislikes=func.cardinality(disliked_by),
                updated_at=datetime.now().astimezone(),
            )
            .returning(comments_table)
        )

        result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            return None

        await self.session.flush()
        return row_to_comment(row._asdict())

    async def update_status(
        self,
        comment_id: CommentId,
        status: CommentStatus,
        reason: Optional[str] = None,
    ) -> Optional[Comment]:
        """Set a comment's moderation status."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(
                status=status.value,
                moderation_reason=reason,
                updated_at=datetime.now().astimezone(),
            )
            .returning(comments_table)
        )

        result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            return None

        await self.session.flush()
        return row_to_comment(row._asdict())

    async def delete_subtree(self, comment_id: CommentId) -> int:
        """Hard delete a comment and every reply beneath it."""
        subtree = (
            select(comments_table.c.id)
            .where(comments_table.c.id == comment_id)
            .cte("subtree", recursive=True)
        )
        subtree = subtree.union_all(
            select(comments_table.c.id).where(
                comments_table.c.parent_id == subtree.c.id
            )
        )

        stmt = (
            delete(comments_table)
            .where(comments_table.c.id.in_(select(subtree.c.id)))
            .returning(comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        removed = len(result.fetchall())
        await self.session.flush()
        return removed
