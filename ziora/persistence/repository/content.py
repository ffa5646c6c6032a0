"""PostgreSQL implementation of Content repository."""

from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import Text, and_, bindparam, select, update
from sqlalchemy.dialects.postgresql import JSONB, insert
from sqlalchemy.ext.asyncio import AsyncSession

from ziora.domain.model import ContentDocument
from ziora.domain.repository import ContentRepository
from ziora.domain.value import SubjectKey
from ziora.persistence.mappers import row_to_document
from ziora.persistence.tables import content_documents_table

_UNIQUE_SUBJECT = "uq_content_documents_subject"


def _matches(key: SubjectKey):
    return and_(
        content_documents_table.c.year == key.year,
        content_documents_table.c.semester == key.semester,
        content_documents_table.c.branch == key.branch,
        content_documents_table.c.subject == key.subject,
    )


class PostgresContentRepository(ContentRepository):
    """PostgreSQL implementation of ContentRepository.

    Buckets live in one JSONB column per subject row. Writes merge or remove
    a single top-level key with ``||`` / ``-`` so concurrent writers to
    different content types of the same subject never clobber each other.
    Version checks happen in the UPDATE's WHERE clause.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_document(self, key: SubjectKey) -> Optional[ContentDocument]:
        """Find the document for a subject."""
        stmt = select(content_documents_table).where(_matches(key))
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_document(row._asdict()) if row else None

    async def find_all(self) -> List[ContentDocument]:
        """Find every content document."""
        stmt = select(content_documents_table).order_by(
            content_documents_table.c.created_at
        )
        result = await self.session.execute(stmt)
        return [row_to_document(row._asdict()) for row in result.fetchall()]

    async def put_bucket(
        self,
        key: SubjectKey,
        content_type: str,
        bucket: dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> Optional[ContentDocument]:
        """Create or replace one bucket.

        ``expected_version=0`` means the caller saw no document at all.
        """
        now = datetime.now().astimezone()
        patch = {content_type: bucket}

        if expected_version is None or expected_version == 0:
            stmt = insert(content_documents_table).values(
                year=key.year,
                semester=key.semester,
                branch=key.branch,
                subject=key.subject,
                buckets=patch,
                version=1,
                created_at=now,
                updated_at=now,
            )
            if expected_version is None:
                stmt = stmt.on_conflict_do_update(
                    constraint=_UNIQUE_SUBJECT,
                    set_={
                        "buckets": content_documents_table.c.buckets.op(
                            "||", return_type=JSONB
                        )(stmt.excluded.buckets),
                        "version": content_documents_table.c.version + 1,
                        "updated_at": now,
                    },
                )
            else:
                stmt = stmt.on_conflict_do_nothing(constraint=_UNIQUE_SUBJECT)
        else:
            stmt = (
                update(content_documents_table)
                .where(_matches(key))
                .where(content_documents_table.c.version == expected_version)
                .values(
                    buckets=content_documents_table.c.buckets.op(
                        "||", return_type=JSONB
                    )(bindparam("patch", patch, type_=JSONB)),
                    version=content_documents_table.c.version + 1,
                    updated_at=now,
                )
            )

        result = await self.session.execute(
            stmt.returning(content_documents_table)
        )
        row = result.fetchone()
        if row is None:
            return None

        await self.session.flush()
        return row_to_document(row._asdict())

    async def remove_bucket(
        self,
        key: SubjectKey,
        content_type: str,
        expected_version: Optional[int] = None,
    ) -> Optional[ContentDocument]:
        """Remove one bucket, leaving the other buckets untouched."""
        stmt = (
            update(content_documents_table)
            .where(_matches(key))
            .values(
                buckets=content_documents_table.c.buckets.op("-", return_type=JSONB)(
                    bindparam("content_type", content_type, type_=Text)
                ),
                version=content_documents_table.c.version + 1,
                updated_at=datetime.now().astimezone(),
            )
        )
        if expected_version is not None:
            stmt = stmt.where(content_documents_table.c.version == expected_version)

        result = await self.session.execute(stmt.returning(content_documents_table))
        row = result.fetchone()
        if row is None:
            return None

        await self.session.flush()
        return row_to_document(row._asdict())
