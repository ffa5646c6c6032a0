"""In-memory content repository for testing."""

import copy
from datetime import UTC, datetime
from typing import Any, Optional
from uuid import uuid4

from ziora.domain.model.content import ContentDocument
from ziora.domain.repository.content import ContentRepository
from ziora.domain.value import DocumentId, SubjectKey


class InMemoryContentRepository(ContentRepository):
    """In-memory implementation of ContentRepository for testing.

    Buckets are deep-copied on the way in so callers cannot mutate stored
    state through a dict they still hold.
    """

    def __init__(self) -> None:
        self._documents: dict[str, ContentDocument] = {}

    async def find_document(self, key: SubjectKey) -> Optional[ContentDocument]:
        """Find the document for a subject."""
        return self._documents.get(str(key))

    async def find_all(self) -> list[ContentDocument]:
        """Find every content document."""
        return sorted(self._documents.values(), key=lambda d: d.created_at)

    async def put_bucket(
        self,
        key: SubjectKey,
        content_type: str,
        bucket: dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> Optional[ContentDocument]:
        """Create or replace one bucket."""
        existing = self._documents.get(str(key))
        current_version = existing.version if existing else 0
        if expected_version is not None and expected_version != current_version:
            return None

        now = datetime.now(UTC)
        if existing is None:
            document = ContentDocument(
                id=DocumentId(uuid4()),
                year=key.year,
                semester=key.semester,
                branch=key.branch,
                subject=key.subject,
                buckets={content_type: copy.deepcopy(bucket)},
                version=1,
                created_at=now,
                updated_at=now,
            )
        else:
            document = existing.model_copy(
                update={
                    "buckets": {**existing.buckets, content_type: copy.deepcopy(bucket)},
                    "version": existing.version + 1,
                    "updated_at": now,
                }
            )

        self._documents[str(key)] = document
        return document

    async def remove_bucket(
        self,
        key: SubjectKey,
        content_type: str,
        expected_version: Optional[int] = None,
    ) -> Optional[ContentDocument]:
        """Remove one bucket, leaving the other buckets untouched."""
        existing = self._documents.get(str(key))
        if existing is None:
            return None
        if expected_version is not None and expected_version != existing.version:
            return None

        document = existing.model_copy(
            update={
                "buckets": {
                    k: v for k, v in existing.buckets.items() if k != content_type
                },
                "version": existing.version + 1,
                "updated_at": datetime.now(UTC),
            }
        )
        self._documents[str(key)] = document
        return document
