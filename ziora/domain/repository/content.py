"""Content repository interface."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from ziora.domain.model.content import ContentDocument
from ziora.domain.value import SubjectKey


class ContentRepository(ABC):
    """Repository for subject content documents.

    Each subject key owns one document mapping content types to buckets.
    Writes touch a single bucket and bump the document ``version`` and
    ``updated_at``. When ``expected_version`` is given the write only applies
    if the stored version still matches.
    """

    @abstractmethod
    async def find_document(self, key: SubjectKey) -> Optional[ContentDocument]:
        """Find the document for a subject.

        Args:
            key: Subject key

        Returns:
            The document if any content was ever stored for the subject
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[ContentDocument]:
        """Find every content document."""
        pass

    @abstractmethod
    async def put_bucket(
        self,
        key: SubjectKey,
        content_type: str,
        bucket: dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> Optional[ContentDocument]:
        """Create or replace one bucket, creating the document if needed.

        Args:
            key: Subject key
            content_type: Bucket name within the document
            bucket: Serialized bucket
            expected_version: Version the caller read, or None for
                last-write-wins

        Returns:
            The updated document, or None if ``expected_version`` did not match
        """
        pass

    @abstractmethod
    async def remove_bucket(
        self,
        key: SubjectKey,
        content_type: str,
        expected_version: Optional[int] = None,
    ) -> Optional[ContentDocument]:
        """Remove one bucket, leaving the document's other buckets untouched.

        Args:
            key: Subject key
            content_type: Bucket name within the document
            expected_version: Version the caller read, or None for
                last-write-wins

        Returns:
            The updated document, or None if the document does not exist or
            ``expected_version`` did not match
        """
        pass
