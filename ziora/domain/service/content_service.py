"""Content store domain service."""

import time
from collections import Counter
from dataclasses import dataclass
from typing import Any

import logfire
import pydantic

from ziora.domain.error import ConflictError, NotFoundError, ValidationError
from ziora.domain.model.content import ContentBucket, ContentDocument, Module, Topic
from ziora.domain.repository import ContentRepository
from ziora.domain.value import ContentPath

from .base import Service

# Attempts for read-modify-write cycles before giving up with a conflict
MAX_CAS_ATTEMPTS = 3


@dataclass(frozen=True)
class StoredBucket:
    """A bucket as read from the store, with the version to write back against.

    ``version`` is 0 when nothing has ever been stored for the subject.
    """

    bucket: ContentBucket
    version: int


def _document_version(document: ContentDocument | None) -> int:
    return document.version if document else 0


def _parse_bucket(content: ContentBucket | dict[str, Any]) -> ContentBucket:
    if isinstance(content, ContentBucket):
        return content
    try:
        return ContentBucket.model_validate(content)
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid content: {e.errors()[0]['msg']}") from e


def check_unique_ids(bucket: ContentBucket) -> None:
    """Reject buckets whose module or topic ids collide.

    Raises:
        ConflictError: On a duplicate module id, or a duplicate topic id
            within one module
    """
    module_ids = Counter(m.id for m in bucket.modules)
    duplicates = sorted(i for i, n in module_ids.items() if n > 1)
    if duplicates:
        raise ConflictError(f"Duplicate module ids: {', '.join(duplicates)}")

    for module in bucket.modules:
        topic_ids = Counter(t.id for t in module.topics)
        duplicates = sorted(i for i, n in topic_ids.items() if n > 1)
        if duplicates:
            raise ConflictError(
                f"Duplicate topic ids in module {module.id}: {', '.join(duplicates)}"
            )


class ContentService(Service):
    """Domain service for reading and writing content buckets."""

    def __init__(self, content_repository: ContentRepository) -> None:
        """Initialize content service.

        Args:
            content_repository: Content repository
        """
        self.content_repository = content_repository

    async def get(self, path: ContentPath) -> StoredBucket:
        """Read the bucket at a path.

        A path that was never written reads as an empty bucket.

        Args:
            path: Content path

        Returns:
            The bucket and the version of its subject document
        """
        with logfire.span("content_service.get", path=path.key):
            document = await self.content_repository.find_document(path.subject_key)
            bucket = document.bucket(path.content_type) if document else None
            return StoredBucket(
                bucket=bucket or ContentBucket.empty(),
                version=_document_version(document),
            )

    async def set(
        self,
        path: ContentPath,
        content: ContentBucket | dict[str, Any],
        expected_version: int | None = None,
    ) -> StoredBucket:
        """Create or replace the bucket at a path.

        Without ``expected_version`` the last writer wins. With it, the write
        only applies if the subject document is still at that version.

        Args:
            path: Content path
            content: Bucket to store
            expected_version: Version returned by :meth:`get`, or None

        Returns:
            The stored bucket and the new document version

        Raises:
            ValidationError: If the content is not a valid bucket
            ConflictError: On duplicate ids or a stale version
        """
        bucket = _parse_bucket(content)
        check_unique_ids(bucket)

        with logfire.span(
            "content_service.set",
            path=path.key,
            modules=len(bucket.modules),
            expected_version=expected_version,
        ):
            document = await self.content_repository.put_bucket(
                path.subject_key,
                path.content_type,
                bucket.to_storage(),
                expected_version=expected_version,
            )
            if document is None:
                logfire.warn(
                    "Stale content write rejected",
                    path=path.key,
                    expected_version=expected_version,
                )
                raise ConflictError(
                    f"Content at {path.key} changed since version {expected_version}"
                )

            logfire.info("Content saved", path=path.key, version=document.version)
            return StoredBucket(bucket=bucket, version=document.version)

    async def unset(
        self, path: ContentPath, expected_version: int | None = None
    ) -> int:
        """Remove the bucket at a path.

        Other content types of the same subject are left untouched.

        Args:
            path: Content path
            expected_version: Version returned by :meth:`get`, or None

        Returns:
            The new document version

        Raises:
            NotFoundError: If nothing is stored at the path
            ConflictError: On a stale version
        """
        with logfire.span("content_service.unset", path=path.key):
            document = await self.content_repository.find_document(path.subject_key)
            if document is None or path.content_type not in document.buckets:
                raise NotFoundError("Content", path.key)

            updated = await self.content_repository.remove_bucket(
                path.subject_key,
                path.content_type,
                expected_version=expected_version,
            )
            if updated is None:
                raise ConflictError(
                    f"Content at {path.key} changed since version {expected_version}"
                )

            logfire.info("Content deleted", path=path.key, version=updated.version)
            return updated.version

    async def upsert_topic(
        self,
        path: ContentPath,
        module_id: str | None,
        topic: dict[str, Any],
    ) -> Topic:
        """Add a topic to a module, creating the module if needed.

        When ``module_id`` names an existing module the topic is appended to
        it; otherwise a new module ``Module N`` holding only the topic is
        appended to the bucket. Missing ids are derived from the current time.
        The read-modify-write is retried against the document version so
        concurrent uploads cannot drop each other's topics.

        Args:
            path: Content path
            module_id: Target module ID, or None for a new module
            topic: Topic fields (camelCase or snake_case keys)

        Returns:
            The stored topic

        Raises:
            ConflictError: If the module already has a topic with the same ID,
                or the document kept changing underneath us
        """
        with logfire.span(
            "content_service.upsert_topic", path=path.key, module_id=module_id
        ):
            stamp = int(time.time() * 1000)
            fields = dict(topic)
            if not fields.get("id"):
                fields["id"] = f"topic-{stamp}"
            new_topic = Topic.model_validate(fields)

            for attempt in range(1, MAX_CAS_ATTEMPTS + 1):
                current = await self.get(path)
                bucket = self._with_topic(current.bucket, module_id, new_topic, stamp)

                document = await self.content_repository.put_bucket(
                    path.subject_key,
                    path.content_type,
                    bucket.to_storage(),
                    expected_version=current.version,
                )
                if document is not None:
                    logfire.info(
                        "Topic uploaded",
                        path=path.key,
                        topic_id=new_topic.id,
                        version=document.version,
                    )
                    return new_topic

                logfire.warn(
                    "Concurrent content write, retrying",
                    path=path.key,
                    attempt=attempt,
                )

            raise ConflictError(f"Content at {path.key} is being modified concurrently")

    @staticmethod
    def _with_topic(
        bucket: ContentBucket, module_id: str | None, topic: Topic, stamp: int
    ) -> ContentBucket:
        modules = list(bucket.modules)
        existing = bucket.find_module(module_id) if module_id else None

        if existing is None:
            modules.append(
                Module(
                    id=module_id or f"module-{stamp}",
                    name=f"Module {len(modules) + 1}",
                    topics=[topic],
                )
            )
        else:
            if existing.find_topic(topic.id):
                raise ConflictError(
                    f"Topic {topic.id} already exists in module {existing.id}"
                )
            index = modules.index(existing)
            modules[index] = existing.model_copy(
                update={"topics": [*existing.topics, topic]}
            )

        return bucket.model_copy(update={"modules": modules})
