"""Content tree entities.

A bucket holds the modules stored for one content type of one subject
(``{"modules": [...]}``). Buckets travel and are stored with camelCase keys
(``videoUrl``, ``pdfUrl``) and keep any extra keys they were given, so what
is written is exactly what is read back.

Older content embeds comments directly on modules and topics; those are
modelled by :class:`LegacyComment` and are read by the aggregator and the
legacy import.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ziora.domain.model.common import DomainModel
from ziora.domain.value import DocumentId, SubjectKey

_content_config = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    extra="allow",
    coerce_numbers_to_str=True,
)


def _none_as_empty(value: Any) -> Any:
    """Legacy records store absent lists as null."""
    return [] if value is None else value


class LegacyComment(BaseModel):
    """A comment embedded in a content bucket.

    Every field is optional: legacy records may lack ``status`` (read as
    pending) and carry timestamps as ISO or ``DD/MM/YYYY, HH:MM:SS`` strings.
    """

    model_config = _content_config

    id: Optional[str] = None
    author: Optional[str] = None
    content: Optional[str] = None
    status: Optional[str] = None
    user_id: Optional[str] = None
    likes: Any = None
    dislikes: Any = None
    liked_by: list[str] = Field(default_factory=list)
    disliked_by: list[str] = Field(default_factory=list)
    timestamp: Any = None
    replies: list["LegacyComment"] = Field(default_factory=list)

    @field_validator("liked_by", "disliked_by", "replies", mode="before")
    @classmethod
    def absent_lists(cls, value: Any) -> Any:
        return _none_as_empty(value)


class Topic(BaseModel):
    """A single video lecture, note or question set inside a module."""

    model_config = _content_config

    id: str
    title: Optional[str] = None
    video_url: Optional[str] = None
    pdf_url: Optional[str] = None
    notes: Optional[str] = None
    comments: list[LegacyComment] = Field(default_factory=list)

    @field_validator("comments", mode="before")
    @classmethod
    def absent_comments(cls, value: Any) -> Any:
        return _none_as_empty(value)


class Module(BaseModel):
    """A named group of topics."""

    model_config = _content_config

    id: str
    name: Optional[str] = None
    topics: list[Topic] = Field(default_factory=list)
    comments: list[LegacyComment] = Field(default_factory=list)

    @field_validator("topics", "comments", mode="before")
    @classmethod
    def absent_lists(cls, value: Any) -> Any:
        return _none_as_empty(value)

    def find_topic(self, topic_id: str) -> Topic | None:
        return next((t for t in self.topics if t.id == topic_id), None)


class ContentBucket(BaseModel):
    """The ``{modules: [...]}`` structure stored at one content path."""

    model_config = _content_config

    modules: list[Module] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "ContentBucket":
        return cls(modules=[])

    def find_module(self, module_id: str) -> Module | None:
        return next((m for m in self.modules if m.id == module_id), None)

    def to_storage(self) -> dict[str, Any]:
        """Serialize with wire keys, omitting fields the caller never set."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class ContentDocument(DomainModel):
    """Storage unit holding every content bucket of one subject.

    ``version`` increases on every write and is the compare-and-swap token
    for callers that need protection against concurrent editors.
    """

    id: DocumentId
    year: str
    semester: str
    branch: str
    subject: str
    buckets: dict[str, dict[str, Any]] = Field(default_factory=dict)
    version: int = Field(default=1, ge=1)
    created_at: datetime
    updated_at: datetime

    @property
    def subject_key(self) -> SubjectKey:
        return SubjectKey(
            year=self.year,
            semester=self.semester,
            branch=self.branch,
            subject=self.subject,
        )

    def bucket(self, content_type: str) -> ContentBucket | None:
        raw = self.buckets.get(content_type)
        if raw is None:
            return None
        return ContentBucket.model_validate(raw)
