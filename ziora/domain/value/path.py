"""Composite content paths.

A content bucket is addressed by ``(year, semester, branch, subject,
content_type)``. The storage key joins the segments with dots and prefixes the
semester with ``sem-`` so ``SE.sem-3.computer.dbms.notes`` can never be
confused with a branch or subject that happens to be numeric.
"""

import re

from pydantic import ConfigDict, model_validator

from ziora.domain.error import (
    InvalidSegmentError,
    MissingFieldError,
    ValidationError,
)
from ziora.domain.value.common import ValueObject

SEPARATOR = "."
SEMESTER_PREFIX = "sem-"
SEGMENT_PATTERN = re.compile(r"^[A-Za-z0-9-]{1,100}$")


def validate_segment(name: str, value: str) -> str:
    """Check a single path segment.

    Args:
        name: Segment name used in the error message
        value: Segment value

    Returns:
        The value, unchanged

    Raises:
        InvalidSegmentError: If empty, too long or not alphanumeric/hyphen
    """
    if not isinstance(value, str) or not SEGMENT_PATTERN.match(value):
        raise InvalidSegmentError(name, str(value))
    return value


class SubjectKey(ValueObject):
    """The ``(year, semester, branch, subject)`` prefix of a content path.

    Each subject key names one independently versioned storage document.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    year: str
    semester: str
    branch: str
    subject: str

    @model_validator(mode="after")
    def check_segments(self) -> "SubjectKey":
        for name in ("year", "semester", "branch", "subject"):
            validate_segment(name, getattr(self, name))
        return self

    def __str__(self) -> str:
        return SEPARATOR.join(
            [self.year, f"{SEMESTER_PREFIX}{self.semester}", self.branch, self.subject]
        )


class ContentPath(ValueObject):
    """Address of one content bucket."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    year: str
    semester: str
    branch: str
    subject: str
    content_type: str

    @model_validator(mode="after")
    def check_segments(self) -> "ContentPath":
        for name in ("year", "semester", "branch", "subject", "content_type"):
            validate_segment(name, getattr(self, name))
        return self

    @property
    def subject_key(self) -> SubjectKey:
        return SubjectKey(
            year=self.year,
            semester=self.semester,
            branch=self.branch,
            subject=self.subject,
        )

    @property
    def key(self) -> str:
        return encode_path(self)

    def __str__(self) -> str:
        return self.key


def encode_path(path: ContentPath) -> str:
    """Encode a content path as its dotted storage key.

    Args:
        path: Content path

    Returns:
        Key such as ``SE.sem-3.computer.dbms.video-lecs``
    """
    return SEPARATOR.join([str(path.subject_key), path.content_type])


def decode_path(key: str) -> ContentPath:
    """Decode a dotted storage key back into a content path.

    Args:
        key: Key produced by :func:`encode_path`

    Returns:
        The content path

    Raises:
        ValidationError: If the key does not have five segments or lacks the
            semester prefix
        InvalidSegmentError: If a segment is invalid
    """
    parts = key.split(SEPARATOR)
    if len(parts) != 5:
        raise ValidationError(f"Content key must have 5 segments: {key!r}")

    year, semester, branch, subject, content_type = parts
    if not semester.startswith(SEMESTER_PREFIX):
        raise ValidationError(f"Semester segment must start with 'sem-': {key!r}")

    return ContentPath(
        year=year,
        semester=semester[len(SEMESTER_PREFIX) :],
        branch=branch,
        subject=subject,
        content_type=content_type,
    )


def resolve_path(
    year: str | None,
    semester: str | None,
    branch: str | None,
    subject: str | None,
    content_type: str | None,
) -> ContentPath:
    """Build a content path from request fields.

    Raises:
        MissingFieldError: If any field is empty
        InvalidSegmentError: If a segment is invalid
    """
    fields = {
        "year": year,
        "semester": semester,
        "branch": branch,
        "subject": subject,
        "contentType": content_type,
    }
    missing = [name for name, value in fields.items() if value in (None, "")]
    if missing:
        raise MissingFieldError(missing)
    return ContentPath(
        year=year,
        semester=semester,
        branch=branch,
        subject=subject,
        content_type=content_type,
    )
