"""Domain value objects for Ziora."""

from ziora.domain.value.identifiers import (
    AccountId,
    CommentId,
    DocumentId,
    LearnerId,
    parse_comment_id,
)
from ziora.domain.value.path import (
    ContentPath,
    SubjectKey,
    decode_path,
    encode_path,
    resolve_path,
)
from ziora.domain.value.timestamp import is_on_day, local_date, parse_timestamp
from ziora.domain.value.types import (
    CommentStatus,
    ModerationAction,
    UserStatus,
    VoteKind,
)

__all__ = [
    # Identifiers
    "AccountId",
    "CommentId",
    "DocumentId",
    "LearnerId",
    "parse_comment_id",
    # Paths
    "ContentPath",
    "SubjectKey",
    "decode_path",
    "encode_path",
    "resolve_path",
    # Timestamps
    "is_on_day",
    "local_date",
    "parse_timestamp",
    # Types
    "CommentStatus",
    "ModerationAction",
    "UserStatus",
    "VoteKind",
]
