"""Domain enumerations for Ziora."""

from enum import Enum


class CommentStatus(str, Enum):
    """Moderation status of a comment."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    FLAGGED = "flagged"


class ModerationAction(str, Enum):
    """Admin actions that move a comment between statuses."""

    APPROVE = "approve"
    REJECT = "reject"
    FLAG = "flag"


class VoteKind(str, Enum):
    """Learner vote on a comment."""

    LIKE = "like"
    DISLIKE = "dislike"


class UserStatus(str, Enum):
    """Account status."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    DELETED = "deleted"
