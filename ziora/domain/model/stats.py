"""Dashboard statistics."""

from ziora.domain.model.common import DomainModel


class CommentStats(DomainModel):
    """Comment rollup across the whole content tree."""

    total: int = 0
    pending: int = 0
    flagged: int = 0
    today: int = 0


class UserStats(DomainModel):
    """Account rollup."""

    total: int = 0
    active: int = 0
    suspended: int = 0
    new_this_week: int = 0
