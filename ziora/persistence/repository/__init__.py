"""PostgreSQL repository implementations."""

from ziora.persistence.repository.comment import PostgresCommentRepository
from ziora.persistence.repository.content import PostgresContentRepository
from ziora.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresContentRepository",
    "PostgresUserRepository",
]
