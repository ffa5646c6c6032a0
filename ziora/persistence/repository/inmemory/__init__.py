"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .content import InMemoryContentRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryContentRepository",
    "InMemoryUserRepository",
]
