"""Repository interfaces for the Ziora domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from ziora.domain.repository.comment import CommentRepository
from ziora.domain.repository.content import ContentRepository
from ziora.domain.repository.user import UserRepository

__all__ = [
    "CommentRepository",
    "ContentRepository",
    "UserRepository",
]
