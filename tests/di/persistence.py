"""Mock persistence providers for testing."""

from dishka import Scope, provide

from ziora.domain.repository import (
    CommentRepository,
    ContentRepository,
    UserRepository,
)
from ziora.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryContentRepository,
    InMemoryUserRepository,
)
from ziora.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so state written by one request is visible to the next
    within a test. Every test builds its own container, so tests stay
    isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_content_repository(self) -> ContentRepository:
        """Provide in-memory content repository."""
        return InMemoryContentRepository()

    @provide(scope=Scope.APP)
    def get_comment_repository(self) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository()
