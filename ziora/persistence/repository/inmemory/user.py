"""In-memory user repository for testing."""

from ziora.domain.model.user import User
from ziora.domain.repository.user import UserRepository
from ziora.domain.value import AccountId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[AccountId, User] = {}

    async def find_all(self) -> list[User]:
        """Find every account."""
        return sorted(self._users.values(), key=lambda u: u.created_at)

    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        self._users[user.id] = user
        return user
