"""User repository interface."""

from abc import ABC, abstractmethod
from typing import List

from ziora.domain.model.user import User


class UserRepository(ABC):
    """Repository for learner accounts.

    Accounts are owned by the signup flow; this service reads them for the
    dashboard and writes them only when seeding.
    """

    @abstractmethod
    async def find_all(self) -> List[User]:
        """Find every account."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        pass
