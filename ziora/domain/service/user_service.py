"""User domain service."""

from datetime import UTC, datetime, timedelta

import logfire

from ziora.domain.model import UserStats
from ziora.domain.repository import UserRepository
from ziora.domain.value import UserStatus

NEW_USER_WINDOW = timedelta(days=7)


class UserService:
    """Domain service for user operations."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def compute_user_stats(self, now: datetime | None = None) -> UserStats:
        """Count accounts for the admin dashboard.

        Args:
            now: Reference time for the new-this-week window (defaults to now)

        Returns:
            Total, active (neither suspended nor deleted), suspended and
            created within the last seven days
        """
        now = now or datetime.now(UTC)
        with logfire.span("user_service.compute_user_stats"):
            users = await self.user_repository.find_all()
            cutoff = now - NEW_USER_WINDOW

            stats = UserStats(
                total=len(users),
                active=sum(
                    1
                    for u in users
                    if u.status not in (UserStatus.SUSPENDED, UserStatus.DELETED)
                ),
                suspended=sum(1 for u in users if u.status == UserStatus.SUSPENDED),
                new_this_week=sum(1 for u in users if u.created_at > cutoff),
            )
            logfire.info("User stats computed", total=stats.total, active=stats.active)
            return stats
