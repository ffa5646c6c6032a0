"""Admin dashboard use case."""

from ziora.application.usecase.base import WireModel
from ziora.domain.service import TreeAggregator, UserService


class UserStatistics(WireModel):
    total: int
    active: int
    suspended: int
    new_this_week: int


class CommentStatistics(WireModel):
    total: int
    pending: int
    flagged: int
    today: int


class DashboardStatistics(WireModel):
    users: UserStatistics
    comments: CommentStatistics


class GetDashboardResponse(WireModel):
    """Admin dashboard response."""

    success: bool = True
    statistics: DashboardStatistics


class GetDashboardUseCase:
    """Use case for the platform-wide statistics shown on the admin dashboard."""

    def __init__(
        self, user_service: UserService, tree_aggregator: TreeAggregator
    ) -> None:
        """Initialize dashboard use case.

        Args:
            user_service: User domain service
            tree_aggregator: Comment aggregator
        """
        self.user_service = user_service
        self.tree_aggregator = tree_aggregator

    async def execute(self) -> GetDashboardResponse:
        """Execute dashboard flow.

        Returns:
            User and comment statistics
        """
        users = await self.user_service.compute_user_stats()
        comments = await self.tree_aggregator.compute_comment_stats()
        return GetDashboardResponse(
            statistics=DashboardStatistics(
                users=UserStatistics(**users.model_dump()),
                comments=CommentStatistics(**comments.model_dump()),
            )
        )
