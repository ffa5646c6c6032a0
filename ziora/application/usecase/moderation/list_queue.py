"""Moderation queue use case."""

from ziora.application.usecase.base import WireModel
from ziora.application.usecase.comment.get_comments import parse_status_filter
from ziora.application.usecase.views import QueueEntry
from ziora.config import CommentSettings
from ziora.domain.service import TreeAggregator


class ListModerationQueueRequest(WireModel):
    """Moderation queue request."""

    status: str | None = None


class ListModerationQueueResponse(WireModel):
    """Moderation queue response."""

    success: bool = True
    comments: list[QueueEntry]


class ListModerationQueueUseCase:
    """Use case for listing the newest comments across the whole platform."""

    def __init__(
        self, tree_aggregator: TreeAggregator, settings: CommentSettings
    ) -> None:
        """Initialize moderation queue use case.

        Args:
            tree_aggregator: Comment aggregator
            settings: Comment settings (queue limit)
        """
        self.tree_aggregator = tree_aggregator
        self.settings = settings

    async def execute(
        self, request: ListModerationQueueRequest
    ) -> ListModerationQueueResponse:
        """Execute moderation queue flow.

        Args:
            request: Optional status filter (``all`` or absent for every status)

        Returns:
            Embedded and stored comments, newest first
        """
        status = parse_status_filter(request.status, default=None)
        entries = await self.tree_aggregator.moderation_queue(
            status=status, limit=self.settings.moderation_queue_limit
        )
        return ListModerationQueueResponse(
            comments=[QueueEntry.from_flat(e) for e in entries]
        )
