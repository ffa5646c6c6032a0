"""Get comments use case."""

from ziora.application.usecase.base import WireModel
from ziora.application.usecase.views import CommentView
from ziora.domain.error import ValidationError
from ziora.domain.service import CommentService
from ziora.domain.value import CommentStatus

ALL_STATUSES = "all"


def parse_status_filter(value: str | None, default: str | None) -> CommentStatus | None:
    """Parse a ``status`` query parameter.

    ``all`` disables the filter; an absent value falls back to ``default``.

    Raises:
        ValidationError: If the value is not a known status
    """
    value = value or default
    if value is None or value == ALL_STATUSES:
        return None
    try:
        return CommentStatus(value)
    except ValueError:
        raise ValidationError(f"Invalid status: {value!r}")


class GetCommentsRequest(WireModel):
    """Get comments request."""

    type: str | None = None
    subject: str | None = None
    module: str | None = None
    content_id: str | None = None
    status: str | None = None


class GetCommentsResponse(WireModel):
    """Get comments response."""

    success: bool = True
    comments: list[CommentView]


class GetCommentsUseCase:
    """Use case for listing comment threads on a content item."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Only approved comments are listed unless another status (or ``all``)
        is requested.

        Args:
            request: Get comments request

        Returns:
            Threads, newest first
        """
        status = parse_status_filter(request.status, CommentStatus.APPROVED.value)
        trees = await self.comment_service.list_threads(
            content_type=request.type,
            subject=request.subject,
            module=request.module,
            content_id=request.content_id,
            status=status,
        )
        return GetCommentsResponse(comments=[CommentView.from_tree(t) for t in trees])
