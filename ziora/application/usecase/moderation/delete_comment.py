"""Delete comment use case."""

from ziora.application.usecase.base import WireModel
from ziora.domain.service import CommentService
from ziora.domain.value import parse_comment_id


class DeleteCommentRequest(WireModel):
    """Delete comment request."""

    comment_id: str | None = None


class DeleteCommentResponse(WireModel):
    """Delete comment response."""

    success: bool = True
    message: str
    removed: int


class DeleteCommentUseCase:
    """Use case for hard deleting a comment and its replies."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            MissingFieldError: If the comment ID is absent
            NotFoundError: If the comment does not exist
        """
        comment_id = parse_comment_id(request.comment_id)
        removed = await self.comment_service.delete_comment(comment_id)
        return DeleteCommentResponse(
            message="Comment deleted successfully", removed=removed
        )
