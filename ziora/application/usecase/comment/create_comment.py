"""Create comment use case."""

from ziora.application.usecase.base import WireModel
from ziora.application.usecase.views import CommentView
from ziora.domain.service import CommentService


class CreateCommentRequest(WireModel):
    """Create comment request.

    ``type`` is the content type the comment is attached to; ``content_id``
    is the module or topic ID.
    """

    author: str | None = None
    content: str | None = None
    type: str | None = None
    subject: str | None = None
    module: str | None = None
    content_id: str | None = None
    year: str | None = None
    semester: str | None = None
    branch: str | None = None
    user_id: str | None = None
    user_email: str | None = None


class CreateCommentResponse(WireModel):
    """Create comment response."""

    success: bool = True
    comment: CommentView
    message: str


class CreateCommentUseCase:
    """Use case for posting a top-level comment on a content item."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            The new comment, pending moderation

        Raises:
            MissingFieldError: If author, content, subject, module or type is absent
        """
        comment = await self.comment_service.create_comment(
            author=request.author,
            content=request.content,
            subject=request.subject,
            module=request.module,
            content_type=request.type,
            content_id=request.content_id,
            year=request.year,
            semester=request.semester,
            branch=request.branch,
            user_id=request.user_id,
            user_email=request.user_email,
        )
        return CreateCommentResponse(
            comment=CommentView.from_comment(comment),
            message="Comment saved successfully",
        )
