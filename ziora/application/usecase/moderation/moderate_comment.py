"""Moderate comment use case."""

from ziora.application.usecase.base import BaseUseCase, WireModel
from ziora.application.usecase.views import CommentView
from ziora.domain.error import MissingFieldError, ValidationError
from ziora.domain.service import ModerationService
from ziora.domain.value import ModerationAction, parse_comment_id


class ModerateCommentRequest(WireModel):
    """Moderate comment request."""

    comment_id: str | None = None
    action: str | None = None
    reason: str | None = None


class ModerateCommentResponse(WireModel):
    """Moderate comment response."""

    success: bool = True
    message: str
    comment: CommentView


class ModerateCommentUseCase(BaseUseCase):
    """Use case for approving, rejecting or flagging a comment."""

    def __init__(self, moderation_service: ModerationService) -> None:
        """Initialize moderate comment use case.

        Args:
            moderation_service: Moderation domain service
        """
        self.moderation_service = moderation_service

    async def execute(self, request: ModerateCommentRequest) -> ModerateCommentResponse:
        """Execute moderate comment flow.

        Raises:
            MissingFieldError: If the comment ID or action is absent
            ValidationError: If the action is unknown
            NotFoundError: If the comment does not exist
        """
        if not request.action:
            raise MissingFieldError(["action"])
        comment_id = parse_comment_id(request.comment_id)
        try:
            action = ModerationAction(request.action)
        except ValueError:
            raise ValidationError(f"Invalid action: {request.action!r}")

        comment = await self.moderation_service.moderate(
            comment_id, action, request.reason
        )
        return ModerateCommentResponse(
            message=f"Comment {comment.status.value} successfully",
            comment=CommentView.from_comment(comment),
        )
