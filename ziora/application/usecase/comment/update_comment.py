"""Update comment use case."""

from enum import Enum

from ziora.application.usecase.base import WireModel
from ziora.application.usecase.views import CommentView
from ziora.domain.error import MissingFieldError, ValidationError
from ziora.domain.service import CommentService
from ziora.domain.value import LearnerId, VoteKind, parse_comment_id


class CommentAction(str, Enum):
    """Learner actions on an existing comment."""

    LIKE = "like"
    DISLIKE = "dislike"
    REPLY = "reply"


class ReplyData(WireModel):
    """Reply payload."""

    author: str | None = None
    content: str | None = None
    user_id: str | None = None
    user_email: str | None = None


class UpdateCommentRequest(WireModel):
    """Update comment request."""

    comment_id: str | None = None
    action: str | None = None
    user_id: str | None = None
    reply_data: ReplyData | None = None


class UpdateCommentResponse(WireModel):
    """Update comment response.

    ``comment`` is the voted comment for like/dislike and the new reply for
    reply.
    """

    success: bool = True
    message: str
    comment: CommentView


_PAST_TENSE = {
    CommentAction.LIKE: "liked",
    CommentAction.DISLIKE: "disliked",
    CommentAction.REPLY: "replied to",
}


class UpdateCommentUseCase:
    """Use case for voting on or replying to a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Args:
            request: Update comment request

        Returns:
            Update comment response

        Raises:
            MissingFieldError: If the comment ID, action, user ID (votes) or
                reply data (replies) is absent
            ValidationError: If the action is unknown
            NotFoundError: If the comment does not exist
        """
        fields = {"commentId": request.comment_id, "action": request.action}
        missing = [name for name, value in fields.items() if not value]
        if missing:
            raise MissingFieldError(missing)

        try:
            action = CommentAction(request.action)
        except ValueError:
            raise ValidationError(f"Invalid action: {request.action!r}")
        comment_id = parse_comment_id(request.comment_id)

        if action == CommentAction.REPLY:
            if request.reply_data is None:
                raise MissingFieldError(["replyData"])
            comment = await self.comment_service.reply(
                comment_id,
                author=request.reply_data.author,
                content=request.reply_data.content,
                user_id=request.reply_data.user_id or request.user_id,
                user_email=request.reply_data.user_email,
            )
        else:
            voter = LearnerId(request.user_id) if request.user_id else None
            comment = await self.comment_service.vote(
                comment_id, voter, VoteKind(action.value)
            )

        return UpdateCommentResponse(
            message=f"Comment {_PAST_TENSE[action]} successfully",
            comment=CommentView.from_comment(comment),
        )
