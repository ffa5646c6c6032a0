"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query

from ziora.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


@router.post("", response_model=CreateCommentResponse)
async def create_comment(
    request: CreateCommentRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
) -> CreateCommentResponse:
    """Post a comment on a content item.

    New comments are pending and only show up in listings once approved.

    Args:
        request: Comment data (author, content, type, subject, module, ...)
        create_comment_use_case: Create comment use case from DI

    Returns:
        The created comment
    """
    return await create_comment_use_case.execute(request)


@router.get("", response_model=GetCommentsResponse)
async def get_comments(
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    type: str | None = Query(default=None),
    subject: str | None = Query(default=None),
    module: str | None = Query(default=None),
    content_id: str | None = Query(default=None, alias="contentId"),
    status: str | None = Query(default=None),
) -> GetCommentsResponse:
    """List comment threads for a content item, newest first.

    Args:
        get_comments_use_case: Get comments use case from DI
        type: Content type filter
        subject: Subject filter
        module: Module filter
        content_id: Module/topic ID filter
        status: Status filter (default ``approved``, ``all`` for every status)

    Returns:
        Threads with nested replies
    """
    return await get_comments_use_case.execute(
        GetCommentsRequest(
            type=type,
            subject=subject,
            module=module,
            content_id=content_id,
            status=status,
        )
    )


@router.patch("", response_model=UpdateCommentResponse)
async def update_comment(
    request: UpdateCommentRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
) -> UpdateCommentResponse:
    """Like, dislike or reply to a comment.

    Liking twice removes the like; liking a disliked comment moves the vote.

    Args:
        request: ``{commentId, action, userId?, replyData?}``
        update_comment_use_case: Update comment use case from DI

    Returns:
        The voted comment or the new reply
    """
    return await update_comment_use_case.execute(request)
