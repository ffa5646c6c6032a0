"""Admin routes: moderation and dashboard.

Every route requires an ``auth_token`` cookie whose JWT carries the admin
role claim.
"""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query

from ziora.application.usecase.dashboard import GetDashboardResponse, GetDashboardUseCase
from ziora.application.usecase.moderation import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    ImportLegacyCommentsResponse,
    ImportLegacyCommentsUseCase,
    ListModerationQueueRequest,
    ListModerationQueueResponse,
    ListModerationQueueUseCase,
    ModerateCommentRequest,
    ModerateCommentResponse,
    ModerateCommentUseCase,
)
from ziora.domain.service import JWTService

router = APIRouter(prefix="/admin", tags=["admin"], route_class=DishkaRoute)


@router.get("/comments", response_model=ListModerationQueueResponse)
async def list_comments(
    list_queue_use_case: FromDishka[ListModerationQueueUseCase],
    jwt_service: FromDishka[JWTService],
    status: str | None = Query(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ListModerationQueueResponse:
    """List the newest comments across the platform for moderation.

    Args:
        list_queue_use_case: Moderation queue use case from DI
        jwt_service: JWT service for token verification (injected)
        status: Optional status filter
        auth_token: JWT token from cookie

    Returns:
        Up to the configured limit of comments, newest first
    """
    jwt_service.require_admin(auth_token)
    return await list_queue_use_case.execute(ListModerationQueueRequest(status=status))


@router.patch("/comments", response_model=ModerateCommentResponse)
async def moderate_comment(
    request: ModerateCommentRequest,
    moderate_comment_use_case: FromDishka[ModerateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ModerateCommentResponse:
    """Approve, reject or flag a comment."""
    admin = jwt_service.require_admin(auth_token)
    response = await moderate_comment_use_case.execute(request)
    logfire.info(
        "Comment moderated by admin",
        admin_id=admin.user_id,
        comment_id=request.comment_id,
        action=request.action,
    )
    return response


@router.delete("/comments", response_model=DeleteCommentResponse)
async def delete_comment(
    request: DeleteCommentRequest,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteCommentResponse:
    """Delete a comment and all of its replies."""
    jwt_service.require_admin(auth_token)
    return await delete_comment_use_case.execute(request)


@router.post("/comments/import-legacy", response_model=ImportLegacyCommentsResponse)
async def import_legacy_comments(
    import_use_case: FromDishka[ImportLegacyCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ImportLegacyCommentsResponse:
    """Move comments embedded in content buckets into the comment store."""
    jwt_service.require_admin(auth_token)
    return await import_use_case.execute()


@router.get("/dashboard", response_model=GetDashboardResponse)
async def get_dashboard(
    dashboard_use_case: FromDishka[GetDashboardUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetDashboardResponse:
    """Platform-wide user and comment statistics."""
    jwt_service.require_admin(auth_token)
    return await dashboard_use_case.execute()
