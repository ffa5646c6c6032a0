"""Content routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query

from ziora.application.usecase.content import (
    DeleteContentRequest,
    DeleteContentResponse,
    DeleteContentUseCase,
    GetContentRequest,
    GetContentResponse,
    GetContentUseCase,
    SaveContentRequest,
    SaveContentResponse,
    SaveContentUseCase,
    UploadTopicRequest,
    UploadTopicResponse,
    UploadTopicUseCase,
)

router = APIRouter(prefix="/content", tags=["content"], route_class=DishkaRoute)


@router.get("", response_model=GetContentResponse)
async def get_content(
    get_content_use_case: FromDishka[GetContentUseCase],
    year: str | None = Query(default=None),
    semester: str | None = Query(default=None),
    branch: str | None = Query(default=None),
    subject: str | None = Query(default=None),
    content_type: str | None = Query(default=None, alias="contentType"),
) -> GetContentResponse:
    """Get the content bucket for a subject and content type.

    Returns ``{"modules": []}`` when nothing has been stored yet.

    Args:
        get_content_use_case: Get content use case from DI
        year: Year segment (e.g. "SE")
        semester: Semester number
        branch: Branch segment
        subject: Subject segment
        content_type: Content type (e.g. "notes", "video-lecs")

    Returns:
        The bucket and the version to send back on a guarded write
    """
    return await get_content_use_case.execute(
        GetContentRequest(
            year=year,
            semester=semester,
            branch=branch,
            subject=subject,
            content_type=content_type,
        )
    )


@router.post("", response_model=SaveContentResponse)
async def create_content(
    request: SaveContentRequest,
    save_content_use_case: FromDishka[SaveContentUseCase],
) -> SaveContentResponse:
    """Create or replace the bucket at a content path.

    Include ``version`` from a previous GET to reject the write if someone
    else saved in the meantime (409).
    """
    response = await save_content_use_case.execute(request)
    logfire.info(
        "Content saved via API",
        subject=request.subject,
        content_type=request.content_type,
    )
    return response


@router.put("", response_model=SaveContentResponse)
async def update_content(
    request: SaveContentRequest,
    save_content_use_case: FromDishka[SaveContentUseCase],
) -> SaveContentResponse:
    """Replace the bucket at a content path (same semantics as POST)."""
    return await save_content_use_case.execute(request)


@router.delete("", response_model=DeleteContentResponse)
async def delete_content(
    request: DeleteContentRequest,
    delete_content_use_case: FromDishka[DeleteContentUseCase],
) -> DeleteContentResponse:
    """Remove the bucket at a content path.

    Other content types of the same subject are left untouched.
    """
    return await delete_content_use_case.execute(request)


@router.post("/upload", response_model=UploadTopicResponse)
async def upload_topic(
    request: UploadTopicRequest,
    upload_topic_use_case: FromDishka[UploadTopicUseCase],
) -> UploadTopicResponse:
    """Add a topic to a module, creating the module when it does not exist."""
    return await upload_topic_use_case.execute(request)
