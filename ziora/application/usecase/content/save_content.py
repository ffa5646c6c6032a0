"""Save content use case."""

from typing import Any

from ziora.application.usecase.base import WireModel
from ziora.domain.error import MissingFieldError
from ziora.domain.service import ContentService
from ziora.domain.value import resolve_path


class SaveContentRequest(WireModel):
    """Save content request."""

    year: str | None = None
    semester: str | None = None
    branch: str | None = None
    subject: str | None = None
    content_type: str | None = None
    content: dict[str, Any] | None = None
    version: int | None = None


class SaveContentResponse(WireModel):
    """Save content response."""

    success: bool = True
    message: str
    version: int


class SaveContentUseCase:
    """Use case for creating or replacing the bucket at a content path."""

    def __init__(self, content_service: ContentService) -> None:
        """Initialize save content use case.

        Args:
            content_service: Content domain service
        """
        self.content_service = content_service

    async def execute(self, request: SaveContentRequest) -> SaveContentResponse:
        """Execute save content flow.

        Args:
            request: Save content request; ``version`` turns the write into a
                compare-and-swap

        Returns:
            Save content response with the new version

        Raises:
            MissingFieldError: If a path field or the content is absent
            ConflictError: On duplicate ids or a stale version
        """
        path = resolve_path(
            request.year,
            request.semester,
            request.branch,
            request.subject,
            request.content_type,
        )
        if request.content is None:
            raise MissingFieldError(["content"])

        stored = await self.content_service.set(
            path, request.content, expected_version=request.version
        )
        return SaveContentResponse(
            message="Content saved successfully", version=stored.version
        )
