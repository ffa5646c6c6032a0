"""Get content use case."""

from typing import Any

from ziora.application.usecase.base import WireModel
from ziora.domain.service import ContentService
from ziora.domain.value import resolve_path


class GetContentRequest(WireModel):
    """Get content request."""

    year: str | None = None
    semester: str | None = None
    branch: str | None = None
    subject: str | None = None
    content_type: str | None = None


class GetContentResponse(WireModel):
    """Get content response.

    ``version`` is the token to pass back on a guarded write.
    """

    success: bool = True
    content: dict[str, Any]
    version: int


class GetContentUseCase:
    """Use case for reading the bucket stored at a content path."""

    def __init__(self, content_service: ContentService) -> None:
        """Initialize get content use case.

        Args:
            content_service: Content domain service
        """
        self.content_service = content_service

    async def execute(self, request: GetContentRequest) -> GetContentResponse:
        """Execute get content flow.

        Args:
            request: Get content request

        Returns:
            The stored bucket, or ``{"modules": []}`` if nothing is stored

        Raises:
            MissingFieldError: If a path field is absent
            InvalidSegmentError: If a path field is invalid
        """
        path = resolve_path(
            request.year,
            request.semester,
            request.branch,
            request.subject,
            request.content_type,
        )
        stored = await self.content_service.get(path)
        return GetContentResponse(
            content=stored.bucket.to_storage() or {"modules": []},
            version=stored.version,
        )
