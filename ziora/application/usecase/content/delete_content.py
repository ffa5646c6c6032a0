"""Delete content use case."""

from ziora.application.usecase.base import WireModel
from ziora.domain.service import ContentService
from ziora.domain.value import resolve_path


class DeleteContentRequest(WireModel):
    """Delete content request."""

    year: str | None = None
    semester: str | None = None
    branch: str | None = None
    subject: str | None = None
    content_type: str | None = None
    version: int | None = None


class DeleteContentResponse(WireModel):
    """Delete content response."""

    success: bool = True
    message: str
    version: int


class DeleteContentUseCase:
    """Use case for removing the bucket at a content path."""

    def __init__(self, content_service: ContentService) -> None:
        """Initialize delete content use case.

        Args:
            content_service: Content domain service
        """
        self.content_service = content_service

    async def execute(self, request: DeleteContentRequest) -> DeleteContentResponse:
        """Execute delete content flow.

        Raises:
            NotFoundError: If nothing is stored at the path
            ConflictError: On a stale version
        """
        path = resolve_path(
            request.year,
            request.semester,
            request.branch,
            request.subject,
            request.content_type,
        )
        version = await self.content_service.unset(
            path, expected_version=request.version
        )
        return DeleteContentResponse(
            message="Content deleted successfully", version=version
        )
