"""Upload topic use case."""

from datetime import UTC, datetime
from typing import Any

from ziora.application.usecase.base import BaseUseCase, WireModel
from ziora.domain.service import ContentService
from ziora.domain.value import resolve_path

DEFAULT_TITLE = "New Video Topic"
DEFAULT_NOTES = "Video description here"
DEFAULT_VIDEO_URL = "https://www.youtube.com/embed/dQw4w9WgXcQ"
DEFAULT_DURATION = "15:30"


class UploadTopicRequest(WireModel):
    """Upload topic request."""

    year: str | None = None
    semester: str | None = None
    branch: str | None = None
    subject: str | None = None
    content_type: str | None = None
    module_id: str | None = None
    topic_id: str | None = None
    title: str | None = None
    description: str | None = None
    video_url: str | None = None
    pdf_url: str | None = None


class UploadTopicResponse(WireModel):
    """Upload topic response."""

    success: bool = True
    message: str
    topic: dict[str, Any]


class UploadTopicUseCase(BaseUseCase):
    """Use case for adding a single topic to a module of a content bucket."""

    def __init__(self, content_service: ContentService) -> None:
        """Initialize upload topic use case.

        Args:
            content_service: Content domain service
        """
        self.content_service = content_service

    async def execute(self, request: UploadTopicRequest) -> UploadTopicResponse:
        """Execute upload topic flow.

        Unset fields fall back to placeholder values the editor replaces later.

        Args:
            request: Upload topic request

        Returns:
            The stored topic

        Raises:
            MissingFieldError: If a path field is absent
            ConflictError: If the module already has a topic with this ID
        """
        path = resolve_path(
            request.year,
            request.semester,
            request.branch,
            request.subject,
            request.content_type,
        )

        fields: dict[str, Any] = {
            "id": request.topic_id,
            "title": request.title or DEFAULT_TITLE,
            "videoUrl": request.video_url or DEFAULT_VIDEO_URL,
            "notes": request.description or DEFAULT_NOTES,
            "duration": DEFAULT_DURATION,
            "uploadedAt": datetime.now(UTC).isoformat(),
        }
        if request.pdf_url:
            fields["pdfUrl"] = request.pdf_url

        topic = await self.content_service.upsert_topic(path, request.module_id, fields)
        return UploadTopicResponse(
            message="Video content uploaded successfully",
            topic=topic.model_dump(mode="json", by_alias=True, exclude_unset=True),
        )
