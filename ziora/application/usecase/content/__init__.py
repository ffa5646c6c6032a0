"""Content use cases."""

from .delete_content import (
    DeleteContentRequest,
    DeleteContentResponse,
    DeleteContentUseCase,
)
from .get_content import GetContentRequest, GetContentResponse, GetContentUseCase
from .save_content import SaveContentRequest, SaveContentResponse, SaveContentUseCase
from .upload_topic import UploadTopicRequest, UploadTopicResponse, UploadTopicUseCase

__all__ = [
    "DeleteContentRequest",
    "DeleteContentResponse",
    "DeleteContentUseCase",
    "GetContentRequest",
    "GetContentResponse",
    "GetContentUseCase",
    "SaveContentRequest",
    "SaveContentResponse",
    "SaveContentUseCase",
    "UploadTopicRequest",
    "UploadTopicResponse",
    "UploadTopicUseCase",
]
