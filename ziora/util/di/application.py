"""Application layer DI providers."""

from dishka import Scope, provide

from ziora.application.usecase.comment import (
    CreateCommentUseCase,
    GetCommentsUseCase,
    UpdateCommentUseCase,
)
from ziora.application.usecase.content import (
    DeleteContentUseCase,
    GetContentUseCase,
    SaveContentUseCase,
    UploadTopicUseCase,
)
from ziora.application.usecase.dashboard import GetDashboardUseCase
from ziora.application.usecase.moderation import (
    DeleteCommentUseCase,
    ImportLegacyCommentsUseCase,
    ListModerationQueueUseCase,
    ModerateCommentUseCase,
)
from ziora.config import CommentSettings
from ziora.domain.service import (
    CommentService,
    ContentService,
    LegacyCommentImporter,
    ModerationService,
    TreeAggregator,
    UserService,
)
from ziora.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Content use cases
    @provide(scope=Scope.REQUEST)
    def get_get_content_use_case(
        self, content_service: ContentService
    ) -> GetContentUseCase:
        """Provide get content use case."""
        return GetContentUseCase(content_service=content_service)

    @provide(scope=Scope.REQUEST)
    def get_save_content_use_case(
        self, content_service: ContentService
    ) -> SaveContentUseCase:
        """Provide save content use case."""
        return SaveContentUseCase(content_service=content_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_content_use_case(
        self, content_service: ContentService
    ) -> DeleteContentUseCase:
        """Provide delete content use case."""
        return DeleteContentUseCase(content_service=content_service)

    @provide(scope=Scope.REQUEST)
    def get_upload_topic_use_case(
        self, content_service: ContentService
    ) -> UploadTopicUseCase:
        """Provide upload topic use case."""
        return UploadTopicUseCase(content_service=content_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self, comment_service: CommentService
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(comment_service=comment_service)

    # Moderation use cases
    @provide(scope=Scope.REQUEST)
    def get_list_moderation_queue_use_case(
        self, tree_aggregator: TreeAggregator, settings: CommentSettings
    ) -> ListModerationQueueUseCase:
        """Provide moderation queue use case."""
        return ListModerationQueueUseCase(
            tree_aggregator=tree_aggregator, settings=settings
        )

    @provide(scope=Scope.REQUEST)
    def get_moderate_comment_use_case(
        self, moderation_service: ModerationService
    ) -> ModerateCommentUseCase:
        """Provide moderate comment use case."""
        return ModerateCommentUseCase(moderation_service=moderation_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_import_legacy_comments_use_case(
        self, importer: LegacyCommentImporter
    ) -> ImportLegacyCommentsUseCase:
        """Provide legacy comment import use case."""
        return ImportLegacyCommentsUseCase(importer=importer)

    # Dashboard use cases
    @provide(scope=Scope.REQUEST)
    def get_dashboard_use_case(
        self, user_service: UserService, tree_aggregator: TreeAggregator
    ) -> GetDashboardUseCase:
        """Provide admin dashboard use case."""
        return GetDashboardUseCase(
            user_service=user_service, tree_aggregator=tree_aggregator
        )
