"""Domain layer DI providers."""

from dishka import Scope, provide

from ziora.config import AuthSettings, CommentSettings
from ziora.domain.repository import (
    CommentRepository,
    ContentRepository,
    UserRepository,
)
from ziora.domain.service import (
    CommentService,
    ContentService,
    JWTService,
    LegacyCommentImporter,
    ModerationService,
    TreeAggregator,
    UserService,
)
from ziora.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_content_service(
        self, content_repository: ContentRepository
    ) -> ContentService:
        """Provide content store domain service."""
        return ContentService(content_repository=content_repository)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        comment_settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository, settings=comment_settings
        )

    @provide
    def get_moderation_service(
        self, comment_repository: CommentRepository
    ) -> ModerationService:
        """Provide moderation domain service."""
        return ModerationService(comment_repository=comment_repository)

    @provide
    def get_tree_aggregator(
        self,
        content_repository: ContentRepository,
        comment_repository: CommentRepository,
    ) -> TreeAggregator:
        """Provide comment aggregator."""
        return TreeAggregator(
            content_repository=content_repository,
            comment_repository=comment_repository,
        )

    @provide
    def get_legacy_importer(
        self,
        content_repository: ContentRepository,
        comment_repository: CommentRepository,
    ) -> LegacyCommentImporter:
        """Provide legacy comment importer."""
        return LegacyCommentImporter(
            content_repository=content_repository,
            comment_repository=comment_repository,
        )

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)
