"""Unit tests for JWTService."""

import pytest

from ziora.domain.error import NotAuthorizedError
from ziora.domain.service import JWTService
from ziora.util.jwt import JWTError
from tests.factory import make_token
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestRequireAdmin:
    """Tests for require_admin."""

    @pytest.mark.asyncio
    async def test_admin_token_accepted(self, unit_env):
        """A token carrying the admin role passes."""
        # Arrange
        jwt_service = await unit_env.get(JWTService)
        token = make_token("admin-1", role="admin")

        # Act
        payload = jwt_service.require_admin(token)

        # Assert
        assert payload.user_id == "admin-1"
        assert payload.email == "admin-1@ziora.in"

    @pytest.mark.asyncio
    async def test_learner_token_rejected(self, unit_env):
        """A valid token without the admin role is not authorized."""
        # Arrange
        jwt_service = await unit_env.get(JWTService)
        token = make_token("learner-1", role="user")

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            jwt_service.require_admin(token)

    @pytest.mark.asyncio
    async def test_missing_token_rejected(self, unit_env):
        """No token means not authenticated."""
        # Arrange
        jwt_service = await unit_env.get(JWTService)

        # Act & Assert
        with pytest.raises(JWTError):
            jwt_service.require_admin(None)

    @pytest.mark.asyncio
    async def test_tampered_token_rejected(self, unit_env):
        """A token with a broken signature fails verification."""
        # Arrange
        jwt_service = await unit_env.get(JWTService)
        token = make_token("admin-1", role="admin")

        # Act & Assert
        with pytest.raises(JWTError):
            jwt_service.require_admin(token[:-4] + "abcd")
