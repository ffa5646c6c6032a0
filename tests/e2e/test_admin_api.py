"""End-to-end tests for the admin endpoints."""

import pytest
from fastapi.testclient import TestClient

from ziora.interface.api.app import create_app
from ziora.util.di.container import setup_di
from tests.di import build_test_container
from tests.factory import make_token

PATH = {
    "year": "SE",
    "semester": "3",
    "branch": "computer",
    "subject": "dbms",
    "contentType": "video-lecs",
}

LEGACY_CONTENT = {
    "modules": [
        {
            "id": "module-1",
            "name": "Module 1",
            "topics": [
                {
                    "id": "topic-1",
                    "title": "Normalization",
                    "comments": [
                        {
                            "id": "legacy-1",
                            "author": "Ravi",
                            "content": "Old question",
                            "timestamp": "21/06/2025, 10:00:00",
                            "replies": [
                                {
                                    "id": "legacy-2",
                                    "author": "Asha",
                                    "content": "Old answer",
                                    "status": "flagged",
                                    "timestamp": "21/06/2025, 11:00:00",
                                }
                            ],
                        }
                    ],
                }
            ],
        }
    ]
}

COMMENT = {
    "author": "Asha",
    "content": "What is BCNF?",
    "type": "video-lecs",
    "subject": "dbms",
    "module": "Module 1",
    "contentId": "topic-1",
}


@pytest.fixture
def client():
    """Create test client with test container."""
    app_instance = create_app()
    test_container = build_test_container()
    setup_di(app_instance, test_container)
    return TestClient(app_instance)


@pytest.fixture
def admin_client(client):
    """Test client carrying an admin auth_token cookie."""
    client.cookies.set("auth_token", make_token())
    return client


class TestAdminAuth:
    """Admin routes require an admin token."""

    def test_no_token(self, client):
        """Should be unauthenticated without a cookie."""
        # Act
        response = client.get("/admin/dashboard")

        # Assert
        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "error": "Authentication required",
        }

    def test_learner_token(self, client):
        """Should be forbidden for a non-admin role."""
        # Arrange
        client.cookies.set("auth_token", make_token("learner-1", role="user"))

        # Act
        response = client.get("/admin/comments")

        # Assert
        assert response.status_code == 403

    def test_garbage_token(self, client):
        """Should reject a token that does not verify."""
        # Arrange
        client.cookies.set("auth_token", "not-a-jwt")

        # Act
        response = client.post("/admin/comments/import-legacy")

        # Assert
        assert response.status_code == 401


class TestModerationQueue:
    """End-to-end tests for GET /admin/comments."""

    def test_queue_mixes_embedded_and_stored(self, admin_client):
        """Should list legacy and stored comments, newest first."""
        # Arrange
        admin_client.post("/content", json={**PATH, "content": LEGACY_CONTENT})
        stored = admin_client.post("/comments", json=COMMENT).json()["comment"]

        # Act
        response = admin_client.get("/admin/comments")

        # Assert
        assert response.status_code == 200
        entries = response.json()["comments"]
        assert [e["id"] for e in entries] == [stored["id"], "legacy-2", "legacy-1"]
        legacy = entries[2]
        assert legacy["embedded"] is True
        assert legacy["status"] == "pending"
        assert legacy["topic"] == "Normalization"
        assert legacy["path"] == "SE/sem-3/computer/dbms/video-lecs/modules"
        assert legacy["replies"] == 1

    def test_queue_status_filter(self, admin_client):
        """Should only list comments in the requested status."""
        # Arrange
        admin_client.post("/content", json={**PATH, "content": LEGACY_CONTENT})

        # Act
        response = admin_client.get("/admin/comments", params={"status": "flagged"})

        # Assert
        assert [e["id"] for e in response.json()["comments"]] == ["legacy-2"]


class TestModerateComment:
    """End-to-end tests for PATCH and DELETE /admin/comments."""

    def test_reject_then_approve(self, admin_client):
        """Should allow any status to be moderated again."""
        # Arrange
        comment_id = admin_client.post("/comments", json=COMMENT).json()["comment"]["id"]

        # Act
        rejected = admin_client.patch(
            "/admin/comments",
            json={"commentId": comment_id, "action": "reject", "reason": "Spam"},
        )
        approved = admin_client.patch(
            "/admin/comments", json={"commentId": comment_id, "action": "approve"}
        )

        # Assert
        assert rejected.json()["message"] == "Comment rejected successfully"
        assert rejected.json()["comment"]["moderationReason"] == "Spam"
        assert approved.json()["comment"]["status"] == "approved"

    def test_invalid_action(self, admin_client):
        """Should reject unknown moderation actions."""
        # Arrange
        comment_id = admin_client.post("/comments", json=COMMENT).json()["comment"]["id"]

        # Act
        response = admin_client.patch(
            "/admin/comments", json={"commentId": comment_id, "action": "pin"}
        )

        # Assert
        assert response.status_code == 400

    def test_legacy_comment_id_not_found(self, admin_client):
        """IDs that name no stored comment are not found for every action."""
        # Arrange
        legacy_id = "6858a1b2c3d4e5f601234567"

        # Act
        moderated = admin_client.patch(
            "/admin/comments", json={"commentId": legacy_id, "action": "approve"}
        )
        deleted = admin_client.request(
            "DELETE", "/admin/comments", json={"commentId": legacy_id}
        )
        voted = admin_client.patch(
            "/comments",
            json={"commentId": legacy_id, "action": "like", "userId": "u1"},
        )

        # Assert
        assert moderated.status_code == 404
        assert deleted.status_code == 404
        assert voted.status_code == 404
        assert voted.json() == {
            "success": False,
            "error": f"Comment not found: {legacy_id}",
        }

    def test_delete_removes_replies(self, admin_client):
        """Should delete a comment together with its replies."""
        # Arrange
        comment_id = admin_client.post("/comments", json=COMMENT).json()["comment"]["id"]
        admin_client.patch(
            "/comments",
            json={
                "commentId": comment_id,
                "action": "reply",
                "replyData": {"author": "Ravi", "content": "Reply"},
            },
        )

        # Act
        response = admin_client.request(
            "DELETE", "/admin/comments", json={"commentId": comment_id}
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["removed"] == 2
        queue = admin_client.get("/admin/comments").json()["comments"]
        assert queue == []


class TestImportAndDashboard:
    """End-to-end tests for legacy import and the dashboard."""

    def test_import_then_dashboard_counts(self, admin_client):
        """Should import embedded comments without changing the totals."""
        # Arrange
        admin_client.post("/content", json={**PATH, "content": LEGACY_CONTENT})
        before = admin_client.get("/admin/dashboard").json()["statistics"]["comments"]

        # Act
        response = admin_client.post("/admin/comments/import-legacy")

        # Assert
        assert response.status_code == 200
        assert response.json()["imported"] == 2
        after = admin_client.get("/admin/dashboard").json()["statistics"]["comments"]
        assert after["total"] == before["total"] == 2
        assert after["flagged"] == before["flagged"] == 1
        assert after["pending"] == before["pending"] == 1

    def test_dashboard_shape(self, admin_client):
        """Should report user and comment statistics."""
        # Act
        response = admin_client.get("/admin/dashboard")

        # Assert
        assert response.status_code == 200
        statistics = response.json()["statistics"]
        assert statistics["users"] == {
            "total": 0,
            "active": 0,
            "suspended": 0,
            "newThisWeek": 0,
        }
        assert statistics["comments"]["total"] == 0
