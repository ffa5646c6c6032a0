"""End-to-end test for the health endpoint."""

import pytest
from fastapi.testclient import TestClient

from ziora.interface.api.app import create_app
from ziora.util.di.container import setup_di
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client with test container."""
    app_instance = create_app()
    test_container = build_test_container()
    setup_di(app_instance, test_container)
    return TestClient(app_instance)


def test_health_reports_version(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["version"] == "0.1.0"
    assert "git_sha" in body
    assert "timestamp" in body
