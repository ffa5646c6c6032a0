"""Test configuration and fixtures."""

import logfire
import pytest

from ziora.domain.value import ContentPath

# Local-only, quiet telemetry; the app module instruments FastAPI on import
logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def content_path() -> ContentPath:
    """Video lecture bucket for SE / semester 3 / computer / dbms."""
    return ContentPath(
        year="SE",
        semester="3",
        branch="computer",
        subject="dbms",
        content_type="video-lecs",
    )
