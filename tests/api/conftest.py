"""
API test fixtures: application client, identity headers and mocked services.
"""

import uuid
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from curriculum.api.deps.dependencies import (
    get_course_service,
    get_curriculum_coordinator,
    get_dashboard_service,
)
from curriculum.api.main import create_app


@pytest.fixture
def client():
    app = create_app()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"X-User-Id": str(uuid.uuid4()), "X-User-Role": "admin"}


@pytest.fixture
def learner_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def learner_headers(learner_id) -> dict[str, str]:
    return {"X-User-Id": str(learner_id), "X-User-Role": "learner"}


@pytest.fixture
def mock_course_service(client):
    service = AsyncMock()
    client.app.dependency_overrides[get_course_service] = lambda: service
    return service


@pytest.fixture
def mock_coordinator(client):
    coordinator = AsyncMock()
    client.app.dependency_overrides[get_curriculum_coordinator] = lambda: coordinator
    return coordinator


@pytest.fixture
def mock_dashboard_service(client):
    service = AsyncMock()
    client.app.dependency_overrides[get_dashboard_service] = lambda: service
    return service
