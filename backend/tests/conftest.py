import os
import sys
import time

# Settings are read at import time, so the test environment goes in first
os.environ.setdefault("JWT_SECRET", "test-secret-for-notification-service-tests")
os.environ.setdefault("JWT_ISSUER", "littlesoftchat-user-service")
os.environ.setdefault("JWT_AUDIENCE", "littlesoftchat-clients")
os.environ.setdefault("CONNECTION_REGISTRY_BACKEND", "memory")
os.environ.setdefault("USER_SERVICE_URL", "")

# Add backend directory to path
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__) + "/.."))

import jwt
import pytest
from fastapi.testclient import TestClient

from notification_service.application.realtime import RealtimeHub
from notification_service.config.settings import Config
from notification_service.fastapi_app import create_fastapi_app
from notification_service.infrastructure.presence import InMemoryConnectionRegistry
from notification_service.setup.ioc.container import ApplicationProvider, create_container
from tests.fakes import (
    FakeInfrastructureProvider,
    InMemoryHistoryRepository,
    RecordingTransport,
    StaticUserDirectory,
)


def make_token(user_id=42, secret=None, exp_offset=300, claim="nameid"):
    now = int(time.time())
    return jwt.encode(
        {
            claim: str(user_id),
            "iat": now,
            "exp": now + exp_offset,
            "iss": Config.JWT_ISSUER,
            "aud": Config.JWT_AUDIENCE,
        },
        secret or Config.JWT_SECRET,
        algorithm="HS256",
    )


@pytest.fixture()
def registry():
    return InMemoryConnectionRegistry(ttl_seconds=3600)


@pytest.fixture()
def history():
    return InMemoryHistoryRepository()


@pytest.fixture()
def transport():
    return RecordingTransport()


@pytest.fixture()
def hub():
    return RealtimeHub()


@pytest.fixture()
def user_directory():
    return StaticUserDirectory()


@pytest.fixture()
def app(registry, history, hub, user_directory):
    """FastAPI app wired to in-memory infrastructure."""
    container = create_container(
        FakeInfrastructureProvider(registry, history, hub, user_directory),
        ApplicationProvider(),
    )
    return create_fastapi_app(container)


@pytest.fixture()
def client(app):
    """A test client for the FastAPI app (runs the lifespan)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def auth_headers():
    """Authentication headers for user 42."""
    return {"Authorization": f"Bearer {make_token(42)}"}
