# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Wires the real services onto in-memory stores and a temp storage root
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient

from app.dependencies import Services
from app.main import create_app
from core.models.session import AuthSession
from core.services.auth_service import AuthSessionManager
from core.services.file_service import FileService
from core.services.storage_service import LocalStorageService
from core.services.user_service import UserService
from tests.fakes import (
    FakeClock,
    InMemoryFileStore,
    InMemoryKeyValueStore,
    InMemoryUserStore,
    RecordingJobSubmitter,
)


# =============================================================================
# Collaborators
# =============================================================================

@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def kv_store(clock):
    return InMemoryKeyValueStore(clock)


@pytest.fixture
def user_store():
    return InMemoryUserStore()


@pytest.fixture
def file_store():
    return InMemoryFileStore()


@pytest.fixture
def storage(tmp_path):
    return LocalStorageService(tmp_path / "files")


@pytest.fixture
def jobs():
    return RecordingJobSubmitter()


# =============================================================================
# Services
# =============================================================================

@pytest.fixture
def user_service(user_store, jobs):
    return UserService(user_store, jobs=jobs, bcrypt_rounds=4)


@pytest.fixture
def auth_manager(user_service, kv_store):
    return AuthSessionManager(user_service, kv_store)


@pytest.fixture
def file_service(file_store, storage, jobs):
    return FileService(file_store, storage, jobs=jobs)


@pytest.fixture
def alice(user_service):
    return user_service.register("alice@x.com", "pw123")


@pytest.fixture
def bob(user_service):
    return user_service.register("bob@x.com", "hunter2")


@pytest.fixture
def alice_session(alice):
    return AuthSession(token="alice-token", user=alice)


@pytest.fixture
def bob_session(bob):
    return AuthSession(token="bob-token", user=bob)


# =============================================================================
# HTTP
# =============================================================================

@pytest.fixture
def services(user_service, auth_manager, file_service, kv_store):
    return Services(
        users=user_service,
        auth=auth_manager,
        files=file_service,
        status_checks={"redis": kv_store.ping, "db": lambda: True},
    )


@pytest.fixture
def client(services):
    """TestClient on an app wired to the in-memory services."""
    with TestClient(create_app(services)) as test_client:
        yield test_client
