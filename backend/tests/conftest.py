"""
Pytest configuration and shared fixtures.

Every test runs against an in-memory mongomock database; nothing here needs a
running MongoDB server.
"""
import base64
import json
import os

import pytest

# Set test environment variables before importing app modules
os.environ["APP_JWT_SECRET"] = "test-secret-key-minimum-32-characters-for-testing"
os.environ["APP_MONGO_DB_NAME"] = "notion_clone_test"
os.environ["APP_ENABLE_RATE_LIMITING"] = "false"
os.environ["APP_BCRYPT_ROUNDS"] = "4"
os.environ["APP_LOG_LEVEL"] = "WARNING"


# ==================== Store and repository fixtures ====================

def _mock_store():
    """A document store backed by a fresh in-memory mongomock client"""
    import mongomock

    from notion_clone.db.base import DocumentStore

    return DocumentStore("mongodb://localhost", "notion_clone_test", client=mongomock.MongoClient())


@pytest.fixture
def store():
    """Provide a connected in-memory document store"""
    document_store = _mock_store()
    yield document_store
    document_store.disconnect()


@pytest.fixture
def workspace_repo(store):
    from notion_clone.core.repositories.implementations.mongo.workspace_repository import (
        MongoWorkspaceRepository,
    )
    return MongoWorkspaceRepository(store)


@pytest.fixture
def page_repo(store):
    from notion_clone.core.repositories.implementations.mongo.page_repository import MongoPageRepository
    return MongoPageRepository(store)


@pytest.fixture
def user_repo(store):
    from notion_clone.core.repositories.implementations.mongo.user_repository import MongoUserRepository
    return MongoUserRepository(store)


@pytest.fixture
def page_service(page_repo, workspace_repo):
    from notion_clone.core.services.page_service import PageService
    return PageService(page_repo, workspace_repo)


@pytest.fixture
def workspace_service(workspace_repo, page_repo, user_repo, page_service):
    from notion_clone.core.services.workspace_service import WorkspaceService
    return WorkspaceService(workspace_repo, page_repo, user_repo, page_service)


@pytest.fixture
def user_service(user_repo):
    from notion_clone.core.services.user_service import UserService
    return UserService(user_repo)


@pytest.fixture
def make_user(user_repo):
    """Insert a user directly and return its id"""
    from notion_clone.core.models.user import User

    async def _make_user(email="any@email.com", name="any-name", workspaces=None):
        user = User(
            name=name,
            email=email,
            password="not-a-real-hash",
            workspaces=workspaces or [],
        )
        return await user_repo.create(user)

    return _make_user


# ==================== FastAPI Test Client ====================

@pytest.fixture
def client():
    """Provide a test client with a fresh app (and a fresh in-memory store)"""
    from fastapi.testclient import TestClient

    from notion_clone.main import create_app

    with TestClient(create_app(store=_mock_store())) as test_client:
        yield test_client


def user_id_from_token(token: str) -> str:
    """Read the user id out of the token payload segment"""
    payload = token.split(".")[1]
    payload += "=" * (-len(payload) % 4)
    return json.loads(base64.urlsafe_b64decode(payload))["sub"]


@pytest.fixture
def signup(client):
    """Register a user through the API; returns (user_id, headers)"""

    def _signup(email="any@email.com", password="any-password", name="any-name"):
        response = client.post(
            "/v1/register",
            json={"name": name, "email": email, "password": password, "is_dark_mode": True},
        )
        assert response.status_code == 200, response.text
        token = response.json()["authentication_token"]
        return user_id_from_token(token), {"Authorization": f"Bearer {token}"}

    return _signup
