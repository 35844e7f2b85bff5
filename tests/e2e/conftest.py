"""Fixtures for end-to-end tests against the full application.

The app runs on the mocked test container. Dependencies are resolved
through the test client's event loop, so seeded in-memory data is the
same data the routes and the realtime broker see.
"""

import pytest
from fastapi.testclient import TestClient

from homestead.config import AuthSettings
from homestead.domain.value import Role, UserId
from homestead.interface.api.app import create_app
from homestead.persistence.repository.inmemory import (
    InMemoryPropertyRepository,
    InMemoryUserRepository,
)
from homestead.util.jwt import create_token
from tests.conftest import make_property, make_user
from tests.di import build_test_container


@pytest.fixture
def app():
    """Application wired to a fresh mocked container."""
    return create_app(build_test_container())


@pytest.fixture
def client(app):
    """Test client with the application lifespan running."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def resolve(app, client):
    """Resolve an app-scoped dependency on the client's event loop."""
    container = app.state.dishka_container

    def _resolve(dependency):
        return client.portal.call(container.get, dependency)

    return _resolve


@pytest.fixture
def auth(resolve):
    """Build Authorization headers for a user."""
    settings = resolve(AuthSettings)

    def _auth(user_id: int, role: Role = Role.USER) -> dict[str, str]:
        token = create_token(UserId(user_id), role, settings)
        return {"Authorization": f"Bearer {token}"}

    return _auth


@pytest.fixture
def seeded(resolve):
    """Users 1-3; user 1 owns property 10."""
    users = resolve(InMemoryUserRepository)
    properties = resolve(InMemoryPropertyRepository)
    for user_id in (1, 2, 3):
        users.add(make_user(user_id))
    properties.add(make_property(10, owner_id=1))
