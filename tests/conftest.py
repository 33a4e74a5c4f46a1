# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from typing import Generator

from main import create_app
from dependencies.auth import CurrentUser, get_current_user


@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    return create_app()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides = {}


@pytest.fixture
def superadmin_user():
    return CurrentUser(
        id="superadmin-user-id",
        email="root@example.com",
        role="superadmin",
    )


@pytest.fixture
def household_user():
    return CurrentUser(
        id="household-user-id",
        email="head@example.com",
        role="household_head",
        tenant_id="village-1",
    )


@pytest.fixture
def login(app):
    """Pretend Supabase Auth already validated the given user."""
    def _login(user: CurrentUser):
        app.dependency_overrides[get_current_user] = lambda: user
        return user
    return _login

