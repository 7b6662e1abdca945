"""
Pytest configuration and fixtures.

Router tests run against in-memory repositories wired in through FastAPI
dependency overrides, so no MongoDB server is needed.
"""

import pytest
from fastapi.testclient import TestClient

from traitmatch.main import app
from traitmatch.repositories.companies import get_company_repository
from traitmatch.repositories.jobs import get_job_repository
from traitmatch.repositories.messages import get_message_repository
from traitmatch.repositories.users import get_user_repository
from traitmatch.tests.fakes import (
    InMemoryCompanyRepository,
    InMemoryJobRepository,
    InMemoryMessageRepository,
    InMemoryUserRepository,
    Repositories,
)


@pytest.fixture
def repositories() -> Repositories:
    return Repositories(
        jobs=InMemoryJobRepository(),
        companies=InMemoryCompanyRepository(),
        users=InMemoryUserRepository(),
        messages=InMemoryMessageRepository(),
    )


@pytest.fixture
def client(repositories):
    """TestClient without the lifespan, so startup never connects to MongoDB."""
    app.dependency_overrides[get_job_repository] = lambda: repositories.jobs
    app.dependency_overrides[get_company_repository] = lambda: repositories.companies
    app.dependency_overrides[get_user_repository] = lambda: repositories.users
    app.dependency_overrides[get_message_repository] = lambda: repositories.messages
    yield TestClient(app)
    app.dependency_overrides.clear()
