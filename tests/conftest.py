"""Pytest configuration and fixtures."""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from task_runner.domain.value_objects.sandbox_phase import SandboxPhase
from task_runner.infrastructure.dependencies import (
    get_sandbox_platform,
    get_task_repository,
    get_task_repository_scope,
)
from task_runner.infrastructure.persistence.repositories.memory_task_repository import InMemoryTaskRepository
from tests.helpers import FakeSandboxPlatform, RepositoryScope


@pytest.fixture
def fake_platform() -> FakeSandboxPlatform:
    """Sandbox platform that never talks to a cluster."""
    return FakeSandboxPlatform(phases=[SandboxPhase.SUCCEEDED])


@pytest.fixture
def memory_repository() -> InMemoryTaskRepository:
    """Fresh in-memory task repository per test."""
    return InMemoryTaskRepository()


@pytest.fixture
def app(fake_platform, memory_repository):
    """FastAPI app with the repository and sandbox platform overridden."""
    from task_runner.interfaces.rest.main import create_app

    application = create_app()
    application.dependency_overrides[get_task_repository] = lambda: memory_repository
    application.dependency_overrides[get_task_repository_scope] = lambda: RepositoryScope(memory_repository)
    application.dependency_overrides[get_sandbox_platform] = lambda: fake_platform
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncClient:
    """Get test HTTP client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """Get test database session."""
    # Use in-memory SQLite for testing
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )

    async_session = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Create tables
    from task_runner.infrastructure.persistence import models  # noqa: F401
    from task_runner.infrastructure.persistence.database import Base
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        yield session

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()
