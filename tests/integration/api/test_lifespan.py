"""
应用生命周期集成测试
"""
import pytest
from fastapi import FastAPI

from task_runner.infrastructure import dependencies
from task_runner.infrastructure.config.settings import get_settings
from task_runner.infrastructure.persistence.database import db_manager
from task_runner.interfaces.rest.main import lifespan
from tests.helpers import FakeSandboxPlatform


@pytest.fixture
def fake_cluster(monkeypatch):
    """用假平台替换 Kubernetes 客户端，并清空依赖单例"""
    platform = FakeSandboxPlatform(reachable=False)
    constructed = []

    def factory(**kwargs):
        constructed.append(kwargs)
        return platform

    monkeypatch.setattr(
        "task_runner.infrastructure.sandbox.k8s_sandbox_platform.K8sSandboxPlatform",
        factory,
    )
    monkeypatch.setattr(dependencies, "_sandbox_platform_singleton", None)
    monkeypatch.setattr(dependencies, "_memory_repository_singleton", None)
    monkeypatch.setenv("KUBERNETES_NAMESPACE", "jobs")
    get_settings.cache_clear()
    yield platform, constructed
    get_settings.cache_clear()


@pytest.mark.asyncio
async def test_startup_tolerates_unreachable_cluster(fake_cluster, monkeypatch):
    """集群不可达时启动仍然完成"""
    platform, constructed = fake_cluster
    monkeypatch.setenv("USE_SQL_REPOSITORIES", "false")
    get_settings.cache_clear()
    app = FastAPI()

    async with lifespan(app):
        assert dependencies.get_sandbox_platform() is platform
        assert app.state.sandbox_platform is platform
        assert platform.ping_calls == 1
        assert constructed[0]["namespace"] == "jobs"
        assert not db_manager.is_initialized

    assert app.state.sandbox_platform is None
    with pytest.raises(RuntimeError):
        dependencies.get_sandbox_platform()


@pytest.mark.asyncio
async def test_startup_creates_tables_in_development(fake_cluster, monkeypatch):
    platform, _ = fake_cluster
    monkeypatch.setenv("USE_SQL_REPOSITORIES", "true")
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("ENVIRONMENT", "development")
    get_settings.cache_clear()
    app = FastAPI()

    async with lifespan(app):
        assert db_manager.is_initialized
        async with dependencies.task_repository_scope() as repo:
            assert await repo.find_all() == []

    assert not db_manager.is_initialized
    assert platform.ping_calls == 1
